"""
Autenticação: login, setup inicial e token
"""
from sqlalchemy import select

from app.models import ActivityLog

PASSWORD = "senha123"


async def test_login(client, db, admin_user):
    response = await client.post("/api/auth/login", json={"email": "ADMIN@loja.com.br", "password": PASSWORD})
    assert response.status_code == 200

    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "admin"

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "admin@loja.com.br"

    logs = (await db.execute(select(ActivityLog.action))).scalars().all()
    assert "login" in logs


async def test_login_wrong_password(client, admin_user):
    response = await client.post("/api/auth/login", json={"email": "admin@loja.com.br", "password": "errada123"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Email ou senha inválidos"


async def test_invalid_token(client):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer nao-e-um-token"})
    assert response.status_code == 401


async def test_setup_only_once(client):
    payload = {"email": "Dono@Loja.com", "password": "segredo1", "name": "Dono da Loja"}

    response = await client.post("/api/auth/setup", json=payload)
    assert response.status_code == 200
    assert response.json()["email"] == "dono@loja.com"

    response = await client.post("/api/auth/setup", json=payload)
    assert response.status_code == 400


async def test_client_role_logs_in_but_not_into_staff_routes(client, client_user):
    response = await client.post("/api/auth/login", json={"email": "maria@email.com", "password": PASSWORD})
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = await client.get("/api/vehicles", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
