"""
Contas de acesso: validação, limite por admin e mensagem genérica
"""
import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    AccountCreationError,
    PermissionDeniedError,
    RateLimitError,
    ValidationError,
)
from app.models import Client, User
from app.services.accounts import (
    AccountCreationLimiter,
    create_account,
    delete_account_by_email,
    validate_account_data,
)


def test_validate_normalizes_data():
    data = validate_account_data("  Novo@Loja.com ", "segredo1", "  Ana  ", "(49) 99999-0000", "papel-x")
    assert data["email"] == "novo@loja.com"
    assert data["name"] == "Ana"
    assert data["role"].value == "vendedor"


@pytest.mark.parametrize("email, password, name, phone", [
    ("", "segredo1", "Ana", None),
    ("sem-arroba", "segredo1", "Ana", None),
    ("a@b.com", "123", "Ana", None),
    ("a@b.com", "x" * 129, "Ana", None),
    ("a@b.com", "segredo1", " A ", None),
    ("a@b.com", "segredo1", "Ana", "abc"),
])
def test_validate_rejects_invalid_data(email, password, name, phone):
    with pytest.raises(ValidationError):
        validate_account_data(email, password, name, phone)


def test_limiter_blocks_after_limit_and_resets():
    limiter = AccountCreationLimiter(limit=2, window=3600)

    limiter.hit("admin")
    limiter.hit("admin")
    with pytest.raises(RateLimitError) as exc:
        limiter.hit("admin")
    assert "60 minutos" in exc.value.message
    assert 3500 <= exc.value.reset_in_seconds <= 3600

    limiter.hit("outro-admin")

    limiter.reset()
    limiter.hit("admin")


async def test_only_admin_creates_accounts(db, vendor_session):
    with pytest.raises(PermissionDeniedError):
        await create_account(db, vendor_session, "x@loja.com", "segredo1", "Xavier")


async def test_create_account(db, admin_session):
    user = await create_account(db, admin_session, "Cliente@Email.com", "segredo1", "Cliente Novo", role="cliente")
    await db.commit()

    assert user.email == "cliente@email.com"
    assert user.role == "cliente"
    assert user.created_by == admin_session.user_id
    assert user.hashed_password != "segredo1"


async def test_duplicate_email_gets_generic_message(db, admin_session, vendor_user):
    with pytest.raises(AccountCreationError) as exc:
        await create_account(db, admin_session, "VENDEDOR@loja.com.br", "segredo1", "Repetido")
    assert exc.value.message == AccountCreationError.GENERIC_MESSAGE


async def test_rate_limit_per_admin(db, admin_session):
    limiter = AccountCreationLimiter(limit=1, window=3600)
    await create_account(db, admin_session, "um@loja.com", "segredo1", "Primeiro", limiter=limiter)

    with pytest.raises(RateLimitError):
        await create_account(db, admin_session, "dois@loja.com", "segredo1", "Segundo", limiter=limiter)


async def test_delete_account_by_email(db, admin_session, client_user, vendor_user):
    assert await delete_account_by_email(db, admin_session, "maria@email.com") is True
    assert await delete_account_by_email(db, admin_session, "ninguem@email.com") is False

    with pytest.raises(PermissionDeniedError):
        await delete_account_by_email(db, admin_session, vendor_user.email)

    await db.commit()
    remaining = (await db.execute(select(User.email))).scalars().all()
    assert "Maria@Email.com" not in remaining


async def test_users_endpoint_requires_admin(client, vendor_headers, admin_headers):
    payload = {"email": "novo@loja.com", "password": "segredo1", "name": "Novo Vendedor"}

    response = await client.post("/api/users", json=payload, headers=vendor_headers)
    assert response.status_code == 403

    response = await client.post("/api/users", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["role"] == "vendedor"

    response = await client.post("/api/users", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == AccountCreationError.GENERIC_MESSAGE


async def test_users_endpoint_returns_429_with_retry_after(client, admin_headers, monkeypatch):
    monkeypatch.setattr(
        "app.services.accounts.account_creation_limiter", AccountCreationLimiter(limit=1, window=3600)
    )

    response = await client.post(
        "/api/users", json={"email": "um@loja.com", "password": "segredo1", "name": "Primeiro"}, headers=admin_headers
    )
    assert response.status_code == 201

    response = await client.post(
        "/api/users", json={"email": "dois@loja.com", "password": "segredo1", "name": "Segundo"}, headers=admin_headers
    )
    assert response.status_code == 429
    assert "minutos" in response.json()["detail"]
    assert int(response.headers["retry-after"]) > 0


async def test_deleting_client_removes_portal_account(client, db, vendor_headers, client_user, make_client):
    record = await make_client(name="Maria Cliente", email="maria@email.com")

    response = await client.delete(f"/api/clients/{record.id}", headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["account_removed"] is True

    assert (await db.execute(select(Client.id).where(Client.id == record.id))).first() is None
    emails = (await db.execute(select(User.email))).scalars().all()
    assert client_user.email not in emails


async def test_client_deletion_succeeds_when_account_removal_fails(
    client, db, vendor_headers, client_user, make_client, monkeypatch
):
    record = await make_client(name="Maria Cliente", email="maria@email.com")

    async def accounts_unavailable(db, session, email):
        raise OperationalError("DELETE FROM users", {}, Exception("serviço de contas indisponível"))

    monkeypatch.setattr("app.api.clients.delete_account_by_email", accounts_unavailable)

    response = await client.delete(f"/api/clients/{record.id}", headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["account_removed"] is False

    assert (await db.execute(select(Client.id).where(Client.id == record.id))).first() is None
    emails = (await db.execute(select(User.email))).scalars().all()
    assert client_user.email in emails


async def test_client_without_email_has_no_account_to_remove(client, vendor_headers, make_client):
    record = await make_client(email=None)

    response = await client.delete(f"/api/clients/{record.id}", headers=vendor_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Cliente excluído", "account_removed": False}
