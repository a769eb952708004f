"""
Fluxo completo pela API: cliente, veículo, proposta, contrato, PDF e venda
"""
from io import BytesIO

from pypdf import PdfReader


async def test_sale_flow(client, admin_headers, vendor_headers):
    response = await client.post("/api/banks", json={
        "name": "Banco Serrano",
        "interest_rate": 1.8,
        "commission_rate": 2.0,
    }, headers=admin_headers)
    assert response.status_code == 201
    bank = response.json()

    response = await client.post("/api/clients", json={
        "name": "Ana Pereira",
        "cpf": "52998224725",
        "email": "Ana@Email.com",
        "phone": "49999990000",
        "city": "Lages",
        "state": "SC",
    }, headers=vendor_headers)
    assert response.status_code == 201
    customer = response.json()
    assert customer["email"] == "ana@email.com"
    assert customer["funnel_stage"] == "atendimento"

    response = await client.post("/api/vehicles", json={
        "brand": "Fiat",
        "model": "Argo",
        "year_fab": 2022,
        "year_model": 2022,
        "price": 72000,
        "plate": "qwe1r23",
    }, headers=vendor_headers)
    assert response.status_code == 201
    vehicle = response.json()
    assert vehicle["plate"] == "QWE1R23"

    response = await client.post("/api/proposals", json={
        "client_id": customer["id"],
        "vehicle_id": vehicle["id"],
        "bank_id": bank["id"],
        "vehicle_price": 72000,
        "down_payment": 22000,
        "installments": 48,
        "installment_value": 1480,
    }, headers=vendor_headers)
    assert response.status_code == 201
    proposal = response.json()
    assert proposal["status"] == "pendente"
    assert proposal["financed_amount"] == 50000

    response = await client.patch(
        f"/api/proposals/{proposal['id']}/status", json={"status": "aprovada"}, headers=vendor_headers
    )
    assert response.status_code == 200
    assert response.json()["action"] == "approve"

    response = await client.post("/api/contracts", json={"proposal_id": proposal["id"]}, headers=vendor_headers)
    assert response.status_code == 201
    contract = response.json()

    response = await client.get(f"/api/contracts/{contract['id']}/pdf", headers=vendor_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert contract["contract_number"] in response.headers["content-disposition"]
    assert response.headers["cache-control"].startswith("no-store")

    text = " ".join((page.extract_text() or "") for page in PdfReader(BytesIO(response.content)).pages)
    text = " ".join(text.split())
    assert contract["contract_number"] in text
    assert "Ana Pereira" in text

    response = await client.post("/api/sales", json={"proposal_id": proposal["id"]}, headers=vendor_headers)
    assert response.status_code == 201
    assert response.json()["commission_value"] == 1000

    response = await client.get(f"/api/vehicles/{vehicle['id']}", headers=vendor_headers)
    assert response.json()["status"] == "vendido"

    response = await client.get("/api/stats/dashboard", headers=vendor_headers)
    assert response.status_code == 200
    dashboard = response.json()
    assert dashboard["sales"]["count"] == 1
    assert dashboard["proposals"]["by_status"]["aprovada"] == 1
    assert dashboard["clients"]["by_stage"]["atendimento"] == 1

    response = await client.get(
        "/api/activity", params={"entity_type": "proposal", "entity_id": proposal["id"]}, headers=admin_headers
    )
    assert response.status_code == 200
    assert {entry["action"] for entry in response.json()} >= {"create", "approve"}
