"""
Contratos: condições de pagamento, proposta aprovada e assinaturas
"""
from datetime import date

import pytest

from app.core.exceptions import ValidationError, ProposalNotApprovedError
from app.services.contracts import validate_payment_terms, create_contract, sign_contract
from app.services.proposals import create_proposal, change_status


def test_avista_requires_no_terms():
    validate_payment_terms("avista")


def test_parcelado_requires_every_term():
    with pytest.raises(ValidationError) as exc:
        validate_payment_terms("parcelado")

    message = exc.value.message
    for field in ("entrada", "número de parcelas", "valor da parcela", "dia de vencimento", "primeiro vencimento"):
        assert field in message


def test_parcelado_with_complete_terms():
    validate_payment_terms(
        "parcelado",
        down_payment=10000,
        installments=12,
        installment_value=1500,
        due_day=10,
        first_due_date=date(2026, 5, 10),
    )


@pytest.mark.parametrize("due_day", [0, 32])
def test_due_day_out_of_range(due_day):
    with pytest.raises(ValidationError):
        validate_payment_terms(
            "parcelado", down_payment=0, installments=12, installment_value=1500,
            due_day=due_day, first_due_date=date(2026, 5, 10)
        )


def test_unknown_payment_type():
    with pytest.raises(ValidationError):
        validate_payment_terms("consorcio")


async def _pending_proposal(db, session, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()
    proposal = await create_proposal(db, session, {
        "client_id": customer.id,
        "vehicle_id": vehicle.id,
        "type": "financiamento_direto",
        "vehicle_price": 55000.0,
        "down_payment": 19000.0,
        "installments": 12,
        "installment_value": 3000.0,
        "first_due_date": date(2026, 5, 15),
    })
    await db.commit()
    return proposal


async def test_contract_from_pending_proposal_is_blocked(db, vendor_session, make_client, make_vehicle):
    proposal = await _pending_proposal(db, vendor_session, make_client, make_vehicle)

    with pytest.raises(ProposalNotApprovedError):
        await create_contract(db, vendor_session, {"proposal_id": proposal.id})


async def test_contract_from_approved_proposal_copies_terms(db, vendor_session, make_client, make_vehicle):
    proposal = await _pending_proposal(db, vendor_session, make_client, make_vehicle)
    await change_status(db, vendor_session, proposal, "aprovada")

    contract = await create_contract(db, vendor_session, {"proposal_id": proposal.id})
    await db.commit()

    assert contract.contract_number.startswith("CONT")
    assert contract.proposal_id == proposal.id
    assert contract.client_id == proposal.client_id
    assert contract.payment_type == "parcelado"
    assert contract.down_payment == 19000.0
    assert contract.installments == 12
    assert contract.installment_value == 3000.0
    assert contract.due_day == 15
    assert contract.delivery_percentage == 50
    assert contract.client_data["name"] == "João da Silva"
    assert contract.vehicle_data["plate"] == "ABC1D23"


async def test_standalone_avista_contract(db, vendor_session, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()

    contract = await create_contract(db, vendor_session, {
        "client_id": customer.id,
        "vehicle_id": vehicle.id,
        "payment_type": "avista",
    })

    assert contract.payment_type == "avista"
    assert contract.vehicle_price == 55000.0
    assert contract.installments is None


async def test_signed_at_requires_both_parties(db, vendor_session, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()
    contract = await create_contract(db, vendor_session, {
        "client_id": customer.id, "vehicle_id": vehicle.id, "payment_type": "avista"
    })

    await sign_contract(db, vendor_session, contract, "client", "data:image/png;base64,AAAA")
    assert contract.signed_at is None

    await sign_contract(db, vendor_session, contract, "vendor", "data:image/png;base64,BBBB")
    assert contract.seller_signature == "data:image/png;base64,BBBB"
    assert contract.signed_at is not None


async def test_contract_endpoint_returns_409_for_pending_proposal(
    client, db, vendor_session, vendor_headers, make_client, make_vehicle
):
    proposal = await _pending_proposal(db, vendor_session, make_client, make_vehicle)

    response = await client.post("/api/contracts", json={"proposal_id": proposal.id}, headers=vendor_headers)
    assert response.status_code == 409


async def test_parcelado_endpoint_without_terms_returns_422(client, vendor_headers, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()

    response = await client.post(
        "/api/contracts",
        json={"client_id": customer.id, "vehicle_id": vehicle.id, "payment_type": "parcelado"},
        headers=vendor_headers
    )
    assert response.status_code == 422
    assert "Contrato parcelado requer" in response.json()["detail"]
