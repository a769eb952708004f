"""
Propostas: criação, máquina de status e histórico
"""
import pytest
from sqlalchemy import select

from app.core.exceptions import ValidationError
from app.models import ActivityLog
from app.models.enums import ProposalStatus, ActivityAction
from app.services.proposals import action_for_status, change_status, create_proposal, sign_proposal


@pytest.mark.parametrize("status, action", [
    ("aprovada", ActivityAction.APPROVE),
    ("recusada", ActivityAction.REJECT),
    ("cancelada", ActivityAction.CANCEL),
    ("pendente", ActivityAction.UPDATE),
])
def test_action_for_status(status, action):
    assert action_for_status(status) == action


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        action_for_status("arquivada")


async def _proposal(db, session, make_client, make_vehicle, make_bank, **fields):
    customer = await make_client()
    vehicle = await make_vehicle()
    bank = await make_bank()
    data = {
        "client_id": customer.id,
        "vehicle_id": vehicle.id,
        "bank_id": bank.id,
        "vehicle_price": 55000.0,
        "down_payment": 15000.0,
        "installments": 48,
        "installment_value": 1150.0,
        "interest_rate": 1.8,
    }
    data.update(fields)
    proposal = await create_proposal(db, session, data)
    await db.commit()
    return proposal


async def test_create_proposal_is_pending_and_computes_financed_amount(
    db, vendor_session, make_client, make_vehicle, make_bank
):
    proposal = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)

    assert proposal.status == ProposalStatus.PENDENTE.value
    assert proposal.proposal_number.startswith("PROP")
    assert proposal.seller_id == vendor_session.user_id
    assert proposal.financed_amount == 40000.0
    assert proposal.total_amount == 15000.0 + 48 * 1150.0


async def test_down_payment_above_price_is_rejected(db, vendor_session, make_client, make_vehicle, make_bank):
    with pytest.raises(ValidationError):
        await _proposal(db, vendor_session, make_client, make_vehicle, make_bank, down_payment=60000.0)


async def test_change_status_logs_derived_action(db, vendor_session, make_client, make_vehicle, make_bank):
    proposal = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)

    action = await change_status(db, vendor_session, proposal, "aprovada")
    await db.commit()

    assert action == ActivityAction.APPROVE
    assert proposal.status == "aprovada"

    logs = (await db.execute(
        select(ActivityLog).where(ActivityLog.entity_id == proposal.id)
    )).scalars().all()
    assert sorted(log.action for log in logs) == ["approve", "create"]


async def test_sign_proposal_sets_party_field(db, vendor_session, make_client, make_vehicle, make_bank):
    proposal = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)

    await sign_proposal(db, vendor_session, proposal, "vendor", "data:image/png;base64,AAAA")
    assert proposal.vendor_signature == "data:image/png;base64,AAAA"
    assert proposal.client_signature is None


async def test_status_endpoint(client, db, vendor_session, vendor_headers, make_client, make_vehicle, make_bank):
    proposal = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)

    response = await client.patch(
        f"/api/proposals/{proposal.id}/status", json={"status": "recusada"}, headers=vendor_headers
    )
    assert response.status_code == 200
    assert response.json()["action"] == "reject"
    assert response.json()["proposal"]["status"] == "recusada"

    response = await client.patch(
        f"/api/proposals/{proposal.id}/status", json={"status": "arquivada"}, headers=vendor_headers
    )
    assert response.status_code == 422


async def test_unknown_proposal_returns_404(client, vendor_headers):
    response = await client.get("/api/proposals/nao-existe", headers=vendor_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Proposta inexistente"
