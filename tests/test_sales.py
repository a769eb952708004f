"""
Vendas: comissão, proposta aprovada e totais
"""
import pytest

from app.core.exceptions import ProposalNotApprovedError, InvalidTransitionError
from app.models import Bank
from app.models.enums import VehicleStatus
from app.services.proposals import create_proposal, change_status
from app.services.sales import commission_for, create_sale_from_proposal, sales_stats


def test_commission_for():
    bank = Bank(name="Banco", commission_rate=2.5)
    assert commission_for(40000, bank) == 1000.0
    assert commission_for(40000, None) == 0.0
    assert commission_for(0, bank) == 0.0


async def _proposal(db, session, make_client, make_vehicle, make_bank, approve=True):
    customer = await make_client()
    vehicle = await make_vehicle()
    bank = await make_bank(commission_rate=2.0)
    proposal = await create_proposal(db, session, {
        "client_id": customer.id,
        "vehicle_id": vehicle.id,
        "bank_id": bank.id,
        "vehicle_price": 55000.0,
        "down_payment": 15000.0,
        "installments": 48,
        "installment_value": 1150.0,
    })
    if approve:
        await change_status(db, session, proposal, "aprovada")
    await db.commit()
    return proposal, vehicle


async def test_sale_from_approved_proposal(db, vendor_session, make_client, make_vehicle, make_bank):
    proposal, vehicle = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)

    sale = await create_sale_from_proposal(db, vendor_session, proposal.id)
    await db.commit()
    await db.refresh(vehicle)

    assert sale.total_value == proposal.total_amount
    assert sale.commission_value == 800.0
    assert sale.seller_id == vendor_session.user_id
    assert vehicle.status == VehicleStatus.VENDIDO.value


async def test_sale_requires_approved_proposal(db, vendor_session, make_client, make_vehicle, make_bank):
    proposal, _ = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank, approve=False)

    with pytest.raises(ProposalNotApprovedError):
        await create_sale_from_proposal(db, vendor_session, proposal.id)


async def test_proposal_converts_only_once(db, vendor_session, make_client, make_vehicle, make_bank):
    proposal, _ = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)
    await create_sale_from_proposal(db, vendor_session, proposal.id)
    await db.commit()

    with pytest.raises(InvalidTransitionError):
        await create_sale_from_proposal(db, vendor_session, proposal.id)


async def test_sales_stats(db, vendor_session, make_client, make_vehicle, make_bank):
    assert await sales_stats(db) == {"count": 0, "total_value": 0.0, "total_commission": 0.0}

    proposal, _ = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)
    await create_sale_from_proposal(db, vendor_session, proposal.id)
    await db.commit()

    stats = await sales_stats(db, seller_id=vendor_session.user_id)
    assert stats["count"] == 1
    assert stats["total_value"] == proposal.total_amount
    assert stats["total_commission"] == 800.0

    assert (await sales_stats(db, seller_id="outro"))["count"] == 0


async def test_sales_endpoints(client, db, vendor_session, vendor_headers, make_client, make_vehicle, make_bank):
    proposal, _ = await _proposal(db, vendor_session, make_client, make_vehicle, make_bank)

    response = await client.post("/api/sales", json={"proposal_id": proposal.id}, headers=vendor_headers)
    assert response.status_code == 201

    response = await client.get("/api/sales/stats", headers=vendor_headers)
    assert response.status_code == 200
    assert response.json()["count"] == 1
