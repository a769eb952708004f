"""
Dealer Back-Office - Sales
Conversão de proposta aprovada em venda e totais de comissão
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.core.exceptions import InvalidTransitionError
from app.models import Sale, Proposal, Bank, Client
from app.models.enums import VehicleStatus, ActivityAction, EntityType
from app.services.activity import log_activity
from app.services.common import get_or_raise, set_vehicle_status
from app.services.proposals import ensure_approved

logger = logging.getLogger(__name__)


def commission_for(financed_amount: Optional[float], bank: Optional[Bank]) -> float:
    """Comissão do vendedor: valor financiado x comissão do banco"""
    if bank is None or not financed_amount:
        return 0.0
    return round(financed_amount * (bank.commission_rate or 0) / 100, 2)


async def create_sale_from_proposal(
    db: AsyncSession,
    session: AuthSession,
    proposal_id: str,
    sale_date: Optional[date] = None,
    notes: Optional[str] = None
) -> Sale:
    proposal = await get_or_raise(db, Proposal, proposal_id, "Proposta")
    ensure_approved(proposal)

    existing = await db.execute(select(Sale).where(Sale.proposal_id == proposal.id))
    if existing.scalar_one_or_none():
        raise InvalidTransitionError(f"Proposta {proposal.proposal_number} já foi convertida em venda")

    bank = await db.get(Bank, proposal.bank_id) if proposal.bank_id else None
    client = await db.get(Client, proposal.client_id)

    sale = Sale(
        client_id=proposal.client_id,
        vehicle_id=proposal.vehicle_id,
        proposal_id=proposal.id,
        seller_id=proposal.seller_id or session.user_id,
        sale_date=sale_date or date.today(),
        total_value=proposal.total_amount or proposal.vehicle_price,
        commission_value=commission_for(proposal.financed_amount, bank),
        notes=notes,
    )
    db.add(sale)
    await set_vehicle_status(db, proposal.vehicle_id, VehicleStatus.VENDIDO)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.SALE, sale.id,
        f"Venda da proposta {proposal.proposal_number}" + (f" para {client.name}" if client else "")
    )
    logger.info(f"Venda registrada: proposta {proposal.proposal_number}")
    return sale


async def sales_stats(db: AsyncSession, seller_id: Optional[str] = None) -> dict:
    """Total vendido, total de comissões e quantidade de vendas"""
    query = select(
        func.count(Sale.id),
        func.coalesce(func.sum(Sale.total_value), 0),
        func.coalesce(func.sum(Sale.commission_value), 0),
    )
    if seller_id:
        query = query.where(Sale.seller_id == seller_id)

    count, total_value, total_commission = (await db.execute(query)).one()
    return {
        "count": count,
        "total_value": float(total_value),
        "total_commission": float(total_commission),
    }
