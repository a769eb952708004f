"""
Dealer Back-Office - Statistics API
Dashboard da loja
"""
from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.database import get_db
from app.models import Vehicle, Client, Proposal, Reservation
from app.models.enums import VehicleStatus, ProposalStatus, ReservationStatus
from app.core import AuthSession, is_admin
from app.api.auth import require_staff
from app.services.funnel import BOARD_STAGES, effective_stage
from app.services.sales import sales_stats

router = APIRouter(prefix="/stats", tags=["Statistics"])


@router.get("/dashboard")
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Estatísticas para o dashboard (vendedor vê apenas as próprias vendas)"""

    # Veículos por status
    result = await db.execute(
        select(Vehicle.status, func.count(Vehicle.id)).group_by(Vehicle.status)
    )
    vehicles_by_status = {s.value: 0 for s in VehicleStatus}
    vehicles_by_status.update({row[0]: row[1] for row in result.all()})

    # Clientes por estágio ('lead' conta como atendimento)
    result = await db.execute(
        select(Client.funnel_stage, func.count(Client.id)).group_by(Client.funnel_stage)
    )
    clients_by_stage = {s.value: 0 for s in BOARD_STAGES}
    for stage, count in result.all():
        clients_by_stage[effective_stage(stage).value] += count

    # Propostas por status
    result = await db.execute(
        select(Proposal.status, func.count(Proposal.id)).group_by(Proposal.status)
    )
    proposals_by_status = {s.value: 0 for s in ProposalStatus}
    proposals_by_status.update({row[0]: row[1] for row in result.all()})

    # Reservas ativas e vencidas
    result = await db.execute(
        select(func.count(Reservation.id)).where(Reservation.status == ReservationStatus.ATIVA.value)
    )
    active_reservations = result.scalar() or 0

    result = await db.execute(
        select(func.count(Reservation.id)).where(
            Reservation.status == ReservationStatus.ATIVA.value,
            Reservation.valid_until < date.today()
        )
    )
    expired_reservations = result.scalar() or 0

    sales = await sales_stats(db, None if is_admin(session) else session.user_id)

    return {
        "vehicles": {
            "total": sum(vehicles_by_status.values()),
            "by_status": vehicles_by_status
        },
        "clients": {
            "total": sum(clients_by_stage.values()),
            "by_stage": clients_by_stage
        },
        "proposals": {
            "total": sum(proposals_by_status.values()),
            "by_status": proposals_by_status
        },
        "reservations": {
            "active": active_reservations,
            "expired": expired_reservations
        },
        "sales": sales
    }
