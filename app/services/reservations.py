"""
Dealer Back-Office - Reservations
Reserva de veículo com sinal, validade e conversão/cancelamento
"""
import logging
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.core.config import settings
from app.core.exceptions import ValidationError, InvalidTransitionError
from app.models import Reservation, Client, Vehicle
from app.models.enums import (
    ReservationStatus,
    VehicleStatus,
    ActivityAction,
    EntityType,
    DocumentPrefix,
)
from app.services.activity import log_activity
from app.services.common import get_or_raise, set_vehicle_status
from app.services.numbering import next_document_number

logger = logging.getLogger(__name__)

# Status do veículo após cada desfecho da reserva
VEHICLE_STATUS_BY_OUTCOME = {
    ReservationStatus.CONVERTIDA: VehicleStatus.VENDIDO,
    ReservationStatus.CANCELADA: VehicleStatus.DISPONIVEL,
}

ACTION_BY_OUTCOME = {
    ReservationStatus.CONVERTIDA: ActivityAction.CONVERT,
    ReservationStatus.CANCELADA: ActivityAction.CANCEL,
}


def is_expired(reservation: Reservation, today: Optional[date] = None) -> bool:
    """Reserva ativa com validade vencida (apenas informativo)"""
    today = today or date.today()
    return (
        reservation.status == ReservationStatus.ATIVA.value
        and reservation.valid_until is not None
        and reservation.valid_until < today
    )


async def create_reservation(
    db: AsyncSession,
    session: AuthSession,
    client_id: Optional[str],
    vehicle_id: Optional[str],
    deposit_amount: float = 0,
    today: Optional[date] = None,
    notes: Optional[str] = None
) -> Reservation:
    """
    Cria reserva ativa válida por RESERVATION_VALIDITY_DAYS e marca o veículo como reservado.

    A reserva é gravada primeiro; a atualização do veículo é um passo
    separado. Se esse passo falhar a reserva permanece ativa e a falha é logada.
    """
    if not client_id or not vehicle_id:
        raise ValidationError("Selecione o cliente e o veículo da reserva")
    if deposit_amount is not None and deposit_amount < 0:
        raise ValidationError("Valor do sinal não pode ser negativo")

    client = await get_or_raise(db, Client, client_id, "Cliente")
    vehicle = await get_or_raise(db, Vehicle, vehicle_id, "Veículo")

    today = today or date.today()
    reservation = Reservation(
        reservation_number=await next_document_number(db, DocumentPrefix.RESERVATION),
        client_id=client.id,
        vehicle_id=vehicle.id,
        seller_id=session.user_id,
        deposit_amount=deposit_amount or 0,
        reservation_date=today,
        valid_until=today + timedelta(days=settings.RESERVATION_VALIDITY_DAYS),
        status=ReservationStatus.ATIVA.value,
        notes=notes,
    )
    db.add(reservation)
    await db.flush()
    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.RESERVATION, reservation.id,
        f"Reserva {reservation.reservation_number}: {vehicle.title} para {client.name}"
    )
    await db.commit()
    logger.info(f"Reserva criada: {reservation.reservation_number}")

    try:
        await set_vehicle_status(db, vehicle.id, VehicleStatus.RESERVADO)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(
            f"Reserva {reservation.reservation_number} criada, mas falhou ao marcar "
            f"veículo {vehicle.id} como reservado: {e}"
        )
        await db.refresh(reservation)

    return reservation


async def update_status(
    db: AsyncSession,
    session: AuthSession,
    reservation: Reservation,
    new_status
) -> Reservation:
    """Converte ou cancela uma reserva ativa, ajustando o veículo"""
    try:
        status = ReservationStatus(new_status)
    except ValueError:
        raise ValidationError(f"Status de reserva inválido: {new_status}")

    if reservation.status != ReservationStatus.ATIVA.value:
        raise InvalidTransitionError(
            f"Reserva {reservation.reservation_number} já está {reservation.status}"
        )
    if status == ReservationStatus.ATIVA:
        raise InvalidTransitionError(f"Reserva {reservation.reservation_number} já está ativa")

    reservation.status = status.value
    await set_vehicle_status(db, reservation.vehicle_id, VEHICLE_STATUS_BY_OUTCOME[status])

    await log_activity(
        db, session, ACTION_BY_OUTCOME[status], EntityType.RESERVATION, reservation.id,
        f"Reserva {reservation.reservation_number}: {status.value}"
    )
    logger.info(f"Reserva {reservation.reservation_number} -> {status.value}")
    return reservation


async def delete_reservation(db: AsyncSession, session: AuthSession, reservation: Reservation) -> None:
    """Exclui a reserva e libera o veículo"""
    number = reservation.reservation_number
    reservation_id = reservation.id
    await set_vehicle_status(db, reservation.vehicle_id, VehicleStatus.DISPONIVEL)
    await db.delete(reservation)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.DELETE, EntityType.RESERVATION, reservation_id,
        f"Reserva {number} excluída"
    )
    logger.info(f"Reserva excluída: {number}")


async def list_reservations(
    db: AsyncSession,
    status: Optional[ReservationStatus] = None,
    expired: bool = False,
    client_id: Optional[str] = None,
    today: Optional[date] = None
) -> List[Reservation]:
    """Lista reservas (mais recentes primeiro); expired=True traz só as ativas vencidas"""
    query = select(Reservation)
    if status:
        query = query.where(Reservation.status == ReservationStatus(status).value)
    if client_id:
        query = query.where(Reservation.client_id == client_id)
    if expired:
        today = today or date.today()
        query = query.where(
            Reservation.status == ReservationStatus.ATIVA.value,
            Reservation.valid_until < today
        )
    query = query.order_by(Reservation.created_at.desc())

    result = await db.execute(query)
    return list(result.scalars().all())
