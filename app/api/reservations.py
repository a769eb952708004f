"""
Dealer Back-Office - Reservations API
Reservas de veículos com sinal e validade
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Reservation
from app.models.enums import ReservationStatus
from app.schemas import ReservationCreate, ReservationStatusUpdate, DocumentSignature
from app.core import AuthSession
from app.api.auth import require_staff
from app.api.documents import pdf_response
from app.services.common import get_or_raise
from app.services.documents import sign_document
from app.services.pdf_documents import render_document_pdf
from app.services.reservations import (
    create_reservation,
    update_status,
    delete_reservation,
    list_reservations,
    is_expired,
)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


def _reservation_out(reservation: Reservation, today: Optional[date] = None) -> dict:
    data = reservation.to_dict()
    data["is_expired"] = is_expired(reservation, today)
    return data


@router.get("")
async def list_all(
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    expired: bool = Query(False),
    client_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Lista reservas; expired=true traz as ativas com validade vencida"""
    reservations = await list_reservations(db, status=status_filter, expired=expired, client_id=client_id)
    today = date.today()
    return [_reservation_out(r, today) for r in reservations]


@router.get("/{reservation_id}")
async def get_reservation(
    reservation_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    reservation = await get_or_raise(db, Reservation, reservation_id, "Reserva")
    return _reservation_out(reservation)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create(
    request: ReservationCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Cria reserva e marca o veículo como reservado"""
    reservation = await create_reservation(
        db, session,
        client_id=request.client_id,
        vehicle_id=request.vehicle_id,
        deposit_amount=request.deposit_amount,
        notes=request.notes
    )
    return _reservation_out(reservation)


@router.patch("/{reservation_id}/status")
async def change_status(
    reservation_id: str,
    request: ReservationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Converte ou cancela a reserva"""
    reservation = await get_or_raise(db, Reservation, reservation_id, "Reserva")
    await update_status(db, session, reservation, request.status)
    await db.commit()
    await db.refresh(reservation)

    return _reservation_out(reservation)


@router.post("/{reservation_id}/sign")
async def sign(
    reservation_id: str,
    request: DocumentSignature,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    reservation = await get_or_raise(db, Reservation, reservation_id, "Reserva")
    await sign_document(db, session, reservation, request.party, request.signature)
    await db.commit()
    await db.refresh(reservation)

    return _reservation_out(reservation)


@router.get("/{reservation_id}/pdf")
async def download_pdf(
    reservation_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Termo de reserva em PDF"""
    reservation = await get_or_raise(db, Reservation, reservation_id, "Reserva")
    pdf_bytes, filename = await render_document_pdf(db, session, reservation)
    await db.commit()

    return pdf_response(pdf_bytes, filename)


@router.delete("/{reservation_id}")
async def delete(
    reservation_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Exclui a reserva e libera o veículo"""
    reservation = await get_or_raise(db, Reservation, reservation_id, "Reserva")
    await delete_reservation(db, session, reservation)
    await db.commit()

    return {"message": "Reserva excluída"}
