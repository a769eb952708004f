"""
Dealer Back-Office - Banks API
Bancos parceiros, taxas por prazo e comissão
"""
import logging

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models import Bank
from app.schemas import BankCreate, BankUpdate
from app.core import AuthSession
from app.api.auth import require_staff, require_admin
from app.services.common import get_or_raise

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/banks", tags=["Banks"])


@router.get("")
async def list_banks(
    active_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    query = select(Bank).order_by(Bank.name)
    if active_only:
        query = query.where(Bank.is_active == True)  # noqa: E712

    result = await db.execute(query)
    return [b.to_dict() for b in result.scalars().all()]


@router.get("/{bank_id}")
async def get_bank(
    bank_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    bank = await get_or_raise(db, Bank, bank_id, "Banco")
    return bank.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_bank(
    request: BankCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_admin)
):
    """Cadastra banco"""
    bank = Bank(**request.model_dump())
    db.add(bank)
    await db.commit()
    await db.refresh(bank)
    logger.info(f"Banco cadastrado: {bank.name}")

    return bank.to_dict()


@router.put("/{bank_id}")
async def update_bank(
    bank_id: str,
    request: BankUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_admin)
):
    bank = await get_or_raise(db, Bank, bank_id, "Banco")

    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(bank, field, value)

    await db.commit()
    await db.refresh(bank)

    return bank.to_dict()


@router.delete("/{bank_id}")
async def delete_bank(
    bank_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_admin)
):
    """Exclui banco"""
    bank = await get_or_raise(db, Bank, bank_id, "Banco")
    await db.delete(bank)
    await db.commit()
    logger.info(f"Banco excluído: {bank_id}")

    return {"message": "Banco excluído"}
