"""
Dealer Back-Office - Sales API
Vendas registradas a partir de propostas aprovadas
"""
from typing import Optional

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models import Sale
from app.schemas import SaleCreate
from app.core import AuthSession
from app.api.auth import require_staff
from app.services.sales import create_sale_from_proposal, sales_stats

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("")
async def list_sales(
    seller_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    query = select(Sale)
    if seller_id:
        query = query.where(Sale.seller_id == seller_id)

    result = await db.execute(query.order_by(Sale.sale_date.desc(), Sale.created_at.desc()))
    return [s.to_dict() for s in result.scalars().all()]


@router.get("/stats")
async def get_sales_stats(
    seller_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Total vendido, comissões e quantidade de vendas"""
    return await sales_stats(db, seller_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_sale(
    request: SaleCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Registra venda a partir de proposta aprovada"""
    sale = await create_sale_from_proposal(
        db, session, request.proposal_id,
        sale_date=request.sale_date,
        notes=request.notes
    )
    await db.commit()
    await db.refresh(sale)

    return sale.to_dict()
