"""
Dealer Back-Office - Contracts API
Contratos de compra e venda
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models import Contract
from app.models.enums import ActivityAction, EntityType
from app.schemas import ContractCreate, SignatureRequest
from app.core import AuthSession, is_admin
from app.api.auth import require_staff
from app.api.documents import pdf_response
from app.services.activity import log_activity
from app.services.common import get_or_raise
from app.services.contracts import create_contract, sign_contract
from app.services.pdf_documents import render_document_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["Contracts"])


@router.get("")
async def list_contracts(
    client_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Lista contratos (mais recentes primeiro)"""
    query = select(Contract)
    if client_id:
        query = query.where(Contract.client_id == client_id)

    result = await db.execute(query.order_by(Contract.created_at.desc()))
    return [c.to_dict() for c in result.scalars().all()]


@router.get("/{contract_id}")
async def get_contract(
    contract_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    contract = await get_or_raise(db, Contract, contract_id, "Contrato")
    return contract.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create(
    request: ContractCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Cria contrato (a partir de proposta aprovada ou com dados avulsos)"""
    contract = await create_contract(db, session, request.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(contract)

    return contract.to_dict()


@router.post("/{contract_id}/sign")
async def sign(
    contract_id: str,
    request: SignatureRequest,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    contract = await get_or_raise(db, Contract, contract_id, "Contrato")
    await sign_contract(db, session, contract, request.party, request.signature)
    await db.commit()
    await db.refresh(contract)

    return contract.to_dict()


@router.get("/{contract_id}/pdf")
async def download_pdf(
    contract_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """PDF do contrato"""
    contract = await get_or_raise(db, Contract, contract_id, "Contrato")
    pdf_bytes, filename = await render_document_pdf(db, session, contract)
    await db.commit()

    return pdf_response(pdf_bytes, filename)


@router.delete("/{contract_id}")
async def delete(
    contract_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Exclui contrato (vendedor responsável ou admin)"""
    contract = await get_or_raise(db, Contract, contract_id, "Contrato")

    if not is_admin(session) and contract.seller_id != session.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sem permissão para excluir este contrato"
        )

    number = contract.contract_number
    await db.delete(contract)
    await log_activity(db, session, ActivityAction.DELETE, EntityType.CONTRACT, contract_id,
                       f"Contrato {number} excluído")
    await db.commit()
    logger.info(f"Contrato excluído: {number}")

    return {"message": "Contrato excluído"}
