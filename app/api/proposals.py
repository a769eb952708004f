"""
Dealer Back-Office - Proposals API
Propostas de venda, status e assinaturas
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models import Proposal
from app.models.enums import ProposalStatus, ActivityAction, EntityType
from app.schemas import ProposalCreate, ProposalUpdate, ProposalStatusUpdate, SignatureRequest
from app.core import AuthSession, is_admin
from app.api.auth import require_staff
from app.api.documents import pdf_response
from app.services.activity import log_activity
from app.services.common import get_or_raise
from app.services.pdf_documents import render_document_pdf
from app.services.proposals import create_proposal, change_status, sign_proposal, update_proposal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/proposals", tags=["Proposals"])


@router.get("")
async def list_proposals(
    status_filter: Optional[ProposalStatus] = Query(None, alias="status"),
    client_id: Optional[str] = Query(None),
    seller_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Lista propostas (mais recentes primeiro)"""
    query = select(Proposal)
    if status_filter:
        query = query.where(Proposal.status == ProposalStatus(status_filter).value)
    if client_id:
        query = query.where(Proposal.client_id == client_id)
    if seller_id:
        query = query.where(Proposal.seller_id == seller_id)

    result = await db.execute(query.order_by(Proposal.created_at.desc()))
    return [p.to_dict() for p in result.scalars().all()]


@router.get("/{proposal_id}")
async def get_proposal(
    proposal_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    proposal = await get_or_raise(db, Proposal, proposal_id, "Proposta")
    return proposal.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create(
    request: ProposalCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Cria proposta pendente"""
    proposal = await create_proposal(db, session, request.model_dump())
    await db.commit()
    await db.refresh(proposal)

    return proposal.to_dict()


@router.put("/{proposal_id}")
async def update(
    proposal_id: str,
    request: ProposalUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    proposal = await get_or_raise(db, Proposal, proposal_id, "Proposta")
    await update_proposal(db, session, proposal, request.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(proposal)

    return proposal.to_dict()


@router.patch("/{proposal_id}/status")
async def update_status(
    proposal_id: str,
    request: ProposalStatusUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Aprova, recusa, cancela ou volta a proposta para pendente"""
    proposal = await get_or_raise(db, Proposal, proposal_id, "Proposta")
    action = await change_status(db, session, proposal, request.status)
    await db.commit()
    await db.refresh(proposal)

    return {"action": action.value, "proposal": proposal.to_dict()}


@router.post("/{proposal_id}/sign")
async def sign(
    proposal_id: str,
    request: SignatureRequest,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    proposal = await get_or_raise(db, Proposal, proposal_id, "Proposta")
    await sign_proposal(db, session, proposal, request.party, request.signature)
    await db.commit()
    await db.refresh(proposal)

    return proposal.to_dict()


@router.get("/{proposal_id}/pdf")
async def download_pdf(
    proposal_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """PDF da proposta"""
    proposal = await get_or_raise(db, Proposal, proposal_id, "Proposta")
    pdf_bytes, filename = await render_document_pdf(db, session, proposal)
    await db.commit()

    return pdf_response(pdf_bytes, filename)


@router.delete("/{proposal_id}")
async def delete(
    proposal_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Exclui proposta (vendedor responsável ou admin)"""
    proposal = await get_or_raise(db, Proposal, proposal_id, "Proposta")

    if not is_admin(session) and proposal.seller_id != session.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sem permissão para excluir esta proposta"
        )

    number = proposal.proposal_number
    await db.delete(proposal)
    await log_activity(db, session, ActivityAction.DELETE, EntityType.PROPOSAL, proposal_id,
                       f"Proposta {number} excluída")
    await db.commit()
    logger.info(f"Proposta excluída: {number}")

    return {"message": "Proposta excluída"}
