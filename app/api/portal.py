"""
Dealer Back-Office - Client Portal API
Área do cliente: cadastro e documentos próprios (somente leitura)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.core import AuthSession
from app.api.auth import get_current_session
from app.api.documents import pdf_response
from app.services.pdf_documents import render_document_pdf
from app.services.portal import require_portal_client, list_client_documents, get_client_document

router = APIRouter(prefix="/portal", tags=["Client Portal"])


@router.get("/me")
async def portal_me(
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(get_current_session)
):
    """Cadastro do cliente logado"""
    client = await require_portal_client(db, session)
    return client.to_dict()


@router.get("/{kind}")
async def portal_documents(
    kind: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(get_current_session)
):
    """Documentos do cliente: contracts, proposals, receipts, warranties, transfers, reservations, withdrawals"""
    client = await require_portal_client(db, session)
    documents = await list_client_documents(db, client, kind)
    return [d.to_dict() for d in documents]


@router.get("/{kind}/{document_id}/pdf")
async def portal_document_pdf(
    kind: str,
    document_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(get_current_session)
):
    client = await require_portal_client(db, session)
    document = await get_client_document(db, client, kind, document_id)
    pdf_bytes, filename = await render_document_pdf(db, session, document)
    await db.commit()

    return pdf_response(pdf_bytes, filename)
