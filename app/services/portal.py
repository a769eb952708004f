"""
Dealer Back-Office - Client Portal
Resolução do cadastro do cliente logado e seus documentos
"""
import logging
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession, is_client
from app.core.exceptions import PermissionDeniedError, NotFoundError
from app.models import (
    Client,
    Contract,
    Proposal,
    Receipt,
    Warranty,
    TransferAuthorization,
    Reservation,
    WithdrawalDeclaration,
)

logger = logging.getLogger(__name__)

# Coleções exibidas no portal: nome -> model
PORTAL_DOCUMENTS = {
    "contracts": Contract,
    "proposals": Proposal,
    "receipts": Receipt,
    "warranties": Warranty,
    "transfers": TransferAuthorization,
    "reservations": Reservation,
    "withdrawals": WithdrawalDeclaration,
}


async def resolve_client(db: AsyncSession, session: AuthSession) -> Optional[Client]:
    """
    Cadastro de cliente do usuário logado.
    Procura pelo vínculo user_id; sem vínculo, pelo email (sem diferenciar maiúsculas)
    e grava o vínculo encontrado.
    """
    result = await db.execute(select(Client).where(Client.user_id == session.user_id))
    client = result.scalars().first()
    if client:
        return client

    if not session.email:
        return None

    result = await db.execute(
        select(Client)
        .where(func.lower(Client.email) == session.email.lower())
        .order_by(Client.created_at)
    )
    client = result.scalars().first()
    if client is None:
        return None

    if client.user_id is None:
        client.user_id = session.user_id
        await db.flush()
        logger.info(f"Cliente {client.id} vinculado ao usuário {session.user_id}")
    elif client.user_id != session.user_id:
        # Email já vinculado a outra conta
        return None
    return client


async def require_portal_client(db: AsyncSession, session: AuthSession) -> Client:
    if not is_client(session):
        raise PermissionDeniedError("Área exclusiva para clientes")
    client = await resolve_client(db, session)
    if client is None:
        raise NotFoundError("Cadastro de cliente não encontrado para este usuário")
    return client


async def list_client_documents(db: AsyncSession, client: Client, kind: str) -> list:
    model = PORTAL_DOCUMENTS.get(kind)
    if model is None:
        raise NotFoundError(f"Tipo de documento desconhecido: {kind}")

    result = await db.execute(
        select(model)
        .where(model.client_id == client.id)
        .order_by(model.created_at.desc())
    )
    return list(result.scalars().all())


async def get_client_document(db: AsyncSession, client: Client, kind: str, document_id: str):
    """Documento do próprio cliente (404 para documentos de terceiros)"""
    model = PORTAL_DOCUMENTS.get(kind)
    if model is None:
        raise NotFoundError(f"Tipo de documento desconhecido: {kind}")

    document = await db.get(model, document_id)
    if document is None or document.client_id != client.id:
        raise NotFoundError("Documento não encontrado")
    return document
