"""
Dealer Back-Office - Documents API
Recibos, termos de garantia, ATPV e declarações de desistência
"""
from typing import Optional

from fastapi import APIRouter, Depends, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Receipt, Warranty, TransferAuthorization, WithdrawalDeclaration
from app.schemas import ReceiptCreate, WarrantyCreate, TransferCreate, WithdrawalCreate, DocumentSignature
from app.core import AuthSession
from app.api.auth import require_staff
from app.services.common import get_or_raise
from app.services.documents import (
    create_receipt,
    create_warranty,
    create_transfer,
    create_withdrawal,
    list_documents,
    delete_document,
    sign_document,
)
from app.services.pdf_documents import render_document_pdf


def pdf_response(pdf_bytes: bytes, filename: str) -> Response:
    """PDF para download"""
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


def document_router(prefix: str, tag: str, model, create_schema, create_service, label: str) -> APIRouter:
    """Rotas de listagem, criação, assinatura, PDF e exclusão de um tipo de documento"""
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("")
    async def list_all(
        client_id: Optional[str] = Query(None),
        db: AsyncSession = Depends(get_db),
        session: AuthSession = Depends(require_staff)
    ):
        documents = await list_documents(db, model, client_id)
        return [d.to_dict() for d in documents]

    @router.get("/{document_id}")
    async def get_one(
        document_id: str,
        db: AsyncSession = Depends(get_db),
        session: AuthSession = Depends(require_staff)
    ):
        document = await get_or_raise(db, model, document_id, label)
        return document.to_dict()

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create(
        request: create_schema,
        db: AsyncSession = Depends(get_db),
        session: AuthSession = Depends(require_staff)
    ):
        document = await create_service(db, session, request.model_dump())
        await db.commit()
        await db.refresh(document)
        return document.to_dict()

    @router.post("/{document_id}/sign")
    async def sign(
        document_id: str,
        request: DocumentSignature,
        db: AsyncSession = Depends(get_db),
        session: AuthSession = Depends(require_staff)
    ):
        document = await get_or_raise(db, model, document_id, label)
        await sign_document(db, session, document, request.party, request.signature)
        await db.commit()
        await db.refresh(document)
        return document.to_dict()

    @router.get("/{document_id}/pdf")
    async def download_pdf(
        document_id: str,
        db: AsyncSession = Depends(get_db),
        session: AuthSession = Depends(require_staff)
    ):
        document = await get_or_raise(db, model, document_id, label)
        pdf_bytes, filename = await render_document_pdf(db, session, document)
        await db.commit()
        return pdf_response(pdf_bytes, filename)

    @router.delete("/{document_id}")
    async def delete(
        document_id: str,
        db: AsyncSession = Depends(get_db),
        session: AuthSession = Depends(require_staff)
    ):
        document = await get_or_raise(db, model, document_id, label)
        await delete_document(db, session, document)
        await db.commit()
        return {"message": f"{label} excluído"}

    return router


receipts_router = document_router(
    "/receipts", "Receipts", Receipt, ReceiptCreate, create_receipt, "Recibo"
)
warranties_router = document_router(
    "/warranties", "Warranties", Warranty, WarrantyCreate, create_warranty, "Termo de garantia"
)
transfers_router = document_router(
    "/transfers", "Transfers", TransferAuthorization, TransferCreate, create_transfer, "ATPV"
)
withdrawals_router = document_router(
    "/withdrawals", "Withdrawals", WithdrawalDeclaration, WithdrawalCreate, create_withdrawal,
    "Declaração de desistência"
)
