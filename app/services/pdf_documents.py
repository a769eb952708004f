"""
Dealer Back-Office - PDF Documents
Carrega cliente, veículo, loja e vendedor de um documento e gera o PDF correspondente
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.core.config import settings
from app.models import (
    Bank,
    Client,
    Contract,
    Proposal,
    Receipt,
    Reservation,
    TransferAuthorization,
    User,
    Vehicle,
    Warranty,
    WithdrawalDeclaration,
)
from app.models.enums import ActivityAction, EntityType
from app.services.activity import log_activity
from app.services.company import load_company
from app.utils.contractGenerator import generate_contract_pdf
from app.utils.proposalGenerator import generate_proposal_pdf
from app.utils.receiptGenerator import generate_receipt_pdf
from app.utils.reservationGenerator import generate_reservation_pdf
from app.utils.transferGenerator import generate_transfer_pdf
from app.utils.warrantyGenerator import generate_warranty_pdf
from app.utils.withdrawalGenerator import generate_withdrawal_pdf

logger = logging.getLogger(__name__)

# model -> (tipo no histórico, campo do número, prefixo do arquivo)
PDF_DOCUMENTS = {
    Contract: (EntityType.CONTRACT, "contract_number", "contrato"),
    Proposal: (EntityType.PROPOSAL, "proposal_number", "proposta"),
    Receipt: (EntityType.RECEIPT, "receipt_number", "recibo"),
    Warranty: (EntityType.WARRANTY, "warranty_number", "garantia"),
    TransferAuthorization: (EntityType.TRANSFER, "authorization_number", "atpv"),
    WithdrawalDeclaration: (EntityType.WITHDRAWAL, "declaration_number", "desistencia"),
    Reservation: (EntityType.RESERVATION, "reservation_number", "reserva"),
}


def row_dict(instance) -> Optional[dict]:
    """Todas as colunas da linha (inclusive assinaturas), para os geradores"""
    if instance is None:
        return None
    return {column.key: getattr(instance, column.key) for column in instance.__table__.columns}


async def _load(db: AsyncSession, model, entity_id: Optional[str]) -> Optional[dict]:
    if not entity_id:
        return None
    return row_dict(await db.get(model, entity_id))


async def render_document_pdf(
    db: AsyncSession,
    session: AuthSession,
    document
) -> Tuple[bytes, str]:
    """Gera o PDF do documento, registra generate_pdf e retorna (bytes, nome do arquivo)"""
    entity_type, number_field, file_prefix = PDF_DOCUMENTS[type(document)]
    data = row_dict(document)

    company = await load_company(db)
    client = await _load(db, Client, document.client_id)
    vehicle = await _load(db, Vehicle, document.vehicle_id)
    seller = await _load(db, User, document.seller_id)
    logo_path = settings.LOGO_PATH

    if isinstance(document, Contract):
        # Contrato usa os dados congelados na criação
        client = {**(client or {}), **(document.client_data or {})}
        vehicle = {**(vehicle or {}), **(document.vehicle_data or {})}
        pdf_bytes = generate_contract_pdf(data, client, vehicle, company, seller, logo_path)
    elif isinstance(document, Proposal):
        bank = await _load(db, Bank, document.bank_id)
        pdf_bytes = generate_proposal_pdf(data, client or {}, vehicle or {}, company, bank, seller, logo_path)
    elif isinstance(document, Receipt):
        pdf_bytes = generate_receipt_pdf(data, client, vehicle, company, seller, logo_path)
    elif isinstance(document, Warranty):
        pdf_bytes = generate_warranty_pdf(data, client or {}, vehicle or {}, company, logo_path)
    elif isinstance(document, TransferAuthorization):
        pdf_bytes = generate_transfer_pdf(data, client or {}, vehicle or {}, company, logo_path)
    elif isinstance(document, WithdrawalDeclaration):
        pdf_bytes = generate_withdrawal_pdf(data, client or {}, vehicle or {}, company, logo_path)
    else:
        pdf_bytes = generate_reservation_pdf(data, client or {}, vehicle or {}, company, logo_path)

    number = getattr(document, number_field) or document.id
    await log_activity(
        db, session, ActivityAction.GENERATE_PDF, entity_type, document.id,
        f"PDF gerado: {number}"
    )
    return pdf_bytes, f"{file_prefix}-{number}.pdf"
