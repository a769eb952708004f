"""
Dealer Back-Office - Documents
Recibos, termos de garantia, ATPV e declarações de desistência
"""
import logging
from datetime import date
from typing import List, Optional, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.core.config import settings
from app.core.exceptions import ValidationError
from app.models import (
    Receipt,
    Warranty,
    TransferAuthorization,
    WithdrawalDeclaration,
    Reservation,
    Client,
    Vehicle,
)
from app.models.enums import (
    PaymentMethod,
    PaymentReference,
    ActivityAction,
    EntityType,
    DocumentPrefix,
    SignatureParty,
)
from app.services.activity import log_activity
from app.services.common import get_or_raise
from app.services.numbering import next_document_number

logger = logging.getLogger(__name__)

DEFAULT_WARRANTY_PERIOD = "6 meses"
DEFAULT_WARRANTY_COVERAGE = "Motor e Câmbio"
DEFAULT_WARRANTY_KM = 200000

# model -> (tipo no histórico, campo do número, rótulo)
DOCUMENT_TYPES = {
    Receipt: (EntityType.RECEIPT, "receipt_number", "Recibo"),
    Warranty: (EntityType.WARRANTY, "warranty_number", "Garantia"),
    TransferAuthorization: (EntityType.TRANSFER, "authorization_number", "ATPV"),
    WithdrawalDeclaration: (EntityType.WITHDRAWAL, "declaration_number", "Declaração de desistência"),
}

# Campos de assinatura aceitos por documento
SIGNATURE_FIELDS = {
    Receipt: {SignatureParty.CLIENT: "client_signature", SignatureParty.VENDOR: "vendor_signature"},
    Warranty: {SignatureParty.CLIENT: "client_signature"},
    TransferAuthorization: {SignatureParty.CLIENT: "client_signature", SignatureParty.VENDOR: "vendor_signature"},
    WithdrawalDeclaration: {SignatureParty.CLIENT: "client_signature"},
    Reservation: {SignatureParty.CLIENT: "client_signature"},
}


async def create_receipt(db: AsyncSession, session: AuthSession, data: dict) -> Receipt:
    """Recibo de pagamento (valor deve ser positivo)"""
    amount = data.get("amount")
    if amount is None or amount <= 0:
        raise ValidationError("Valor do recibo deve ser maior que zero")

    client = None
    if data.get("client_id"):
        client = await get_or_raise(db, Client, data["client_id"], "Cliente")
    if data.get("vehicle_id"):
        await get_or_raise(db, Vehicle, data["vehicle_id"], "Veículo")

    payer_name = data.get("payer_name") or (client.name if client else None)
    if not payer_name:
        raise ValidationError("Informe o nome do pagador ou selecione um cliente")

    receipt = Receipt(
        receipt_number=await next_document_number(db, DocumentPrefix.RECEIPT),
        client_id=data.get("client_id"),
        vehicle_id=data.get("vehicle_id"),
        proposal_id=data.get("proposal_id"),
        seller_id=session.user_id,
        amount=amount,
        payment_method=PaymentMethod(data.get("payment_method") or PaymentMethod.PIX).value,
        payment_reference=PaymentReference(data.get("payment_reference") or PaymentReference.ENTRADA).value,
        payer_name=payer_name,
        payer_cpf=data.get("payer_cpf") or (client.cpf if client else None),
        payment_date=data.get("payment_date") or date.today(),
        description=data.get("description"),
        location=data.get("location") or settings.DEFAULT_DOCUMENT_LOCATION,
    )
    db.add(receipt)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.RECEIPT, receipt.id,
        f"Recibo {receipt.receipt_number} de {payer_name}"
    )
    logger.info(f"Recibo criado: {receipt.receipt_number}")
    return receipt


async def create_warranty(db: AsyncSession, session: AuthSession, data: dict) -> Warranty:
    client = await get_or_raise(db, Client, data.get("client_id"), "Cliente")
    vehicle = await get_or_raise(db, Vehicle, data.get("vehicle_id"), "Veículo")

    warranty_km = data.get("warranty_km")
    warranty = Warranty(
        warranty_number=await next_document_number(db, DocumentPrefix.WARRANTY),
        contract_id=data.get("contract_id"),
        client_id=client.id,
        vehicle_id=vehicle.id,
        seller_id=session.user_id,
        warranty_period=data.get("warranty_period") or DEFAULT_WARRANTY_PERIOD,
        warranty_coverage=data.get("warranty_coverage") or DEFAULT_WARRANTY_COVERAGE,
        warranty_km=DEFAULT_WARRANTY_KM if warranty_km is None else warranty_km,
        conditions=data.get("conditions"),
    )
    db.add(warranty)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.WARRANTY, warranty.id,
        f"Garantia {warranty.warranty_number}: {vehicle.title}"
    )
    logger.info(f"Garantia criada: {warranty.warranty_number}")
    return warranty


async def create_transfer(db: AsyncSession, session: AuthSession, data: dict) -> TransferAuthorization:
    """Autorização de transferência (valor padrão = preço do veículo)"""
    client = await get_or_raise(db, Client, data.get("client_id"), "Cliente")
    vehicle = await get_or_raise(db, Vehicle, data.get("vehicle_id"), "Veículo")

    transfer = TransferAuthorization(
        authorization_number=await next_document_number(db, DocumentPrefix.TRANSFER),
        contract_id=data.get("contract_id"),
        client_id=client.id,
        vehicle_id=vehicle.id,
        seller_id=session.user_id,
        vehicle_value=data.get("vehicle_value") or vehicle.price,
        transfer_date=data.get("transfer_date") or date.today(),
        location=data.get("location") or settings.DEFAULT_DOCUMENT_LOCATION,
    )
    db.add(transfer)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.TRANSFER, transfer.id,
        f"ATPV {transfer.authorization_number}: {vehicle.title} para {client.name}"
    )
    logger.info(f"ATPV criada: {transfer.authorization_number}")
    return transfer


async def create_withdrawal(db: AsyncSession, session: AuthSession, data: dict) -> WithdrawalDeclaration:
    client = await get_or_raise(db, Client, data.get("client_id"), "Cliente")
    vehicle = await get_or_raise(db, Vehicle, data.get("vehicle_id"), "Veículo")

    declaration = WithdrawalDeclaration(
        declaration_number=await next_document_number(db, DocumentPrefix.WITHDRAWAL),
        client_id=client.id,
        vehicle_id=vehicle.id,
        seller_id=session.user_id,
        reason=data.get("reason"),
        declaration_date=data.get("declaration_date") or date.today(),
    )
    db.add(declaration)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.WITHDRAWAL, declaration.id,
        f"Desistência {declaration.declaration_number} de {client.name}"
    )
    logger.info(f"Declaração de desistência criada: {declaration.declaration_number}")
    return declaration


async def list_documents(
    db: AsyncSession,
    model: Type,
    client_id: Optional[str] = None
) -> List:
    """Documentos do tipo, mais recentes primeiro"""
    query = select(model)
    if client_id:
        query = query.where(model.client_id == client_id)
    query = query.order_by(model.created_at.desc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def delete_document(db: AsyncSession, session: AuthSession, document) -> None:
    entity_type, number_field, label = DOCUMENT_TYPES[type(document)]
    number = getattr(document, number_field)
    document_id = document.id

    await db.delete(document)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.DELETE, entity_type, document_id,
        f"{label} {number} excluído"
    )
    logger.info(f"{label} excluído: {number}")


async def sign_document(
    db: AsyncSession,
    session: AuthSession,
    document,
    party: SignatureParty,
    signature: str
):
    """Grava a assinatura da parte no documento (recibo, garantia, ATPV, desistência ou reserva)"""
    party = SignatureParty(party)
    field = SIGNATURE_FIELDS[type(document)].get(party)
    if field is None:
        raise ValidationError(f"Documento não possui assinatura do tipo '{party.value}'")
    if not signature:
        raise ValidationError("Assinatura vazia")

    setattr(document, field, signature)
    await db.flush()

    if isinstance(document, Reservation):
        entity_type, number = EntityType.RESERVATION, document.reservation_number
    else:
        entity_type, number_field, _ = DOCUMENT_TYPES[type(document)]
        number = getattr(document, number_field)

    await log_activity(
        db, session, ActivityAction.SIGN, entity_type, document.id,
        f"Assinatura ({party.value}) em {number}"
    )
    return document
