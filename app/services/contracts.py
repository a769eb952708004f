"""
Dealer Back-Office - Contracts
Validação das condições de pagamento e criação de contratos
"""
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.core.config import settings
from app.core.exceptions import ValidationError
from app.models import Contract, Client, Vehicle, Proposal
from app.models.enums import (
    PaymentType,
    ProposalType,
    ActivityAction,
    EntityType,
    DocumentPrefix,
    SignatureParty,
)
from app.services.activity import log_activity
from app.services.common import get_or_raise
from app.services.numbering import next_document_number
from app.services.proposals import ensure_approved

logger = logging.getLogger(__name__)


def validate_payment_terms(
    payment_type,
    down_payment: Optional[float] = None,
    installments: Optional[int] = None,
    installment_value: Optional[float] = None,
    due_day: Optional[int] = None,
    first_due_date: Optional[date] = None
) -> None:
    """Contrato parcelado exige entrada, parcelas, valor, dia de vencimento e 1º vencimento"""
    try:
        payment_type = PaymentType(payment_type)
    except ValueError:
        raise ValidationError(f"Forma de pagamento inválida: {payment_type}")

    if payment_type == PaymentType.AVISTA:
        return

    missing = []
    if down_payment is None:
        missing.append("entrada")
    if not installments or installments < 1:
        missing.append("número de parcelas")
    if not installment_value or installment_value <= 0:
        missing.append("valor da parcela")
    if due_day is None or not 1 <= due_day <= 31:
        missing.append("dia de vencimento (1 a 31)")
    if first_due_date is None:
        missing.append("primeiro vencimento")

    if missing:
        raise ValidationError("Contrato parcelado requer: " + ", ".join(missing))


def _client_snapshot(client: Client) -> dict:
    data = client.to_dict()
    for key in ("funnel_stage", "notes", "seller_id", "user_id", "created_at", "updated_at"):
        data.pop(key, None)
    return data


def _vehicle_snapshot(vehicle: Vehicle) -> dict:
    data = vehicle.to_dict()
    for key in ("status", "description", "created_at", "updated_at"):
        data.pop(key, None)
    return data


async def create_contract(db: AsyncSession, session: AuthSession, data: dict) -> Contract:
    """
    Cria contrato de compra e venda.
    Com proposal_id, a proposta precisa estar aprovada e completa os dados ausentes.
    """
    data = dict(data)
    proposal = None
    if data.get("proposal_id"):
        proposal = await get_or_raise(db, Proposal, data["proposal_id"], "Proposta")
        ensure_approved(proposal)
        _fill_from_proposal(data, proposal)

    client = await get_or_raise(db, Client, data.get("client_id"), "Cliente")
    vehicle = await get_or_raise(db, Vehicle, data.get("vehicle_id"), "Veículo")

    payment_type = PaymentType(data.get("payment_type") or PaymentType.AVISTA)
    validate_payment_terms(
        payment_type,
        down_payment=data.get("down_payment"),
        installments=data.get("installments"),
        installment_value=data.get("installment_value"),
        due_day=data.get("due_day"),
        first_due_date=data.get("first_due_date"),
    )

    delivery_percentage = data.get("delivery_percentage")
    if delivery_percentage is None:
        delivery_percentage = settings.DEFAULT_DELIVERY_PERCENTAGE

    contract = Contract(
        contract_number=await next_document_number(db, DocumentPrefix.CONTRACT),
        proposal_id=proposal.id if proposal else None,
        client_id=client.id,
        vehicle_id=vehicle.id,
        seller_id=session.user_id,
        contract_date=data.get("contract_date") or date.today(),
        vehicle_price=data.get("vehicle_price") or vehicle.price,
        payment_type=payment_type.value,
        delivery_percentage=delivery_percentage,
        witness1=data.get("witness1"),
        witness2=data.get("witness2"),
        client_data=_client_snapshot(client),
        vehicle_data=_vehicle_snapshot(vehicle),
        notes=data.get("notes"),
    )
    if payment_type == PaymentType.PARCELADO:
        contract.down_payment = data.get("down_payment")
        contract.installments = data.get("installments")
        contract.installment_value = data.get("installment_value")
        contract.due_day = data.get("due_day")
        contract.first_due_date = data.get("first_due_date")

    db.add(contract)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.CONTRACT, contract.id,
        f"Contrato {contract.contract_number}: {vehicle.title} para {client.name}"
    )
    logger.info(f"Contrato criado: {contract.contract_number}")
    return contract


def _fill_from_proposal(data: dict, proposal: Proposal) -> None:
    """Completa campos ausentes com os valores da proposta"""
    data.setdefault("client_id", None)
    data.setdefault("vehicle_id", None)
    data["client_id"] = data["client_id"] or proposal.client_id
    data["vehicle_id"] = data["vehicle_id"] or proposal.vehicle_id
    if not data.get("vehicle_price"):
        data["vehicle_price"] = proposal.vehicle_price

    if data.get("payment_type"):
        return

    # Só o financiamento direto gera parcelas com a loja (no bancário a loja recebe do banco)
    if proposal.type != ProposalType.FINANCIAMENTO_DIRETO.value or not proposal.installments:
        data["payment_type"] = PaymentType.AVISTA
        return

    data["payment_type"] = PaymentType.PARCELADO
    if data.get("down_payment") is None:
        data["down_payment"] = proposal.down_payment or 0
    if not data.get("installments"):
        data["installments"] = proposal.installments
    if not data.get("installment_value"):
        data["installment_value"] = proposal.installment_value
    if not data.get("first_due_date"):
        data["first_due_date"] = proposal.first_due_date
    if data.get("due_day") is None and data.get("first_due_date"):
        data["due_day"] = data["first_due_date"].day


async def sign_contract(
    db: AsyncSession,
    session: AuthSession,
    contract: Contract,
    party: SignatureParty,
    signature: str
) -> Contract:
    """Grava assinatura; signed_at é preenchido quando ambas as partes assinaram"""
    party = SignatureParty(party)
    if party == SignatureParty.CLIENT:
        contract.client_signature = signature
    else:
        contract.seller_signature = signature

    if contract.client_signature and contract.seller_signature and not contract.signed_at:
        contract.signed_at = datetime.utcnow()
    await db.flush()

    await log_activity(
        db, session, ActivityAction.SIGN, EntityType.CONTRACT, contract.id,
        f"Assinatura ({party.value}) no contrato {contract.contract_number}"
    )
    return contract
