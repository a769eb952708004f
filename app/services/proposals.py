"""
Dealer Back-Office - Proposals
Criação, assinatura e máquina de status das propostas
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.core.config import settings
from app.core.exceptions import ValidationError, ProposalNotApprovedError
from app.models import Proposal, Client, Vehicle, Bank
from app.models.enums import (
    ProposalStatus,
    ProposalType,
    ActivityAction,
    EntityType,
    DocumentPrefix,
    SignatureParty,
)
from app.services.activity import log_activity
from app.services.common import get_or_raise
from app.services.numbering import next_document_number

logger = logging.getLogger(__name__)

# Ação registrada no histórico para cada status de destino
ACTION_BY_STATUS = {
    ProposalStatus.APROVADA: ActivityAction.APPROVE,
    ProposalStatus.RECUSADA: ActivityAction.REJECT,
    ProposalStatus.CANCELADA: ActivityAction.CANCEL,
    ProposalStatus.PENDENTE: ActivityAction.UPDATE,
}

STATUS_LABELS = {
    ProposalStatus.PENDENTE: "Pendente",
    ProposalStatus.APROVADA: "Aprovada",
    ProposalStatus.RECUSADA: "Recusada",
    ProposalStatus.CANCELADA: "Cancelada",
}


def parse_status(status) -> ProposalStatus:
    try:
        return ProposalStatus(status)
    except ValueError:
        raise ValidationError(f"Status de proposta inválido: {status}")


def action_for_status(status) -> ActivityAction:
    """Ação do histórico correspondente ao novo status"""
    return ACTION_BY_STATUS[parse_status(status)]


def ensure_approved(proposal: Proposal) -> None:
    """Bloqueia contrato/venda de proposta não aprovada (se a regra estiver ativa)"""
    if not settings.REQUIRE_APPROVED_PROPOSAL:
        return
    if proposal.status != ProposalStatus.APROVADA.value:
        raise ProposalNotApprovedError(
            f"Proposta {proposal.proposal_number} não está aprovada (status: {proposal.status})"
        )


async def create_proposal(db: AsyncSession, session: AuthSession, data: dict) -> Proposal:
    """Cria proposta pendente com número PROP"""
    client = await get_or_raise(db, Client, data.get("client_id"), "Cliente")
    vehicle = await get_or_raise(db, Vehicle, data.get("vehicle_id"), "Veículo")
    if data.get("bank_id"):
        await get_or_raise(db, Bank, data["bank_id"], "Banco")

    proposal_type = ProposalType(data.get("type") or ProposalType.FINANCIAMENTO_BANCARIO)
    vehicle_price = float(data.get("vehicle_price") or vehicle.price)
    down_payment = float(data.get("down_payment") or 0)

    financed_amount = data.get("financed_amount")
    if financed_amount is None:
        financed_amount = vehicle_price - down_payment
    if financed_amount < 0:
        raise ValidationError("Entrada maior que o valor do veículo")

    installments = int(data.get("installments") or 0)
    installment_value = float(data.get("installment_value") or 0)
    if proposal_type != ProposalType.A_VISTA and installments > 0 and installment_value <= 0:
        raise ValidationError("Informe o valor da parcela")

    total_amount = data.get("total_amount")
    if total_amount is None:
        if installments and installment_value:
            total_amount = down_payment + installments * installment_value
        else:
            total_amount = data.get("cash_price") or vehicle_price

    proposal = Proposal(
        proposal_number=await next_document_number(db, DocumentPrefix.PROPOSAL),
        client_id=client.id,
        vehicle_id=vehicle.id,
        seller_id=session.user_id,
        bank_id=data.get("bank_id"),
        status=ProposalStatus.PENDENTE.value,
        type=proposal_type.value,
        vehicle_price=vehicle_price,
        cash_price=data.get("cash_price"),
        down_payment=down_payment,
        financed_amount=financed_amount,
        installments=installments,
        installment_value=installment_value,
        interest_rate=float(data.get("interest_rate") or 0),
        total_amount=total_amount,
        first_due_date=data.get("first_due_date"),
        notes=data.get("notes"),
    )
    db.add(proposal)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.PROPOSAL, proposal.id,
        f"Proposta {proposal.proposal_number} para {client.name}"
    )
    logger.info(f"Proposta criada: {proposal.proposal_number}")
    return proposal


async def change_status(
    db: AsyncSession,
    session: AuthSession,
    proposal: Proposal,
    new_status
) -> ActivityAction:
    """Altera o status e registra a ação derivada; retorna a ação"""
    status = parse_status(new_status)
    action = ACTION_BY_STATUS[status]

    proposal.status = status.value
    await db.flush()

    await log_activity(
        db, session, action, EntityType.PROPOSAL, proposal.id,
        f"Proposta {proposal.proposal_number}: {STATUS_LABELS[status]}"
    )
    logger.info(f"Proposta {proposal.proposal_number} -> {status.value}")
    return action


async def sign_proposal(
    db: AsyncSession,
    session: AuthSession,
    proposal: Proposal,
    party: SignatureParty,
    signature: str
) -> Proposal:
    """Grava a assinatura do cliente ou do vendedor"""
    party = SignatureParty(party)
    if party == SignatureParty.CLIENT:
        proposal.client_signature = signature
    else:
        proposal.vendor_signature = signature
    await db.flush()

    await log_activity(
        db, session, ActivityAction.SIGN, EntityType.PROPOSAL, proposal.id,
        f"Assinatura ({party.value}) na proposta {proposal.proposal_number}"
    )
    return proposal


async def update_proposal(
    db: AsyncSession,
    session: AuthSession,
    proposal: Proposal,
    data: dict
) -> Proposal:
    for field, value in data.items():
        if field == "type" and value is not None:
            value = ProposalType(value).value
        setattr(proposal, field, value)
    await db.flush()

    await log_activity(
        db, session, ActivityAction.UPDATE, EntityType.PROPOSAL, proposal.id,
        f"Proposta {proposal.proposal_number} atualizada"
    )
    return proposal
