"""
Dealer Back-Office - Sales Funnel
Estágios do cliente no funil e movimentação entre colunas
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession, can_manage_client
from app.core.exceptions import PermissionDeniedError, ValidationError
from app.models import Client
from app.models.enums import FunnelStage, ActivityAction, EntityType
from app.services.activity import log_activity

logger = logging.getLogger(__name__)

# Colunas do quadro, na ordem de exibição
BOARD_STAGES = (
    FunnelStage.ATENDIMENTO,
    FunnelStage.SIMULACAO,
    FunnelStage.PROPOSTA,
    FunnelStage.VENDIDO,
    FunnelStage.PERDIDO,
)

STAGE_LABELS = {
    FunnelStage.ATENDIMENTO: "Atendimento",
    FunnelStage.SIMULACAO: "Simulação",
    FunnelStage.PROPOSTA: "Proposta",
    FunnelStage.VENDIDO: "Vendido",
    FunnelStage.PERDIDO: "Perdido",
}


def effective_stage(stored: Optional[str]) -> FunnelStage:
    """Estágio exibido; o legado 'lead' (ou vazio) conta como atendimento"""
    if not stored:
        return FunnelStage.ATENDIMENTO
    stage = FunnelStage(stored)
    if stage == FunnelStage.LEAD:
        return FunnelStage.ATENDIMENTO
    return stage


def group_by_stage(clients: Iterable[Client]) -> Dict[FunnelStage, List[Client]]:
    """Agrupa clientes nas colunas do quadro sem alterar o valor salvo"""
    board = {stage: [] for stage in BOARD_STAGES}
    for client in clients:
        board[effective_stage(client.funnel_stage)].append(client)
    return board


async def move_stage(
    db: AsyncSession,
    session: AuthSession,
    client: Client,
    target: FunnelStage
) -> bool:
    """
    Move o cliente para outro estágio.
    Retorna False (sem escrita) quando o cliente já está no estágio.
    """
    try:
        target = FunnelStage(target)
    except ValueError:
        raise ValidationError(f"Estágio inválido: {target}")
    if target == FunnelStage.LEAD:
        raise ValidationError("Estágio 'lead' não pode ser atribuído")

    if not can_manage_client(session, client):
        raise PermissionDeniedError("Sem permissão para mover este cliente")

    current = effective_stage(client.funnel_stage)
    if current == target:
        return False

    client.funnel_stage = target.value
    client.updated_at = datetime.utcnow()
    await db.flush()

    await log_activity(
        db, session, ActivityAction.UPDATE, EntityType.CLIENT, client.id,
        f"Moveu {client.name} de {STAGE_LABELS[current]} para {STAGE_LABELS[target]}"
    )
    logger.info(f"Cliente {client.id} movido para {target.value} por {session.email}")
    return True
