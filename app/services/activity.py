"""
Dealer Back-Office - Activity Log Service
Registro do histórico de ações (best-effort)
"""
import logging
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.models import ActivityLog
from app.models.enums import ActivityAction, EntityType

logger = logging.getLogger(__name__)


async def log_activity(
    db: AsyncSession,
    session: Optional[AuthSession],
    action,
    entity_type,
    entity_id: Optional[str] = None,
    description: Optional[str] = None
) -> Optional[ActivityLog]:
    """
    Registra uma ação no histórico.
    Falhas são apenas logadas: a ação principal nunca é bloqueada.
    """
    try:
        entry = ActivityLog(
            user_id=session.user_id if session else None,
            action=ActivityAction(action).value,
            entity_type=EntityType(entity_type).value,
            entity_id=entity_id,
            description=description
        )
        db.add(entry)
        return entry
    except Exception as e:
        logger.warning(f"Falha ao registrar atividade {action}/{entity_type}: {e}")
        return None


async def list_activity(
    db: AsyncSession,
    entity_type: Optional[EntityType] = None,
    entity_id: Optional[str] = None,
    user_id: Optional[str] = None,
    limit: int = 50
) -> List[ActivityLog]:
    """Lista atividades mais recentes primeiro"""
    query = select(ActivityLog)
    if entity_type:
        query = query.where(ActivityLog.entity_type == EntityType(entity_type).value)
    if entity_id:
        query = query.where(ActivityLog.entity_id == entity_id)
    if user_id:
        query = query.where(ActivityLog.user_id == user_id)
    query = query.order_by(ActivityLog.created_at.desc()).limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())
