"""
Dealer Back-Office - Activity API
Histórico de ações
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.enums import EntityType
from app.core import AuthSession
from app.api.auth import require_staff
from app.services.activity import list_activity

router = APIRouter(prefix="/activity", tags=["Activity"])


@router.get("")
async def get_activity(
    entity_type: Optional[EntityType] = Query(None),
    entity_id: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Atividades mais recentes primeiro"""
    entries = await list_activity(db, entity_type, entity_id, user_id, limit)
    return [e.to_dict() for e in entries]
