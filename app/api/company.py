"""
Dealer Back-Office - Company API
Dados da loja usados nos documentos
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas import CompanySettingsUpdate
from app.core import AuthSession
from app.api.auth import require_staff, require_admin
from app.services.company import load_company, update_company

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/company", tags=["Company"])


@router.get("")
async def get_company(
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Dados salvos sobre os padrões da configuração"""
    return await load_company(db)


@router.put("")
async def put_company(
    request: CompanySettingsUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_admin)
):
    await update_company(db, request.model_dump(exclude_unset=True))
    await db.commit()
    logger.info(f"Dados da loja atualizados por {session.email}")

    return await load_company(db)
