"""
Dealer Back-Office - Users API
Contas de acesso da equipe e dos clientes
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models import User
from app.models.enums import UserRole
from app.schemas import AccountCreate, AccountDeleteRequest
from app.core import AuthSession
from app.api.auth import require_staff, require_admin
from app.services.accounts import create_account, delete_account_by_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
async def list_users(
    role: Optional[UserRole] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Lista usuários"""
    query = select(User).order_by(User.name)
    if role:
        query = query.where(User.role == UserRole(role).value)

    result = await db.execute(query)
    return [u.to_dict() for u in result.scalars().all()]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: AccountCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_admin)
):
    """Cria conta de acesso (limite de criações por admin)"""
    user = await create_account(
        db, session,
        email=request.email,
        password=request.password,
        name=request.name,
        phone=request.phone,
        role=request.role
    )
    await db.commit()
    await db.refresh(user)

    return user.to_dict()


@router.delete("")
async def delete_user(
    request: AccountDeleteRequest,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Remove a conta de cliente vinculada ao email"""
    deleted = await delete_account_by_email(db, session, request.email)
    await db.commit()

    return {"deleted": deleted}
