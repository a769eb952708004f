"""
Dealer Back-Office - Auth API
Login, sessão atual e setup do primeiro administrador
"""
from datetime import datetime
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.database import get_db
from app.models import User
from app.models.enums import UserRole, ActivityAction, EntityType
from app.schemas import LoginRequest, LoginResponse, SetupRequest, UserResponse
from app.core import (
    verify_password,
    get_password_hash,
    create_access_token,
    verify_access_token,
    settings,
    AuthSession,
    is_admin,
    is_staff,
)
from app.core.rate_limit import limiter
from app.services.activity import log_activity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Dependency para obter o usuário autenticado"""
    payload = verify_access_token(credentials.credentials)

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido ou expirado"
        )

    user = await db.get(User, payload.get("sub"))

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuário não encontrado ou inativo"
        )

    return user


async def get_current_session(user: User = Depends(get_current_user)) -> AuthSession:
    """Sessão explícita (id, email, papel) repassada aos serviços"""
    return AuthSession(
        user_id=user.id,
        email=user.email,
        role=UserRole(user.role),
        name=user.name
    )


async def require_staff(session: AuthSession = Depends(get_current_session)) -> AuthSession:
    """Admin ou vendedor"""
    if not is_staff(session):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito à equipe da loja"
        )
    return session


async def require_admin(session: AuthSession = Depends(get_current_session)) -> AuthSession:
    if not is_admin(session):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito a administradores"
        )
    return session


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(request: Request, credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login por email e senha (limitado por IP)"""
    result = await db.execute(
        select(User).where(func.lower(User.email) == credentials.email.lower())
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Tentativa de login inválida para {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha inválidos"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Conta desativada"
        )

    user.last_login_at = datetime.utcnow()
    session = AuthSession(user_id=user.id, email=user.email, role=UserRole(user.role), name=user.name)
    await log_activity(db, session, ActivityAction.LOGIN, EntityType.USER, user.id, f"Login de {user.email}")
    await db.commit()

    access_token = create_access_token(
        data={"sub": user.id, "email": user.email, "role": user.role}
    )
    logger.info(f"Login: {user.email} ({user.role})")

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=user.to_dict()
    )


@router.post("/logout")
async def logout(
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(get_current_session)
):
    """Registra o logout no histórico (o token expira sozinho)"""
    await log_activity(db, session, ActivityAction.LOGOUT, EntityType.USER, session.user_id,
                       f"Logout de {session.email}")
    return {"message": "Logout registrado"}


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Retorna dados do usuário atual"""
    return user.to_dict()


@router.post("/setup")
async def initial_setup(
    request: Optional[SetupRequest] = None,
    db: AsyncSession = Depends(get_db)
):
    """Setup inicial: cria o primeiro administrador se não houver usuários"""
    result = await db.execute(select(User.id).limit(1))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Setup já realizado"
        )

    email = request.email if request else settings.ADMIN_EMAIL
    admin = User(
        email=email.lower(),
        hashed_password=get_password_hash(request.password if request else settings.ADMIN_PASSWORD),
        name=request.name if request else settings.ADMIN_NAME,
        role=UserRole.ADMIN.value
    )

    db.add(admin)
    await db.commit()
    logger.info(f"Administrador inicial criado: {admin.email}")

    return {"message": "Setup concluído", "email": admin.email}
