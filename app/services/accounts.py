"""
Dealer Back-Office - Accounts
Criação de contas de acesso (apenas admin) e remoção de contas de clientes
"""
import logging
import math
import re
import time
from typing import Optional

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession, is_admin, is_staff
from app.core.config import settings
from app.core.exceptions import (
    ValidationError,
    PermissionDeniedError,
    RateLimitError,
    AccountCreationError,
)
from app.core.security import get_password_hash
from app.models import User
from app.models.enums import UserRole, ActivityAction, EntityType
from app.services.activity import log_activity

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[\d\s\-()+]{8,20}$")


class AccountCreationLimiter:
    """
    Janela fixa por admin: no máximo `limit` contas a cada `window` segundos.
    Usa o mesmo backend do slowapi (limits), em memória.
    """

    def __init__(self, limit: int, window: int):
        self.item = RateLimitItemPerSecond(limit, window)
        self.storage = MemoryStorage()
        self.strategy = FixedWindowRateLimiter(self.storage)

    def hit(self, key: str) -> None:
        """Conta uma tentativa; levanta RateLimitError quando o limite foi atingido"""
        if self.strategy.hit(self.item, "account-creation", key):
            return

        reset_time, _ = self.strategy.get_window_stats(self.item, "account-creation", key)
        reset_in = max(int(reset_time - time.time()), 0)
        minutes = max(math.ceil(reset_in / 60), 1)
        raise RateLimitError(
            f"Limite de criação de usuários atingido. Tente novamente em {minutes} minutos.",
            reset_in_seconds=reset_in
        )

    def reset(self) -> None:
        self.storage.reset()


account_creation_limiter = AccountCreationLimiter(
    settings.ACCOUNT_CREATION_LIMIT,
    settings.ACCOUNT_CREATION_WINDOW_SECONDS
)


def _clean(value: Optional[str], max_length: int) -> str:
    return (value or "").strip()[:max_length]


def validate_account_data(
    email: Optional[str],
    password: Optional[str],
    name: Optional[str],
    phone: Optional[str] = None,
    role: Optional[str] = None
) -> dict:
    """Valida e normaliza os dados da nova conta"""
    if not email or not password or not name:
        raise ValidationError("Email, senha e nome são obrigatórios")

    clean_email = _clean(email, 255).lower()
    if not EMAIL_RE.match(clean_email):
        raise ValidationError("Formato de email inválido")

    if not 6 <= len(password) <= 128:
        raise ValidationError("A senha deve ter entre 6 e 128 caracteres")

    clean_name = _clean(name, 255)
    if len(clean_name) < 2:
        raise ValidationError("O nome deve ter pelo menos 2 caracteres")

    clean_phone = _clean(phone, 20) or None
    if clean_phone and not PHONE_RE.match(clean_phone):
        raise ValidationError("Formato de telefone inválido")

    try:
        user_role = UserRole(role)
    except ValueError:
        user_role = UserRole.VENDEDOR

    return {
        "email": clean_email,
        "password": password,
        "name": clean_name,
        "phone": clean_phone,
        "role": user_role,
    }


async def create_account(
    db: AsyncSession,
    session: AuthSession,
    email: Optional[str],
    password: Optional[str],
    name: Optional[str],
    phone: Optional[str] = None,
    role: Optional[str] = None,
    limiter: Optional[AccountCreationLimiter] = None
) -> User:
    """
    Cria conta de acesso.
    Qualquer falha na criação (inclusive email já cadastrado) gera a mesma mensagem genérica.
    """
    if not is_admin(session):
        raise PermissionDeniedError("Apenas administradores podem criar usuários")

    (limiter or account_creation_limiter).hit(session.user_id)

    data = validate_account_data(email, password, name, phone, role)
    logger.info(f"Admin {session.user_id} criando usuário com papel {data['role'].value}")

    existing = await db.execute(select(User.id).where(func.lower(User.email) == data["email"]))
    if existing.scalar_one_or_none():
        logger.warning("Criação de conta recusada: email já cadastrado")
        raise AccountCreationError()

    user = User(
        email=data["email"],
        hashed_password=get_password_hash(data["password"]),
        name=data["name"],
        phone=data["phone"],
        role=data["role"].value,
        created_by=session.user_id,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"Falha ao criar conta: {e.orig}")
        raise AccountCreationError()

    await log_activity(
        db, session, ActivityAction.CREATE, EntityType.USER, user.id,
        f"Conta criada: {user.name} ({user.role})"
    )
    logger.info(f"Usuário criado com id: {user.id}")
    return user


async def delete_account_by_email(db: AsyncSession, session: AuthSession, email: str) -> bool:
    """
    Remove a conta de cliente vinculada ao email.
    Retorna False quando não existe conta; contas da equipe não podem ser removidas por aqui.
    """
    if not is_staff(session):
        raise PermissionDeniedError("Apenas administradores podem excluir usuários")
    if not email:
        raise ValidationError("Email é obrigatório")

    result = await db.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
    user = result.scalar_one_or_none()
    if user is None:
        logger.info("Nenhuma conta encontrada para o email informado")
        return False

    if user.role != UserRole.CLIENTE.value:
        raise PermissionDeniedError("Não é possível excluir usuários da equipe por este método")

    user_id = user.id
    await db.delete(user)
    await db.flush()

    await log_activity(db, session, ActivityAction.DELETE, EntityType.USER, user_id, "Conta de cliente excluída")
    logger.info(f"Usuário {user_id} excluído")
    return True
