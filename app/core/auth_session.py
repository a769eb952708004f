"""
Dealer Back-Office - Auth Session
Identidade e papel do usuário autenticado, passados explicitamente aos serviços
"""
from dataclasses import dataclass
from typing import Optional

from app.models.enums import UserRole


@dataclass(frozen=True)
class AuthSession:
    """Usuário autenticado da requisição atual"""
    user_id: str
    email: str
    role: UserRole
    name: Optional[str] = None


def is_admin(session: AuthSession) -> bool:
    return session.role == UserRole.ADMIN


def is_staff(session: AuthSession) -> bool:
    """Admin ou vendedor"""
    return session.role in (UserRole.ADMIN, UserRole.VENDEDOR)


def is_client(session: AuthSession) -> bool:
    return session.role == UserRole.CLIENTE


def can_manage_client(session: AuthSession, client) -> bool:
    """Vendedor dono do cliente ou admin"""
    if is_admin(session):
        return True
    return session.role == UserRole.VENDEDOR and client.seller_id == session.user_id
