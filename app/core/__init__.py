from .config import settings, get_settings
from .security import (
    create_access_token,
    verify_access_token,
    verify_password,
    get_password_hash
)
from .auth_session import AuthSession, is_admin, is_staff, is_client, can_manage_client

__all__ = [
    "settings",
    "get_settings",
    "create_access_token",
    "verify_access_token",
    "verify_password",
    "get_password_hash",
    "AuthSession",
    "is_admin",
    "is_staff",
    "is_client",
    "can_manage_client"
]
