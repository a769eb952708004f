"""
Dealer Back-Office - Auth Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: dict


class SetupRequest(BaseModel):
    """Criação do primeiro administrador"""
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=2, max_length=255)


class AccountCreate(BaseModel):
    # Validação feita no serviço de contas (mensagens próprias)
    email: str
    password: str
    name: str
    phone: Optional[str] = None
    role: Optional[str] = None


class AccountDeleteRequest(BaseModel):
    email: str


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    is_active: bool = True
    last_login_at: Optional[str] = None
    created_at: Optional[str] = None

    class Config:
        from_attributes = True
