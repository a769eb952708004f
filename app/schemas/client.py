"""
Dealer Back-Office - Client Schemas
"""
from pydantic import EmailStr, Field
from typing import Optional
from datetime import date

from app.models.enums import FunnelStage, MaritalStatus

from .base import EnumValueModel


class ClientCreate(EnumValueModel):
    name: str = Field(..., min_length=2, max_length=255)
    cpf: Optional[str] = Field(None, max_length=14)
    rg: Optional[str] = Field(None, max_length=20)
    birth_date: Optional[date] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    marital_status: Optional[MaritalStatus] = None
    occupation: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=2)
    zip_code: Optional[str] = Field(None, max_length=10)
    funnel_stage: FunnelStage = FunnelStage.ATENDIMENTO
    notes: Optional[str] = None
    seller_id: Optional[str] = None


class ClientUpdate(EnumValueModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    cpf: Optional[str] = Field(None, max_length=14)
    rg: Optional[str] = Field(None, max_length=20)
    birth_date: Optional[date] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    marital_status: Optional[MaritalStatus] = None
    occupation: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=2)
    zip_code: Optional[str] = Field(None, max_length=10)
    notes: Optional[str] = None
    seller_id: Optional[str] = None


class StageUpdate(EnumValueModel):
    stage: FunnelStage
