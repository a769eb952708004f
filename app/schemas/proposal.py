"""
Dealer Back-Office - Proposal, Contract and Sale Schemas
"""
from pydantic import Field
from typing import Optional
from datetime import date

from app.models.enums import ProposalStatus, ProposalType, PaymentType, SignatureParty

from .base import EnumValueModel


class ProposalCreate(EnumValueModel):
    client_id: str
    vehicle_id: str
    bank_id: Optional[str] = None
    type: ProposalType = ProposalType.FINANCIAMENTO_BANCARIO
    vehicle_price: float = Field(..., gt=0)
    cash_price: Optional[float] = Field(None, ge=0)
    down_payment: float = Field(0, ge=0)
    financed_amount: Optional[float] = Field(None, ge=0)
    installments: int = Field(0, ge=0, le=120)
    installment_value: float = Field(0, ge=0)
    interest_rate: float = Field(0, ge=0)
    total_amount: Optional[float] = Field(None, ge=0)
    first_due_date: Optional[date] = None
    notes: Optional[str] = None


class ProposalUpdate(EnumValueModel):
    bank_id: Optional[str] = None
    type: Optional[ProposalType] = None
    vehicle_price: Optional[float] = Field(None, gt=0)
    cash_price: Optional[float] = Field(None, ge=0)
    down_payment: Optional[float] = Field(None, ge=0)
    financed_amount: Optional[float] = Field(None, ge=0)
    installments: Optional[int] = Field(None, ge=0, le=120)
    installment_value: Optional[float] = Field(None, ge=0)
    interest_rate: Optional[float] = Field(None, ge=0)
    total_amount: Optional[float] = Field(None, ge=0)
    first_due_date: Optional[date] = None
    notes: Optional[str] = None


class ProposalStatusUpdate(EnumValueModel):
    status: ProposalStatus


class SignatureRequest(EnumValueModel):
    """Assinatura desenhada (PNG em base64 ou data URL)"""
    party: SignatureParty
    signature: str = Field(..., min_length=1)


class ContractCreate(EnumValueModel):
    proposal_id: Optional[str] = None
    client_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    contract_date: Optional[date] = None
    vehicle_price: Optional[float] = Field(None, gt=0)
    payment_type: Optional[PaymentType] = None
    down_payment: Optional[float] = Field(None, ge=0)
    installments: Optional[int] = Field(None, ge=0, le=120)
    installment_value: Optional[float] = Field(None, ge=0)
    due_day: Optional[int] = None
    first_due_date: Optional[date] = None
    delivery_percentage: Optional[float] = Field(None, ge=0, le=100)
    witness1: Optional[str] = Field(None, max_length=255)
    witness2: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class SaleCreate(EnumValueModel):
    proposal_id: str
    sale_date: Optional[date] = None
    notes: Optional[str] = None
