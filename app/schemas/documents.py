"""
Dealer Back-Office - Document Schemas
Recibos, garantias, ATPV, desistências e reservas
"""
from pydantic import Field
from typing import Optional
from datetime import date

from app.models.enums import PaymentMethod, PaymentReference, ReservationStatus, SignatureParty

from .base import EnumValueModel


class ReceiptCreate(EnumValueModel):
    client_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    proposal_id: Optional[str] = None
    amount: float
    payment_method: PaymentMethod = PaymentMethod.PIX
    payment_reference: PaymentReference = PaymentReference.ENTRADA
    payer_name: Optional[str] = Field(None, max_length=255)
    payer_cpf: Optional[str] = Field(None, max_length=14)
    payment_date: Optional[date] = None
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=100)


class WarrantyCreate(EnumValueModel):
    contract_id: Optional[str] = None
    client_id: str
    vehicle_id: str
    warranty_period: Optional[str] = Field(None, max_length=50)
    warranty_coverage: Optional[str] = Field(None, max_length=255)
    warranty_km: Optional[int] = Field(None, ge=0)
    conditions: Optional[str] = None


class TransferCreate(EnumValueModel):
    contract_id: Optional[str] = None
    client_id: str
    vehicle_id: str
    vehicle_value: Optional[float] = Field(None, gt=0)
    transfer_date: Optional[date] = None
    location: Optional[str] = Field(None, max_length=100)


class WithdrawalCreate(EnumValueModel):
    client_id: str
    vehicle_id: str
    reason: Optional[str] = None
    declaration_date: Optional[date] = None


class ReservationCreate(EnumValueModel):
    client_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    deposit_amount: float = Field(0, ge=0)
    notes: Optional[str] = None


class ReservationStatusUpdate(EnumValueModel):
    status: ReservationStatus


class DocumentSignature(EnumValueModel):
    """Assinatura (PNG base64 ou data URL) de um documento"""
    party: SignatureParty = SignatureParty.CLIENT
    signature: str = Field(..., min_length=1)
