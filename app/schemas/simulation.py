"""
Dealer Back-Office - Simulation and Company Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional


class SimulationRequest(BaseModel):
    vehicle_price: float = Field(..., gt=0)
    down_payment: float = Field(0, ge=0)
    installments: int = Field(48, ge=1, le=120)
    own_installments: int = Field(12, ge=1, le=120)
    vehicle_id: Optional[str] = None
    client_id: Optional[str] = None


class SimulationSave(BaseModel):
    client_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    bank_name: Optional[str] = None
    vehicle_price: float = Field(..., gt=0)
    down_payment: float = Field(0, ge=0)
    financed_amount: float = Field(0, ge=0)
    installments: int = Field(..., ge=1, le=120)
    interest_rate: float = Field(0, ge=0)
    installment_value: float = Field(0, ge=0)
    total_value: float = Field(0, ge=0)
    cet: float = 0
    vendor_commission: float = 0
    store_margin: float = 0


class CompanySettingsUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    fantasy_name: Optional[str] = Field(None, max_length=255)
    cnpj: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=255)
    address_number: Optional[str] = Field(None, max_length=20)
    neighborhood: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=2)
    zip_code: Optional[str] = Field(None, max_length=10)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)
    representative_name: Optional[str] = Field(None, max_length=255)
    representative_cpf: Optional[str] = Field(None, max_length=14)
    representative_role: Optional[str] = Field(None, max_length=100)
    representative_signature: Optional[str] = None
