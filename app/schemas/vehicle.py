"""
Dealer Back-Office - Vehicle and Bank Schemas
"""
from pydantic import Field
from typing import Optional, Dict

from app.models.enums import VehicleStatus, FuelType, TransmissionType

from .base import EnumValueModel


class VehicleCreate(EnumValueModel):
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    version: Optional[str] = Field(None, max_length=100)
    year_fab: Optional[int] = Field(None, ge=1900, le=2100)
    year_model: Optional[int] = Field(None, ge=1900, le=2100)
    color: Optional[str] = Field(None, max_length=50)
    price: float = Field(..., gt=0)
    mileage: int = Field(0, ge=0)
    fuel: Optional[FuelType] = None
    transmission: Optional[TransmissionType] = None
    plate: Optional[str] = Field(None, max_length=10)
    chassi: Optional[str] = Field(None, max_length=30)
    renavam: Optional[str] = Field(None, max_length=20)
    crv_number: Optional[str] = Field(None, max_length=30)
    status: VehicleStatus = VehicleStatus.DISPONIVEL
    description: Optional[str] = None


class VehicleUpdate(EnumValueModel):
    brand: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    version: Optional[str] = Field(None, max_length=100)
    year_fab: Optional[int] = Field(None, ge=1900, le=2100)
    year_model: Optional[int] = Field(None, ge=1900, le=2100)
    color: Optional[str] = Field(None, max_length=50)
    price: Optional[float] = Field(None, gt=0)
    mileage: Optional[int] = Field(None, ge=0)
    fuel: Optional[FuelType] = None
    transmission: Optional[TransmissionType] = None
    plate: Optional[str] = Field(None, max_length=10)
    chassi: Optional[str] = Field(None, max_length=30)
    renavam: Optional[str] = Field(None, max_length=20)
    crv_number: Optional[str] = Field(None, max_length=30)
    status: Optional[VehicleStatus] = None
    description: Optional[str] = None


class BankCreate(EnumValueModel):
    name: str = Field(..., min_length=2, max_length=100)
    primary_color: Optional[str] = Field("#1e3a5f", max_length=10)
    interest_rate: float = Field(0, ge=0)
    rates: Dict[str, float] = {}
    commission_rate: float = Field(0, ge=0, le=100)
    is_own: bool = False
    is_active: bool = True


class BankUpdate(EnumValueModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    primary_color: Optional[str] = Field(None, max_length=10)
    interest_rate: Optional[float] = Field(None, ge=0)
    rates: Optional[Dict[str, float]] = None
    commission_rate: Optional[float] = Field(None, ge=0, le=100)
    is_own: Optional[bool] = None
    is_active: Optional[bool] = None
