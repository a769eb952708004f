from .auth import (
    LoginRequest,
    LoginResponse,
    SetupRequest,
    AccountCreate,
    AccountDeleteRequest,
    UserResponse
)
from .client import ClientCreate, ClientUpdate, StageUpdate
from .vehicle import VehicleCreate, VehicleUpdate, BankCreate, BankUpdate
from .proposal import (
    ProposalCreate,
    ProposalUpdate,
    ProposalStatusUpdate,
    SignatureRequest,
    ContractCreate,
    SaleCreate
)
from .documents import (
    ReceiptCreate,
    WarrantyCreate,
    TransferCreate,
    WithdrawalCreate,
    ReservationCreate,
    ReservationStatusUpdate,
    DocumentSignature
)
from .simulation import SimulationRequest, SimulationSave, CompanySettingsUpdate

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "SetupRequest",
    "AccountCreate",
    "AccountDeleteRequest",
    "UserResponse",
    "ClientCreate",
    "ClientUpdate",
    "StageUpdate",
    "VehicleCreate",
    "VehicleUpdate",
    "BankCreate",
    "BankUpdate",
    "ProposalCreate",
    "ProposalUpdate",
    "ProposalStatusUpdate",
    "SignatureRequest",
    "ContractCreate",
    "SaleCreate",
    "ReceiptCreate",
    "WarrantyCreate",
    "TransferCreate",
    "WithdrawalCreate",
    "ReservationCreate",
    "ReservationStatusUpdate",
    "DocumentSignature",
    "SimulationRequest",
    "SimulationSave",
    "CompanySettingsUpdate"
]
