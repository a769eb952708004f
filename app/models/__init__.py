from .user import User
from .client import Client
from .vehicle import Vehicle
from .bank import Bank
from .proposal import Proposal
from .simulation import Simulation
from .contract import Contract
from .receipt import Receipt
from .sale import Sale
from .documents import Warranty, TransferAuthorization, WithdrawalDeclaration
from .reservation import Reservation
from .activity_log import ActivityLog
from .company_settings import CompanySettings
from .document_sequence import DocumentSequence

__all__ = [
    "User",
    "Client",
    "Vehicle",
    "Bank",
    "Proposal",
    "Simulation",
    "Contract",
    "Receipt",
    "Sale",
    "Warranty",
    "TransferAuthorization",
    "WithdrawalDeclaration",
    "Reservation",
    "ActivityLog",
    "CompanySettings",
    "DocumentSequence"
]
