from .auth import router as auth_router
from .users import router as users_router
from .clients import router as clients_router
from .vehicles import router as vehicles_router
from .banks import router as banks_router
from .proposals import router as proposals_router
from .contracts import router as contracts_router
from .sales import router as sales_router
from .reservations import router as reservations_router
from .documents import receipts_router, warranties_router, transfers_router, withdrawals_router
from .simulations import router as simulations_router
from .activity import router as activity_router
from .portal import router as portal_router
from .company import router as company_router
from .stats import router as stats_router

__all__ = [
    "auth_router",
    "users_router",
    "clients_router",
    "vehicles_router",
    "banks_router",
    "proposals_router",
    "contracts_router",
    "sales_router",
    "reservations_router",
    "receipts_router",
    "warranties_router",
    "transfers_router",
    "withdrawals_router",
    "simulations_router",
    "activity_router",
    "portal_router",
    "company_router",
    "stats_router"
]
