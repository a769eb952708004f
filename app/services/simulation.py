"""
Dealer Back-Office - Financing Simulation
Parcelas pela tabela Price para cada banco ativo e financiamento próprio sem juros
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth_session import AuthSession
from app.core.config import settings
from app.models import Bank, Simulation

logger = logging.getLogger(__name__)

# Prazos com taxa cadastrada nos bancos
RATE_TERMS = (12, 24, 36, 48, 60)


def closest_term(installments: int) -> int:
    """Prazo tabelado mais próximo (empate fica com o menor)"""
    best = RATE_TERMS[0]
    for term in RATE_TERMS[1:]:
        if abs(term - installments) < abs(best - installments):
            best = term
    return best


def price_installment(financed_amount: float, monthly_rate: float, installments: int) -> float:
    """Parcela pela tabela Price (monthly_rate em fração, ex: 0.0149)"""
    if monthly_rate == 0:
        return financed_amount / installments
    factor = (1 + monthly_rate) ** installments
    return financed_amount * (monthly_rate * factor) / (factor - 1)


def simulate_bank(bank: Bank, vehicle_price: float, down_payment: float, installments: int) -> dict:
    financed_amount = vehicle_price - down_payment
    used_term = closest_term(installments)
    rate = bank.rate_for(used_term) / 100

    installment_value = price_installment(financed_amount, rate, installments)
    return {
        "bank_id": bank.id,
        "bank_name": bank.name,
        "primary_color": bank.primary_color,
        "used_term": used_term,
        "interest_rate": rate * 100,
        "financed_amount": financed_amount,
        "installments": installments,
        "installment_value": installment_value,
        "total_value": installment_value * installments,
        "cet": rate * 12 * settings.CET_FACTOR,
        "vendor_commission": financed_amount * ((bank.commission_rate or 0) / 100),
        "store_margin": vehicle_price * settings.STORE_MARGIN_RATE,
    }


def simulate_own_financing(vehicle_price: float, down_payment: float, installments: int) -> Optional[dict]:
    """Financiamento próprio: sem juros"""
    financed_amount = vehicle_price - down_payment
    if financed_amount <= 0 or installments <= 0:
        return None
    return {
        "financed_amount": financed_amount,
        "installments": installments,
        "installment_value": financed_amount / installments,
        "total_value": financed_amount,
    }


def simulate(
    banks: Iterable[Bank],
    vehicle_price: float,
    down_payment: float,
    installments: int
) -> List[dict]:
    """Simulação em todos os bancos, ordenada pela menor parcela"""
    if vehicle_price - down_payment <= 0 or installments <= 0:
        return []
    results = [
        simulate_bank(bank, vehicle_price, down_payment, installments)
        for bank in banks
        if not bank.is_own
    ]
    return sorted(results, key=lambda r: r["installment_value"])


async def run_simulation(
    db: AsyncSession,
    vehicle_price: float,
    down_payment: float,
    installments: int,
    own_installments: int = 12
) -> dict:
    result = await db.execute(select(Bank).where(Bank.is_active == True).order_by(Bank.name))  # noqa: E712
    banks = result.scalars().all()

    own = simulate_own_financing(vehicle_price, down_payment, own_installments)

    return {
        "vehicle_price": vehicle_price,
        "down_payment": down_payment,
        "financed_amount": vehicle_price - down_payment,
        "down_payment_percent": (down_payment / vehicle_price) * 100 if vehicle_price > 0 else 0,
        "banks": simulate(banks, vehicle_price, down_payment, installments),
        "own_financing": own,
    }


async def save_simulation(db: AsyncSession, session: AuthSession, data: dict) -> Simulation:
    simulation = Simulation(seller_id=session.user_id, **data)
    db.add(simulation)
    await db.flush()
    logger.info(f"Simulação salva: {simulation.bank_name} {simulation.installments}x por {session.email}")
    return simulation
