"""
Dealer Back-Office - Simulations API
Simulação de financiamento por banco e simulações salvas
"""
from typing import Optional

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models import Simulation
from app.schemas import SimulationRequest, SimulationSave
from app.core import AuthSession
from app.core.exceptions import ValidationError
from app.api.auth import require_staff
from app.services.simulation import run_simulation, save_simulation

router = APIRouter(prefix="/simulations", tags=["Simulations"])


@router.post("/run")
async def simulate(
    request: SimulationRequest,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Parcelas, CET e comissão em cada banco ativo (ordenado pela menor parcela)"""
    if request.down_payment > request.vehicle_price:
        raise ValidationError("Entrada maior que o valor do veículo")

    return await run_simulation(
        db,
        request.vehicle_price,
        request.down_payment,
        request.installments,
        request.own_installments
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def save(
    request: SimulationSave,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    simulation = await save_simulation(db, session, request.model_dump())
    await db.commit()
    await db.refresh(simulation)

    return simulation.to_dict()


@router.get("")
async def list_simulations(
    client_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Simulações salvas (mais recentes primeiro)"""
    query = select(Simulation)
    if client_id:
        query = query.where(Simulation.client_id == client_id)

    result = await db.execute(query.order_by(Simulation.created_at.desc()))
    return [s.to_dict() for s in result.scalars().all()]
