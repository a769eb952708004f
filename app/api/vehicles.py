"""
Dealer Back-Office - Vehicles API
Estoque de veículos
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_

from app.database import get_db
from app.models import Vehicle
from app.models.enums import VehicleStatus, ActivityAction, EntityType
from app.schemas import VehicleCreate, VehicleUpdate
from app.core import AuthSession
from app.api.auth import require_staff, require_admin
from app.services.activity import log_activity
from app.services.common import get_or_raise

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("")
async def list_vehicles(
    status_filter: Optional[VehicleStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Lista veículos do estoque"""
    query = select(Vehicle)

    if status_filter:
        query = query.where(Vehicle.status == VehicleStatus(status_filter).value)

    if search:
        query = query.where(
            or_(
                Vehicle.brand.ilike(f"%{search}%"),
                Vehicle.model.ilike(f"%{search}%"),
                Vehicle.plate.ilike(f"%{search}%")
            )
        )

    query = query.order_by(Vehicle.brand, Vehicle.model)
    result = await db.execute(query)
    return [v.to_dict() for v in result.scalars().all()]


@router.get("/{vehicle_id}")
async def get_vehicle(
    vehicle_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    vehicle = await get_or_raise(db, Vehicle, vehicle_id, "Veículo")
    return vehicle.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    request: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Cadastra veículo"""
    vehicle = Vehicle(**request.model_dump())
    if vehicle.plate:
        vehicle.plate = vehicle.plate.upper()
    db.add(vehicle)
    await db.flush()

    await log_activity(db, session, ActivityAction.CREATE, EntityType.VEHICLE, vehicle.id, vehicle.title)
    await db.commit()
    await db.refresh(vehicle)
    logger.info(f"Veículo cadastrado: {vehicle.title}")

    return vehicle.to_dict()


@router.put("/{vehicle_id}")
async def update_vehicle(
    vehicle_id: str,
    request: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Atualiza veículo"""
    vehicle = await get_or_raise(db, Vehicle, vehicle_id, "Veículo")

    update_data = request.model_dump(exclude_unset=True)
    if update_data.get("plate"):
        update_data["plate"] = update_data["plate"].upper()
    for field, value in update_data.items():
        setattr(vehicle, field, value)

    await log_activity(db, session, ActivityAction.UPDATE, EntityType.VEHICLE, vehicle.id, vehicle.title)
    await db.commit()
    await db.refresh(vehicle)

    return vehicle.to_dict()


@router.delete("/{vehicle_id}")
async def delete_vehicle(
    vehicle_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_admin)
):
    """Exclui veículo"""
    vehicle = await get_or_raise(db, Vehicle, vehicle_id, "Veículo")
    title = vehicle.title

    await db.delete(vehicle)
    await log_activity(db, session, ActivityAction.DELETE, EntityType.VEHICLE, vehicle_id, title)
    await db.commit()
    logger.info(f"Veículo excluído: {vehicle_id}")

    return {"message": "Veículo excluído"}
