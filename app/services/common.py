"""
Dealer Back-Office - Service helpers
"""
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.models import Vehicle
from app.models.enums import VehicleStatus


async def get_or_raise(db: AsyncSession, model, entity_id: str, label: str):
    """Busca pela chave primária ou levanta NotFoundError"""
    if not entity_id:
        raise ValidationError(f"{label}: campo obrigatório")
    instance = await db.get(model, entity_id)
    if instance is None:
        raise NotFoundError(f"{label} inexistente")
    return instance


async def set_vehicle_status(db: AsyncSession, vehicle_id: str, status: VehicleStatus) -> Vehicle:
    """Atualiza o status do veículo (sem commit)"""
    vehicle = await get_or_raise(db, Vehicle, vehicle_id, "Veículo")
    vehicle.status = VehicleStatus(status).value
    await db.flush()
    return vehicle
