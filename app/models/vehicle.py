"""
Dealer Back-Office - Vehicle Model
Veículos do estoque
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Integer, Float

from app.database import Base
from app.models.enums import VehicleStatus


class Vehicle(Base):
    """Modelo de Veículo"""
    __tablename__ = "vehicles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    brand = Column(String(100), nullable=False, index=True)
    model = Column(String(100), nullable=False)
    version = Column(String(100))
    year_fab = Column(Integer)
    year_model = Column(Integer)
    color = Column(String(50))
    price = Column(Float, nullable=False)
    mileage = Column(Integer, default=0)
    fuel = Column(String(20))
    transmission = Column(String(20))

    # Documentação
    plate = Column(String(10), index=True)
    chassi = Column(String(30))
    renavam = Column(String(20))
    crv_number = Column(String(30))

    status = Column(String(20), nullable=False, default=VehicleStatus.DISPONIVEL.value, index=True)
    description = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def title(self) -> str:
        parts = [self.brand, self.model, self.version]
        return " ".join(p for p in parts if p)

    def to_dict(self):
        return {
            "id": self.id,
            "brand": self.brand,
            "model": self.model,
            "version": self.version,
            "year_fab": self.year_fab,
            "year_model": self.year_model,
            "color": self.color,
            "price": self.price,
            "mileage": self.mileage,
            "fuel": self.fuel,
            "transmission": self.transmission,
            "plate": self.plate,
            "chassi": self.chassi,
            "renavam": self.renavam,
            "crv_number": self.crv_number,
            "status": self.status,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
