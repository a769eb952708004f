"""
Dealer Back-Office - Reservation Model
Reservas de veículo com sinal
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Float, ForeignKey

from app.database import Base
from app.models.enums import ReservationStatus


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    reservation_number = Column(String(30), unique=True, index=True)

    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    deposit_amount = Column(Float, default=0)
    reservation_date = Column(Date, nullable=False)
    valid_until = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=ReservationStatus.ATIVA.value, index=True)

    client_signature = Column(Text)
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "reservation_number": self.reservation_number,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "seller_id": self.seller_id,
            "deposit_amount": self.deposit_amount,
            "reservation_date": self.reservation_date.isoformat() if self.reservation_date else None,
            "valid_until": self.valid_until.isoformat() if self.valid_until else None,
            "status": self.status,
            "has_client_signature": bool(self.client_signature),
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
