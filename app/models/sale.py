"""
Dealer Back-Office - Sale Model
Vendas concluídas (derivadas de propostas aprovadas)
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Float, ForeignKey

from app.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    proposal_id = Column(String(36), ForeignKey("proposals.id", ondelete="SET NULL"), unique=True, index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    sale_date = Column(Date, default=lambda: datetime.utcnow().date())
    total_value = Column(Float, nullable=False, default=0)
    commission_value = Column(Float, default=0)
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "proposal_id": self.proposal_id,
            "seller_id": self.seller_id,
            "sale_date": self.sale_date.isoformat() if self.sale_date else None,
            "total_value": self.total_value,
            "commission_value": self.commission_value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
