"""
Dealer Back-Office - Simulation Model
Simulações de financiamento salvas
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Float, ForeignKey

from app.database import Base


class Simulation(Base):
    __tablename__ = "simulations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    bank_name = Column(String(100))
    vehicle_price = Column(Float, nullable=False)
    down_payment = Column(Float, default=0)
    financed_amount = Column(Float, default=0)
    installments = Column(Integer, nullable=False)
    interest_rate = Column(Float, default=0)
    installment_value = Column(Float, default=0)
    total_value = Column(Float, default=0)
    cet = Column(Float, default=0)
    vendor_commission = Column(Float, default=0)
    store_margin = Column(Float, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "seller_id": self.seller_id,
            "bank_name": self.bank_name,
            "vehicle_price": self.vehicle_price,
            "down_payment": self.down_payment,
            "financed_amount": self.financed_amount,
            "installments": self.installments,
            "interest_rate": self.interest_rate,
            "installment_value": self.installment_value,
            "total_value": self.total_value,
            "cet": self.cet,
            "vendor_commission": self.vendor_commission,
            "store_margin": self.store_margin,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
