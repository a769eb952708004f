"""
Dealer Back-Office - Contract Model
Contratos de compra e venda de veículo
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Integer, Float, ForeignKey
from sqlalchemy.dialects.sqlite import JSON

from app.database import Base
from app.models.enums import PaymentType


class Contract(Base):
    """Contrato de compra e venda"""
    __tablename__ = "contracts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    contract_number = Column(String(30), unique=True, index=True)

    proposal_id = Column(String(36), ForeignKey("proposals.id", ondelete="SET NULL"), index=True)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    contract_date = Column(Date, default=lambda: datetime.utcnow().date())
    vehicle_price = Column(Float, nullable=False)

    # Pagamento
    payment_type = Column(String(20), nullable=False, default=PaymentType.AVISTA.value)
    down_payment = Column(Float)
    installments = Column(Integer)
    installment_value = Column(Float)
    due_day = Column(Integer)
    first_due_date = Column(Date)
    delivery_percentage = Column(Float, default=50)

    # Assinaturas (PNG base64) e testemunhas
    client_signature = Column(Text)
    seller_signature = Column(Text)
    witness1 = Column(String(255))
    witness2 = Column(String(255))
    signed_at = Column(DateTime)

    # Cópia dos dados no momento da assinatura
    client_data = Column(JSON, default=dict)
    vehicle_data = Column(JSON, default=dict)

    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "contract_number": self.contract_number,
            "proposal_id": self.proposal_id,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "seller_id": self.seller_id,
            "contract_date": self.contract_date.isoformat() if self.contract_date else None,
            "vehicle_price": self.vehicle_price,
            "payment_type": self.payment_type,
            "down_payment": self.down_payment,
            "installments": self.installments,
            "installment_value": self.installment_value,
            "due_day": self.due_day,
            "first_due_date": self.first_due_date.isoformat() if self.first_due_date else None,
            "delivery_percentage": self.delivery_percentage,
            "witness1": self.witness1,
            "witness2": self.witness2,
            "has_client_signature": bool(self.client_signature),
            "has_seller_signature": bool(self.seller_signature),
            "signed_at": self.signed_at.isoformat() if self.signed_at else None,
            "client_data": self.client_data or {},
            "vehicle_data": self.vehicle_data or {},
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
