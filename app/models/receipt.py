"""
Dealer Back-Office - Receipt Model
Recibos de pagamento
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Float, ForeignKey

from app.database import Base
from app.models.enums import PaymentMethod, PaymentReference


class Receipt(Base):
    __tablename__ = "receipts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    receipt_number = Column(String(30), unique=True, index=True)

    client_id = Column(String(36), ForeignKey("clients.id", ondelete="SET NULL"), index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id", ondelete="SET NULL"), index=True)
    proposal_id = Column(String(36), ForeignKey("proposals.id", ondelete="SET NULL"), index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    amount = Column(Float, nullable=False)
    payment_method = Column(String(20), nullable=False, default=PaymentMethod.PIX.value)
    payment_reference = Column(String(20), nullable=False, default=PaymentReference.ENTRADA.value)

    payer_name = Column(String(255), nullable=False)
    payer_cpf = Column(String(14))
    payment_date = Column(Date, default=lambda: datetime.utcnow().date())
    description = Column(Text)
    location = Column(String(100))

    client_signature = Column(Text)
    vendor_signature = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "receipt_number": self.receipt_number,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "proposal_id": self.proposal_id,
            "seller_id": self.seller_id,
            "amount": self.amount,
            "payment_method": self.payment_method,
            "payment_reference": self.payment_reference,
            "payer_name": self.payer_name,
            "payer_cpf": self.payer_cpf,
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "description": self.description,
            "location": self.location,
            "has_client_signature": bool(self.client_signature),
            "has_vendor_signature": bool(self.vendor_signature),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
