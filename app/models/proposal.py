"""
Dealer Back-Office - Proposal Model
Propostas de venda/financiamento
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Integer, Float, ForeignKey

from app.database import Base
from app.models.enums import ProposalStatus, ProposalType


class Proposal(Base):
    """Proposta comercial vinculada a cliente e veículo"""
    __tablename__ = "proposals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    proposal_number = Column(String(30), unique=True, index=True)

    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)
    bank_id = Column(String(36), ForeignKey("banks.id"), index=True)

    status = Column(String(20), nullable=False, default=ProposalStatus.PENDENTE.value, index=True)
    type = Column(String(30), nullable=False, default=ProposalType.FINANCIAMENTO_BANCARIO.value)

    # Valores
    vehicle_price = Column(Float, nullable=False)
    cash_price = Column(Float)
    down_payment = Column(Float, default=0)
    financed_amount = Column(Float, default=0)
    installments = Column(Integer, default=0)
    installment_value = Column(Float, default=0)
    interest_rate = Column(Float, default=0)
    total_amount = Column(Float, default=0)
    first_due_date = Column(Date)

    # Assinaturas (PNG base64)
    client_signature = Column(Text)
    vendor_signature = Column(Text)

    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "proposal_number": self.proposal_number,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "seller_id": self.seller_id,
            "bank_id": self.bank_id,
            "status": self.status,
            "type": self.type,
            "vehicle_price": self.vehicle_price,
            "cash_price": self.cash_price,
            "down_payment": self.down_payment,
            "financed_amount": self.financed_amount,
            "installments": self.installments,
            "installment_value": self.installment_value,
            "interest_rate": self.interest_rate,
            "total_amount": self.total_amount,
            "first_due_date": self.first_due_date.isoformat() if self.first_due_date else None,
            "has_client_signature": bool(self.client_signature),
            "has_vendor_signature": bool(self.vendor_signature),
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
