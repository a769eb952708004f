"""
Dealer Back-Office - Document Models
Termo de garantia, autorização de transferência (ATPV) e declaração de desistência
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, Integer, Float, ForeignKey

from app.database import Base


class Warranty(Base):
    """Termo de garantia"""
    __tablename__ = "warranties"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    warranty_number = Column(String(30), unique=True, index=True)

    contract_id = Column(String(36), ForeignKey("contracts.id", ondelete="SET NULL"), index=True)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    warranty_period = Column(String(50), default="6 meses")
    warranty_coverage = Column(String(255), default="Motor e Câmbio")
    warranty_km = Column(Integer, default=200000)
    conditions = Column(Text)
    client_signature = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "warranty_number": self.warranty_number,
            "contract_id": self.contract_id,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "seller_id": self.seller_id,
            "warranty_period": self.warranty_period,
            "warranty_coverage": self.warranty_coverage,
            "warranty_km": self.warranty_km,
            "conditions": self.conditions,
            "has_client_signature": bool(self.client_signature),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TransferAuthorization(Base):
    """Autorização para transferência de propriedade do veículo (ATPV)"""
    __tablename__ = "transfer_authorizations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    authorization_number = Column(String(30), unique=True, index=True)

    contract_id = Column(String(36), ForeignKey("contracts.id", ondelete="SET NULL"), index=True)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    vehicle_value = Column(Float, nullable=False)
    transfer_date = Column(Date, default=lambda: datetime.utcnow().date())
    location = Column(String(100), default="Lages/SC")

    vendor_signature = Column(Text)
    client_signature = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "authorization_number": self.authorization_number,
            "contract_id": self.contract_id,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "seller_id": self.seller_id,
            "vehicle_value": self.vehicle_value,
            "transfer_date": self.transfer_date.isoformat() if self.transfer_date else None,
            "location": self.location,
            "has_vendor_signature": bool(self.vendor_signature),
            "has_client_signature": bool(self.client_signature),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class WithdrawalDeclaration(Base):
    """Declaração de desistência da compra"""
    __tablename__ = "withdrawal_declarations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    declaration_number = Column(String(30), unique=True, index=True)

    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)

    reason = Column(Text)
    declaration_date = Column(Date, default=lambda: datetime.utcnow().date())
    client_signature = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "declaration_number": self.declaration_number,
            "client_id": self.client_id,
            "vehicle_id": self.vehicle_id,
            "seller_id": self.seller_id,
            "reason": self.reason,
            "declaration_date": self.declaration_date.isoformat() if self.declaration_date else None,
            "has_client_signature": bool(self.client_signature),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
