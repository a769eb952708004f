"""
Dealer Back-Office - Bank Model
Bancos parceiros e financiamento próprio
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Float
from sqlalchemy.dialects.sqlite import JSON

from app.database import Base


class Bank(Base):
    """Banco parceiro (taxas mensais por prazo e comissão do vendedor)"""
    __tablename__ = "banks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(100), nullable=False, index=True)
    primary_color = Column(String(10), default="#1e3a5f")

    # Taxa mensal padrão (%) e taxas por prazo: {"12": 1.49, "24": 1.59, ...}
    interest_rate = Column(Float, default=0)
    rates = Column(JSON, default=dict)
    commission_rate = Column(Float, default=0)

    is_own = Column(Boolean, default=False)  # financiamento próprio da loja
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def rate_for(self, term: int) -> float:
        """Taxa mensal para o prazo (cai na taxa padrão)"""
        rates = self.rates or {}
        value = rates.get(str(term), rates.get(term))
        if value is None:
            return float(self.interest_rate or 0)
        return float(value)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "primary_color": self.primary_color,
            "interest_rate": self.interest_rate,
            "rates": self.rates or {},
            "commission_rate": self.commission_rate,
            "is_own": self.is_own,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
