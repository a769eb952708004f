"""
Dealer Back-Office - Client Model
Clientes da loja (compradores) e seu estágio no funil de vendas
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Text, ForeignKey

from app.database import Base
from app.models.enums import FunnelStage


class Client(Base):
    """Modelo de Cliente (pessoa física compradora)"""
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Dados pessoais
    name = Column(String(255), nullable=False, index=True)
    cpf = Column(String(14), index=True)
    rg = Column(String(20))
    birth_date = Column(Date)
    email = Column(String(255), index=True)
    phone = Column(String(20))
    marital_status = Column(String(20))
    occupation = Column(String(100))

    # Endereço
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(2))
    zip_code = Column(String(10))

    # Funil
    funnel_stage = Column(String(20), nullable=False, default=FunnelStage.ATENDIMENTO.value, index=True)
    notes = Column(Text)

    # Vendedor responsável e conta do portal
    seller_id = Column(String(36), ForeignKey("users.id"), index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "cpf": self.cpf,
            "rg": self.rg,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "email": self.email,
            "phone": self.phone,
            "marital_status": self.marital_status,
            "occupation": self.occupation,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "funnel_stage": self.funnel_stage,
            "notes": self.notes,
            "seller_id": self.seller_id,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
