"""
Dealer Back-Office - User Model
Identidade de acesso (admin, vendedor ou cliente do portal)
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime

from app.database import Base
from app.models.enums import UserRole


class User(Base):
    """Usuário autenticável do sistema"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255))
    phone = Column(String(20))
    role = Column(String(20), nullable=False, default=UserRole.VENDEDOR.value, index=True)

    is_active = Column(Boolean, default=True)

    # Admin que criou a conta (controle de limite de criação)
    created_by = Column(String(36), index=True)

    last_login_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "role": self.role,
            "is_active": self.is_active,
            "last_login_at": self.last_login_at.isoformat() if self.last_login_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
