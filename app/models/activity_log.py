"""
Dealer Back-Office - Activity Log Model
Histórico de ações dos usuários
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text

from app.database import Base
from app.models.enums import ACTION_LABELS, ENTITY_LABELS


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = Column(String(36), index=True)
    action = Column(String(20), nullable=False, index=True)
    entity_type = Column(String(20), nullable=False, index=True)
    entity_id = Column(String(36), index=True)
    description = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "action": self.action,
            "action_label": ACTION_LABELS.get(self.action, self.action),
            "entity_type": self.entity_type,
            "entity_label": ENTITY_LABELS.get(self.entity_type, self.entity_type),
            "entity_id": self.entity_id,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
