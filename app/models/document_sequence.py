"""
Dealer Back-Office - Document Sequence Model
Contador mensal por prefixo de documento
"""
from sqlalchemy import Column, String, Integer

from app.database import Base


class DocumentSequence(Base):
    __tablename__ = "document_sequences"

    prefix = Column(String(10), primary_key=True)
    period = Column(String(6), primary_key=True)  # YYYYMM
    last_value = Column(Integer, nullable=False, default=0)
