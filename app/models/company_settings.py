"""
Dealer Back-Office - Company Settings Model
Dados da loja usados nos documentos (linha única)
"""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Text

from app.database import Base


class CompanySettings(Base):
    __tablename__ = "company_settings"

    id = Column(Integer, primary_key=True, default=1)

    name = Column(String(255))
    fantasy_name = Column(String(255))
    cnpj = Column(String(20))
    address = Column(String(255))
    address_number = Column(String(20))
    neighborhood = Column(String(100))
    city = Column(String(100))
    state = Column(String(2))
    zip_code = Column(String(10))
    phone = Column(String(20))
    email = Column(String(255))

    # Representante legal
    representative_name = Column(String(255))
    representative_cpf = Column(String(14))
    representative_role = Column(String(100))
    representative_signature = Column(Text)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "name": self.name,
            "fantasy_name": self.fantasy_name,
            "cnpj": self.cnpj,
            "address": self.address,
            "address_number": self.address_number,
            "neighborhood": self.neighborhood,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "phone": self.phone,
            "email": self.email,
            "representative_name": self.representative_name,
            "representative_cpf": self.representative_cpf,
            "representative_role": self.representative_role,
            "representative_signature": self.representative_signature,
        }
