"""
Dealer Back-Office - Company Settings
Dados da loja para os documentos, com padrão vindo da configuração
"""
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models import CompanySettings


def default_company() -> dict:
    return {
        "name": settings.COMPANY_NAME,
        "fantasy_name": settings.COMPANY_FANTASY_NAME,
        "cnpj": settings.COMPANY_CNPJ,
        "address": settings.COMPANY_STREET,
        "address_number": None,
        "neighborhood": settings.COMPANY_NEIGHBORHOOD,
        "city": settings.COMPANY_CITY,
        "state": settings.COMPANY_STATE,
        "zip_code": settings.COMPANY_ZIP_CODE,
        "phone": settings.COMPANY_PHONE,
        "email": settings.COMPANY_EMAIL,
        "representative_name": settings.COMPANY_REP_NAME,
        "representative_cpf": settings.COMPANY_REP_CPF,
        "representative_role": "Sócio Administrador",
        "representative_nationality": settings.COMPANY_REP_NATIONALITY,
        "representative_marital_status": settings.COMPANY_REP_MARITAL_STATUS,
        "representative_occupation": settings.COMPANY_REP_OCCUPATION,
        "representative_rg": settings.COMPANY_REP_RG,
        "representative_signature": None,
    }


async def load_company(db: AsyncSession) -> dict:
    """Configuração salva sobreposta aos padrões (campos vazios ficam com o padrão)"""
    company = default_company()
    row = await db.get(CompanySettings, 1)
    if row:
        company.update({k: v for k, v in row.to_dict().items() if v})
    return company


async def update_company(db: AsyncSession, data: dict) -> CompanySettings:
    row = await db.get(CompanySettings, 1)
    if row is None:
        row = CompanySettings(id=1)
        db.add(row)
    for field, value in data.items():
        setattr(row, field, value)
    await db.flush()
    return row
