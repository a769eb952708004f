"""
Dealer Back-Office - Schema Base
"""
from pydantic import BaseModel, ConfigDict


class EnumValueModel(BaseModel):
    """Enums (inclusive os padrões) chegam aos serviços como o texto armazenado no banco"""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)
