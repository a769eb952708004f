"""
Dealer Back-Office - Document Numbering
Números de documento no formato PREFIXO + AAAAMM + sequência de 4 dígitos
"""
import logging
import time
from datetime import datetime
from typing import Awaitable, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import DocumentSequence
from app.models.enums import DocumentPrefix

logger = logging.getLogger(__name__)


def _unix_millis() -> int:
    return int(time.time() * 1000)


async def generate_document_number(
    db: AsyncSession,
    prefix: DocumentPrefix,
    now: Optional[datetime] = None
) -> str:
    """Próximo número da sequência mensal do prefixo (ex: PROP2026010001)"""
    prefix = DocumentPrefix(prefix)
    period = (now or datetime.now()).strftime("%Y%m")

    sequence = await db.get(DocumentSequence, (prefix.value, period))
    if sequence is None:
        sequence = DocumentSequence(prefix=prefix.value, period=period, last_value=0)
        db.add(sequence)

    sequence.last_value = (sequence.last_value or 0) + 1
    await db.flush()

    return f"{prefix.value}{period}{sequence.last_value:04d}"


async def next_document_number(
    db: AsyncSession,
    prefix: DocumentPrefix,
    sequence: Callable[[AsyncSession, DocumentPrefix], Awaitable[str]] = generate_document_number,
    now_ms: Callable[[], int] = _unix_millis
) -> str:
    """
    Número para um novo documento.
    Se a sequência falhar ou vier vazia usa PREFIXO + milissegundos unix.
    Duas chamadas no mesmo milissegundo geram o mesmo número de fallback.
    """
    prefix = DocumentPrefix(prefix)
    try:
        # Savepoint: uma falha da sequência não invalida a transação do documento
        async with db.begin_nested():
            number = await sequence(db, prefix)
        if number:
            return number
        logger.warning(f"Sequência {prefix.value} retornou vazio, usando fallback")
    except Exception as e:
        logger.warning(f"Falha na sequência {prefix.value}, usando fallback: {e}")

    return f"{prefix.value}{now_ms()}"
