"""
Numeração de documentos: sequência mensal e fallback por milissegundos
"""
from datetime import datetime
from itertools import count

from sqlalchemy import select

from app.models import DocumentSequence, Proposal
from app.models.enums import DocumentPrefix
from app.services.numbering import generate_document_number, next_document_number


async def test_sequence_increments_per_prefix_and_month(db):
    jan = datetime(2026, 1, 15)

    assert await generate_document_number(db, DocumentPrefix.PROPOSAL, now=jan) == "PROP2026010001"
    assert await generate_document_number(db, DocumentPrefix.PROPOSAL, now=jan) == "PROP2026010002"
    assert await generate_document_number(db, DocumentPrefix.CONTRACT, now=jan) == "CONT2026010001"
    assert await generate_document_number(db, "PROP", now=datetime(2026, 2, 1)) == "PROP2026020001"


async def test_next_number_uses_sequence(db):
    number = await next_document_number(db, DocumentPrefix.RESERVATION)
    assert number.startswith("RES")
    assert len(number) == len("RES") + 6 + 4


async def test_fallback_numbers_are_distinct_when_sequence_fails(db):
    async def broken_sequence(db, prefix):
        raise RuntimeError("sequência indisponível")

    clock = count(1767225600000)
    numbers = [
        await next_document_number(db, DocumentPrefix.RECEIPT, sequence=broken_sequence, now_ms=lambda: next(clock))
        for _ in range(3)
    ]

    assert numbers == ["REC1767225600000", "REC1767225600001", "REC1767225600002"]
    assert len(set(numbers)) == 3


async def test_fallback_when_sequence_returns_empty(db):
    async def empty_sequence(db, prefix):
        return ""

    number = await next_document_number(db, "GAR", sequence=empty_sequence, now_ms=lambda: 42)
    assert number == "GAR42"


async def test_failed_sequence_flush_does_not_block_the_document(
    db, session_factory, vendor_session, make_client, make_vehicle
):
    customer = await make_client()
    vehicle = await make_vehicle()
    async with session_factory() as other:
        await generate_document_number(other, DocumentPrefix.PROPOSAL, now=datetime(2026, 1, 15))
        await other.commit()

    async def concurrent_first_row(db, prefix):
        # outra requisição já criou a linha do mês
        db.add(DocumentSequence(prefix=prefix.value, period="202601", last_value=1))
        await db.flush()

    number = await next_document_number(db, DocumentPrefix.PROPOSAL, sequence=concurrent_first_row, now_ms=lambda: 7)
    assert number == "PROP7"

    db.add(Proposal(
        proposal_number=number,
        client_id=customer.id,
        vehicle_id=vehicle.id,
        seller_id=vendor_session.user_id,
        vehicle_price=55000.0,
    ))
    await db.flush()
    await db.commit()

    stored = (await db.execute(select(Proposal.proposal_number))).scalars().all()
    assert stored == ["PROP7"]
