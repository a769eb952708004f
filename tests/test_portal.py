"""
Portal do cliente: vínculo por email e documentos próprios
"""
import pytest

from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.services.documents import create_receipt
from app.services.portal import resolve_client, require_portal_client, get_client_document


async def test_resolve_by_email_backfills_link(db, client_session, make_client):
    record = await make_client(name="Maria Cliente", email="maria@email.com")
    assert record.user_id is None

    resolved = await resolve_client(db, client_session)
    await db.commit()

    assert resolved.id == record.id
    assert record.user_id == client_session.user_id

    # segunda busca pelo vínculo
    assert (await resolve_client(db, client_session)).id == record.id


async def test_staff_cannot_use_portal(db, vendor_session):
    with pytest.raises(PermissionDeniedError):
        await require_portal_client(db, vendor_session)


async def test_client_without_record(db, client_session):
    with pytest.raises(NotFoundError):
        await require_portal_client(db, client_session)


async def test_documents_of_other_clients_are_hidden(db, vendor_session, client_session, make_client):
    own = await make_client(name="Maria Cliente", email="maria@email.com")
    other = await make_client(name="Pedro Outro", email="pedro@email.com")
    other_receipt = await create_receipt(db, vendor_session, {"client_id": other.id, "amount": 300.0})
    await db.commit()

    with pytest.raises(NotFoundError):
        await get_client_document(db, own, "receipts", other_receipt.id)

    with pytest.raises(NotFoundError):
        await get_client_document(db, own, "boletos", other_receipt.id)


async def test_portal_endpoints(client, db, vendor_session, client_headers, vendor_headers, make_client):
    own = await make_client(name="Maria Cliente", email="maria@email.com")
    receipt = await create_receipt(db, vendor_session, {"client_id": own.id, "amount": 1500.0})
    await db.commit()

    response = await client.get("/api/portal/me", headers=client_headers)
    assert response.status_code == 200
    assert response.json()["id"] == own.id

    response = await client.get("/api/portal/receipts", headers=client_headers)
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [receipt.id]

    response = await client.get(f"/api/portal/receipts/{receipt.id}/pdf", headers=client_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")

    response = await client.get("/api/portal/me", headers=vendor_headers)
    assert response.status_code == 403

    response = await client.get("/api/clients", headers=client_headers)
    assert response.status_code == 403
