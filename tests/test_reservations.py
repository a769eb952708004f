"""
Reservas: validade, status do veículo e transições
"""
from datetime import date, timedelta

import pytest

from app.core.exceptions import InvalidTransitionError, ValidationError
from app.models import Vehicle
from app.models.enums import ReservationStatus, VehicleStatus
from app.services import reservations as reservation_service
from app.services.reservations import (
    create_reservation,
    update_status,
    delete_reservation,
    list_reservations,
    is_expired,
)


async def test_create_reserves_vehicle_for_ten_days(db, vendor_session, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()
    today = date(2026, 3, 25)

    reservation = await create_reservation(db, vendor_session, customer.id, vehicle.id, 1000.0, today=today)
    await db.refresh(vehicle)

    assert reservation.status == ReservationStatus.ATIVA.value
    assert reservation.reservation_number.startswith("RES")
    assert reservation.reservation_date == today
    assert reservation.valid_until == date(2026, 4, 4)
    assert reservation.valid_until - reservation.reservation_date == timedelta(days=10)
    assert vehicle.status == VehicleStatus.RESERVADO.value


async def test_missing_client_or_vehicle_is_rejected(db, vendor_session, make_vehicle):
    vehicle = await make_vehicle()
    with pytest.raises(ValidationError):
        await create_reservation(db, vendor_session, None, vehicle.id)


async def test_vehicle_failure_leaves_reservation_active(
    db, vendor_session, make_client, make_vehicle, monkeypatch
):
    customer = await make_client()
    vehicle = await make_vehicle()

    async def failing_set_vehicle_status(db, vehicle_id, status):
        raise RuntimeError("falha de rede")

    monkeypatch.setattr(reservation_service, "set_vehicle_status", failing_set_vehicle_status)

    reservation = await create_reservation(db, vendor_session, customer.id, vehicle.id)

    assert reservation.status == ReservationStatus.ATIVA.value
    stored = await db.get(Vehicle, vehicle.id)
    await db.refresh(stored)
    assert stored.status == VehicleStatus.DISPONIVEL.value


@pytest.mark.parametrize("outcome, vehicle_status", [
    ("convertida", VehicleStatus.VENDIDO),
    ("cancelada", VehicleStatus.DISPONIVEL),
])
async def test_outcome_updates_vehicle(db, vendor_session, make_client, make_vehicle, outcome, vehicle_status):
    customer = await make_client()
    vehicle = await make_vehicle()
    reservation = await create_reservation(db, vendor_session, customer.id, vehicle.id)

    await update_status(db, vendor_session, reservation, outcome)
    await db.commit()
    await db.refresh(vehicle)

    assert reservation.status == outcome
    assert vehicle.status == vehicle_status.value


async def test_only_active_reservations_change_status(db, vendor_session, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()
    reservation = await create_reservation(db, vendor_session, customer.id, vehicle.id)
    await update_status(db, vendor_session, reservation, "cancelada")

    with pytest.raises(InvalidTransitionError):
        await update_status(db, vendor_session, reservation, "convertida")


async def test_delete_releases_vehicle(db, vendor_session, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()
    reservation = await create_reservation(db, vendor_session, customer.id, vehicle.id)

    await delete_reservation(db, vendor_session, reservation)
    await db.commit()
    await db.refresh(vehicle)

    assert vehicle.status == VehicleStatus.DISPONIVEL.value


async def test_expired_reservations_stay_active(db, vendor_session, make_client, make_vehicle):
    customer = await make_client()
    old = await create_reservation(db, vendor_session, customer.id, (await make_vehicle()).id,
                                   today=date(2026, 1, 1))
    fresh = await create_reservation(db, vendor_session, customer.id, (await make_vehicle(plate="XYZ9K87")).id,
                                     today=date(2026, 1, 20))
    today = date(2026, 1, 25)

    assert is_expired(old, today) is True
    assert is_expired(fresh, today) is False
    assert old.status == ReservationStatus.ATIVA.value

    expired = await list_reservations(db, expired=True, today=today)
    assert [r.id for r in expired] == [old.id]


async def test_reservation_endpoints(client, vendor_headers, make_client, make_vehicle):
    customer = await make_client()
    vehicle = await make_vehicle()

    response = await client.post(
        "/api/reservations",
        json={"client_id": customer.id, "vehicle_id": vehicle.id, "deposit_amount": 500},
        headers=vendor_headers
    )
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "ativa"
    assert created["is_expired"] is False

    response = await client.patch(
        f"/api/reservations/{created['id']}/status", json={"status": "convertida"}, headers=vendor_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "convertida"

    response = await client.patch(
        f"/api/reservations/{created['id']}/status", json={"status": "cancelada"}, headers=vendor_headers
    )
    assert response.status_code == 409

    response = await client.get(f"/api/vehicles/{vehicle.id}", headers=vendor_headers)
    assert response.json()["status"] == "vendido"
