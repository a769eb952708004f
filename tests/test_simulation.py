"""
Simulação de financiamento (tabela Price) por banco
"""
import pytest

from app.models import Bank
from app.services.simulation import (
    closest_term,
    price_installment,
    simulate,
    simulate_own_financing,
    run_simulation,
)


@pytest.mark.parametrize("installments, term", [(10, 12), (18, 12), (30, 24), (46, 48), (72, 60)])
def test_closest_term(installments, term):
    assert closest_term(installments) == term


def test_price_installment():
    assert price_installment(12000, 0, 12) == 1000
    assert price_installment(10000, 0.02, 12) == pytest.approx(945.60, abs=0.01)


def test_own_financing_has_no_interest():
    own = simulate_own_financing(50000, 20000, 12)
    assert own["installment_value"] == 2500
    assert own["total_value"] == 30000
    assert simulate_own_financing(50000, 50000, 12) is None


def test_banks_sorted_by_installment_and_own_bank_skipped():
    cheap = Bank(id="b1", name="Barato", interest_rate=1.2, rates={"48": 1.0}, commission_rate=1.0, is_own=False)
    expensive = Bank(id="b2", name="Caro", interest_rate=2.5, rates={}, commission_rate=3.0, is_own=False)
    own = Bank(id="b3", name="Loja", interest_rate=0, rates={}, commission_rate=0, is_own=True)

    results = simulate([expensive, cheap, own], 60000, 20000, 48)

    assert [r["bank_name"] for r in results] == ["Barato", "Caro"]
    first = results[0]
    assert first["used_term"] == 48
    assert first["interest_rate"] == pytest.approx(1.0)
    assert first["financed_amount"] == 40000
    assert first["cet"] == pytest.approx(0.01 * 12 * 1.15)
    assert first["vendor_commission"] == pytest.approx(400)
    assert first["store_margin"] == pytest.approx(3000)
    assert first["total_value"] == pytest.approx(first["installment_value"] * 48)


def test_nothing_to_finance():
    bank = Bank(id="b1", name="Banco", interest_rate=1.5, rates={})
    assert simulate([bank], 30000, 30000, 24) == []


async def test_run_simulation_uses_active_banks(db, make_bank):
    await make_bank(name="Ativo")
    await make_bank(name="Inativo", is_active=False)

    result = await run_simulation(db, 50000, 10000, 36)

    assert [b["bank_name"] for b in result["banks"]] == ["Ativo"]
    assert result["down_payment_percent"] == 20
    assert result["own_financing"]["installments"] == 12


async def test_simulation_endpoints(client, vendor_headers, make_bank):
    await make_bank()

    response = await client.post(
        "/api/simulations/run",
        json={"vehicle_price": 50000, "down_payment": 10000, "installments": 48},
        headers=vendor_headers
    )
    assert response.status_code == 200
    best = response.json()["banks"][0]

    response = await client.post("/api/simulations", json={
        "bank_name": best["bank_name"],
        "vehicle_price": 50000,
        "down_payment": 10000,
        "financed_amount": best["financed_amount"],
        "installments": 48,
        "interest_rate": best["interest_rate"],
        "installment_value": best["installment_value"],
        "total_value": best["total_value"],
        "cet": best["cet"],
        "vendor_commission": best["vendor_commission"],
        "store_margin": best["store_margin"],
    }, headers=vendor_headers)
    assert response.status_code == 201

    response = await client.get("/api/simulations", headers=vendor_headers)
    assert len(response.json()) == 1

    response = await client.post(
        "/api/simulations/run",
        json={"vehicle_price": 50000, "down_payment": 60000},
        headers=vendor_headers
    )
    assert response.status_code == 422
