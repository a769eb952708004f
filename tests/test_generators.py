"""
Geradores de PDF (reportlab): conteúdo mínimo de cada documento
"""
from datetime import date
from io import BytesIO

from pypdf import PdfReader

from app.utils.contractGenerator import generate_contract_pdf, installment_schedule
from app.utils.proposalGenerator import generate_proposal_pdf
from app.utils.receiptGenerator import generate_receipt_pdf
from app.utils.reservationGenerator import generate_reservation_pdf
from app.utils.transferGenerator import generate_transfer_pdf
from app.utils.warrantyGenerator import generate_warranty_pdf
from app.utils.withdrawalGenerator import generate_withdrawal_pdf

COMPANY = {
    "name": "Serra Veículos LTDA",
    "fantasy_name": "Serra Veículos",
    "cnpj": "12345678000190",
    "address": "Av. Central",
    "address_number": "100",
    "city": "Lages",
    "state": "SC",
    "phone": "4932220000",
}

CLIENT = {
    "name": "Joao da Silva",
    "cpf": "52998224725",
    "phone": "49999990000",
    "address": "Rua das Flores, 10",
    "city": "Lages",
    "state": "SC",
}

VEHICLE = {
    "brand": "Volkswagen",
    "model": "Gol",
    "version": "1.0",
    "year_manufacture": 2020,
    "year_model": 2021,
    "plate": "abc1d23",
    "color": "Branco",
    "mileage": 42000,
    "price": 55000.0,
}


def pdf_text(pdf_bytes: bytes) -> str:
    assert pdf_bytes.startswith(b"%PDF")
    reader = PdfReader(BytesIO(pdf_bytes))
    text = " ".join(page.extract_text() or "" for page in reader.pages)
    return " ".join(text.split())


def test_installment_schedule_clamps_due_day():
    schedule = installment_schedule({
        "first_due_date": date(2026, 1, 31),
        "installments": 3,
        "due_day": 31,
        "installment_value": 1000.0,
    })

    assert [due for _, due, _ in schedule] == [date(2026, 1, 31), date(2026, 2, 28), date(2026, 3, 31)]
    assert installment_schedule({"installments": 3}) == []


def test_installment_schedule_crosses_year():
    schedule = installment_schedule({
        "first_due_date": "2026-11-30",
        "installments": 4,
        "due_day": 30,
        "installment_value": 500.0,
    })

    assert [due for _, due, _ in schedule] == [
        date(2026, 11, 30), date(2026, 12, 30), date(2027, 1, 30), date(2027, 2, 28)
    ]
    assert [n for n, _, _ in schedule] == [1, 2, 3, 4]


def test_proposal_pdf():
    proposal = {
        "proposal_number": "PROP2026010001",
        "type": "financiamento",
        "vehicle_price": 55000.0,
        "down_payment": 15000.0,
        "financed_amount": 40000.0,
        "installments": 48,
        "installment_value": 1150.0,
        "total_amount": 70200.0,
    }
    bank = {"name": "Banco Serrano", "primary_color": "#004488"}

    text = pdf_text(generate_proposal_pdf(proposal, CLIENT, VEHICLE, COMPANY, bank))

    assert "PROPOSTA DE VENDA" in text
    assert "PROP2026010001" in text
    assert "Banco Serrano" in text


def test_contract_pdf_with_schedule():
    contract = {
        "contract_number": "CONT2026010001",
        "payment_type": "parcelado",
        "vehicle_price": 55000.0,
        "down_payment": 19000.0,
        "installments": 12,
        "installment_value": 3000.0,
        "due_day": 15,
        "first_due_date": date(2026, 5, 15),
        "delivery_percentage": 50,
    }

    text = pdf_text(generate_contract_pdf(contract, CLIENT, VEHICLE, COMPANY))

    assert "CONT2026010001" in text
    assert "Joao da Silva" in text
    assert "Cronograma de Parcelas" in text
    assert "12/12" in text


def test_receipt_pdf_has_amount_in_words():
    receipt = {"receipt_number": "REC2026010001", "amount": 2000.0, "payment_date": date(2026, 1, 10)}

    text = pdf_text(generate_receipt_pdf(receipt, CLIENT, None, COMPANY))

    assert "RECIBO DE PAGAMENTO" in text
    assert "dois mil reais" in text
    assert "JOAO DA SILVA" in text


def test_reservation_pdf():
    reservation = {
        "reservation_number": "RES2026010001",
        "reservation_date": date(2026, 1, 10),
        "valid_until": date(2026, 1, 20),
        "deposit_amount": 1000.0,
    }

    text = pdf_text(generate_reservation_pdf(reservation, CLIENT, VEHICLE, COMPANY))

    assert "RES2026010001" in text
    assert "mil reais" in text
    assert "ABC1D23" in text


def test_warranty_pdf():
    warranty = {"warranty_number": "GAR2026010001", "warranty_period": "3 meses", "warranty_coverage": "Motor e câmbio"}

    text = pdf_text(generate_warranty_pdf(warranty, CLIENT, VEHICLE, COMPANY))

    assert "TERMO DE GARANTIA" in text
    assert "3 meses" in text


def test_transfer_pdf():
    transfer = {"authorization_number": "ATPV2026010001", "transfer_date": date(2026, 1, 10)}

    text = pdf_text(generate_transfer_pdf(transfer, CLIENT, VEHICLE, COMPANY))

    assert "ATPV2026010001" in text


def test_withdrawal_pdf_default_reason():
    declaration = {"declaration_number": "DES2026010001", "declaration_date": date(2026, 1, 10)}

    text = pdf_text(generate_withdrawal_pdf(declaration, CLIENT, VEHICLE, COMPANY))

    assert "DES2026010001" in text
    assert "motivos pessoais" in text
