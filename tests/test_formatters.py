"""
Formatação brasileira e valor por extenso
"""
from datetime import date

import pytest

from app.utils.formatters import (
    number_to_words,
    cardinal,
    format_currency,
    format_cpf,
    format_cpf_cnpj,
    format_rg,
    format_phone,
    format_date,
    format_date_extenso,
    is_valid_cpf,
)


def test_number_to_words_with_cents():
    text = number_to_words(1234.56)
    assert text == "mil, duzentos e trinta e quatro reais e cinquenta e seis centavos"
    assert "mil" in text
    assert "reais" in text
    assert "centavos" in text


@pytest.mark.parametrize("value, expected", [
    (0, "zero reais"),
    (None, "zero reais"),
    (1, "um real"),
    (100, "cem reais"),
    (0.5, "cinquenta centavos"),
    (0.01, "um centavo"),
    (1000, "mil reais"),
    (2000, "dois mil reais"),
    (1000000, "um milhão de reais"),
    (2500000, "dois milhões e quinhentos mil reais"),
    (101, "cento e um reais"),
    (1001, "mil e um reais"),
    (1234567, "um milhão, duzentos e trinta e quatro mil, quinhentos e sessenta e sete reais"),
    (1200100, "um milhão, duzentos mil e cem reais"),
    (-10, "menos dez reais"),
])
def test_number_to_words_phrases(value, expected):
    assert number_to_words(value) == expected


def test_number_to_words_rounds_half_up():
    assert number_to_words("10.005") == "dez reais e um centavo"


def test_cardinal():
    assert cardinal(10) == "dez"
    assert cardinal(0) == "zero"


def test_format_currency():
    assert format_currency(1234.56) == "R$ 1.234,56"
    assert format_currency(None) == "R$ 0,00"
    assert format_currency(-5) == "-R$ 5,00"


def test_documents_and_phone():
    assert format_cpf("52998224725") == "529.982.247-25"
    assert format_cpf("123") == "123"
    assert format_cpf_cnpj("11222333000181") == "11.222.333/0001-81"
    assert format_rg("12345678x") == "12.345.678-X"
    assert format_phone("49999887766") == "(49) 99988-7766"
    assert format_phone("4932221100") == "(49) 3222-1100"


def test_dates():
    assert format_date(date(2026, 3, 5)) == "05/03/2026"
    assert format_date("2026-03-05T10:00:00Z") == "05/03/2026"
    assert format_date(None) == ""
    assert format_date_extenso(date(2026, 3, 5)) == "5 de março de 2026"


def test_cpf_validation():
    assert is_valid_cpf("529.982.247-25") is True
    assert is_valid_cpf("529.982.247-24") is False
    assert is_valid_cpf("111.111.111-11") is False
