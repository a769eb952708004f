"""
Dealer Back-Office - Formatters
Formatação brasileira de moeda, documentos, datas e valor por extenso
"""
import re
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[int, float, Decimal, str]

UNIDADES = ["", "um", "dois", "três", "quatro", "cinco", "seis", "sete", "oito", "nove",
            "dez", "onze", "doze", "treze", "quatorze", "quinze", "dezesseis",
            "dezessete", "dezoito", "dezenove"]
DEZENAS = ["", "", "vinte", "trinta", "quarenta", "cinquenta",
           "sessenta", "setenta", "oitenta", "noventa"]
CENTENAS = ["", "cento", "duzentos", "trezentos", "quatrocentos", "quinhentos",
            "seiscentos", "setecentos", "oitocentos", "novecentos"]

# (singular, plural) por grupo de milhar, do maior para o menor
ESCALAS = [
    ("bilhão", "bilhões"),
    ("milhão", "milhões"),
    ("mil", "mil"),
    ("", ""),
]

MESES = ["janeiro", "fevereiro", "março", "abril", "maio", "junho",
         "julho", "agosto", "setembro", "outubro", "novembro", "dezembro"]


def _extenso_centena(n: int) -> str:
    """Extenso de 1 a 999"""
    if n == 0:
        return ""
    if n == 100:
        return "cem"

    c = n // 100
    resto = n % 100
    partes = []
    if c > 0:
        partes.append(CENTENAS[c])
    if resto >= 20:
        d, u = divmod(resto, 10)
        partes.append(DEZENAS[d])
        if u:
            partes.append(UNIDADES[u])
    elif resto > 0:
        partes.append(UNIDADES[resto])
    return " e ".join(partes)


def _extenso_inteiro(n: int) -> str:
    """Extenso de um inteiro positivo (até 999 bilhões)"""
    grupos = []
    for i, (singular, plural) in enumerate(ESCALAS):
        divisor = 1000 ** (len(ESCALAS) - 1 - i)
        valor, n = divmod(n, divisor)
        if valor == 0:
            continue
        if singular == "mil":
            texto = "mil" if valor == 1 else f"{_extenso_centena(valor)} mil"
        elif singular:
            texto = f"{_extenso_centena(valor)} {singular if valor == 1 else plural}"
        else:
            texto = _extenso_centena(valor)
        grupos.append((valor, texto))

    if len(grupos) == 1:
        return grupos[0][1]

    # Grupos separados por vírgula; "e" antes do último quando ele é menor que 100 ou centena redonda
    ultimo_valor, ultimo_texto = grupos[-1]
    anteriores = ", ".join(texto for _, texto in grupos[:-1])
    if ultimo_valor < 100 or ultimo_valor % 100 == 0:
        return f"{anteriores} e {ultimo_texto}"
    return f"{anteriores}, {ultimo_texto}"


def cardinal(n: int) -> str:
    """Inteiro por extenso, sem moeda (ex: 10 -> "dez")"""
    return _extenso_inteiro(n) if n > 0 else "zero"


def number_to_words(value: Optional[Number]) -> str:
    """
    Valor em reais por extenso.
    Ex: 1234.56 -> "mil, duzentos e trinta e quatro reais e cinquenta e seis centavos"
    """
    if value is None:
        return "zero reais"

    valor = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if valor < 0:
        return f"menos {number_to_words(-valor)}"

    inteiro = int(valor)
    centavos = int((valor - inteiro) * 100)
    if inteiro >= 10 ** 12:
        raise ValueError(f"Valor fora do limite para extenso: {value}")

    if inteiro == 0 and centavos == 0:
        return "zero reais"

    partes = []
    if inteiro > 0:
        texto = _extenso_inteiro(inteiro)
        if inteiro == 1:
            texto += " real"
        elif inteiro % 1000000 == 0:
            # "um milhão de reais", "dois bilhões de reais"
            texto += " de reais"
        else:
            texto += " reais"
        partes.append(texto)

    if centavos > 0:
        texto = _extenso_centena(centavos)
        partes.append(f"{texto} centavo" if centavos == 1 else f"{texto} centavos")

    return " e ".join(partes)


def format_currency(value) -> str:
    """Formata valor para moeda brasileira"""
    if value is None:
        return "R$ 0,00"
    valor = float(value)
    texto = f"R$ {abs(valor):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"-{texto}" if valor < 0 else texto


def format_percent(value) -> str:
    return f"{float(value or 0):.2f}".replace(".", ",") + "%"


def format_mileage(value) -> str:
    return f"{int(value or 0):,}".replace(",", ".") + " km"


def only_digits(value: Optional[str]) -> str:
    return re.sub(r"\D", "", value or "")


def format_cpf(cpf: Optional[str]) -> str:
    digits = only_digits(cpf)
    if len(digits) != 11:
        return cpf or ""
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def format_cpf_cnpj(doc: Optional[str]) -> str:
    """Formata CPF ou CNPJ"""
    digits = only_digits(doc)
    if len(digits) == 14:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
    return format_cpf(doc)


def format_rg(rg: Optional[str]) -> str:
    """RG no padrão 9 dígitos (00.000.000-0); outros formatos ficam como vieram"""
    if not rg:
        return ""
    cleaned = re.sub(r"[^\dXx]", "", rg)
    if len(cleaned) == 9:
        return f"{cleaned[:2]}.{cleaned[2:5]}.{cleaned[5:8]}-{cleaned[8:].upper()}"
    return rg


def format_phone(phone: Optional[str]) -> str:
    digits = only_digits(phone)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return phone or ""


def parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()


def format_date(value) -> str:
    """dd/mm/aaaa"""
    d = parse_date(value)
    return d.strftime("%d/%m/%Y") if d else ""


def format_date_extenso(value) -> str:
    """Formata data por extenso (ex: 5 de março de 2026)"""
    d = parse_date(value)
    if d is None:
        return ""
    return f"{d.day} de {MESES[d.month - 1]} de {d.year}"


def is_valid_cpf(cpf: Optional[str]) -> bool:
    """Valida dígitos verificadores do CPF"""
    digits = only_digits(cpf)
    if len(digits) != 11 or digits == digits[0] * 11:
        return False

    for length in (9, 10):
        total = sum(int(digits[i]) * (length + 1 - i) for i in range(length))
        check = 11 - (total % 11)
        if check > 9:
            check = 0
        if int(digits[length]) != check:
            return False
    return True
