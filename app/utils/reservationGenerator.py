"""
Gerador do Termo de Solicitação de Reserva de Veículo em PDF
"""
from typing import List, Optional
import logging

from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from app.utils.documentLayout import (
    STYLES, esc, header, title_band, meta_row, section, info_table, clauses, place_and_date,
    signature_block, build_pdf, company_location, client_address, vehicle_name, vehicle_year,
)
from app.utils.formatters import (
    cardinal, format_cpf, format_phone, format_currency, format_date, number_to_words, parse_date,
)

logger = logging.getLogger(__name__)


def reservation_clauses(reservation: dict, validity_days: int) -> List[str]:
    return [
        f"1. A reserva terá validade de {validity_days} ({cardinal(validity_days)}) "
        f"dias corridos a partir desta data, expirando em {format_date(reservation.get('valid_until'))}.",
        "2. Durante o período de reserva, o veículo não poderá ser vendido a terceiros.",
        "3. O valor da reserva/sinal será abatido do valor total do veículo no ato da compra.",
        "4. Caso o solicitante desista da compra, o valor do sinal NÃO será devolvido.",
        "5. Caso a loja não possa entregar o veículo, o valor do sinal será devolvido integralmente.",
        "6. Este termo tem força de contrato entre as partes.",
    ]


def validity_days_of(reservation: dict, default: int = 10) -> int:
    start = parse_date(reservation.get('reservation_date'))
    end = parse_date(reservation.get('valid_until'))
    if start and end and end >= start:
        return (end - start).days
    return default


def generate_reservation_pdf(reservation: dict, client: dict, vehicle: dict, company: dict,
                             logo_path: Optional[str] = None) -> bytes:
    when = reservation.get('reservation_date')
    store = company.get('fantasy_name') or company.get('name')

    elements = header(company, logo_path)
    elements.append(title_band("TERMO DE SOLICITAÇÃO DE RESERVA DE VEÍCULO"))
    elements.append(meta_row(
        f"Termo Nº {reservation.get('reservation_number') or 'S/N'}",
        f"Data: {format_date(when)}"
    ))

    elements.append(section("Solicitante"))
    elements.append(info_table([
        ("Nome:", client.get('name')),
        ("CPF:", format_cpf(client.get('cpf'))),
        ("Telefone:", format_phone(client.get('phone'))),
        ("Endereço:", client_address(client)),
    ]))

    elements.append(section("Veículo"))
    elements.append(info_table([
        ("Veículo:", vehicle_name(vehicle)),
        ("Ano:", vehicle_year(vehicle)),
        ("Placa:", (vehicle.get('plate') or '').upper()),
        ("Valor:", format_currency(vehicle.get('price'))),
    ]))

    deposit = reservation.get('deposit_amount') or 0
    if deposit > 0:
        elements.append(Paragraph(
            f"<b>Valor do Sinal:</b> {format_currency(deposit)} ({esc(number_to_words(deposit))})",
            STYLES['body']
        ))

    elements.append(section("Condições da Reserva"))
    elements += clauses(reservation_clauses(reservation, validity_days_of(reservation)))
    if reservation.get('notes'):
        elements.append(Paragraph(f"<b>Observações:</b> {esc(reservation['notes'])}", STYLES['body']))

    elements.append(Spacer(1, 8*mm))
    elements.append(place_and_date(company_location(company), when))
    elements.append(Spacer(1, 6*mm))
    elements.append(signature_block([
        {'label': "SOLICITANTE", 'name': client.get('name'), 'signature': reservation.get('client_signature')},
        {'label': "LOJA", 'name': store, 'signature': company.get('representative_signature')},
    ]))

    pdf_bytes = build_pdf(elements, company, "Termo de Reserva")
    logger.info(f"Termo de reserva gerado: {reservation.get('reservation_number')}")
    return pdf_bytes
