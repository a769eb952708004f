"""
Gerador da Declaração de Desistência de Compra em PDF
"""
from datetime import date
from typing import Optional
import logging

from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from app.utils.documentLayout import (
    STYLES, esc, header, title_band, meta_row, section, info_table, place_and_date,
    signature_block, build_pdf, company_location, vehicle_name, vehicle_year,
)
from app.utils.formatters import format_cpf, format_rg, format_date

logger = logging.getLogger(__name__)

DEFAULT_REASON = "motivos pessoais"


def declaration_text(client: dict) -> str:
    city = client.get('city') or 'Lages'
    state = client.get('state') or 'SC'
    address = client.get('address') or ''
    return (
        f"Eu, <b>{esc(client.get('name'))}</b>, portador(a) do CPF: {esc(format_cpf(client.get('cpf')))}, "
        f"RG: {esc(format_rg(client.get('rg')))}, residente e domiciliado(a) em {esc(address)}, "
        f"{esc(city)}/{esc(state)}, declaro para os devidos fins que <b>DESISTO</b> da compra do veículo "
        f"abaixo especificado:"
    )


def generate_withdrawal_pdf(declaration: dict, client: dict, vehicle: dict, company: dict,
                            logo_path: Optional[str] = None) -> bytes:
    when = declaration.get('declaration_date') or date.today()
    reason = declaration.get('reason') or DEFAULT_REASON
    store = company.get('fantasy_name') or company.get('name')

    elements = header(company, logo_path)
    elements.append(title_band("DECLARAÇÃO DE DESISTÊNCIA DE COMPRA"))
    elements.append(meta_row(
        f"Declaração Nº {declaration.get('declaration_number') or 'S/N'}",
        f"Data: {format_date(when)}"
    ))
    elements.append(Spacer(1, 3*mm))
    elements.append(Paragraph(declaration_text(client), STYLES['body']))

    elements.append(section("Veículo"))
    elements.append(info_table([
        ("Veículo:", vehicle_name(vehicle)),
        ("Ano:", vehicle_year(vehicle)),
        ("Placa:", (vehicle.get('plate') or '').upper()),
        ("Chassi:", (vehicle.get('chassi') or '').upper()),
    ]))

    elements.append(Paragraph(f"Motivo da desistência: {esc(reason)}.", STYLES['body']))
    elements.append(Paragraph(
        "Esta declaração é feita de livre e espontânea vontade, sem qualquer tipo de coação, para que "
        f"produza os efeitos legais necessários perante a empresa {esc(store)}.",
        STYLES['body']
    ))

    elements.append(Spacer(1, 8*mm))
    elements.append(place_and_date(company_location(company), when))
    elements.append(Spacer(1, 6*mm))
    elements.append(signature_block([{
        'label': "Assinatura do Declarante",
        'name': client.get('name'),
        'detail': f"CPF: {format_cpf(client.get('cpf'))}",
        'signature': declaration.get('client_signature'),
    }], per_row=1))
    elements.append(Spacer(1, 6*mm))
    elements.append(Paragraph(
        "Obs.: Esta declaração deve ser reconhecida em cartório para ter validade jurídica.", STYLES['note']
    ))

    pdf_bytes = build_pdf(elements, company, "Declaração de Desistência")
    logger.info(f"Declaração de desistência gerada: {declaration.get('declaration_number')}")
    return pdf_bytes
