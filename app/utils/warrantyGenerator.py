"""
Gerador do Termo de Garantia em PDF
"""
from datetime import date
from typing import Optional
import logging

from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer

from app.models.enums import FUEL_LABELS
from app.utils.documentLayout import (
    STYLES, esc, header, title_band, meta_row, section, info_table, clauses,
    place_and_date, signature_block, build_pdf, company_location, vehicle_year,
)
from app.utils.formatters import format_cpf, format_phone, format_date, format_mileage

logger = logging.getLogger(__name__)

WARRANTY_CONDITIONS = [
    "1. A garantia cobre exclusivamente os itens especificados acima.",
    "2. Não cobre peças de desgaste natural (freios, embreagem, pneus, bateria).",
    "3. A garantia é anulada em caso de mau uso, negligência ou modificações.",
    "4. Reparos devem ser realizados em oficina autorizada pela loja.",
    "5. O cliente deve apresentar este termo para acionar a garantia.",
]


def generate_warranty_pdf(warranty: dict, client: dict, vehicle: dict, company: dict,
                          logo_path: Optional[str] = None) -> bytes:
    """Termo de garantia: veículo, cliente, cobertura, condições e assinatura do cliente"""
    issued = warranty.get('created_at') or date.today()

    elements = header(company, logo_path)
    elements.append(title_band("TERMO DE GARANTIA"))
    elements.append(meta_row(f"Termo Nº {warranty.get('warranty_number') or 'S/N'}", f"Data: {format_date(issued)}"))

    elements.append(section("Dados do Veículo"))
    elements.append(info_table([
        ("Ano:", vehicle_year(vehicle)),
        ("Modelo:", vehicle.get('model')),
        ("Marca:", vehicle.get('brand')),
        ("Cor:", vehicle.get('color')),
        ("Placa:", (vehicle.get('plate') or '').upper()),
        ("Tipo:", FUEL_LABELS.get(vehicle.get('fuel'), vehicle.get('fuel'))),
        ("Chassi:", (vehicle.get('chassi') or '').upper()),
        ("KM:", format_mileage(vehicle.get('mileage'))),
    ]))

    elements.append(section("Dados do Cliente"))
    elements.append(info_table([
        ("Nome:", client.get('name')),
        ("CPF:", format_cpf(client.get('cpf'))),
        ("Telefone:", format_phone(client.get('phone'))),
    ]))

    elements.append(section("Condições de Garantia"))
    coverage = [
        ("Período:", warranty.get('warranty_period')),
        ("Cobertura:", warranty.get('warranty_coverage')),
    ]
    if warranty.get('warranty_km'):
        coverage.append(("KM Limite:", format_mileage(warranty['warranty_km'])))
    elements.append(info_table(coverage))

    elements.append(section("Condições"))
    elements += clauses(WARRANTY_CONDITIONS)

    if warranty.get('conditions'):
        elements.append(Paragraph(f"<b>Observações:</b> {esc(warranty['conditions'])}", STYLES['body']))

    elements.append(Spacer(1, 8*mm))
    elements.append(place_and_date(company_location(company), issued))
    elements.append(Spacer(1, 6*mm))
    elements.append(signature_block([{
        'label': "Assinatura do Cliente",
        'name': client.get('name'),
        'signature': warranty.get('client_signature'),
    }], per_row=1))

    pdf_bytes = build_pdf(elements, company, "Termo de Garantia")
    logger.info(f"Termo de garantia gerado: {warranty.get('warranty_number')}")
    return pdf_bytes
