"""
Gerador da Proposta de Venda em PDF
Cores do cabeçalho seguem o banco do financiamento
"""
from datetime import date
from typing import Optional
import logging

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer, Table, TableStyle

from app.models.enums import FUEL_LABELS, TRANSMISSION_LABELS
from app.utils.documentLayout import (
    DocumentDesign, STYLES, esc, header, title_band, meta_row, section, info_table,
    place_and_date, signature_block, build_pdf, company_location, vehicle_name, vehicle_year,
)
from app.utils.formatters import format_cpf, format_phone, format_currency, format_date, format_percent

logger = logging.getLogger(__name__)

PROPOSAL_TYPE_LABELS = {
    "financiamento_bancario": "Financiamento Bancário",
    "financiamento_direto": "Financiamento Direto",
    "a_vista": "À Vista",
}


def financing_label(proposal: dict, bank: Optional[dict]) -> str:
    if bank and bank.get('is_own'):
        return "Financiamento Direto"
    if bank:
        return f"Banco: {bank.get('name')}"
    return PROPOSAL_TYPE_LABELS.get(proposal.get('type'), proposal.get('type') or '-')


def total_band(total: float, color) -> Table:
    band = Table(
        [[Paragraph(f"<b>Total: {format_currency(total)}</b>", STYLES['title'])]],
        colWidths=[DocumentDesign.CONTENT_WIDTH / 2], hAlign='RIGHT'
    )
    band.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, -1), color),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
    ]))
    return band


def generate_proposal_pdf(proposal: dict, client: dict, vehicle: dict, company: dict,
                          bank: Optional[dict] = None, seller: Optional[dict] = None,
                          logo_path: Optional[str] = None) -> bytes:
    """Proposta de venda com dados do cliente, veículo e condições de pagamento"""
    bank_color = (bank or {}).get('primary_color') or None
    band_color = colors.HexColor(bank_color) if bank_color else DocumentDesign.PRIMARY
    badge = f"Financiamento: {bank['name']}" if bank else None
    issued = proposal.get('created_at') or date.today()

    elements = header(company, logo_path, badge=badge, badge_color=bank_color)
    elements.append(title_band("PROPOSTA DE VENDA", band_color))
    elements.append(meta_row(f"Proposta Nº {proposal.get('proposal_number') or 'S/N'}",
                             f"Data: {format_date(issued)}"))
    if seller and seller.get('name'):
        elements.append(Paragraph(f"Vendedor: {esc(seller['name'])}", STYLES['meta_left']))

    elements.append(section("Dados do Cliente"))
    client_rows = [("Nome:", client.get('name')), ("CPF:", format_cpf(client.get('cpf')))]
    if client.get('phone'):
        client_rows.append(("Telefone:", format_phone(client['phone'])))
    elements.append(info_table(client_rows))

    elements.append(section("Dados do Veículo"))
    elements.append(info_table([
        ("Veículo:", vehicle_name(vehicle)),
        ("Combustível:", FUEL_LABELS.get(vehicle.get('fuel'), vehicle.get('fuel'))),
        ("Ano:", vehicle_year(vehicle)),
        ("Câmbio:", TRANSMISSION_LABELS.get(vehicle.get('transmission'), vehicle.get('transmission'))),
        ("Cor:", vehicle.get('color')),
        ("Placa:", (vehicle.get('plate') or '').upper()),
    ]))

    elements.append(section("Condições de Pagamento"))
    payment = [
        ("Valor do Veículo:", format_currency(proposal.get('vehicle_price'))),
        ("Tipo:", financing_label(proposal, bank)),
        ("Entrada:", format_currency(proposal.get('down_payment'))),
    ]
    if proposal.get('installments'):
        payment += [
            ("Parcelas:", f"{proposal['installments']}x de {format_currency(proposal.get('installment_value'))}"),
            ("Valor Financiado:", format_currency(proposal.get('financed_amount'))),
            ("Taxa:", f"{format_percent(proposal.get('interest_rate'))} a.m."),
        ]
    if proposal.get('first_due_date'):
        payment.append(("1º Vencimento:", format_date(proposal['first_due_date'])))
    elements.append(info_table(payment))
    elements.append(Spacer(1, 2*mm))
    elements.append(total_band(proposal.get('total_amount') or proposal.get('vehicle_price') or 0, band_color))

    if proposal.get('notes'):
        elements.append(Paragraph(f"<b>Observações:</b> {esc(proposal['notes'])}", STYLES['body']))

    elements.append(Spacer(1, 8*mm))
    elements.append(signature_block([
        {'label': "Assinatura do Cliente", 'name': client.get('name'),
         'signature': proposal.get('client_signature')},
        {'label': "Assinatura do Vendedor", 'name': (seller or {}).get('name') or company.get('fantasy_name'),
         'signature': proposal.get('vendor_signature')},
    ]))
    elements.append(Spacer(1, 5*mm))
    elements.append(Paragraph(
        "Esta proposta tem validade de 5 dias úteis e está sujeita a aprovação de crédito.", STYLES['small_center']
    ))
    elements.append(place_and_date(company_location(company), issued))

    pdf_bytes = build_pdf(elements, company, "Proposta de Venda")
    logger.info(f"Proposta gerada: {proposal.get('proposal_number')}")
    return pdf_bytes
