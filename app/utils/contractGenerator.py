"""
Gerador de Contrato de Compra e Venda de Veículo em PDF
"""
from datetime import date
from typing import List, Optional
import logging

from dateutil.relativedelta import relativedelta

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Spacer, Table, TableStyle, KeepTogether

from app.utils.documentLayout import (
    DocumentDesign, STYLES, esc, header, title_band, meta_row, section,
    info_table, clauses, place_and_date, signature_block, build_pdf, company_location,
    client_address, vehicle_name, vehicle_year,
)
from app.models.enums import MARITAL_STATUS_LABELS, FUEL_LABELS
from app.utils.formatters import (
    format_currency, format_cpf, format_rg, format_phone, format_date,
    format_mileage, number_to_words,
)

logger = logging.getLogger(__name__)

CONTRACT_CLAUSES = [
    "1. O VENDEDOR se compromete a entregar o veículo em perfeitas condições de uso.",
    "2. O COMPRADOR declara ter examinado o veículo e aceita-o no estado em que se encontra.",
    "3. A transferência de propriedade será realizada após a quitação total do valor acordado.",
    "4. Em caso de atraso no pagamento, será cobrada multa de 5% sobre o valor da parcela.",
    "5. Incidirão juros de 1% ao mês sobre parcelas em atraso.",
    "6. A multa por rescisão unilateral do contrato é de 15% do valor total.",
    "7. O veículo será entregue com documentação em dia e livre de débitos até a data da venda.",
    "8. O COMPRADOR assume a responsabilidade por multas e infrações a partir da entrega.",
    "9. Fica eleito o foro da comarca de {forum} para dirimir quaisquer dúvidas.",
]


def installment_schedule(contract: dict) -> List[tuple]:
    """Parcelas (nº, vencimento, valor) a partir do primeiro vencimento e dia fixo"""
    first_due = contract.get('first_due_date')
    installments = contract.get('installments') or 0
    if not first_due or installments < 1:
        return []
    if isinstance(first_due, str):
        first_due = date.fromisoformat(first_due[:10])

    due_day = contract.get('due_day') or first_due.day
    value = contract.get('installment_value') or 0
    schedule = [(1, first_due, value)]
    for n in range(2, installments + 1):
        # relativedelta limita o dia ao último dia do mês (31 -> 28/02)
        due = first_due + relativedelta(months=n - 1, day=due_day)
        schedule.append((n, due, value))
    return schedule


class ContractPDF:
    """Contrato de compra e venda (vendedor, comprador, veículo, pagamento, cláusulas e assinaturas)"""

    def __init__(self, contract: dict, client: dict, vehicle: dict, company: dict,
                 seller: Optional[dict] = None, logo_path: Optional[str] = None):
        self.contract = contract
        self.client = client
        self.vehicle = vehicle
        self.company = company
        self.seller = seller or {}
        self.logo_path = logo_path

    def _seller_section(self) -> List:
        company = self.company
        rep = company.get('representative_name')
        pairs = [
            ("Razão Social:", company.get('name')),
            ("CNPJ:", company.get('cnpj')),
            ("Nome Fantasia:", company.get('fantasy_name')),
            ("Cidade/UF:", company_location(company)),
        ]
        if rep:
            pairs += [
                ("Representante:", rep),
                ("CPF:", format_cpf(company.get('representative_cpf'))),
            ]
        return [section("Vendedor"), info_table(pairs)]

    def _buyer_section(self) -> List:
        client = self.client
        pairs = [
            ("Nome:", client.get('name')),
            ("CPF:", format_cpf(client.get('cpf'))),
            ("RG:", format_rg(client.get('rg'))),
            ("Estado Civil:", MARITAL_STATUS_LABELS.get(client.get('marital_status'), '')),
            ("Profissão:", client.get('occupation')),
            ("Telefone:", format_phone(client.get('phone'))),
        ]
        table = info_table(pairs)
        address = Paragraph(f"<b>Endereço:</b> {esc(client_address(client) or '-')}", STYLES['value'])
        return [section("Comprador"), table, Spacer(1, 1*mm), address]

    def _vehicle_section(self) -> List:
        v = self.vehicle
        pairs = [
            ("Marca/Modelo:", vehicle_name(v)),
            ("Ano:", vehicle_year(v)),
            ("Cor:", v.get('color')),
            ("Placa:", (v.get('plate') or '').upper()),
            ("Chassi:", (v.get('chassi') or '').upper()),
            ("Renavam:", v.get('renavam')),
            ("Quilometragem:", format_mileage(v.get('mileage'))),
            ("Combustível:", FUEL_LABELS.get(v.get('fuel'), v.get('fuel'))),
        ]
        return [section("Veículo"), info_table(pairs)]

    def _payment_section(self) -> List:
        c = self.contract
        price = c.get('vehicle_price') or 0
        elements = [section("Preço e Forma de Pagamento")]
        pairs = [("Valor Total:", format_currency(price))]

        if c.get('payment_type') == 'parcelado':
            pairs += [
                ("Forma:", "Parcelado"),
                ("Entrada:", format_currency(c.get('down_payment'))),
                ("Parcelas:", f"{c.get('installments')}x de {format_currency(c.get('installment_value'))}"),
                ("Vencimento:", f"Todo dia {c.get('due_day')}"),
                ("1º Vencimento:", format_date(c.get('first_due_date'))),
            ]
        else:
            pairs.append(("Forma:", "À vista"))
        elements.append(info_table(pairs))
        elements.append(Paragraph(
            f"Valor total de {format_currency(price)} ({esc(number_to_words(price))}).",
            STYLES['body']
        ))

        delivery = c.get('delivery_percentage')
        if delivery:
            elements.append(Paragraph(
                f"O veículo será entregue ao COMPRADOR após o pagamento de {delivery:g}% do valor total.",
                STYLES['body']
            ))

        schedule = installment_schedule(c)
        if schedule:
            elements.append(section("Cronograma de Parcelas"))
            elements.append(self._schedule_table(schedule))
        return elements

    def _schedule_table(self, schedule: List[tuple]) -> Table:
        rows = [["Parcela", "Vencimento", "Valor"]]
        rows += [[f"{n}/{len(schedule)}", format_date(due), format_currency(value)] for n, due, value in schedule]
        width = DocumentDesign.CONTENT_WIDTH / 3
        table = Table(rows, colWidths=[width] * 3, repeatRows=1)
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 8),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f0f4f8')),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, DocumentDesign.BACKGROUND]),
            ('BOX', (0, 0), (-1, -1), 0.5, DocumentDesign.SECONDARY),
            ('INNERGRID', (0, 0), (-1, -1), 0.25, DocumentDesign.BORDER),
        ]))
        return table

    def _signatures(self) -> List:
        company = self.company
        signers = [
            {
                'label': "COMPRADOR",
                'name': self.client.get('name'),
                'detail': f"CPF: {format_cpf(self.client.get('cpf'))}",
                'signature': self.contract.get('client_signature'),
            },
            {
                'label': "VENDEDOR",
                'name': self.seller.get('name') or company.get('fantasy_name'),
                'detail': company.get('fantasy_name'),
                'signature': self.contract.get('seller_signature'),
            },
        ]
        if company.get('representative_name'):
            signers.append({
                'label': "REPRESENTANTE LEGAL",
                'name': company['representative_name'],
                'detail': f"CPF: {company.get('representative_cpf') or '-'}",
                'signature': company.get('representative_signature'),
            })

        witnesses = [
            {'label': "TESTEMUNHA 1", 'name': self.contract.get('witness1') or "Nome:", 'detail': "RG:            CPF:"},
            {'label': "TESTEMUNHA 2", 'name': self.contract.get('witness2') or "Nome:", 'detail': "RG:            CPF:"},
        ]
        return [
            KeepTogether([signature_block(signers)]),
            Spacer(1, 4*mm),
            section("Testemunhas"),
            KeepTogether([signature_block(witnesses)]),
        ]

    def generate(self) -> bytes:
        c = self.contract
        location = company_location(self.company)
        elements = []
        elements += header(self.company, self.logo_path)
        elements.append(title_band("CONTRATO DE COMPRA E VENDA DE VEÍCULO"))
        elements.append(meta_row(
            f"Contrato Nº {c.get('contract_number') or 'S/N'}",
            f"Data: {format_date(c.get('contract_date'))}"
        ))
        elements += self._seller_section()
        elements += self._buyer_section()
        elements += self._vehicle_section()
        elements += self._payment_section()

        elements.append(section("Cláusulas Contratuais"))
        elements += clauses([text.format(forum=location) for text in CONTRACT_CLAUSES])
        if c.get('notes'):
            elements.append(Paragraph(f"<b>Observações:</b> {esc(c['notes'])}", STYLES['body']))

        elements.append(Spacer(1, 5*mm))
        elements.append(place_and_date(location, c.get('contract_date') or date.today()))
        elements.append(Spacer(1, 4*mm))
        elements += self._signatures()

        return build_pdf(elements, self.company, "Contrato de Compra e Venda")


def generate_contract_pdf(contract: dict, client: dict, vehicle: dict, company: dict,
                          seller: Optional[dict] = None, logo_path: Optional[str] = None) -> bytes:
    """Retorna os bytes do PDF do contrato"""
    try:
        pdf_bytes = ContractPDF(contract, client, vehicle, company, seller, logo_path).generate()
        logger.info(f"Contrato gerado: {contract.get('contract_number')}")
        return pdf_bytes
    except Exception as e:
        logger.error(f"Erro ao gerar contrato: {str(e)}")
        raise
