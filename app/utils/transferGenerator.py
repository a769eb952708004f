"""
Gerador da Autorização para Transferência de Propriedade de Veículo (ATPV) em PDF
"""
from datetime import date
from typing import List, Optional
import logging

from reportlab.lib import colors
from reportlab.lib.units import cm, mm
from reportlab.platypus import Paragraph, Spacer, Table, TableStyle, KeepTogether

from app.utils.documentLayout import (
    DocumentDesign, STYLES, esc, header, meta_row, signature_block, build_pdf, company_location,
)
from app.utils.formatters import (
    format_cpf_cnpj, format_rg, format_currency, format_date, format_date_extenso,
)

logger = logging.getLogger(__name__)

LABEL_BACKGROUND = colors.HexColor('#f0f0f0')

CTB_NOTES = [
    "Art. 134 do CTB: No caso de transferência de propriedade, o proprietário antigo deverá encaminhar ao "
    "órgão executivo de trânsito do Estado, no prazo de 30 (trinta) dias, cópia autenticada do comprovante "
    "de transferência de propriedade, devidamente assinado e datado, sob pena de ter que se responsabilizar "
    "solidariamente pelas penalidades impostas e suas reincidências até a data da comunicação.",
    "Art. 223 do CTB: Deixar de comunicar ao órgão de registro, no prazo de 30 dias, a aquisição, "
    "transferência ou mudança de categoria, cor ou característica de veículo: Infração: grave; "
    "Penalidade: multa.",
]


def transfer_rows(transfer: dict, client: dict, vehicle: dict, company: dict) -> List[tuple]:
    """Linhas da tabela oficial, com um ou dois pares rótulo/valor cada"""
    city_state = f"{client.get('city') or ''}/{client.get('state') or ''}".strip('/')
    location = transfer.get('location') or company_location(company)
    when = transfer.get('transfer_date') or date.today()
    return [
        ("NOME:", (client.get('name') or '').upper()),
        ("RG:", format_rg(client.get('rg')), "CPF/CNPJ:", format_cpf_cnpj(client.get('cpf'))),
        ("ENDEREÇO:", (client.get('address') or '').upper()),
        ("CIDADE/UF:", city_state.upper(), "CEP:", client.get('zip_code') or ''),
        ("PLACA:", (vehicle.get('plate') or '').upper(), "CHASSI:", (vehicle.get('chassi') or '').upper()),
        ("RENAVAM:", vehicle.get('renavam') or '', "VALOR:", format_currency(transfer.get('vehicle_value'))),
        ("LOCAL E DATA:", f"{location}, {format_date_extenso(when)}".upper()),
    ]


def rows_table(rows: List[tuple]) -> Table:
    label_width = 3.3*cm
    value_width = (DocumentDesign.CONTENT_WIDTH - 2 * label_width) / 2

    data, commands = [], []
    for i, row in enumerate(rows):
        cells = [
            Paragraph(esc(value), STYLES['label'] if n % 2 == 0 else STYLES['value'])
            for n, value in enumerate(row)
        ]
        commands.append(('BACKGROUND', (0, i), (0, i), LABEL_BACKGROUND))
        if len(row) == 2:
            cells += ['', '']
            commands.append(('SPAN', (1, i), (3, i)))
        else:
            commands.append(('BACKGROUND', (2, i), (2, i), LABEL_BACKGROUND))
        data.append(cells)

    table = Table(data, colWidths=[label_width, value_width, label_width, value_width])
    table.setStyle(TableStyle([
        ('GRID', (0, 0), (-1, -1), 0.4, colors.black),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
    ] + commands))
    return table


def notes_box() -> Table:
    content = [Paragraph("<b>OBSERVAÇÕES IMPORTANTES:</b>", STYLES['value'])]
    content += [Paragraph(esc(note), STYLES['clause']) for note in CTB_NOTES]
    box = Table([[content]], colWidths=[DocumentDesign.CONTENT_WIDTH])
    box.setStyle(TableStyle([
        ('BOX', (0, 0), (-1, -1), 0.6, colors.black),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    return box


def generate_transfer_pdf(transfer: dict, client: dict, vehicle: dict, company: dict,
                          logo_path: Optional[str] = None) -> bytes:
    """ATPV no formato oficial: tabela do comprador/veículo, assinaturas e espaço para firma"""
    elements = header(company, logo_path)
    elements.append(Paragraph("<b>AUTORIZAÇÃO PARA TRANSFERÊNCIA DE<br/>PROPRIEDADE DE VEÍCULO</b>",
                              STYLES['center']))
    elements.append(meta_row(
        f"Nº {transfer.get('authorization_number') or 'S/N'}",
        f"Data: {format_date(transfer.get('transfer_date'))}"
    ))
    elements.append(Spacer(1, 3*mm))
    elements.append(Paragraph(
        "Autorizo a transferência de propriedade do veículo abaixo identificado para:", STYLES['center']
    ))
    elements.append(Spacer(1, 3*mm))
    elements.append(rows_table(transfer_rows(transfer, client, vehicle, company)))
    elements.append(Spacer(1, 5*mm))

    elements.append(KeepTogether([
        Paragraph("<b>ASSINATURA DO PROPRIETÁRIO (VENDEDOR):</b>", STYLES['value']),
        signature_block([{
            'label': "(Assinatura igual ao documento)",
            'name': company.get('name'),
            'detail': f"CNPJ: {company.get('cnpj') or '-'}",
            'signature': transfer.get('vendor_signature'),
        }], per_row=1),
    ]))
    elements.append(Spacer(1, 4*mm))
    elements.append(notes_box())
    elements.append(Spacer(1, 4*mm))

    elements.append(KeepTogether([
        Paragraph("<b>ASSINATURA DO COMPRADOR:</b>", STYLES['value']),
        signature_block([{
            'label': "(Assinatura igual ao documento)",
            'name': client.get('name'),
            'signature': transfer.get('client_signature'),
        }], per_row=1),
    ]))
    elements.append(Spacer(1, 4*mm))
    elements.append(Paragraph("<b>RECONHECIMENTO DE FIRMA:</b>", STYLES['value']))
    elements.append(Paragraph("Espaço reservado para reconhecimento de firma em cartório", STYLES['note']))
    elements.append(Spacer(1, 25*mm))

    pdf_bytes = build_pdf(elements, company, "Autorização para Transferência de Veículo")
    logger.info(f"ATPV gerada: {transfer.get('authorization_number')}")
    return pdf_bytes
