"""
Dealer Back-Office - Document Layout
Peças comuns dos PDFs da loja: cabeçalho, faixa de título, seções, tabelas e assinaturas
"""
import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import cm, mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle,
    HRFlowable, Image
)

from app.utils.formatters import format_date_extenso

logger = logging.getLogger(__name__)


class DocumentDesign:
    PRIMARY = colors.HexColor('#1a365d')     # Azul escuro (títulos)
    SECONDARY = colors.HexColor('#2c5282')   # Azul médio (seções)
    ACCENT = colors.HexColor('#B8860B')      # Ouro (detalhes)
    TEXT = colors.HexColor('#1e1e1e')
    GRAY = colors.HexColor('#4a5568')
    LIGHT_GRAY = colors.HexColor('#718096')
    BORDER = colors.HexColor('#e2e8f0')
    BACKGROUND = colors.HexColor('#f8fafc')

    MARGIN = 1.5*cm
    CONTENT_WIDTH = A4[0] - 2 * 1.5*cm

    SIGNATURE_WIDTH = 6.5*cm
    SIGNATURE_HEIGHT = 2.2*cm


STYLES = {
    'company': ParagraphStyle('Company', fontSize=14, fontName='Helvetica-Bold',
                              textColor=DocumentDesign.PRIMARY, leading=16),
    'company_info': ParagraphStyle('CompanyInfo', fontSize=8, fontName='Helvetica',
                                   textColor=DocumentDesign.GRAY, leading=10),
    'title': ParagraphStyle('Title', fontSize=13, fontName='Helvetica-Bold', alignment=TA_CENTER,
                            textColor=colors.white, leading=16),
    'meta_left': ParagraphStyle('MetaLeft', fontSize=9, fontName='Helvetica', textColor=DocumentDesign.GRAY),
    'meta_right': ParagraphStyle('MetaRight', fontSize=9, fontName='Helvetica', alignment=TA_RIGHT,
                                 textColor=DocumentDesign.GRAY),
    'section': ParagraphStyle('Section', fontSize=9, fontName='Helvetica-Bold', alignment=TA_LEFT,
                              textColor=DocumentDesign.SECONDARY, spaceBefore=3*mm, spaceAfter=1.5*mm),
    'label': ParagraphStyle('Label', fontSize=8, fontName='Helvetica-Bold', textColor=DocumentDesign.GRAY,
                            leading=10),
    'value': ParagraphStyle('Value', fontSize=9, fontName='Helvetica', textColor=DocumentDesign.TEXT,
                            leading=11),
    'body': ParagraphStyle('Body', fontSize=10, fontName='Helvetica', alignment=TA_JUSTIFY,
                           leading=14, spaceBefore=2*mm, spaceAfter=2*mm, textColor=DocumentDesign.TEXT),
    'clause': ParagraphStyle('Clause', fontSize=8.5, fontName='Helvetica', alignment=TA_JUSTIFY,
                             leading=11, spaceBefore=0.8*mm, spaceAfter=0.8*mm, leftIndent=3*mm,
                             textColor=DocumentDesign.TEXT),
    'center': ParagraphStyle('Center', fontSize=10, fontName='Helvetica', alignment=TA_CENTER, leading=13),
    'small_center': ParagraphStyle('SmallCenter', fontSize=8, fontName='Helvetica', alignment=TA_CENTER,
                                   textColor=DocumentDesign.GRAY, leading=10),
    'note': ParagraphStyle('Note', fontSize=7.5, fontName='Helvetica-Oblique', alignment=TA_JUSTIFY,
                           textColor=DocumentDesign.LIGHT_GRAY, leading=9.5),
}


def esc(value) -> str:
    """Texto seguro para Paragraph (None vira vazio)"""
    if value is None:
        return ""
    return escape(str(value))


def company_address(company: dict) -> str:
    street = company.get('address') or ''
    if company.get('address_number'):
        street = f"{street}, {company['address_number']}"
    parts = [p for p in (street, company.get('neighborhood')) if p]
    city = company.get('city')
    if city:
        parts.append(f"{city}/{company.get('state') or ''}".rstrip('/'))
    text = " - ".join(parts)
    if company.get('zip_code'):
        text += f" - CEP {company['zip_code']}"
    return text


def company_location(company: dict) -> str:
    """Cidade/UF da loja para local e data"""
    if company.get('city'):
        return f"{company['city']}/{company.get('state') or ''}".rstrip('/')
    return "Lages/SC"


def client_address(client: dict) -> str:
    parts = [client.get('address')]
    if client.get('city'):
        parts.append(f"{client['city']}/{client.get('state') or ''}".rstrip('/'))
    if client.get('zip_code'):
        parts.append(f"CEP {client['zip_code']}")
    return " - ".join(p for p in parts if p)


def vehicle_name(vehicle: dict) -> str:
    return " ".join(p for p in (vehicle.get('brand'), vehicle.get('model'), vehicle.get('version')) if p)


def vehicle_year(vehicle: dict) -> str:
    """Ano fabricação/modelo (ex: 2020/2021)"""
    fab, model = vehicle.get('year_fab'), vehicle.get('year_model')
    if fab and model and fab != model:
        return f"{fab}/{model}"
    return str(model or fab or '-')


def decode_image(data: Optional[str]) -> Optional[bytes]:
    """Bytes de uma imagem em base64 ou data URL (None se inválida)"""
    if not data:
        return None
    if data.startswith('data:'):
        _, _, data = data.partition(',')
    try:
        raw = base64.b64decode(data, validate=True)
        ImageReader(BytesIO(raw)).getSize()
        return raw
    except (binascii.Error, ValueError, OSError) as e:
        logger.warning(f"Imagem de assinatura inválida ignorada: {e}")
        return None


def signature_image(data: Optional[str], width=DocumentDesign.SIGNATURE_WIDTH,
                    height=DocumentDesign.SIGNATURE_HEIGHT):
    raw = decode_image(data)
    if raw is None:
        return Spacer(width, height)
    return Image(BytesIO(raw), width=width, height=height, kind='proportional')


def header(company: dict, logo_path: Optional[str] = None,
           badge: Optional[str] = None, badge_color: Optional[str] = None) -> List:
    """Logo + dados da loja, com selo opcional (ex: banco do financiamento)"""
    logo = None
    if logo_path and Path(logo_path).exists():
        try:
            logo = Image(str(logo_path), width=2.2*cm, height=2.2*cm, kind='proportional')
        except Exception as e:
            logger.warning(f"Não foi possível carregar o logo: {e}")

    info = [Paragraph(esc(company.get('fantasy_name') or company.get('name')), STYLES['company'])]
    if company.get('cnpj'):
        info.append(Paragraph(f"CNPJ: {esc(company['cnpj'])}", STYLES['company_info']))
    address = company_address(company)
    if address:
        info.append(Paragraph(esc(address), STYLES['company_info']))
    contacts = " | ".join(c for c in (company.get('phone'), company.get('email')) if c)
    if contacts:
        info.append(Paragraph(esc(contacts), STYLES['company_info']))

    right = ""
    if badge:
        color = badge_color or '#2c5282'
        right = Paragraph(
            f"<font color='{color}'><b>{esc(badge)}</b></font>",
            ParagraphStyle('Badge', fontSize=8, alignment=TA_RIGHT)
        )

    if logo:
        row = [logo, info, right]
        widths = [2.6*cm, DocumentDesign.CONTENT_WIDTH - 7.1*cm, 4.5*cm]
    else:
        row = [info, right]
        widths = [DocumentDesign.CONTENT_WIDTH - 4.5*cm, 4.5*cm]

    table = Table([row], colWidths=widths)
    table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('LEFTPADDING', (0, 0), (-1, -1), 0),
        ('RIGHTPADDING', (0, 0), (-1, -1), 0),
    ]))
    return [
        table,
        HRFlowable(width="100%", thickness=1.5, color=DocumentDesign.ACCENT, spaceBefore=2*mm, spaceAfter=3*mm),
    ]


def title_band(title: str, color=None) -> Table:
    if isinstance(color, str):
        color = colors.HexColor(color)
    band = Table([[Paragraph(esc(title), STYLES['title'])]], colWidths=[DocumentDesign.CONTENT_WIDTH])
    band.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, -1), color or DocumentDesign.PRIMARY),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    return band


def meta_row(left: str, right: str) -> Table:
    """Linha 'Nº do documento | Data' abaixo do título"""
    table = Table(
        [[Paragraph(esc(left), STYLES['meta_left']), Paragraph(esc(right), STYLES['meta_right'])]],
        colWidths=[DocumentDesign.CONTENT_WIDTH / 2] * 2
    )
    table.setStyle(TableStyle([
        ('LEFTPADDING', (0, 0), (-1, -1), 0),
        ('RIGHTPADDING', (0, 0), (-1, -1), 0),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
    ]))
    return table


def section(title: str) -> Paragraph:
    return Paragraph(esc(title).upper(), STYLES['section'])


def info_table(pairs: Sequence[Tuple[str, object]], columns: int = 2) -> Table:
    """Grade de rótulo/valor com `columns` pares por linha"""
    label_width = 3.2*cm
    value_width = DocumentDesign.CONTENT_WIDTH / columns - label_width

    rows, row = [], []
    for label, value in pairs:
        row.extend([
            Paragraph(esc(label), STYLES['label']),
            Paragraph(esc(value if value not in (None, '') else '-'), STYLES['value']),
        ])
        if len(row) == columns * 2:
            rows.append(row)
            row = []
    if row:
        row.extend([''] * (columns * 2 - len(row)))
        rows.append(row)

    table = Table(rows, colWidths=[label_width, value_width] * columns)
    table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('BACKGROUND', (0, 0), (-1, -1), DocumentDesign.BACKGROUND),
        ('BOX', (0, 0), (-1, -1), 0.5, DocumentDesign.BORDER),
        ('TOPPADDING', (0, 0), (-1, -1), 3),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
    ]))
    return table


def clauses(items: Sequence[str]) -> List:
    return [Paragraph(esc(item), STYLES['clause']) for item in items]


def place_and_date(location: str, when) -> Paragraph:
    return Paragraph(f"{esc(location)}, {esc(format_date_extenso(when))}.", STYLES['center'])


def signature_block(signers: Sequence[dict], per_row: int = 2) -> Table:
    """
    Blocos de assinatura lado a lado.
    Cada signatário: {'label', 'name', 'detail' (opcional), 'signature' (base64 opcional)}
    """
    cell_width = DocumentDesign.CONTENT_WIDTH / per_row
    cells = []
    for signer in signers:
        cell = Table([
            [signature_image(signer.get('signature'))],
            [HRFlowable(width=DocumentDesign.SIGNATURE_WIDTH, thickness=0.7, color=DocumentDesign.GRAY)],
            [Paragraph(f"<b>{esc(signer.get('label'))}</b>", STYLES['small_center'])],
            [Paragraph(esc(signer.get('name')), STYLES['small_center'])],
            [Paragraph(esc(signer.get('detail')), STYLES['small_center'])],
        ], colWidths=[cell_width])
        cell.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'BOTTOM'),
            ('TOPPADDING', (0, 0), (-1, -1), 1),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 1),
        ]))
        cells.append(cell)

    rows = [cells[i:i + per_row] for i in range(0, len(cells), per_row)]
    for row in rows:
        row.extend([''] * (per_row - len(row)))

    table = Table(rows, colWidths=[cell_width] * per_row)
    table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'BOTTOM'),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
    ]))
    return table


def build_pdf(elements: List, company: dict, document_type: str) -> bytes:
    """Monta o PDF A4 com rodapé padrão e retorna os bytes"""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=DocumentDesign.MARGIN,
        leftMargin=DocumentDesign.MARGIN,
        topMargin=1.2*cm,
        bottomMargin=2.2*cm,
        title=document_type,
        author=company.get('fantasy_name') or company.get('name') or '',
    )

    footer_lines = [
        f"{company.get('fantasy_name') or company.get('name') or ''} | CNPJ: {company.get('cnpj') or '-'}",
        company_address(company),
        f"Documento gerado eletronicamente - {document_type}",
    ]

    def draw_footer(canvas, _doc):
        canvas.saveState()
        width = A4[0]
        canvas.setStrokeColor(DocumentDesign.BORDER)
        canvas.setLineWidth(0.5)
        canvas.line(DocumentDesign.MARGIN, 1.8*cm, width - DocumentDesign.MARGIN, 1.8*cm)
        canvas.setFont('Helvetica', 7)
        canvas.setFillColor(DocumentDesign.LIGHT_GRAY)
        y = 1.45*cm
        for line in footer_lines:
            canvas.drawCentredString(width / 2, y, line)
            y -= 0.35*cm
        canvas.drawRightString(width - DocumentDesign.MARGIN, 0.5*cm, f"Página {canvas.getPageNumber()}")
        canvas.restoreState()

    doc.build(elements, onFirstPage=draw_footer, onLaterPages=draw_footer)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes
