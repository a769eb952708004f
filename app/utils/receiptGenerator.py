# [ Imports ]
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas
from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Optional
import logging

from reportlab.platypus import Paragraph
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.enums import TA_JUSTIFY, TA_CENTER

from app.models.enums import PAYMENT_METHOD_LABELS, PAYMENT_REFERENCE_LABELS
from app.utils.documentLayout import decode_image, esc, company_address, company_location, vehicle_name
from app.utils.formatters import (
    format_currency, format_cpf_cnpj, format_date, format_date_extenso, number_to_words,
)

logger = logging.getLogger(__name__)


# ==========================================
# CONFIGURAÇÕES DE DESIGN
# ==========================================
class ReceiptDesign:
    PRIMARY = '#000000'      # Preto (textos)
    SECONDARY = '#B8860B'    # Ouro escuro (linhas)
    ACCENT = '#1a237e'       # Azul profundo (valor e borda interna)
    DARK = '#343a40'
    LIGHT = '#ffffff'
    GRAY = '#6c757d'
    BACKGROUND = '#FDFBF5'   # Fundo marfim

    FONT_BOLD = "Times-Bold"
    FONT_REGULAR = "Times-Roman"
    FONT_ITALIC = "Times-Italic"

    MARGIN_LEFT = 2.5*cm
    MARGIN_RIGHT = 2.5*cm
    MARGIN_TOP = 2.2*cm
    MARGIN_BOTTOM = 2.4*cm

    SPACE_L = 1.2*cm
    SPACE_M = 0.8*cm
    SPACE_S = 0.5*cm

    SIGNATURE_WIDTH = 6.5*cm
    SIGNATURE_HEIGHT = 1.8*cm


LEGAL_ARTICLES = [
    ("Art. 319.", "O devedor que paga tem direito a quitação regular, e pode reter o pagamento, "
                  "enquanto não lhe seja dada."),
    ("Art. 320.", "A quitação, que sempre poderá ser dada por instrumento particular, designará o valor "
                  "e a espécie da dívida quitada, o nome do devedor, ou quem por este pagou, o tempo e o "
                  "lugar do pagamento, com a assinatura do credor, ou do seu representante."),
]


def _content_width() -> float:
    return A4[0] - ReceiptDesign.MARGIN_LEFT - ReceiptDesign.MARGIN_RIGHT


def _style(name: str, font: str, size: float, alignment=TA_JUSTIFY, color: str = ReceiptDesign.DARK,
           leading: Optional[float] = None) -> ParagraphStyle:
    return ParagraphStyle(name, fontName=font, fontSize=size, alignment=alignment,
                          textColor=HexColor(color), leading=leading or size * 1.25)


def draw_double_line(c, y_pos, left=None, right=None):
    """Linha dupla (grossa e fina) em ouro"""
    left = ReceiptDesign.MARGIN_LEFT if left is None else left
    right = A4[0] - ReceiptDesign.MARGIN_RIGHT if right is None else right
    c.setStrokeColor(HexColor(ReceiptDesign.SECONDARY))
    c.setLineWidth(2.0)
    c.line(left, y_pos, right, y_pos)
    c.setLineWidth(0.5)
    c.line(left, y_pos - 0.08*cm, right, y_pos - 0.08*cm)
    return y_pos - 0.2*cm


def draw_framed_box(c, x, y, width, height):
    """Caixa com fundo marfim e borda composta arredondada"""
    radius = 0.4*cm
    inset = 0.15*cm
    c.setFillColor(HexColor(ReceiptDesign.BACKGROUND))
    c.roundRect(x, y, width, height, radius, stroke=0, fill=1)
    c.setStrokeColor(HexColor(ReceiptDesign.SECONDARY))
    c.setLineWidth(2.5)
    c.roundRect(x, y, width, height, radius, stroke=1, fill=0)
    c.setStrokeColor(HexColor(ReceiptDesign.ACCENT))
    c.setLineWidth(1)
    c.roundRect(x + inset, y + inset, width - 2*inset, height - 2*inset, radius - inset/2, stroke=1, fill=0)


def draw_watermark(c):
    c.saveState()
    c.translate(A4[0]/2, A4[1]/2)
    c.rotate(45)
    c.setFont(ReceiptDesign.FONT_BOLD, 110)
    c.setFillColor(HexColor('#e9ecef'))
    c.setFillAlpha(0.5)
    c.drawCentredString(0, 0, "RECIBO")
    c.restoreState()


def draw_header(c, company: dict, y_position, logo_path: Optional[str] = None):
    """Logo (se existir) e dados da loja centralizados"""
    logo_size = 2.2*cm
    text_x = ReceiptDesign.MARGIN_LEFT
    logo_file = Path(logo_path) if logo_path else None

    if logo_file and logo_file.exists():
        try:
            c.drawImage(str(logo_file), ReceiptDesign.MARGIN_LEFT, y_position - logo_size,
                        width=logo_size, height=logo_size, mask='auto', preserveAspectRatio=True)
            text_x += logo_size + ReceiptDesign.SPACE_S
        except Exception as e:
            logger.warning(f"Não foi possível desenhar o logo: {e}")

    text_width = (A4[0] - ReceiptDesign.MARGIN_RIGHT) - text_x
    name = (company.get('fantasy_name') or company.get('name') or '').upper()
    content = f"<font name='{ReceiptDesign.FONT_BOLD}' size=14>{esc(name)}</font>"
    if company.get('cnpj'):
        content += f"<br/><font size=10 color='{ReceiptDesign.DARK}'>CNPJ: {esc(company['cnpj'])}</font>"
    address = company_address(company)
    if address:
        content += f"<br/><font size=9 color='{ReceiptDesign.GRAY}'>{esc(address)}</font>"

    p = Paragraph(content, _style('ReceiptHeader', ReceiptDesign.FONT_REGULAR, 10, TA_CENTER,
                                  ReceiptDesign.PRIMARY, 13))
    _, h = p.wrap(text_width, 6*cm)
    block_height = max(logo_size, h)
    p.drawOn(c, text_x, y_position - (block_height + h) / 2)

    line_y = draw_double_line(c, y_position - block_height - ReceiptDesign.SPACE_S)
    return line_y - ReceiptDesign.SPACE_M


def draw_title(c, receipt: dict, y_position):
    c.setFont(ReceiptDesign.FONT_BOLD, 24)
    c.setFillColor(HexColor(ReceiptDesign.PRIMARY))
    c.drawCentredString(A4[0] / 2, y_position, "RECIBO DE PAGAMENTO")

    c.setFont(ReceiptDesign.FONT_REGULAR, 10)
    c.setFillColor(HexColor(ReceiptDesign.GRAY))
    c.drawCentredString(A4[0] / 2, y_position - 0.6*cm, f"Nº {receipt.get('receipt_number') or 'S/N'}")
    return y_position - ReceiptDesign.SPACE_L


def draw_amount(c, amount: float, y_position):
    """Valor em destaque e por extenso"""
    height = 3.0*cm
    draw_framed_box(c, ReceiptDesign.MARGIN_LEFT, y_position - height, _content_width(), height)

    c.setFont(ReceiptDesign.FONT_BOLD, 32)
    c.setFillColor(HexColor(ReceiptDesign.ACCENT))
    c.drawCentredString(A4[0] / 2, y_position - 1.4*cm, format_currency(amount))

    words = Paragraph(f"({esc(number_to_words(amount))})",
                      _style('ReceiptWords', ReceiptDesign.FONT_ITALIC, 11, TA_CENTER))
    _, h = words.wrap(_content_width() - 1*cm, 2*cm)
    words.drawOn(c, ReceiptDesign.MARGIN_LEFT + 0.5*cm, y_position - 1.9*cm - h + 0.4*cm)

    return y_position - height - ReceiptDesign.SPACE_M


def receipt_text(receipt: dict, client: Optional[dict], vehicle: Optional[dict]) -> str:
    """Texto do recibo: quem pagou, referente a quê e forma de pagamento"""
    client = client or {}
    payer = receipt.get('payer_name') or client.get('name') or "-"
    payer_doc = receipt.get('payer_cpf') or client.get('cpf')

    text = f"Recebi(emos) de <b>{esc(payer.upper())}</b>"
    if payer_doc:
        text += f", inscrito(a) no CPF/CNPJ sob o nº <b>{esc(format_cpf_cnpj(payer_doc))}</b>"
    text += f", a importância de <b>{format_currency(receipt.get('amount'))}</b>"

    reference = receipt.get('payment_reference')
    if reference:
        text += f", referente a <b>{esc(PAYMENT_REFERENCE_LABELS.get(reference, reference).lower())}</b>"
    if vehicle:
        text += f" do veículo <b>{esc(vehicle_name(vehicle))}</b>"
        if vehicle.get('plate'):
            text += f", placa <b>{esc(vehicle['plate'].upper())}</b>"
    if receipt.get('description'):
        text += f" ({esc(receipt['description'])})"

    method = receipt.get('payment_method')
    if method:
        text += f", paga via <b>{esc(PAYMENT_METHOD_LABELS.get(method, method))}</b>"
    text += f", em {format_date(receipt.get('payment_date'))}. Pelo que damos plena e geral quitação do valor recebido."
    return text


def draw_body(c, receipt: dict, client: Optional[dict], vehicle: Optional[dict], y_position):
    p = Paragraph(receipt_text(receipt, client, vehicle),
                  _style('ReceiptBody', ReceiptDesign.FONT_REGULAR, 12, leading=16))
    _, h = p.wrap(_content_width(), 12*cm)
    p.drawOn(c, ReceiptDesign.MARGIN_LEFT, y_position - h)
    return y_position - h - ReceiptDesign.SPACE_M


def draw_place_and_date(c, receipt: dict, company: dict, y_position):
    location = receipt.get('location') or company_location(company)
    when = receipt.get('payment_date') or date.today()
    c.setFont(ReceiptDesign.FONT_REGULAR, 12)
    c.setFillColor(HexColor(ReceiptDesign.DARK))
    c.drawCentredString(A4[0] / 2, y_position, f"{location}, {format_date_extenso(when)}.")
    return y_position - ReceiptDesign.SPACE_M


def draw_signature(c, center_x, y_position, signature: Optional[str], label: str, name: str,
                   detail: Optional[str] = None):
    """Imagem da assinatura (se houver) sobre a linha, com rótulo e nome"""
    half = ReceiptDesign.SIGNATURE_WIDTH / 2
    line_y = y_position - ReceiptDesign.SIGNATURE_HEIGHT

    raw = decode_image(signature)
    if raw:
        c.drawImage(ImageReader(BytesIO(raw)), center_x - half, line_y + 0.1*cm,
                    width=ReceiptDesign.SIGNATURE_WIDTH, height=ReceiptDesign.SIGNATURE_HEIGHT - 0.2*cm,
                    mask='auto', preserveAspectRatio=True)

    draw_double_line(c, line_y, center_x - half, center_x + half)
    c.setFont(ReceiptDesign.FONT_BOLD, 10)
    c.setFillColor(HexColor(ReceiptDesign.PRIMARY))
    c.drawCentredString(center_x, line_y - 0.55*cm, (name or '').upper())
    c.setFont(ReceiptDesign.FONT_REGULAR, 8)
    c.setFillColor(HexColor(ReceiptDesign.GRAY))
    c.drawCentredString(center_x, line_y - 0.95*cm, label)
    if detail:
        c.drawCentredString(center_x, line_y - 1.3*cm, detail)
    return line_y - 1.6*cm


def draw_signatures(c, receipt: dict, client: Optional[dict], company: dict,
                    seller: Optional[dict], y_position):
    client = client or {}
    seller = seller or {}
    width = A4[0]
    payer = receipt.get('payer_name') or client.get('name') or ''
    receiver = seller.get('name') or company.get('fantasy_name') or company.get('name') or ''

    draw_signature(c, width * 0.28, y_position, receipt.get('client_signature'), "PAGADOR", payer)
    return draw_signature(c, width * 0.72, y_position, receipt.get('vendor_signature'), "RECEBEDOR", receiver,
                          company.get('fantasy_name'))


def draw_legal_articles(c):
    """Arts. 319 e 320 do Código Civil no pé da página"""
    current_y = ReceiptDesign.MARGIN_BOTTOM + 1.4*cm
    box_width = 1.8*cm
    box_height = 0.5*cm
    text_x = ReceiptDesign.MARGIN_LEFT + box_width + 0.3*cm
    text_width = (A4[0] - ReceiptDesign.MARGIN_RIGHT) - text_x
    style = _style('ReceiptLaw', ReceiptDesign.FONT_ITALIC, 7, color=ReceiptDesign.GRAY, leading=9)

    for article, text in LEGAL_ARTICLES:
        c.setFillColor(HexColor(ReceiptDesign.ACCENT))
        c.roundRect(ReceiptDesign.MARGIN_LEFT, current_y - box_height, box_width, box_height, 0.1*cm,
                    stroke=0, fill=1)
        c.setFillColor(HexColor(ReceiptDesign.LIGHT))
        c.setFont(ReceiptDesign.FONT_BOLD, 8)
        c.drawCentredString(ReceiptDesign.MARGIN_LEFT + box_width / 2, current_y - box_height + 0.15*cm, article)

        p = Paragraph(text, style)
        _, h = p.wrap(text_width, 4*cm)
        p.drawOn(c, text_x, current_y - h)
        current_y -= max(box_height, h) + 0.25*cm


def draw_document_code(c, code: str):
    c.setFont(ReceiptDesign.FONT_REGULAR, 8)
    c.setFillColor(HexColor(ReceiptDesign.GRAY))
    c.drawCentredString(A4[0] / 2, ReceiptDesign.MARGIN_BOTTOM / 2, code)


# ==========================================
# FUNÇÃO PRINCIPAL (GERADOR)
# ==========================================

def generate_receipt_pdf(receipt: dict, client: Optional[dict], vehicle: Optional[dict], company: dict,
                         seller: Optional[dict] = None, logo_path: Optional[str] = None) -> bytes:
    """
    Gera o PDF do recibo de pagamento.
    Cliente e veículo são opcionais (recibo avulso).
    """
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(f"Recibo {receipt.get('receipt_number') or ''}".strip())

    try:
        y_pos = A4[1] - ReceiptDesign.MARGIN_TOP

        draw_watermark(c)
        y_pos = draw_header(c, company, y_pos, logo_path=logo_path)
        y_pos = draw_title(c, receipt, y_pos)
        y_pos = draw_amount(c, receipt.get('amount') or 0, y_pos)
        y_pos = draw_body(c, receipt, client, vehicle, y_pos)
        y_pos = draw_place_and_date(c, receipt, company, y_pos)
        draw_signatures(c, receipt, client, company, seller, y_pos)
        draw_legal_articles(c)
        draw_document_code(c, receipt.get('receipt_number') or '')

        c.showPage()
        c.save()

        pdf_bytes = buffer.getvalue()
        logger.info(f"Recibo gerado: {receipt.get('receipt_number')} - {format_currency(receipt.get('amount'))}")
        return pdf_bytes

    except Exception as e:
        logger.error(f"Erro ao gerar recibo: {str(e)}")
        raise
    finally:
        buffer.close()
