"""
PDF export of document previews.

The preview is drawn once into a reportlab form XObject the size of the page,
then that same form is placed 1, 2, 4 or 9 times on a single A4 sheet. Every
tile shows the same document; distinct records are never laid out here.
"""

import io
import logging
import os
from typing import List, Optional, Tuple

from reportlab.graphics import renderPDF
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from . import config
from .previews import Preview, monogram, qr_text
from .qr import qr_drawing
from .schemas import TemplateSettings

logger = logging.getLogger(__name__)

# layout -> (columns, rows)
GRIDS = {
    "1": (1, 1),
    "2": (1, 2),
    "4": (2, 2),
    "9": (3, 3),
}

FORM_NAME = "document-preview"
MARGIN = 40
LINE = 14
QR_SIZE = 64

INK = HexColor("#111827")
MUTED = HexColor("#4B5563")
RULE = HexColor("#D1D5DB")
HEADER_FILL = HexColor("#F3F4F6")
WATERMARK = HexColor("#E5E7EB")

_registered_font: Optional[str] = None

Box = Tuple[float, float, float, float]


def tile_boxes(layout: str, width: float, height: float) -> List[Box]:
    """Tile rectangles ``(x, y, w, h)`` in row-major order from the top."""
    try:
        cols, rows = GRIDS[str(layout)]
    except KeyError:
        raise ValueError(f"Unsupported layout: {layout}")
    tile_w = width / cols
    tile_h = height / rows
    return [
        (col * tile_w, height - (row + 1) * tile_h, tile_w, tile_h)
        for row in range(rows)
        for col in range(cols)
    ]


def _fonts() -> Tuple[str, str]:
    """Regular and bold font names; a configured TTF carries Bengali glyphs."""
    global _registered_font
    path = config.PDF_FONT_PATH
    if path and os.path.exists(path):
        if _registered_font is None:
            pdfmetrics.registerFont(TTFont("SchoolDesk", path))
            _registered_font = "SchoolDesk"
        return _registered_font, _registered_font
    if path:
        logger.warning("PDF font not found at %s, falling back to Helvetica", path)
    return "Helvetica", "Helvetica-Bold"


class _PreviewPainter:
    def __init__(self, c: canvas.Canvas, width: float, height: float, settings: TemplateSettings):
        self.c = c
        self.width = width
        self.height = height
        self.settings = settings
        self.font, self.bold = _fonts()
        self.y = height - MARGIN

    @property
    def content_width(self) -> float:
        return self.width - 2 * MARGIN

    def room_for(self, lines: int) -> bool:
        return self.y - lines * LINE > MARGIN + 60

    def paint(self, preview: Preview):
        c = self.c
        if self.settings.include_watermark:
            self.watermark(preview.title)
        if self.settings.include_logo:
            self.logo(monogram(preview))
        if self.settings.include_qr_code:
            self.qr_code(qr_text(preview))

        c.setFillColor(INK)
        c.setFont(self.bold, 18)
        c.drawCentredString(self.width / 2, self.y, preview.title)
        self.y -= 22
        if preview.subtitle:
            c.setFillColor(MUTED)
            c.setFont(self.font, 11)
            c.drawCentredString(self.width / 2, self.y, preview.subtitle)
            self.y -= 18
        c.setStrokeColor(RULE)
        c.line(MARGIN, self.y, self.width - MARGIN, self.y)
        self.y -= LINE + 4

        self.fields(preview.fields)
        if preview.columns:
            self.table(preview.columns, preview.rows)
        self.summary(preview.summary)
        self.notes(preview.notes)
        if self.settings.include_signature:
            self.signatures(preview.signatures)

    def watermark(self, text: str):
        c = self.c
        c.saveState()
        c.setFillColor(WATERMARK)
        c.setFont(self.bold, 48)
        c.translate(self.width / 2, self.height / 2)
        c.rotate(35)
        c.drawCentredString(0, 0, text)
        c.restoreState()

    def logo(self, initials: str):
        c = self.c
        radius = 20
        cx, cy = MARGIN + radius, self.height - MARGIN - radius + 12
        c.setStrokeColor(INK)
        c.setLineWidth(1.5)
        c.circle(cx, cy, radius, stroke=1, fill=0)
        c.setLineWidth(1)
        c.setFillColor(INK)
        c.setFont(self.bold, 11)
        c.drawCentredString(cx, cy - 4, initials)

    def qr_code(self, text: str):
        x = self.width - MARGIN - QR_SIZE
        y = self.height - MARGIN - QR_SIZE + 12
        renderPDF.draw(qr_drawing(text, QR_SIZE), self.c, x, y)

    def fields(self, fields):
        c = self.c
        half = self.content_width / 2
        for index, (name, value) in enumerate(fields):
            x = MARGIN + (index % 2) * half
            c.setFillColor(INK)
            c.setFont(self.bold, 9)
            c.drawString(x, self.y, f"{name}:")
            c.setFont(self.font, 9)
            c.drawString(x + 95, self.y, str(value)[:40])
            if index % 2 == 1 or index == len(fields) - 1:
                self.y -= LINE
        self.y -= 6

    def table(self, columns, rows):
        c = self.c
        col_w = self.content_width / len(columns)
        c.setFillColor(HEADER_FILL)
        c.rect(MARGIN, self.y - 4, self.content_width, LINE, stroke=0, fill=1)
        c.setFillColor(INK)
        c.setFont(self.bold, 9)
        for i, column in enumerate(columns):
            c.drawString(MARGIN + i * col_w + 3, self.y, str(column))
        self.y -= LINE

        c.setFont(self.font, 9)
        for shown, row in enumerate(rows):
            if not self.room_for(1):
                c.setFillColor(MUTED)
                c.drawString(MARGIN + 3, self.y, f"... +{len(rows) - shown}")
                self.y -= LINE
                break
            for i, cell in enumerate(row):
                limit = max(int(col_w / 5), 4)
                c.drawString(MARGIN + i * col_w + 3, self.y, str(cell)[:limit])
            c.setStrokeColor(RULE)
            c.line(MARGIN, self.y - 4, self.width - MARGIN, self.y - 4)
            self.y -= LINE
        self.y -= 8

    def summary(self, rows):
        c = self.c
        x_label = self.width / 2
        x_value = self.width - MARGIN
        for name, value in rows:
            if not self.room_for(1):
                break
            c.setFillColor(INK)
            c.setFont(self.bold, 10)
            c.drawString(x_label, self.y, str(name))
            c.setFont(self.font, 10)
            c.drawRightString(x_value, self.y, str(value))
            self.y -= LINE
        self.y -= 6

    def notes(self, notes):
        c = self.c
        c.setFont(self.font, 10)
        c.setFillColor(INK)
        for note in notes:
            for line in simpleSplit(str(note), self.font, 10, self.content_width):
                if not self.room_for(1):
                    return
                c.drawString(MARGIN, self.y, line)
                self.y -= LINE
            self.y -= 4

    def signatures(self, signatures):
        if not signatures:
            return
        c = self.c
        slot = self.content_width / len(signatures)
        y = MARGIN + 30
        c.setStrokeColor(INK)
        c.setFillColor(INK)
        c.setFont(self.font, 9)
        for i, signature in enumerate(signatures):
            left = MARGIN + i * slot + 10
            right = MARGIN + (i + 1) * slot - 10
            c.line(left, y, right, y)
            c.drawCentredString((left + right) / 2, y - 12, str(signature))


def export_pdf(preview: Optional[Preview], settings: TemplateSettings) -> Optional[bytes]:
    """Render ``preview`` tiled per ``settings.layout``; None when nothing to export."""
    if preview is None:
        return None

    if settings.orientation == "landscape":
        page_w, page_h = landscape(A4)
    else:
        page_w, page_h = A4

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(page_w, page_h))
    c.setTitle(preview.title)
    c.setAuthor("School Desk")

    c.beginForm(FORM_NAME, lowerx=0, lowery=0, upperx=page_w, uppery=page_h)
    _PreviewPainter(c, page_w, page_h, settings).paint(preview)
    c.endForm()

    for x, y, w, h in tile_boxes(settings.layout, page_w, page_h):
        scale = min(w / page_w, h / page_h)
        c.saveState()
        c.translate(x + (w - page_w * scale) / 2, y + (h - page_h * scale) / 2)
        c.scale(scale, scale)
        c.doForm(FORM_NAME)
        c.restoreState()

    c.showPage()
    c.save()
    logger.info("Exported %s with layout %s", preview.filename or preview.doc_type, settings.layout)
    return buffer.getvalue()
