"""QR codes for printed documents, drawn with reportlab's barcode widget."""

import base64

from reportlab.graphics import renderSVG
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing


def qr_drawing(text: str, size: float = 72) -> Drawing:
    widget = QrCodeWidget(text, barWidth=size, barHeight=size, barBorder=2)
    drawing = Drawing(size, size)
    drawing.add(widget)
    return drawing


def qr_data_uri(text: str, size: float = 96) -> str:
    """SVG QR code as a data URI for the HTML preview."""
    svg = renderSVG.drawToString(qr_drawing(text, size))
    if isinstance(svg, str):
        svg = svg.encode("utf-8")
    return "data:image/svg+xml;base64," + base64.b64encode(svg).decode("ascii")
