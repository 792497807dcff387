"""Tests for the tiled PDF export."""
import pytest
from reportlab.graphics import renderPDF
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from schooldesk.drafts import build_draft
from schooldesk.pdf_export import export_pdf, tile_boxes
from schooldesk.previews import build_preview
from schooldesk.schemas import TemplateSettings


@pytest.mark.parametrize("layout, count", [("1", 1), ("2", 2), ("4", 4), ("9", 9)])
def test_tile_boxes_cover_the_page(layout, count):
    width, height = A4
    boxes = tile_boxes(layout, width, height)
    assert len(boxes) == count
    area = sum(w * h for _, _, w, h in boxes)
    assert area == pytest.approx(width * height)


def test_tiles_start_top_left():
    boxes = tile_boxes("4", 200, 100)
    assert boxes == [(0, 50, 100, 50), (100, 50, 100, 50), (0, 0, 100, 50), (100, 0, 100, 50)]


def test_unknown_layout():
    with pytest.raises(ValueError):
        tile_boxes("3", 100, 100)


def test_nothing_to_export():
    assert export_pdf(None, TemplateSettings()) is None


@pytest.mark.parametrize("layout", ["1", "2", "4", "9"])
def test_export_places_the_same_form_per_tile(sample_drafts, monkeypatch, layout):
    placed = []
    original = canvas.Canvas.doForm

    def spy(self, name):
        placed.append(name)
        return original(self, name)

    monkeypatch.setattr(canvas.Canvas, "doForm", spy)
    settings = TemplateSettings(layout=layout)
    draft = build_draft("result-sheets", sample_drafts["result-sheets"])
    pdf = export_pdf(build_preview(draft, settings), settings)

    assert pdf.startswith(b"%PDF")
    assert len(placed) == int(layout)
    assert len(set(placed)) == 1


@pytest.mark.parametrize(
    "doc_type", ["fee-receipts", "marksheets", "notices", "pay-sheets", "teacher-routines"]
)
def test_export_every_document_type(sample_drafts, doc_type):
    settings = TemplateSettings(language="en", includeWatermark=True)
    draft = build_draft(doc_type, sample_drafts[doc_type])
    pdf = export_pdf(build_preview(draft, settings), settings)
    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")


def test_landscape_export(sample_drafts):
    settings = TemplateSettings(orientation="landscape", layout="2")
    draft = build_draft("teacher-routines", sample_drafts["teacher-routines"])
    assert export_pdf(build_preview(draft, settings), settings).startswith(b"%PDF")


def test_long_tables_are_truncated(sample_drafts):
    students = [{"roll": str(n), "name": f"Student {n}", "marks": str(n % 100)} for n in range(1, 120)]
    payload = dict(sample_drafts["result-sheets"], students=students)
    settings = TemplateSettings()
    draft = build_draft("result-sheets", payload)
    assert export_pdf(build_preview(draft, settings), settings).startswith(b"%PDF")


@pytest.mark.parametrize("include_qr, expected", [(True, 1), (False, 0)])
def test_qr_code_is_drawn_into_the_form(sample_drafts, monkeypatch, include_qr, expected):
    drawn = []
    monkeypatch.setattr(renderPDF, "draw", lambda drawing, c, x, y: drawn.append((x, y)))
    settings = TemplateSettings(includeQRCode=include_qr, layout="4")
    draft = build_draft("fee-receipts", sample_drafts["fee-receipts"])
    assert export_pdf(build_preview(draft, settings), settings).startswith(b"%PDF")
    assert len(drawn) == expected


def test_logo_initials_are_drawn(sample_drafts, monkeypatch):
    texts = []
    original = canvas.Canvas.drawCentredString

    def spy(self, x, y, text, *args, **kwargs):
        texts.append(text)
        return original(self, x, y, text, *args, **kwargs)

    monkeypatch.setattr(canvas.Canvas, "drawCentredString", spy)
    draft = build_draft("marksheets", sample_drafts["marksheets"])
    for settings in (TemplateSettings(), TemplateSettings(includeLogo=False)):
        export_pdf(build_preview(draft, settings), settings)
    assert texts.count("DMS") == 1
