"""
Layout-neutral previews of document drafts.

A Preview is what both outputs draw from: the Jinja2 HTML preview shown while
editing and the tiled PDF export.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .bilingual import label, to_bengali_digits
from .drafts import (
    Draft,
    FeeReceiptDraft,
    MarksheetDraft,
    NoticeDraft,
    PaySheetDraft,
    ResultSheetDraft,
    TeacherRoutineDraft,
)
from .qr import qr_data_uri
from .schemas import TemplateSettings
from .totals import PAY_SHEET_DEDUCTIONS, PAY_SHEET_EARNINGS, parse_amount

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)


@dataclass
class Preview:
    doc_type: str
    title: str
    subtitle: str = ""
    fields: List[Tuple[str, str]] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    summary: List[Tuple[str, str]] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    signatures: List[str] = field(default_factory=list)
    filename: str = ""
    issuer: str = ""


# ----------------------- Formatting -----------------------

def _pick(english: Optional[str], bengali: Optional[str], language: str) -> str:
    english = english or ""
    if not bengali:
        return english
    if language == "bn":
        return bengali
    if language == "both" and bengali != english:
        return f"{english} / {bengali}"
    return english


def _digits(text: str, language: str) -> str:
    return to_bengali_digits(text) if language == "bn" else text


def _number(value: float, language: str) -> str:
    text = str(int(value)) if value == int(value) else f"{value:.2f}"
    return _digits(text, language)


def _money(value: float, language: str) -> str:
    symbol = "Tk" if language == "en" else "৳"
    return _digits(f"{symbol} {value:,.2f}", language)


def _fields(pairs, language) -> List[Tuple[str, str]]:
    """Label the non-empty values; ``pairs`` holds (label key, value)."""
    return [(label(key, language), value) for key, value in pairs if value]


# ----------------------- Builders -----------------------

def _fee_receipt(draft: FeeReceiptDraft, settings: TemplateSettings) -> Preview:
    lang = settings.language
    form = draft.form
    totals = draft.totals
    rows = [
        [
            _digits(str(index), lang),
            _pick(item.description, item.description_bn, lang),
            item.category,
            _money(parse_amount(item.amount), lang),
        ]
        for index, item in enumerate(draft.items, start=1)
    ]
    summary = [
        (label("subtotal", lang), _money(totals.subtotal, lang)),
        (label("discount", lang), _money(totals.deductions, lang)),
    ]
    if totals.previous_due:
        summary.append((label("previous_due", lang), _money(totals.previous_due, lang)))
    if totals.late_fee:
        summary.append((label("late_fee", lang), _money(totals.late_fee, lang)))
    summary += [
        (label("net", lang), _money(totals.net, lang)),
        (label("paid", lang), _money(totals.paid, lang)),
        (label("due", lang), _money(totals.due, lang)),
    ]
    return Preview(
        doc_type=draft.doc_type,
        title=label("fee_receipt", lang),
        subtitle=f"{label('receipt_no', lang)}: {form.receipt_no}",
        fields=_fields(
            [
                ("student_name", _pick(form.student_name, form.student_name_bn, lang)),
                ("student_id", form.student_id),
                ("class", form.class_name),
                ("section", form.section),
                ("roll", form.roll_number),
                ("academic_year", form.academic_year),
                ("month", form.month),
                ("payment_date", form.payment_date),
                ("payment_method", form.payment_method),
                ("guardian", form.guardian_name),
            ],
            lang,
        ),
        columns=["#", label("description", lang), label("category", lang), label("amount", lang)],
        rows=rows,
        summary=summary,
        notes=[form.remarks] if form.remarks else [],
        signatures=[label("accountant_signature", lang), label("principal_signature", lang)],
        filename=draft.pdf_filename(),
    )


def _marksheet(draft: MarksheetDraft, settings: TemplateSettings) -> Preview:
    lang = settings.language
    form = draft.form
    results = draft.results
    rows = [
        [
            subject.name,
            subject.code,
            _number(subject.full_marks, lang),
            _number(subject.passing_marks, lang),
            _number(subject.obtained_marks, lang),
            subject.grade,
        ]
        for subject in results.subjects
    ]
    return Preview(
        doc_type=draft.doc_type,
        title=label("marksheet", lang),
        subtitle=f"{form.exam_name} {form.exam_year}",
        fields=_fields(
            [
                ("student_name", _pick(form.student_name, form.student_name_bn, lang)),
                ("father_name", form.father_name),
                ("mother_name", form.mother_name),
                ("class", form.class_name),
                ("section", form.section),
                ("roll", form.roll_number),
                ("institution", form.institution),
                ("issue_date", form.issue_date),
            ],
            lang,
        ),
        columns=[
            label("subject", lang),
            label("code", lang),
            label("full_marks", lang),
            label("pass_marks", lang),
            label("obtained", lang),
            label("grade", lang),
        ],
        rows=rows,
        summary=[
            (label("full_marks", lang), _number(results.total_full_marks, lang)),
            (label("obtained", lang), _number(results.total_obtained_marks, lang)),
            (label("percentage", lang), _digits(f"{results.percentage:.2f}%", lang)),
            (label("grade", lang), results.grade),
            (label("gpa", lang), _digits(f"{results.gpa:.2f}", lang)),
        ],
        notes=[form.remarks] if form.remarks else [],
        signatures=[label("teacher_signature", lang), label("principal_signature", lang)],
        filename=draft.pdf_filename(),
        issuer=form.institution,
    )


def _notice(draft: NoticeDraft, settings: TemplateSettings) -> Preview:
    lang = settings.language
    form = draft.form
    notes = [_pick(form.content, form.content_in_bangla, lang)]
    if form.important_note:
        notes.append(f"{label('important_note', lang)}: {form.important_note}")
    return Preview(
        doc_type=draft.doc_type,
        title=_pick(form.title, form.title_in_bangla, lang),
        subtitle=_pick(form.school_name, form.school_name_in_bangla, lang),
        fields=_fields(
            [
                ("reference", form.reference_number),
                ("issue_date", form.issue_date),
                ("notice_type", form.notice_type),
                ("audience", form.target_audience),
            ],
            lang,
        ),
        columns=(
            [label("attachment", lang), label("type", lang), label("size", lang)]
            if len(draft.items)
            else []
        ),
        rows=[[a.name, a.type, a.size] for a in draft.items],
        notes=notes,
        signatures=[f"{label('principal', lang)}: {form.principal_name}"],
        filename=draft.pdf_filename(),
        issuer=form.school_name,
    )


def _pay_sheet(draft: PaySheetDraft, settings: TemplateSettings) -> Preview:
    lang = settings.language
    form = draft.form
    totals = draft.totals
    earnings = draft.earnings
    deductions = draft.deductions
    rows = [
        [label("earnings", lang), label(name, lang), _money(earnings[name], lang)]
        for name in PAY_SHEET_EARNINGS
        if earnings[name]
    ]
    rows += [
        [label("deductions", lang), label(name, lang), _money(deductions[name], lang)]
        for name in PAY_SHEET_DEDUCTIONS
        if deductions[name]
    ]
    return Preview(
        doc_type=draft.doc_type,
        title=label("pay_sheet", lang),
        subtitle=form.month_year,
        fields=_fields(
            [
                ("employee", _pick(form.employee_name, form.employee_name_bn, lang)),
                ("employee_id", form.employee_id),
                ("designation", form.position),
                ("department", form.department),
                ("payment_method", form.payment_method),
            ],
            lang,
        ),
        columns=[label("category", lang), label("description", lang), label("amount", lang)],
        rows=rows,
        summary=[
            (label("gross", lang), _money(totals.subtotal, lang)),
            (label("deductions", lang), _money(totals.deductions, lang)),
            (label("net_salary", lang), _money(totals.net, lang)),
        ],
        signatures=[label("accountant_signature", lang), label("principal_signature", lang)],
        filename=draft.pdf_filename(),
    )


def _result_sheet(draft: ResultSheetDraft, settings: TemplateSettings) -> Preview:
    lang = settings.language
    form = draft.form
    rows = [
        [
            _digits(student.roll, lang),
            student.name,
            _number(student.marks, lang),
            student.grade,
            _digits(str(student.position), lang),
        ]
        for student in draft.ranked
    ]
    summary = []
    if settings.include_statistics:
        stats = draft.statistics
        summary = [
            (label("students", lang), _digits(str(stats.total), lang)),
            (label("passed", lang), _digits(str(stats.passed), lang)),
            (label("failed", lang), _digits(str(stats.failed), lang)),
            (label("pass_rate", lang), _digits(f"{stats.pass_percentage:.2f}%", lang)),
            (label("highest", lang), _number(stats.highest, lang)),
            (label("lowest", lang), _number(stats.lowest, lang)),
            (label("average", lang), _digits(f"{stats.average:.2f}", lang)),
        ]
    return Preview(
        doc_type=draft.doc_type,
        title=label("result_sheet", lang),
        subtitle=f"{form.exam_name} {form.exam_year}",
        fields=_fields(
            [
                ("class", form.class_name),
                ("section", form.section),
                ("subject", form.subject),
                ("teacher", form.teacher_name),
                ("department", form.department),
                ("issue_date", form.publication_date),
            ],
            lang,
        ),
        columns=[
            label("roll", lang),
            label("student_name", lang),
            label("marks", lang),
            label("grade", lang),
            label("position", lang),
        ],
        rows=rows,
        summary=summary,
        notes=[form.remarks] if form.remarks else [],
        signatures=[label("teacher_signature", lang), label("principal_signature", lang)],
        filename=draft.pdf_filename(),
    )


def _teacher_routine(draft: TeacherRoutineDraft, settings: TemplateSettings) -> Preview:
    lang = settings.language
    form = draft.form
    rows = [
        [day, p.period, p.time, p.subject, "-".join(filter(None, [p.class_name, p.section])), p.room or ""]
        for day, periods in draft.weekly_grid.items()
        for p in periods
    ]
    return Preview(
        doc_type=draft.doc_type,
        title=label("teacher_routine", lang),
        subtitle=_pick(form.teacher_name, form.teacher_name_bn, lang),
        fields=_fields(
            [
                ("designation", form.designation),
                ("department", form.department),
                ("employee_id", form.employee_id),
                ("academic_year", form.academic_year),
                ("institution", form.institution),
                ("effective_from", form.effective_from),
                ("total_periods", _digits(str(draft.total_periods), lang)),
            ],
            lang,
        ),
        columns=[
            label("day", lang),
            label("period", lang),
            label("time", lang),
            label("subject", lang),
            label("class", lang),
            label("room", lang),
        ],
        rows=rows,
        notes=[form.remarks] if form.remarks else [],
        signatures=[label("teacher_signature", lang), label("principal_signature", lang)],
        filename=draft.pdf_filename(),
        issuer=form.institution,
    )


_BUILDERS: Dict[str, Callable[..., Preview]] = {
    FeeReceiptDraft.doc_type: _fee_receipt,
    MarksheetDraft.doc_type: _marksheet,
    NoticeDraft.doc_type: _notice,
    PaySheetDraft.doc_type: _pay_sheet,
    ResultSheetDraft.doc_type: _result_sheet,
    TeacherRoutineDraft.doc_type: _teacher_routine,
}


def build_preview(draft: Optional[Draft], settings: TemplateSettings) -> Optional[Preview]:
    if draft is None:
        return None
    builder = _BUILDERS.get(draft.doc_type)
    if builder is None:
        logger.warning("No preview builder for document type %s", draft.doc_type)
        return None
    return builder(draft, settings)


def monogram(preview: Preview) -> str:
    """Initials of the issuing institution, drawn where a logo would go."""
    words = (preview.issuer or preview.title).split()
    return "".join(word[0] for word in words[:3]).upper()


def qr_text(preview: Preview) -> str:
    return f"{preview.doc_type}:{preview.filename}"


def render_html(preview: Preview, settings: TemplateSettings) -> str:
    template = env.get_template("preview.html")
    return template.render(
        preview=preview,
        settings=settings,
        logo=monogram(preview) if settings.include_logo else "",
        qr=qr_data_uri(qr_text(preview)) if settings.include_qr_code else "",
    )
