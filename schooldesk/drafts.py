"""
Document drafts: the validated form of one document plus its editable list.

A draft is the single state container for a document page. The scalar fields
live in a pydantic form model, the repeated rows (fee items, subjects,
attachments, students, periods) live in an ItemList, and everything derived
from them (totals, grades, positions, statistics) is a computed property.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import asdict
from functools import lru_cache
from typing import Annotated, Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, TypeAdapter
from pydantic.alias_generators import to_snake

from .ranking import (
    MarksheetResult,
    RankedStudent,
    ResultStatistics,
    marksheet_results,
    rank_students,
    result_statistics,
    roll_key,
)
from .totals import (
    PAY_SHEET_DEDUCTIONS,
    PAY_SHEET_EARNINGS,
    FeeTotals,
    Totals,
    fee_totals,
    parse_amount,
    pay_sheet_totals,
)
from .schemas import (
    Attachment,
    FeeItem,
    FeeReceiptForm,
    MarksheetForm,
    NoticeForm,
    PaySheetForm,
    Period,
    ResultSheetForm,
    StudentResult,
    Subject,
    TeacherRoutineForm,
)

T = TypeVar("T", bound=BaseModel)


class ItemList(Generic[T]):
    """Ordered rows, each with a surrogate id that stays fixed for its lifetime.

    Ids start at 1 and are never handed out twice, even after a removal.
    """

    def __init__(self, items=()):
        self._items: Dict[int, T] = {}
        self._next_id = 1
        for item in items:
            self.add(item)

    def add(self, item: T) -> int:
        item_id = self._next_id
        self._next_id += 1
        self._items[item_id] = item
        return item_id

    def get(self, item_id: int) -> T:
        return self._items[item_id]

    def update(self, item_id: int, **changes) -> T:
        current = self._items[item_id]
        updated = type(current).model_validate({**current.model_dump(), **changes})
        self._items[item_id] = updated
        return updated

    def remove(self, item_id: int) -> T:
        return self._items.pop(item_id)

    def remove_at(self, index: int) -> T:
        item_id = self.ids()[index]
        return self._items.pop(item_id)

    def ids(self) -> List[int]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)


@lru_cache(maxsize=None)
def _rows_adapter(item_class: Type[BaseModel], min_items: int) -> TypeAdapter:
    return TypeAdapter(Annotated[List[item_class], Field(min_length=min_items)])


def _slug(value: Optional[str]) -> str:
    return re.sub(r"\s+", "-", (value or "").strip())


class Draft(ABC):
    doc_type: str = ""
    form_class: Type[BaseModel]
    item_class: Optional[Type[BaseModel]] = None
    # payload key of the repeated rows, as the web client sends it
    items_key: Optional[str] = None
    min_items = 1

    def __init__(self, form: BaseModel, items=()):
        self.form = form
        self.items: ItemList = ItemList(items)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Draft":
        """Validate a posted draft; raises pydantic.ValidationError."""
        data = dict(payload or {})
        raw_items: List[Any] = []
        if cls.items_key:
            snake_key = to_snake(cls.items_key)
            raw_items = data.pop(cls.items_key, None) or data.pop(snake_key, None) or []
            data.pop(snake_key, None)
        form = cls.form_class.model_validate(data)
        items = []
        if cls.item_class is not None:
            items = _rows_adapter(cls.item_class, cls.min_items).validate_python(raw_items)
        return cls(form, items)

    def to_payload(self) -> Dict[str, Any]:
        payload = self.form.model_dump(by_alias=True)
        if self.items_key:
            payload[self.items_key] = [item.model_dump(by_alias=True) for item in self.items]
        return payload

    @abstractmethod
    def computed(self) -> Dict[str, Any]:
        """Derived fields sent back with the draft."""

    @abstractmethod
    def pdf_filename(self) -> str:
        """Name of the exported PDF."""


class FeeReceiptDraft(Draft):
    doc_type = "fee-receipts"
    form_class = FeeReceiptForm
    item_class = FeeItem
    items_key = "feeItems"

    @property
    def totals(self) -> FeeTotals:
        form = self.form
        return fee_totals(
            self.items,
            discount=form.discount,
            paid=form.paid_amount,
            previous_due=form.previous_due,
            late_fee=form.late_fee,
        )

    def computed(self):
        return {"totals": self.totals.as_dict()}

    def pdf_filename(self):
        return f"fee-receipt-{_slug(self.form.receipt_no)}.pdf"


class MarksheetDraft(Draft):
    doc_type = "marksheets"
    form_class = MarksheetForm
    item_class = Subject
    items_key = "subjects"

    @property
    def results(self) -> MarksheetResult:
        return marksheet_results(self.items)

    def computed(self):
        return {"results": asdict(self.results)}

    def pdf_filename(self):
        return f"marksheet-{_slug(self.form.student_name)}-{_slug(self.form.exam_year)}.pdf"


class NoticeDraft(Draft):
    doc_type = "notices"
    form_class = NoticeForm
    item_class = Attachment
    items_key = "attachments"
    min_items = 0

    @property
    def attachment_count(self) -> int:
        return len(self.items)

    def computed(self):
        return {"attachment_count": self.attachment_count}

    def pdf_filename(self):
        reference = self.form.reference_number or self.form.issue_date
        return f"notice-{_slug(reference)}.pdf"


class PaySheetDraft(Draft):
    doc_type = "pay-sheets"
    form_class = PaySheetForm

    @property
    def earnings(self) -> Dict[str, float]:
        return {f: parse_amount(getattr(self.form, f)) for f in PAY_SHEET_EARNINGS}

    @property
    def deductions(self) -> Dict[str, float]:
        return {f: parse_amount(getattr(self.form, f)) for f in PAY_SHEET_DEDUCTIONS}

    @property
    def totals(self) -> Totals:
        return pay_sheet_totals(self.earnings.values(), self.deductions.values())

    def computed(self):
        return {
            "earnings": self.earnings,
            "deductions": self.deductions,
            "totals": self.totals.as_dict(),
        }

    def pdf_filename(self):
        return f"pay-sheet-{_slug(self.form.employee_id)}-{_slug(self.form.month_year)}.pdf"


class ResultSheetDraft(Draft):
    doc_type = "result-sheets"
    form_class = ResultSheetForm
    item_class = StudentResult
    items_key = "students"

    @property
    def ranked(self) -> List[RankedStudent]:
        return rank_students(self.items)

    @property
    def statistics(self) -> ResultStatistics:
        return result_statistics(
            list(self.items),
            full_marks=parse_amount(self.form.full_marks),
            passing_marks=parse_amount(self.form.passing_marks),
        )

    def computed(self):
        return {
            "students": [asdict(s) for s in self.ranked],
            "statistics": asdict(self.statistics),
        }

    def pdf_filename(self):
        form = self.form
        return f"result-sheet-{_slug(form.class_name)}-{_slug(form.subject)}-{_slug(form.exam_year)}.pdf"


class TeacherRoutineDraft(Draft):
    doc_type = "teacher-routines"
    form_class = TeacherRoutineForm
    item_class = Period
    items_key = "periods"

    @property
    def total_periods(self) -> int:
        return len(self.items)

    @property
    def weekly_grid(self) -> Dict[str, List[Period]]:
        """Periods grouped by day in first-seen day order, sorted by period."""
        grid: Dict[str, List[Period]] = {}
        for period in self.items:
            grid.setdefault(period.day, []).append(period)
        for periods in grid.values():
            periods.sort(key=lambda p: roll_key(p.period))
        return grid

    def computed(self):
        return {
            "total_periods": self.total_periods,
            "weekly_grid": {
                day: [p.model_dump() for p in periods]
                for day, periods in self.weekly_grid.items()
            },
        }

    def pdf_filename(self):
        form = self.form
        return f"teacher-routine-{_slug(form.teacher_name)}-{_slug(form.academic_year)}.pdf"


DOCUMENT_TYPES: Dict[str, Type[Draft]] = {
    cls.doc_type: cls
    for cls in (
        FeeReceiptDraft,
        MarksheetDraft,
        NoticeDraft,
        PaySheetDraft,
        ResultSheetDraft,
        TeacherRoutineDraft,
    )
}


def build_draft(doc_type: str, payload: Dict[str, Any]) -> Draft:
    """Validate ``payload`` as a draft of ``doc_type``.

    Raises KeyError for an unknown document type and pydantic.ValidationError
    when the payload does not match the form.
    """
    return DOCUMENT_TYPES[doc_type].from_payload(payload)
