"""Tests for draft validation, the item list and derived fields."""
import pytest
from pydantic import ValidationError

from schooldesk.drafts import DOCUMENT_TYPES, Draft, ItemList, build_draft
from schooldesk.schemas import FeeItem


def _items(*amounts):
    return ItemList(FeeItem(description=f"Item {a}", amount=a) for a in amounts)


def test_item_ids_are_stable_and_never_reused():
    items = _items("100", "200", "300")
    assert items.ids() == [1, 2, 3]

    removed = items.remove_at(1)
    assert removed.amount == "200"
    assert items.ids() == [1, 3]
    assert [i.amount for i in items] == ["100", "300"]

    new_id = items.add(FeeItem(description="Late", amount="50"))
    assert new_id == 4
    assert items.ids() == [1, 3, 4]
    assert len(set(items.ids())) == len(items)


def test_remove_by_id_keeps_relative_order():
    items = _items("1", "2", "3", "4")
    items.remove(3)
    assert [i.amount for i in items] == ["1", "2", "4"]


def test_update_revalidates_the_row():
    items = _items("100")
    updated = items.update(1, amount="250")
    assert updated.amount == "250"
    assert items.get(1).amount == "250"
    with pytest.raises(ValidationError):
        items.update(1, description="")


def test_registry_covers_all_document_pages():
    assert set(DOCUMENT_TYPES) == {
        "fee-receipts", "marksheets", "notices", "pay-sheets", "result-sheets", "teacher-routines",
    }


def test_drafts_must_define_outputs():
    class AdmitCardDraft(Draft):
        doc_type = "admit-cards"

        def computed(self):
            return {}

    with pytest.raises(TypeError):
        AdmitCardDraft(form=None)


def test_unknown_document_type():
    with pytest.raises(KeyError):
        build_draft("admit-cards", {})


def test_fee_receipt(sample_drafts):
    draft = build_draft("fee-receipts", sample_drafts["fee-receipts"])
    totals = draft.totals
    assert totals.subtotal == 4000.0
    assert totals.deductions == 500.0
    assert totals.net == 3500.0
    assert totals.paid == 0.0
    assert totals.due == 3500.0
    assert draft.pdf_filename() == "fee-receipt-FR-2025-001.pdf"


def test_fee_receipt_partial_payment(sample_drafts):
    payload = dict(sample_drafts["fee-receipts"], paidAmount="৩,০০০")
    totals = build_draft("fee-receipts", payload).totals
    assert totals.paid == 3000.0
    assert totals.due == 500.0


def test_fee_receipt_totals_follow_item_edits(sample_drafts):
    draft = build_draft("fee-receipts", sample_drafts["fee-receipts"])
    draft.items.add(FeeItem(description="Library", amount="৫০০"))
    assert draft.totals.subtotal == 4500.0
    draft.items.remove_at(0)
    assert draft.totals.subtotal == 1500.0
    assert draft.computed()["totals"]["net"] == 1000.0


def test_fee_receipt_needs_items_and_required_fields(sample_drafts):
    payload = dict(sample_drafts["fee-receipts"], feeItems=[])
    with pytest.raises(ValidationError):
        build_draft("fee-receipts", payload)

    payload = dict(sample_drafts["fee-receipts"])
    del payload["receiptNo"]
    with pytest.raises(ValidationError):
        build_draft("fee-receipts", payload)


def test_numeric_inputs_are_kept_as_text(sample_drafts):
    payload = dict(sample_drafts["fee-receipts"], discount=250, rollNumber=12)
    draft = build_draft("fee-receipts", payload)
    assert draft.form.discount == "250"
    assert draft.form.roll_number == "12"


def test_marksheet(sample_drafts):
    draft = build_draft("marksheets", sample_drafts["marksheets"])
    results = draft.results
    assert results.percentage == 84.5
    assert results.grade == "A+"
    assert results.gpa == 4.5
    assert [s.grade for s in results.subjects] == ["A", "A+"]
    assert draft.pdf_filename() == "marksheet-Arif-Hossain-2024.pdf"


def test_notice_without_attachments(sample_drafts):
    draft = build_draft("notices", sample_drafts["notices"])
    assert draft.computed() == {"attachment_count": 0}
    assert draft.pdf_filename() == "notice-DMS-45.pdf"


def test_notice_filename_falls_back_to_issue_date(sample_drafts):
    payload = dict(sample_drafts["notices"])
    del payload["referenceNumber"]
    assert build_draft("notices", payload).pdf_filename() == "notice-2024-12-20.pdf"


def test_pay_sheet(sample_drafts):
    draft = build_draft("pay-sheets", sample_drafts["pay-sheets"])
    assert draft.totals.subtotal == 36500.0
    assert draft.totals.deductions == 3700.0
    assert draft.totals.net == 32800.0
    assert draft.earnings["house_rent"] == 10000.0
    assert draft.deductions["loan_repayment"] == 0.0
    assert draft.pdf_filename() == "pay-sheet-T-17-January-2025.pdf"


def test_result_sheet(sample_drafts):
    draft = build_draft("result-sheets", sample_drafts["result-sheets"])
    ranked = draft.ranked
    assert [(s.roll, s.position) for s in ranked] == [("1", 1), ("2", 1), ("3", 3), ("4", 4)]
    stats = draft.statistics
    assert stats.passed == 3
    assert stats.failed == 1
    assert stats.pass_percentage == 75.0
    computed = draft.computed()
    assert computed["students"][0] == {"roll": "1", "name": "Sadia", "marks": 88.0, "grade": "A+", "position": 1}
    assert draft.pdf_filename() == "result-sheet-Class-10-Physics-2025.pdf"


def test_teacher_routine(sample_drafts):
    draft = build_draft("teacher-routines", sample_drafts["teacher-routines"])
    assert draft.total_periods == 3
    grid = draft.weekly_grid
    assert list(grid) == ["Sunday", "Monday"]
    assert [p.period for p in grid["Sunday"]] == ["1", "3"]
    assert draft.pdf_filename() == "teacher-routine-Farhana-Islam-2025.pdf"


def test_payload_round_trip_keeps_client_keys(sample_drafts):
    draft = build_draft("teacher-routines", sample_drafts["teacher-routines"])
    payload = draft.to_payload()
    assert payload["teacherName"] == "Farhana Islam"
    assert payload["periods"][2]["className"] == "Class 8"
