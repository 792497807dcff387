"""Bengali display names, descriptions and labels keyed by fixed type strings."""

from datetime import date, datetime
from typing import Dict, Tuple, Union

BENGALI_DIGITS = "০১২৩৪৫৬৭৮৯"
_TO_BENGALI = str.maketrans("0123456789", BENGALI_DIGITS)
_FROM_BENGALI = str.maketrans(BENGALI_DIGITS, "0123456789")

UNAUTHORIZED = "অননুমোদিত। Unauthorized."

DOCUMENT_NAMES_BN: Dict[str, str] = {
    "student-id-cards": "শিক্ষার্থী আইডি কার্ড",
    "admit-cards": "এডমিট কার্ড",
    "fee-receipts": "ফি রসিদ",
    "marksheets": "মার্কশীট",
    "teacher-id-cards": "শিক্ষক আইডি কার্ড",
    "class-routines": "ক্লাস রুটিন",
    "testimonials": "প্রশংসাপত্র",
    "result-sheets": "রেজাল্ট শিট",
    "transfer-certificates": "স্থানান্তর সনদপত্র",
    "notices": "নোটিশ",
    "pay-sheets": "বেতন শিট",
    "teacher-routines": "শিক্ষক রুটিন",
}

DOCUMENT_DESCRIPTIONS_BN: Dict[str, str] = {
    "student-id-cards": "পেশাদার শিক্ষার্থী পরিচয়পত্র তৈরি করুন",
    "admit-cards": "পরীক্ষার প্রবেশপত্র তৈরি করুন",
    "fee-receipts": "শিক্ষার্থীদের ফি রসিদ তৈরি করুন",
    "marksheets": "একাডেমিক মার্কশীট তৈরি করুন",
    "teacher-id-cards": "পেশাদার শিক্ষক পরিচয়পত্র তৈরি করুন",
    "class-routines": "ক্লাসের সময়সূচী তৈরি করুন",
}

DOCUMENT_ICONS: Dict[str, str] = {
    "student-id-cards": "🪪",
    "admit-cards": "🎫",
    "fee-receipts": "🧾",
    "marksheets": "📊",
    "teacher-id-cards": "👨‍🏫",
    "class-routines": "📅",
}

DOCUMENT_DIFFICULTY: Dict[str, str] = {
    "student-id-cards": "easy",
    "admit-cards": "easy",
    "fee-receipts": "easy",
    "marksheets": "medium",
    "teacher-id-cards": "easy",
    "class-routines": "medium",
}

DOCUMENT_ESTIMATED_TIME: Dict[str, str] = {
    "student-id-cards": "২-৩ মিনিট",
    "admit-cards": "১-২ মিনিট",
    "fee-receipts": "১ মিনিট",
    "marksheets": "৩-৫ মিনিট",
    "teacher-id-cards": "২-৩ মিনিট",
    "class-routines": "৫-৭ মিনিট",
}


def document_name_bn(doc_type: str) -> str:
    return DOCUMENT_NAMES_BN.get(doc_type, doc_type)


def document_description_bn(doc_type: str) -> str:
    return DOCUMENT_DESCRIPTIONS_BN.get(doc_type, "ডকুমেন্ট তৈরি করুন")


def document_icon(doc_type: str) -> str:
    return DOCUMENT_ICONS.get(doc_type, "📄")


def document_difficulty(doc_type: str) -> str:
    return DOCUMENT_DIFFICULTY.get(doc_type, "medium")


def document_estimated_time(doc_type: str) -> str:
    return DOCUMENT_ESTIMATED_TIME.get(doc_type, "২-৩ মিনিট")


def to_bengali_digits(value: Union[str, int, float]) -> str:
    return str(value).translate(_TO_BENGALI)


def to_ascii_digits(value: str) -> str:
    return value.translate(_FROM_BENGALI)


def bengali_date(value: Union[date, datetime]) -> str:
    """Day/month/year with Bengali digits, e.g. ৫/১/২০২৫."""
    return to_bengali_digits(f"{value.day}/{value.month}/{value.year}")


# ----------------------- Document labels -----------------------
# key -> (English, Bengali)
LABELS: Dict[str, Tuple[str, str]] = {
    "fee_receipt": ("Fee Receipt", "ফি রসিদ"),
    "marksheet": ("Academic Marksheet", "একাডেমিক মার্কশীট"),
    "notice": ("Notice", "নোটিশ"),
    "pay_sheet": ("Pay Sheet", "বেতন শিট"),
    "result_sheet": ("Result Sheet", "ফলাফল শিট"),
    "teacher_routine": ("Teacher Routine", "শিক্ষক রুটিন"),
    "receipt_no": ("Receipt No", "রসিদ নম্বর"),
    "student_name": ("Student Name", "শিক্ষার্থীর নাম"),
    "student_id": ("Student ID", "শিক্ষার্থী আইডি"),
    "class": ("Class", "শ্রেণী"),
    "section": ("Section", "শাখা"),
    "roll": ("Roll", "রোল"),
    "payment_date": ("Payment Date", "পেমেন্ট তারিখ"),
    "payment_method": ("Payment Method", "পেমেন্ট পদ্ধতি"),
    "month": ("Month", "মাস"),
    "academic_year": ("Academic Year", "শিক্ষাবর্ষ"),
    "guardian": ("Guardian", "অভিভাবক"),
    "description": ("Description", "বিবরণ"),
    "category": ("Category", "ধরন"),
    "amount": ("Amount", "পরিমাণ"),
    "subtotal": ("Subtotal", "উপমোট"),
    "discount": ("Discount", "ছাড়"),
    "net": ("Net Payable", "মোট প্রদেয়"),
    "paid": ("Paid", "প্রদত্ত"),
    "due": ("Due", "বকেয়া"),
    "father_name": ("Father's Name", "পিতার নাম"),
    "mother_name": ("Mother's Name", "মাতার নাম"),
    "exam": ("Examination", "পরীক্ষা"),
    "exam_year": ("Exam Year", "পরীক্ষার বছর"),
    "institution": ("Institution", "প্রতিষ্ঠান"),
    "subject": ("Subject", "বিষয়"),
    "code": ("Code", "কোড"),
    "full_marks": ("Full Marks", "পূর্ণমান"),
    "pass_marks": ("Pass Marks", "পাস নম্বর"),
    "obtained": ("Obtained", "প্রাপ্ত নম্বর"),
    "marks": ("Marks", "নম্বর"),
    "grade": ("Grade", "গ্রেড"),
    "position": ("Position", "মেধাস্থান"),
    "percentage": ("Percentage", "শতকরা"),
    "total": ("Total", "মোট"),
    "reference": ("Reference", "সূত্র"),
    "issue_date": ("Issue Date", "তারিখ"),
    "notice_type": ("Notice Type", "নোটিশের ধরন"),
    "audience": ("Audience", "প্রাপক"),
    "principal": ("Principal", "অধ্যক্ষ"),
    "attachment": ("Attachment", "সংযুক্তি"),
    "type": ("Type", "ধরন"),
    "size": ("Size", "আকার"),
    "employee": ("Employee", "কর্মচারী"),
    "employee_id": ("Employee ID", "কর্মচারী আইডি"),
    "designation": ("Designation", "পদবি"),
    "department": ("Department", "বিভাগ"),
    "month_year": ("Month", "মাস"),
    "basic_salary": ("Basic Salary", "মূল বেতন"),
    "house_rent": ("House Rent", "বাড়ি ভাড়া"),
    "medical_allowance": ("Medical Allowance", "চিকিৎসা ভাতা"),
    "transport_allowance": ("Transport Allowance", "যাতায়াত ভাতা"),
    "performance_bonus": ("Performance Bonus", "কর্মদক্ষতা বোনাস"),
    "overtime_amount": ("Overtime", "ওভারটাইম"),
    "other_allowances": ("Other Allowances", "অন্যান্য ভাতা"),
    "income_tax": ("Income Tax", "আয়কর"),
    "provident_fund": ("Provident Fund", "ভবিষ্য তহবিল"),
    "loan_repayment": ("Loan Repayment", "ঋণ পরিশোধ"),
    "absent_deduction": ("Absent Deduction", "অনুপস্থিতি কর্তন"),
    "other_deductions": ("Other Deductions", "অন্যান্য কর্তন"),
    "earnings": ("Earnings", "আয়"),
    "gross": ("Gross Salary", "মোট বেতন"),
    "deductions": ("Total Deductions", "মোট কর্তন"),
    "net_salary": ("Net Salary", "নিট বেতন"),
    "teacher": ("Teacher", "শিক্ষক"),
    "day": ("Day", "দিন"),
    "period": ("Period", "পিরিয়ড"),
    "time": ("Time", "সময়"),
    "room": ("Room", "কক্ষ"),
    "total_periods": ("Total Periods", "মোট পিরিয়ড"),
    "effective_from": ("Effective From", "কার্যকর তারিখ"),
    "students": ("Students", "শিক্ষার্থী"),
    "passed": ("Passed", "উত্তীর্ণ"),
    "failed": ("Failed", "অনুত্তীর্ণ"),
    "pass_rate": ("Pass Rate", "পাসের হার"),
    "highest": ("Highest", "সর্বোচ্চ"),
    "lowest": ("Lowest", "সর্বনিম্ন"),
    "average": ("Average", "গড়"),
    "teacher_signature": ("Teacher's Signature", "শিক্ষকের স্বাক্ষর"),
    "principal_signature": ("Principal's Signature", "অধ্যক্ষের স্বাক্ষর"),
    "accountant_signature": ("Accountant's Signature", "হিসাবরক্ষকের স্বাক্ষর"),
    "remarks": ("Remarks", "মন্তব্য"),
    "previous_due": ("Previous Due", "পূর্বের বকেয়া"),
    "late_fee": ("Late Fee", "বিলম্ব ফি"),
    "gpa": ("GPA", "জিপিএ"),
    "important_note": ("Important", "বিশেষ দ্রষ্টব্য"),
}


def label(key: str, language: str = "en") -> str:
    english, bengali = LABELS.get(key, (key, key))
    if language == "bn":
        return bengali
    if language == "both":
        return f"{english} / {bengali}"
    return english
