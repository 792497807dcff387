"""
Schemas for the school desk API (pydantic models)

Request bodies arrive with the camelCase keys the web client sends; every
request model also accepts the snake_case field names. Row models describe the
hosted tables; the table name is noted on each.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FormModel(CamelModel):
    """Document form fields; numbers typed into text inputs stay strings."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )


# ----------------------- Users -----------------------
Role = Literal["admin", "teacher", "student", "parent"]


# table: users
class User(BaseModel):
    """Row written to the users table on registration."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    password_hash: str = Field(..., description="bcrypt hash, never the plain password")
    role: Role = "student"
    avatar_url: Optional[str] = None
    is_active: bool = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = "student"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class PublicUser(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: str
    avatar_url: Optional[str] = None


# ----------------------- Template settings -----------------------
class TemplateSettings(FormModel):
    layout: Literal["1", "2", "4", "9"] = "1"
    language: Literal["en", "bn", "both"] = "en"
    template: str = "standard"
    orientation: Literal["portrait", "landscape"] = "portrait"
    include_logo: bool = True
    include_signature: bool = True
    include_qr_code: bool = Field(False, alias="includeQRCode")
    include_watermark: bool = False
    include_statistics: bool = True


class DocumentRequest(CamelModel):
    draft: Dict[str, Any]
    settings: TemplateSettings = Field(default_factory=TemplateSettings)


class GenerateRequest(CamelModel):
    document_type: str
    document_data: Dict[str, Any] = Field(default_factory=dict)


# ----------------------- Document forms -----------------------
class FeeItem(FormModel):
    description: str = Field(min_length=1)
    description_bn: str = ""
    amount: str = "0"
    category: str = "tuition"


class FeeReceiptForm(FormModel):
    receipt_no: str = Field(min_length=1)
    student_name: str = Field(min_length=2)
    student_name_bn: Optional[str] = None
    father_name: Optional[str] = None
    student_id: Optional[str] = None
    class_name: str = Field(min_length=1)
    section: Optional[str] = None
    roll_number: str = Field(min_length=1)
    academic_year: str = Field(min_length=1)
    month: Optional[str] = None
    payment_date: str = Field(min_length=1)
    payment_method: str = "cash"
    guardian_name: Optional[str] = None
    phone_number: Optional[str] = None
    discount: str = "0"
    previous_due: str = "0"
    late_fee: str = "0"
    paid_amount: Optional[str] = None
    remarks: Optional[str] = None


class Subject(FormModel):
    name: str = Field(min_length=1)
    code: Optional[str] = None
    full_marks: str = "100"
    passing_marks: str = "33"
    obtained_marks: str = "0"


class MarksheetForm(FormModel):
    student_name: str = Field(min_length=2)
    student_name_bn: Optional[str] = None
    father_name: str = Field(min_length=2)
    mother_name: str = Field(min_length=2)
    date_of_birth: Optional[str] = None
    class_name: str = Field(min_length=1)
    section: Optional[str] = None
    roll_number: str = Field(min_length=1)
    registration_number: Optional[str] = None
    exam_name: str = Field(min_length=1)
    exam_year: str = Field(min_length=1)
    institution: str = Field(min_length=1)
    issue_date: Optional[str] = None
    remarks: Optional[str] = None


class Attachment(FormModel):
    name: str = Field(min_length=1)
    type: str = ""
    size: str = ""


class NoticeForm(FormModel):
    title: str = Field(min_length=2)
    title_in_bangla: Optional[str] = None
    notice_type: str = Field(min_length=1)
    issue_date: str = Field(min_length=1)
    reference_number: Optional[str] = None
    school_name: str = Field(min_length=1)
    school_name_in_bangla: Optional[str] = None
    principal_name: str = Field(min_length=1)
    content: str = Field(min_length=10)
    content_in_bangla: Optional[str] = None
    target_audience: str = Field(min_length=1)
    important_note: Optional[str] = None


class PaySheetForm(FormModel):
    employee_name: str = Field(min_length=2)
    employee_name_bn: Optional[str] = None
    employee_id: str = Field(min_length=1)
    position: str = Field(min_length=1)
    department: Optional[str] = None
    month_year: str = Field(min_length=1)
    basic_salary: str = Field(min_length=1)
    house_rent: str = "0"
    medical_allowance: str = "0"
    transport_allowance: str = "0"
    performance_bonus: str = "0"
    overtime_amount: str = "0"
    other_allowances: str = "0"
    income_tax: str = "0"
    provident_fund: str = "0"
    loan_repayment: str = "0"
    absent_deduction: str = "0"
    other_deductions: str = "0"
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    payment_method: str = "cash"


class StudentResult(FormModel):
    roll: str = Field(min_length=1)
    name: str = Field(min_length=2)
    marks: str = "0"


class ResultSheetForm(FormModel):
    class_name: str = Field(min_length=1)
    section: Optional[str] = None
    exam_name: str = Field(min_length=1)
    exam_year: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    subject_code: Optional[str] = None
    teacher_name: str = Field(min_length=1)
    department: Optional[str] = None
    full_marks: str = "100"
    passing_marks: str = "33"
    publication_date: Optional[str] = None
    remarks: Optional[str] = None


class Period(FormModel):
    day: str = Field(min_length=1)
    period: str = Field(min_length=1)
    time: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    class_name: str = Field(min_length=1)
    section: Optional[str] = None
    room: Optional[str] = None


class TeacherRoutineForm(FormModel):
    teacher_name: str = Field(min_length=2)
    teacher_name_bn: Optional[str] = None
    designation: str = Field(min_length=1)
    department: str = Field(min_length=1)
    employee_id: Optional[str] = None
    academic_year: str = Field(min_length=1)
    semester: Optional[str] = None
    institution: str = Field(min_length=1)
    effective_from: str = Field(min_length=1)
    remarks: Optional[str] = None


# ----------------------- Meetings -----------------------
# table: video_conferences
class MeetingCreate(CamelModel):
    title: str
    title_bn: Optional[str] = None
    description: Optional[str] = None
    description_bn: Optional[str] = None
    meeting_type: str = "class"
    scheduled_time: Optional[str] = None
    duration: int = 60
    max_participants: Optional[int] = None


class StatusUpdate(CamelModel):
    status: str


class VideoConferenceCreate(CamelModel):
    name: str
    name_bn: Optional[str] = None
    subject: Optional[str] = None
    host: Optional[str] = None
    start_time: Optional[str] = None
    max_participants: Optional[int] = None


class VideoConferenceStatus(CamelModel):
    status: str
    is_recording: Optional[bool] = None


# ----------------------- Notifications -----------------------
# tables: notifications, enhanced_notifications
NotificationType = Literal["success", "warning", "error", "info", "urgent"]
NotificationPriority = Literal["low", "medium", "high", "urgent"]


class NotificationCreate(CamelModel):
    title: str = Field(min_length=1)
    title_bn: Optional[str] = None
    message: str = Field(min_length=1)
    message_bn: Optional[str] = None
    type: NotificationType
    priority: NotificationPriority
    category: Optional[str] = None
    category_bn: Optional[str] = None
    recipient_id: Optional[int] = None
    action_required: bool = False


class NotificationSend(CamelModel):
    title: str
    title_bn: Optional[str] = None
    message: str
    message_bn: Optional[str] = None
    type: NotificationType = "info"
    priority: NotificationPriority = "medium"
    category: str = "General"
    category_bn: str = "সাধারণ"
    is_live: bool = False
    action_required: bool = False
    sender: str = "System"


class NotificationIds(CamelModel):
    notification_ids: Optional[List[int]] = None


class EnhancedNotificationCreate(CamelModel):
    title: str
    title_bn: Optional[str] = None
    message: str
    message_bn: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    user_id: Optional[int] = None


# ----------------------- Payments -----------------------
# table: payment_transactions
class PaymentProcessRequest(CamelModel):
    method: str = Field(min_length=1)
    amount: float = Field(gt=0)
    phone_number: Optional[str] = None
    fee_ids: List[int] = Field(min_length=1)
    user_id: int


class PaymentCreate(CamelModel):
    amount: float
    payment_method: str
    payer_name: Optional[str] = None
    payer_phone: Optional[str] = None
    description: Optional[str] = None
    description_bn: Optional[str] = None
    student_id: Optional[int] = None


# ----------------------- Templates -----------------------
# table: document_templates
class TemplateCreate(CamelModel):
    name: str
    name_bn: Optional[str] = None
    type: str
    description: Optional[str] = None
    description_bn: Optional[str] = None
    category: Optional[str] = None
    category_bn: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    created_by: Optional[int] = None
    tags: Optional[List[str]] = None


class FavoriteUpdate(CamelModel):
    is_favorite: bool


class DashboardTemplateCreate(CamelModel):
    name: str
    name_bn: Optional[str] = None
    type: str
    category: Optional[str] = None
    description: Optional[str] = None
    description_bn: Optional[str] = None
    icon: Optional[str] = None
    credits_required: Optional[int] = None
    difficulty: Optional[str] = None
    estimated_time: Optional[str] = None


class DashboardTemplateUpdate(CamelModel):
    name: Optional[str] = None
    name_bn: Optional[str] = None
    description: Optional[str] = None
    description_bn: Optional[str] = None
    is_active: Optional[bool] = None
    is_popular: Optional[bool] = None
    credits_required: Optional[int] = None


# ----------------------- Academic terms -----------------------
# table: academic_terms
class AcademicTermCreate(CamelModel):
    name: str
    name_bn: Optional[str] = None
    academic_year_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None
    description_bn: Optional[str] = None


class AcademicTermUpdate(CamelModel):
    name: Optional[str] = None
    name_bn: Optional[str] = None
    academic_year_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None
    description_bn: Optional[str] = None
    status: Optional[str] = None


# ----------------------- School settings -----------------------
# table: school_settings
class SchoolInfo(CamelModel):
    name: Optional[str] = None
    name_in_bangla: Optional[str] = None
    address: Optional[str] = None
    address_in_bangla: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    school_type: Optional[str] = None
    establishment_year: Optional[int] = None
    principal_name: Optional[str] = None
    eiin: Optional[str] = None


class SchoolBranding(CamelModel):
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    motto: Optional[str] = None
    motto_bn: Optional[str] = None
    use_watermark: Optional[bool] = None
    use_letterhead: Optional[bool] = None


class SchoolSettingsUpdate(SchoolInfo, SchoolBranding):
    timezone: Optional[str] = None
    language: Optional[str] = None
    date_format: Optional[str] = None
    currency: Optional[str] = None
    academic_year_start: Optional[str] = None
    week_starts_on: Optional[str] = None
    enable_notifications: Optional[bool] = None
    enable_sms: Optional[bool] = Field(None, alias="enableSMS")
    enable_email: Optional[bool] = None
    auto_backup: Optional[bool] = None
    data_retention: Optional[int] = None
    max_students: Optional[int] = None
    max_teachers: Optional[int] = None
    allow_online_payments: Optional[bool] = None
