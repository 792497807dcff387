"""Shared fixtures: an in-memory stand-in for the Supabase table API."""
import copy
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from schooldesk.auth import get_current_user
from schooldesk.database import get_db
from schooldesk.main import app


class InsertFailed(Exception):
    pass


def _same(left, right):
    # PostgREST filters travel as text, so 1 and "1" match
    return str(left) == str(right)


def _order_key(value):
    return (0, "") if value is None else (1, value)


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.orders = []
        self.row_limit = None

    # builders
    def select(self, *columns, **kwargs):
        return self

    def insert(self, payload, **kwargs):
        self.op, self.payload = "insert", payload
        return self

    def upsert(self, payload, **kwargs):
        self.op, self.payload = "upsert", payload
        return self

    def update(self, payload, **kwargs):
        self.op, self.payload = "update", payload
        return self

    def delete(self, **kwargs):
        self.op = "delete"
        return self

    # filters
    def eq(self, column, value):
        self.filters.append(("eq", column, value, lambda row: _same(row.get(column), value)))
        return self

    def neq(self, column, value):
        self.filters.append(("neq", column, value, lambda row: not _same(row.get(column), value)))
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(
            ("in", column, values, lambda row: any(_same(row.get(column), v) for v in values))
        )
        return self

    def gte(self, column, value):
        self.filters.append(("gte", column, value, lambda row: row.get(column) is not None and row.get(column) >= value))
        return self

    def order(self, column, desc=False, **kwargs):
        self.orders.append((column, desc))
        return self

    def limit(self, count, **kwargs):
        self.row_limit = count
        return self

    def _matches(self, row):
        return all(check(row) for _, _, _, check in self.filters)

    def execute(self):
        self.db.statements.append(
            (self.table, self.op, [(kind, column, value) for kind, column, value, _ in self.filters])
        )
        rows = self.db.tables.setdefault(self.table, [])

        if self.op in ("insert", "upsert"):
            if self.table in self.db.fail_on_insert:
                raise InsertFailed(self.table)
            records = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.db.add(self.table, record) for record in records]
            return SimpleNamespace(data=copy.deepcopy(created))

        matched = [row for row in rows if self._matches(row)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=copy.deepcopy(matched))

        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=copy.deepcopy(matched))

        for column, desc in reversed(self.orders):
            matched.sort(key=lambda row: _order_key(row.get(column)), reverse=desc)
        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        return SimpleNamespace(data=copy.deepcopy(matched))


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.statements = []
        self.fail_on_insert = set()
        self._ids = {}
        self._clock = datetime(2025, 1, 5, 8, 0, tzinfo=timezone.utc)

    def table(self, name):
        return FakeQuery(self, name)

    def from_(self, name):
        return self.table(name)

    def add(self, table, record):
        """Store ``record`` with a generated id and created_at, as Postgres defaults would."""
        row = dict(record)
        if row.get("id") is None:
            self._ids[table] = self._ids.get(table, 0) + 1
            row["id"] = self._ids[table]
        if "created_at" not in row:
            self._clock += timedelta(minutes=1)
            row["created_at"] = self._clock.isoformat()
        self.tables.setdefault(table, []).append(row)
        return row

    def seed(self, table, *records):
        return [self.add(table, record) for record in records]

    def writes(self):
        return [s for s in self.statements if s[1] != "select"]


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return db.add(
        "users",
        {
            "name": "Rahim Uddin",
            "email": "rahim@school.edu.bd",
            "password_hash": "not-used",
            "role": "admin",
            "is_active": True,
        },
    )


@pytest.fixture
def auth_client(client, user):
    app.dependency_overrides[get_current_user] = lambda: user
    return client


@pytest.fixture
def sample_drafts():
    """One valid draft payload per document type, keyed as the web client sends them."""
    return {
        "fee-receipts": {
            "receiptNo": "FR 2025 001",
            "studentName": "Nusrat Jahan",
            "studentNameBn": "নুসরাত জাহান",
            "studentId": "S-1024",
            "className": "Class 8",
            "section": "A",
            "rollNumber": "12",
            "academicYear": "2025",
            "month": "January",
            "paymentDate": "2025-01-10",
            "paymentMethod": "cash",
            "discount": "500",
            "feeItems": [
                {"description": "Tuition Fee", "descriptionBn": "বেতন", "amount": "3000", "category": "tuition"},
                {"description": "Exam Fee", "descriptionBn": "পরীক্ষা ফি", "amount": "1,000", "category": "exam"},
            ],
        },
        "marksheets": {
            "studentName": "Arif Hossain",
            "fatherName": "Kamal Hossain",
            "motherName": "Rokeya Begum",
            "className": "Class 9",
            "rollNumber": "7",
            "examName": "Annual Examination",
            "examYear": "2024",
            "institution": "Dhaka Model School",
            "subjects": [
                {"name": "Bangla", "code": "101", "fullMarks": "100", "passingMarks": "33", "obtainedMarks": "78"},
                {"name": "Mathematics", "code": "109", "fullMarks": "100", "passingMarks": "33", "obtainedMarks": "91"},
            ],
        },
        "notices": {
            "title": "Winter Vacation",
            "titleInBangla": "শীতকালীন ছুটি",
            "noticeType": "holiday",
            "issueDate": "2024-12-20",
            "referenceNumber": "DMS-45",
            "schoolName": "Dhaka Model School",
            "principalName": "Dr. Selina Akter",
            "content": "The school will remain closed from 25 December to 31 December.",
            "targetAudience": "all",
            "attachments": [],
        },
        "pay-sheets": {
            "employeeName": "Mahmudul Hasan",
            "employeeId": "T-17",
            "position": "Senior Teacher",
            "department": "Science",
            "monthYear": "January 2025",
            "basicSalary": "25000",
            "houseRent": "10000",
            "medicalAllowance": "1500",
            "incomeTax": "1200",
            "providentFund": "2500",
        },
        "result-sheets": {
            "className": "Class 10",
            "section": "B",
            "examName": "Half Yearly",
            "examYear": "2025",
            "subject": "Physics",
            "teacherName": "Shahana Parvin",
            "fullMarks": "100",
            "passingMarks": "33",
            "students": [
                {"roll": "3", "name": "Tanvir", "marks": "72"},
                {"roll": "1", "name": "Sadia", "marks": "88"},
                {"roll": "2", "name": "Imran", "marks": "88"},
                {"roll": "4", "name": "Lamia", "marks": "25"},
            ],
        },
        "teacher-routines": {
            "teacherName": "Farhana Islam",
            "designation": "Assistant Teacher",
            "department": "English",
            "academicYear": "2025",
            "institution": "Dhaka Model School",
            "effectiveFrom": "2025-01-01",
            "periods": [
                {"day": "Sunday", "period": "3", "time": "10:00", "subject": "English", "className": "Class 7"},
                {"day": "Monday", "period": "1", "time": "08:00", "subject": "English", "className": "Class 6"},
                {"day": "Sunday", "period": "1", "time": "08:00", "subject": "English", "className": "Class 8", "section": "A"},
            ],
        },
    }
