"""Result-sheet ranking and grading."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from .bilingual import to_ascii_digits
from .totals import parse_amount

# lower bound -> letter grade, checked from the top
GRADE_SCALE = (
    (80.0, "A+"),
    (70.0, "A"),
    (60.0, "A-"),
    (50.0, "B"),
    (40.0, "C"),
    (33.0, "D"),
)
GRADE_POINTS = {
    "A+": 5.00,
    "A": 4.00,
    "A-": 3.50,
    "B": 3.00,
    "C": 2.00,
    "D": 1.00,
    "F": 0.00,
}
GRADES = tuple(GRADE_POINTS)

FULL_MARKS = 100
PASSING_MARKS = 33

_NUMERIC_ROLL = re.compile(r"^\d+(?:\.\d+)?$")


def grade_for(marks: float) -> str:
    for lower, grade in GRADE_SCALE:
        if marks >= lower:
            return grade
    return "F"


def grade_point_for(grade: str) -> float:
    return GRADE_POINTS.get(grade, 0.0)


@dataclass(frozen=True)
class RankedStudent:
    roll: str
    name: str
    marks: float
    grade: str
    position: int


@dataclass
class ResultStatistics:
    total: int = 0
    passed: int = 0
    failed: int = 0
    pass_percentage: float = 0.0
    highest: float = 0.0
    lowest: float = 0.0
    average: float = 0.0
    full_marks: float = FULL_MARKS
    passing_marks: float = PASSING_MARKS
    grade_distribution: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(GRADES, 0))


def roll_key(roll: str):
    """Numeric rolls sort by value and come before free-text rolls."""
    text = to_ascii_digits(str(roll)).strip()
    if _NUMERIC_ROLL.match(text):
        return (0, float(text), "")
    return (1, 0.0, text)


def rank_students(students: Iterable[Any]) -> List[RankedStudent]:
    """Rank by marks with shared positions for ties, returned in roll order.

    Positions follow standard competition ranking: ``[85, 85, 70]`` gives
    ``[1, 1, 3]``. The grade of each student depends on the marks only.
    """
    scored = [
        (index, str(s.roll), s.name, parse_amount(s.marks))
        for index, s in enumerate(students)
    ]
    by_marks = sorted(scored, key=lambda s: s[3], reverse=True)

    ranked = []
    position = 0
    previous = None
    for place, (index, roll, name, marks) in enumerate(by_marks, start=1):
        if marks != previous:
            position = place
            previous = marks
        ranked.append((index, RankedStudent(roll, name, marks, grade_for(marks), position)))

    ranked.sort(key=lambda pair: (roll_key(pair[1].roll), pair[0]))
    return [student for _, student in ranked]


def result_statistics(
    students: Sequence[Any], full_marks: float = FULL_MARKS, passing_marks: float = PASSING_MARKS
) -> ResultStatistics:
    stats = ResultStatistics(full_marks=full_marks, passing_marks=passing_marks)
    if not students:
        return stats

    marks = [parse_amount(s.marks) for s in students]
    stats.total = len(marks)
    stats.passed = sum(1 for m in marks if m >= passing_marks)
    stats.failed = stats.total - stats.passed
    stats.pass_percentage = round(stats.passed / stats.total * 100, 2)
    stats.highest = max(marks)
    stats.lowest = min(marks)
    stats.average = round(sum(marks) / stats.total, 2)
    for m in marks:
        stats.grade_distribution[grade_for(m)] += 1
    return stats


@dataclass(frozen=True)
class SubjectResult:
    name: str
    code: str
    full_marks: float
    passing_marks: float
    obtained_marks: float
    percentage: float
    grade: str
    grade_point: float
    passed: bool


@dataclass
class MarksheetResult:
    subjects: List[SubjectResult]
    total_full_marks: float
    total_obtained_marks: float
    percentage: float
    grade: str
    gpa: float


def marksheet_results(subjects: Iterable[Any]) -> MarksheetResult:
    """Per-subject grades plus overall percentage, grade and GPA.

    A failed subject brings the GPA down to 0.00.
    """
    rows = []
    for subject in subjects:
        full = parse_amount(subject.full_marks)
        passing = parse_amount(subject.passing_marks)
        obtained = parse_amount(subject.obtained_marks)
        percentage = round(obtained / full * 100, 2) if full > 0 else 0.0
        grade = grade_for(percentage)
        rows.append(
            SubjectResult(
                name=subject.name,
                code=subject.code or "",
                full_marks=full,
                passing_marks=passing,
                obtained_marks=obtained,
                percentage=percentage,
                grade=grade,
                grade_point=grade_point_for(grade),
                passed=obtained >= passing,
            )
        )

    total_full = sum(r.full_marks for r in rows)
    total_obtained = sum(r.obtained_marks for r in rows)
    percentage = round(total_obtained / total_full * 100, 2) if total_full > 0 else 0.0
    if rows and all(r.passed for r in rows):
        gpa = round(sum(r.grade_point for r in rows) / len(rows), 2)
    else:
        gpa = 0.0
    return MarksheetResult(
        subjects=rows,
        total_full_marks=total_full,
        total_obtained_marks=total_obtained,
        percentage=percentage,
        grade=grade_for(percentage),
        gpa=gpa,
    )
