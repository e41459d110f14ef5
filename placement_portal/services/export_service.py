"""
Roster Export Service - student records to an Excel workbook.

The workbook is written to an in-memory buffer owned by the caller's
request, so concurrent downloads never share a file on disk.
"""

from io import BytesIO
from typing import Iterable, List

import pandas as pd

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_NAME = "Students"

# (column header, student document field). The password is never exported.
ROSTER_COLUMNS = [
    ("Email", "email"),
    ("Roll", "roll"),
    ("Name", "name"),
    ("Age", "age"),
    ("College", "college"),
    ("PlacementStatus", "placementStatus"),
    ("GraduationCGPA", "graduation"),
    ("PostGraduationCGPA", "pgraduation"),
    ("Certification", "experience"),
    ("PhoneNumber", "phoneNumber"),
    ("PlaceOfBirth", "placeOfBirth"),
    ("TenthPercentage", "tenthPercentage"),
    ("TwelfthPercentage", "twelfthPercentage"),
]

ROSTER_HEADERS = [header for header, _ in ROSTER_COLUMNS]


def build_roster_rows(students: Iterable[dict]) -> List[dict]:
    """One row per student, keyed by column header."""
    return [
        {header: student.get(field) for header, field in ROSTER_COLUMNS}
        for student in students
    ]


def build_roster_workbook(students: Iterable[dict]) -> bytes:
    """
    Build a one-sheet .xlsx workbook from student documents.

    Returns:
        The workbook file contents
    """
    df = pd.DataFrame(build_roster_rows(students), columns=ROSTER_HEADERS)
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
    return output.getvalue()
