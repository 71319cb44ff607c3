from datetime import datetime

import pytest
from openpyxl import Workbook

STUDENT_ROWS = [
    (1, "Ann Lee", 91.5, datetime(2020, 1, 5)),
    (2, "Bo Chen", 78, datetime(2020, 2, 11)),
    (3, "Cy Park", 88.25, datetime(2021, 9, 1)),
]


@pytest.fixture
def workbook() -> Workbook:
    """Roster sheet: students in rows 2-4, a section title in F1, terms in H1:I2."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Roster"
    ws.append(["Roll", "Name", "Score", "Enrolled"])
    for row in STUDENT_ROWS:
        ws.append(list(row))
    ws["F1"] = "Grade 10"
    ws["H1"] = "Spring"
    ws["H2"] = 12
    ws["I1"] = "Fall"
    ws["I2"] = 14
    return wb


@pytest.fixture
def sheet(workbook):
    return workbook["Roster"]
