"""Spreadsheet rendering of student reports."""
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
STRIPE_FILL = PatternFill(start_color="F2F2F2", end_color="F2F2F2", fill_type="solid")
HEADER_FONT = Font(name='Arial', size=12, bold=True, color="FFFFFF")
LABEL_FONT = Font(name='Arial', size=11, bold=True)
CELL_FONT = Font(name='Arial', size=11)
CENTERED = Alignment(horizontal='center', vertical='center', wrap_text=True)
THIN = Side(style='thin')
BOX = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)

# (header, column width)
GRADE_REPORT_COLUMNS = (
    ("Session", 20),
    ("Course Code", 14),
    ("Course Name", 30),
    ("Credits", 10),
    ("Attendance", 12),
    ("Assignment", 12),
    ("Mid Exam", 12),
    ("Final Exam", 12),
    ("Total", 10),
    ("Grade", 8),
    ("Comment", 10),
)


def build_report_workbook(title, columns, rows, details=()):
    """Render a report sheet and return it as an in-memory ``.xlsx`` stream.

    ``details`` are ``(label, value)`` pairs written above the table, one per
    row. ``columns`` are ``(header, width)`` pairs; the header row is frozen
    so it stays visible while scrolling through ``rows``.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    for row_num, (label, value) in enumerate(details, 1):
        ws.cell(row=row_num, column=1, value=label).font = LABEL_FONT
        ws.cell(row=row_num, column=2, value=value).font = CELL_FONT

    header_row = len(details) + 2 if details else 1
    for col_num, (header, width) in enumerate(columns, 1):
        cell = ws.cell(row=header_row, column=col_num, value=header)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = CENTERED
        cell.border = BOX
        ws.column_dimensions[get_column_letter(col_num)].width = width

    for offset, values in enumerate(rows, 1):
        for col_num, value in enumerate(values, 1):
            cell = ws.cell(row=header_row + offset, column=col_num, value=value)
            cell.font = CELL_FONT
            cell.alignment = CENTERED
            cell.border = BOX
            if offset % 2 == 0:
                cell.fill = STRIPE_FILL

    ws.freeze_panes = ws.cell(row=header_row + 1, column=1)

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output


def _score(value):
    return round(value, 2) if value is not None else ""


def _grade_report_row(assessment):
    course = assessment.course
    session = assessment.session
    return [
        session.name if session else "",
        course.code,
        course.name,
        course.credits,
        _score(assessment.attendance),
        _score(assessment.assignment),
        _score(assessment.mid_exam),
        _score(assessment.final_exam),
        _score(assessment.total_score),
        assessment.grade or "",
        assessment.grade_comment or "",
    ]


def export_grade_report_to_excel(student, assessments, gpa):
    details = (
        ("Student", student.full_name or student.email),
        ("Student ID", student.student_id or ""),
        ("GPA", round(gpa, 2)),
    )
    rows = [_grade_report_row(a) for a in assessments]
    return build_report_workbook("Grade Report", GRADE_REPORT_COLUMNS, rows, details)
