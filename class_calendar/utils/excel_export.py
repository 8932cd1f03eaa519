from io import BytesIO
from typing import Iterable

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment

from class_calendar.utils.csv_export import CSV_HEADERS, enrollment_row


def enrollments_to_xlsx_bytes(records: Iterable, sheet_name: str = "Enrollments") -> bytes:
    """
    Same columns as the CSV export, one sheet.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    records = list(records)
    if not records:
        ws.append(["No data"])
        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()

    ws.append(CSV_HEADERS)

    header_font = Font(bold=True)
    for col_idx in range(1, len(CSV_HEADERS) + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for r in records:
        ws.append(enrollment_row(r))

    # autosize columns
    for col_idx, h in enumerate(CSV_HEADERS, start=1):
        max_len = len(h)
        for row_idx in range(2, ws.max_row + 1):
            v = ws.cell(row=row_idx, column=col_idx).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
