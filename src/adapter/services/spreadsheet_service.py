"""openpyxl Spreadsheet Service Implementation

Renders tabular exports to .xlsx workbooks.
"""

from io import BytesIO
from typing import List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from src.app.services.spreadsheet_service import SpreadsheetService

# Excel rejects sheet titles longer than 31 characters
MAX_SHEET_TITLE = 31


class OpenpyxlSpreadsheetService(SpreadsheetService):
    """
    openpyxl implementation of SpreadsheetService

    Writes one worksheet: a bold header row, then the data rows as text.
    Column widths follow the longest value in each column.
    """

    def render_workbook(
        self,
        sheet_title: str,
        headers: List[str],
        rows: Sequence[Sequence[str]],
    ) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = (sheet_title or "Sheet1")[:MAX_SHEET_TITLE]

        ws.append(list(headers))
        for cell in ws[1]:
            cell.font = Font(bold=True)

        for row in rows:
            ws.append(list(row))

        for index, header in enumerate(headers, start=1):
            width = max(
                [len(str(header))] + [len(str(row[index - 1])) for row in rows if len(row) >= index]
            )
            ws.column_dimensions[get_column_letter(index)].width = width + 2

        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()
