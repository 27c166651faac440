"""GET /api/export — download the saved lines as a cutting plan."""
from __future__ import annotations

import csv
import io
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response, StreamingResponse
from openpyxl import Workbook
from openpyxl.styles import Font

from ..services import workbench
from ..services.line_recorder import SavedLine

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

CSV_HEADER = ["Original length (m)", "Cuts", "Residue (m)"]
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
LENGTH_FORMAT = "0.00"


def format_length(value: float) -> str:
    """Up to two decimals, trailing zeros dropped: 1.50 -> "1.5"."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def format_cuts(cuts) -> str:
    return " | ".join(f"{format_length(c)}m" for c in cuts)


def render_csv(lines: tuple[SavedLine, ...]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    for line in lines:
        writer.writerow([
            f"{line.original:.2f}",
            format_cuts(line.cuts),
            f"{line.residue:.2f}",
        ])
    return output.getvalue()


def render_xlsx(lines: tuple[SavedLine, ...]) -> bytes:
    """One "Plan" sheet: numeric lengths formatted 0.00, cuts as text."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Plan"

    ws.append(CSV_HEADER)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row, line in enumerate(lines, start=2):
        ws.cell(row=row, column=1, value=line.original).number_format = LENGTH_FORMAT
        ws.cell(row=row, column=2, value=format_cuts(line.cuts))
        ws.cell(row=row, column=3, value=line.residue).number_format = LENGTH_FORMAT

    cuts_width = max([12] + [len(format_cuts(line.cuts)) + 2 for line in lines])
    widths = {"A": 20, "B": cuts_width, "C": 14}
    for letter, width in widths.items():
        ws.column_dimensions[letter].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _saved_lines_or_404() -> tuple[SavedLine, ...]:
    lines = workbench.current().saved_lines()
    if not lines:
        raise HTTPException(status_code=404, detail="No saved lines to export")
    return lines


@router.get("/export/csv")
def export_csv() -> StreamingResponse:
    lines = _saved_lines_or_404()

    logger.info(f"Exporting {len(lines)} saved line(s)")
    return StreamingResponse(
        iter([render_csv(lines)]),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="cutting-plan.csv"'},
    )


@router.get("/export/xlsx")
def export_xlsx() -> Response:
    lines = _saved_lines_or_404()

    logger.info(f"Exporting {len(lines)} saved line(s) to xlsx")
    return Response(
        content=render_xlsx(lines),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="cutting-plan.xlsx"'},
    )
