"""Excel export of scan reports."""
import re
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from lasttx.models.report import ScanReport
from lasttx.utils.errors import ReportWriteError

HEADERS = ["Wallet Address", "Last Transaction Time (Local)", "Transaction Hash"]
COLUMN_WIDTHS = {"A": 45, "B": 25, "C": 70}
MAX_SHEET_TITLE = 31
FORBIDDEN_TITLE_CHARS = re.compile(r"[:\\/?*\[\]]")


def sheet_title(chain: str) -> str:
    """Excel sheet title for a chain: forbidden characters replaced, length capped."""
    title = FORBIDDEN_TITLE_CHARS.sub("_", chain).strip("'")[:MAX_SHEET_TITLE]
    return title or "chain"


def build_workbook(report: ScanReport) -> Workbook:
    """
    Build a workbook with one sheet per chain.
    
    Sheets follow the report's chain order; chains without rows get no sheet.
    """
    wb = Workbook()
    
    # Remove default sheet
    if "Sheet" in wb.sheetnames:
        wb.remove(wb["Sheet"])
    
    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")
    
    for chain, rows in report.sections.items():
        if not rows:
            continue
        ws = wb.create_sheet(sheet_title(chain))
        ws.append(HEADERS)
        for cell in ws[1]:
            cell.fill = header_fill
            cell.font = header_font
            cell.alignment = Alignment(horizontal="center")
        
        for column, width in COLUMN_WIDTHS.items():
            ws.column_dimensions[column].width = width
        
        for record in rows:
            ws.append([record.address, record.tx_time, record.tx_hash])
    
    # openpyxl refuses to save a workbook without sheets
    if not wb.sheetnames:
        wb.create_sheet("Empty")
    return wb


def report_to_bytes(report: ScanReport) -> BytesIO:
    output = BytesIO()
    build_workbook(report).save(output)
    output.seek(0)
    return output


def write_report(report: ScanReport, path: str) -> Path:
    """
    Save the report workbook to ``path``.
    
    Raises:
        ReportWriteError: If the file cannot be written
    """
    target = Path(path)
    try:
        if target.parent and not target.parent.exists():
            target.parent.mkdir(parents=True)
        build_workbook(report).save(target)
    except (OSError, ValueError) as e:
        raise ReportWriteError(f"Cannot write report to {target}: {e}") from e
    return target
