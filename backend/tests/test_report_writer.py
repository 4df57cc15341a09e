from openpyxl import load_workbook
import pytest

from lasttx.config import QueryMode
from lasttx.models.report import ScanReport
from lasttx.models.result import ResultRecord, ResultStatus
from lasttx.services import report_writer
from lasttx.services.report_writer import HEADERS, build_workbook, report_to_bytes, sheet_title, write_report
from lasttx.utils.errors import ReportWriteError


def _report():
    return ScanReport(
        mode=QueryMode.MULTI,
        chains=["eth", "bsc", "polygon"],
        address_count=2,
        sections={
            "eth": [
                ResultRecord.found("0x01", "eth", "0xe1", "2020-09-13 12:26"),
                ResultRecord.sentinel("0x02", "eth", ResultStatus.NETWORK_ERROR),
            ],
            "bsc": [
                ResultRecord.sentinel("0x01", "bsc", ResultStatus.NO_TRANSACTION),
                ResultRecord.sentinel("0x02", "bsc", ResultStatus.NO_TRANSACTION),
            ],
            "polygon": [],
        },
    )


def test_one_sheet_per_chain_with_rows():
    wb = build_workbook(_report())
    assert wb.sheetnames == ["eth", "bsc"]

    ws = wb["eth"]
    assert [cell.value for cell in ws[1]] == HEADERS
    assert [cell.value for cell in ws[2]] == ["0x01", "2020-09-13 12:26", "0xe1"]
    assert [cell.value for cell in ws[3]] == ["0x02", "N/A", "Network error"]
    assert ws.column_dimensions["A"].width == 45
    assert ws.column_dimensions["C"].width == 70


def test_write_report_round_trips_through_file(tmp_path):
    path = write_report(_report(), str(tmp_path / "out" / "report.xlsx"))
    wb = load_workbook(path)
    assert wb.sheetnames == ["eth", "bsc"]
    assert wb["bsc"].max_row == 3


def test_empty_report_still_saves():
    report = ScanReport(mode=QueryMode.SINGLE, chains=["eth"], address_count=0, sections={"eth": []})
    assert report_to_bytes(report).getvalue()[:2] == b"PK"


def test_unwritable_path_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(ReportWriteError):
        write_report(_report(), str(blocker / "report.xlsx"))


def test_chain_names_are_made_valid_sheet_titles(tmp_path):
    report = ScanReport(
        mode=QueryMode.MULTI,
        chains=["eth:main/test"],
        address_count=1,
        sections={"eth:main/test": [ResultRecord.sentinel("0x01", "eth:main/test", ResultStatus.TIMEOUT)]},
    )

    path = write_report(report, str(tmp_path / "report.xlsx"))

    assert load_workbook(path).sheetnames == ["eth_main_test"]


def test_sheet_title_limits():
    assert sheet_title("a" * 40) == "a" * 31
    assert sheet_title("[?*]") == "____"
    assert sheet_title("''") == "chain"


def test_invalid_sheet_title_becomes_write_error(monkeypatch, tmp_path):
    monkeypatch.setattr(report_writer, "sheet_title", lambda chain: "bad/title")
    with pytest.raises(ReportWriteError):
        write_report(_report(), str(tmp_path / "report.xlsx"))
