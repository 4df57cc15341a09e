from openpyxl import load_workbook

from lasttx import cli
from lasttx.config import QueryMode
from lasttx.models.report import ScanReport
from lasttx.models.result import ResultRecord, ResultStatus

ADDRESS = "0x" + "2" * 40


def test_overrides_replace_settings(test_settings):
    args = cli.build_parser().parse_args([
        "--wallets", "in.txt", "--chains", "base", "--mode", "single", "--concurrency", "2",
    ])
    settings = cli.apply_overrides(test_settings, args)
    assert settings.wallet_txt_file == "in.txt"
    assert settings.wallet_csv_file == ""
    assert settings.chain_list() == ["base"]
    assert settings.mode() == QueryMode.SINGLE
    assert settings.concurrency == 2


def test_main_writes_report(monkeypatch, tmp_path, test_settings):
    wallets = tmp_path / "wallets.txt"
    wallets.write_text(f"{ADDRESS}\n")
    output = tmp_path / "report.xlsx"
    seen = {}

    async def fake_run_scan(settings, addresses):
        seen["addresses"] = addresses
        return ScanReport(
            mode=settings.mode(),
            chains=settings.chain_list(),
            address_count=len(addresses),
            sections={"eth": [ResultRecord.sentinel(ADDRESS, "eth", ResultStatus.TIMEOUT)]},
        )

    monkeypatch.setattr(cli, "run_scan", fake_run_scan)

    code = cli.main(["--wallets", str(wallets), "--output", str(output), "--chains", "eth"], settings=test_settings)

    assert code == 0
    assert seen["addresses"] == [ADDRESS]
    assert load_workbook(output)["eth"]["C2"].value == "Timeout"


def test_main_fails_without_wallet_file(tmp_path, test_settings):
    code = cli.main(["--wallets", str(tmp_path / "none.csv")], settings=test_settings)
    assert code == 1
