"""Command-line entry point: wallet file in, Excel report out."""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from lasttx.config import QueryMode, Settings
from lasttx.services.report_writer import write_report
from lasttx.services.scanner import run_scan
from lasttx.services.wallet_source import load_wallet_addresses
from lasttx.utils.errors import LastTxError

logger = logging.getLogger("lasttx")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lasttx",
        description="Find the most recent transaction of each wallet on each chain.",
    )
    parser.add_argument("--wallets", help="wallet file (.csv with a header row, or one entry per line)")
    parser.add_argument("--output", help="report workbook path")
    parser.add_argument("--chains", help="comma-separated target chains")
    parser.add_argument("--mode", choices=[m.value for m in QueryMode], help="query mode")
    parser.add_argument("--concurrency", type=int, help="maximum wallets queried at once")
    parser.add_argument("--timeout", type=float, help="per-request timeout in seconds")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.wallets:
        if args.wallets.lower().endswith(".csv"):
            overrides["wallet_csv_file"] = args.wallets
            overrides["wallet_txt_file"] = ""
        else:
            overrides["wallet_csv_file"] = ""
            overrides["wallet_txt_file"] = args.wallets
    if args.output:
        overrides["output_file"] = args.output
    if args.chains:
        overrides["target_chains"] = args.chains
    if args.mode:
        overrides["query_mode"] = args.mode
    if args.concurrency is not None:
        overrides["concurrency"] = args.concurrency
    if args.timeout is not None:
        overrides["request_timeout_seconds"] = args.timeout
    return settings.model_copy(update=overrides)


def log_configuration(settings: Settings) -> None:
    if settings.ankr_api_key:
        logger.info("Loaded ANKR_API_KEY (%s)", settings.masked_api_key())
    else:
        logger.warning("ANKR_API_KEY is not set; using the public endpoint %s", settings.ankr_rpc_base)
        logger.warning("Set it in .env (ANKR_API_KEY=your_api_key) or in the environment")
    logger.info("Concurrency: %d", settings.concurrency)
    logger.info("Query mode: %s", settings.mode().value)
    logger.info("Target chains: %s", ", ".join(settings.chain_list()))


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(settings or Settings(), args)
    
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    log_configuration(settings)
    
    try:
        addresses = load_wallet_addresses(settings.wallet_csv_file, settings.wallet_txt_file)
        report = asyncio.run(run_scan(settings, addresses))
        path = write_report(report, settings.output_file)
    except LastTxError as e:
        logger.error("%s", e)
        return 1
    
    logger.info("Done. Results saved to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
