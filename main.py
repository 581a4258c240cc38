import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from config import APP_NAME, STORE_NAME, Config
from models.enums import ReportKey
from models.policy import ReportContext
from services.analytics.contracts import ReportResult
from services.analytics.engine import InventoryAnalyticsEngine
from services.export_service import ExportService
from services.sample_data import demo_products, demo_sales
from services.store_loader import load_store
from utils.decorators import handle_exceptions
from utils.exceptions import AppException
from utils.system.logger import LoggerConfig, logger, setup_logger

FRAME = "+" + "-" * 50 + "+"
BANNER = "+" + "=" * 50 + "+"

MENU_OPTIONS = {
    1: ("All reports", None),
    2: ("Urgent stock alert", ReportKey.URGENT_STOCK),
    3: ("Expiry management", ReportKey.EXPIRY),
    4: ("Today's bestsellers", ReportKey.BESTSELLERS),
    5: ("Sales overview", ReportKey.SALES),
    6: ("Management analysis", ReportKey.MANAGEMENT_ANALYSIS),
    7: ("Overall status", ReportKey.OVERALL_STATUS),
}


def format_report(result: ReportResult) -> List[str]:
    return ["", FRAME, f"  {result.title}", FRAME, *[f"  {line}" for line in result.lines], FRAME]


def run_option(engine: InventoryAnalyticsEngine, choice: int) -> List[str]:
    """Render menu entry ``choice`` (1-7) as printable lines."""
    _, key = MENU_OPTIONS[choice]
    if key is None:
        lines = ["", BANNER, "  All reports", BANNER]
        for result in engine.generate_all_reports():
            lines.extend(format_report(result))
        return lines
    return format_report(engine.run_report(key))


def menu_lines() -> List[str]:
    lines = ["", FRAME, f"  {STORE_NAME} - {APP_NAME}", FRAME, " [ Menu ]"]
    lines.extend(f" {number}. {label}" for number, (label, _) in MENU_OPTIONS.items())
    lines.extend([" 0. Exit", FRAME])
    return lines


def run_menu(engine: InventoryAnalyticsEngine,
             read: Callable[[str], str] = input,
             write: Callable[[str], None] = print) -> None:
    """Show the menu until the user enters 0 or input ends."""
    while True:
        for line in menu_lines():
            write(line)
        try:
            raw = read(" >> Enter a menu number: ")
        except EOFError:
            write(" >> Exiting.")
            return

        try:
            choice = int(raw.strip())
        except ValueError:
            choice = None

        if choice == 0:
            write(" >> Exiting.")
            return
        if choice not in MENU_OPTIONS:
            write(" >> Invalid input, please try again.")
            continue

        try:
            for line in run_option(engine, choice):
                write(line)
        except AppException as e:
            logger.error("Report failed", extra={"choice": choice, "error": str(e)})
            write(f" >> Report failed: {e}")


@handle_exceptions(AppException)
def build_engine(store_path: Optional[str] = None) -> InventoryAnalyticsEngine:
    if store_path:
        store = load_store(store_path)
        return InventoryAnalyticsEngine(store.products, store.sales, store.context, today=store.today)
    return InventoryAnalyticsEngine(demo_products(), demo_sales(), ReportContext.from_config())


def configure_file_logging(log_file: str) -> None:
    setup_logger(
        LoggerConfig(
            log_file=Path(log_file),
            level=logging.INFO,
            max_size=1024 * 1024,
            backup_count=3,
            format=Config.get("log_format", "text"),
        )
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"{STORE_NAME} inventory reports")
    parser.add_argument("--store", help="YAML store file (defaults to the built-in demo store)")
    parser.add_argument("--report", type=int, choices=sorted(MENU_OPTIONS),
                        help="print one menu entry and exit")
    parser.add_argument("--export", metavar="XLSX", help="write every report to an Excel workbook and exit")
    parser.add_argument("--log-file", metavar="PATH", help="also write logs to a rotating file")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.log_file:
        configure_file_logging(args.log_file)
    logger.info("Starting inventory reports", extra={"store": args.store or "demo"})
    try:
        engine = build_engine(args.store)
        if args.export:
            path = ExportService.export_reports(engine.generate_all_reports(), args.export)
            print(f"Reports written to {path}")
        elif args.report:
            for line in run_option(engine, args.report):
                print(line)
        else:
            run_menu(engine)
    except AppException as e:
        logger.critical(f"An unhandled error occurred: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
