from pathlib import Path
from typing import Iterable, Union

from services.analytics.contracts import ReportResult
from utils.data_handling.excel_exporter import ExcelExporter, ExcelSheet
from utils.system.logger import logger


class ExportService:
    @staticmethod
    def report_sheets(results: Iterable[ReportResult]):
        """One sheet per report: its rendered lines, then its rows as a table."""
        return [
            ExcelSheet(
                name=result.title,
                rows=result.data,
                lines=result.lines,
                title=result.title,
            )
            for result in results
        ]

    @staticmethod
    def export_reports(results: Iterable[ReportResult], filename: Union[str, Path]) -> str:
        results = list(results)
        path = ExcelExporter.export_sheets(ExportService.report_sheets(results), str(filename))
        logger.info("Reports exported", extra={"path": path, "reports": len(results)})
        return path
