import logging
import os
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

import xlsxwriter
from xlsxwriter.exceptions import XlsxWriterException

from utils.decorators import handle_external_service
from utils.exceptions import ExternalServiceException, ValidationException
from utils.sanitizers import sanitize_filename, sanitize_sheet_name

logger = logging.getLogger(__name__)


class ExcelSheet:
    """One worksheet: a block of text lines followed by a table of rows."""

    def __init__(self, name: str, rows: Optional[List[Dict[str, Any]]] = None,
                 lines: Optional[Sequence[str]] = None, title: Optional[str] = None):
        self.name = sanitize_sheet_name(name)
        self.rows = rows or []
        self.lines = list(lines or [])
        self.title = title

    @property
    def headers(self) -> List[str]:
        headers: List[str] = []
        for row in self.rows:
            for key in row:
                if key not in headers:
                    headers.append(key)
        return headers


class ExcelExporter:
    @staticmethod
    def _final_path(filename: str) -> str:
        # Only the file name component is sanitised; the directory is kept as given
        clean_filename = sanitize_filename(os.path.basename(filename))
        if not clean_filename:
            raise ValidationException(f"Invalid export filename: {filename!r}")
        directory = os.path.dirname(filename)
        return os.path.join(directory, clean_filename) if directory else clean_filename

    @staticmethod
    def _write_value(worksheet, row: int, col: int, value: Any, date_format) -> None:
        if isinstance(value, datetime):
            worksheet.write_datetime(row, col, value, date_format)
        elif isinstance(value, date):
            worksheet.write_datetime(row, col, datetime(value.year, value.month, value.day), date_format)
        elif isinstance(value, float) and value in (float("inf"), float("-inf")):
            worksheet.write_string(row, col, str(value))
        elif value is None:
            worksheet.write_blank(row, col, None)
        else:
            worksheet.write(row, col, value)

    @staticmethod
    @handle_external_service()
    def export_sheets(sheets: Sequence[ExcelSheet], filename: str,
                      auto_adjust_columns: bool = True) -> str:
        """
        Export several worksheets into one workbook.

        Args:
            sheets (Sequence[ExcelSheet]): Worksheets to write, in order.
            filename (str): Target file (including path).
            auto_adjust_columns (bool, optional): Whether to auto-adjust column widths.

        Returns:
            str: The path actually written.

        Raises:
            ValidationException: If there is nothing to export.
            ExternalServiceException: If there's an issue writing to the file.
        """
        if not sheets:
            raise ValidationException("No data to export")

        final_path = ExcelExporter._final_path(filename)

        try:
            with xlsxwriter.Workbook(final_path) as workbook:
                header_format = workbook.add_format({"bold": True, "bg_color": "#D3D3D3"})
                title_format = workbook.add_format({"bold": True, "font_size": 12})
                date_format = workbook.add_format({"num_format": "yyyy-mm-dd"})
                used_names = set()

                for sheet in sheets:
                    name = sheet.name
                    suffix = 2
                    while name.lower() in used_names:
                        name = f"{sheet.name[:28]}_{suffix}"
                        suffix += 1
                    used_names.add(name.lower())
                    worksheet = workbook.add_worksheet(name)

                    row = 0
                    if sheet.title:
                        worksheet.write(row, 0, sheet.title, title_format)
                        row += 2

                    for line in sheet.lines:
                        worksheet.write_string(row, 0, line)
                        row += 1
                    if sheet.lines and sheet.rows:
                        row += 1

                    if sheet.rows:
                        headers = sheet.headers
                        for col, header in enumerate(headers):
                            worksheet.write(row, col, header, header_format)
                        for item in sheet.rows:
                            row += 1
                            for col, header in enumerate(headers):
                                ExcelExporter._write_value(
                                    worksheet, row, col, item.get(header), date_format
                                )
                        if auto_adjust_columns:
                            for col, header in enumerate(headers):
                                max_width = max(len(str(item.get(header, ""))) for item in sheet.rows)
                                worksheet.set_column(col, col, max(len(header), max_width) + 2)
                    elif auto_adjust_columns and sheet.lines:
                        worksheet.set_column(0, 0, max(len(line) for line in sheet.lines) + 2)

            logger.info(f"Excel file created successfully: {os.path.abspath(final_path)}")
            return final_path
        except OSError as e:
            raise ExternalServiceException(
                f"Error writing to file {final_path}: {str(e)}"
            )
        except XlsxWriterException as e:
            raise ExternalServiceException(
                f"An error occurred while exporting to Excel: {str(e)}"
            )
