from datetime import date
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Union

from models.enums import REPORT_ORDER, ReportKey
from models.policy import ReportContext
from models.product import Product, StockProjection, project_sale
from models.sales import SalesLedger
from services.analytics.contracts import Report, ReportDataset, ReportResult
from services.analytics.reports import DEFAULT_REPORTS
from utils.decorators import measure_performance, validate_input
from utils.exceptions import (
    AppException,
    NotFoundException,
    ReportGenerationException,
    ValidationException,
)
from utils.system.logger import logger


class InventoryAnalyticsEngine:
    """
    Joins the product catalog with the sales ledger and renders the inventory
    reports.

    The engine takes a snapshot of its inputs at construction and never
    modifies them, so report methods can be called repeatedly (and from
    several readers) with identical results. ``today`` is fixed for the whole
    session; it defaults to the current date.
    """

    @validate_input()
    def __init__(
        self,
        products: Iterable[Product],
        sales: Union[SalesLedger, Mapping[str, int], None],
        context: ReportContext,
        today: Optional[date] = None,
        reports: Iterable[Report] = DEFAULT_REPORTS,
    ):
        products = tuple(products)
        for product in products:
            if not isinstance(product, Product):
                raise ValidationException(f"Not a catalog product: {product!r}")
        if not isinstance(context, ReportContext):
            raise ValidationException("context must be a ReportContext")

        self._dataset = ReportDataset(
            products=products,
            ledger=SalesLedger.from_mapping(sales),
            context=context,
            today=today or date.today(),
            index=MappingProxyType(self._build_index(products)),
        )
        self._reports: Dict[ReportKey, Report] = {report.key: report for report in reports}
        self._logger = logger.with_context(component="analytics_engine")

    @staticmethod
    def _build_index(products: Iterable[Product]) -> Dict[str, Product]:
        index: Dict[str, Product] = {}
        for product in products:
            if product.name in index:
                raise ValidationException(
                    f"Duplicate product name in catalog: '{product.name}'",
                    details={"name": product.name},
                )
            index[product.name] = product
        return index

    @property
    def dataset(self) -> ReportDataset:
        return self._dataset

    @property
    def today(self) -> date:
        return self._dataset.today

    def find_product(self, name: str) -> Optional[Product]:
        return self._dataset.find(name)

    def orphan_sales(self) -> List[str]:
        """Ledger names that have no product in the catalog, in ledger order."""
        return [name for name in self._dataset.ledger.names() if self._dataset.find(name) is None]

    def projected_catalog(self) -> List[StockProjection]:
        """Every product with today's sales subtracted; nothing is persisted."""
        ledger = self._dataset.ledger
        return [project_sale(p, ledger.quantity_for(p.name)) for p in self._dataset.products]

    def get_report(self, key: Union[ReportKey, str]) -> Report:
        try:
            return self._reports[ReportKey(key)]
        except (KeyError, ValueError):
            raise NotFoundException(f"Unknown report: {key!r}")

    @measure_performance(threshold=1.0)
    def run_report(self, report: Union[Report, ReportKey, str]) -> ReportResult:
        """
        Executes one report against the session dataset.

        Args:
            report: The Report instance, or the key of a registered report.

        Returns:
            ReportResult with the display lines, the structured rows and metadata.
        """
        if not isinstance(report, Report):
            report = self.get_report(report)

        report.validate_dataset(self._dataset)
        rows = report.collect(self._dataset)
        meta = report.summarize(rows, self._dataset)
        lines = report.render(rows, meta, self._dataset)

        for name in meta.get("warnings", []):
            self._logger.warning(
                "Sales entry references unknown product",
                extra={"report": report.key.value, "product": name},
            )
        self._logger.info(
            f"Generated report: {report.key.value}",
            extra={"rows": len(rows), "lines": len(lines)},
        )
        return ReportResult(
            key=report.key,
            title=report.title,
            lines=lines,
            data=rows,
            meta={**meta, "report": report.key.value, "count": len(rows)},
        )

    def urgent_stock_report(self) -> ReportResult:
        return self.run_report(ReportKey.URGENT_STOCK)

    def expiry_report(self) -> ReportResult:
        return self.run_report(ReportKey.EXPIRY)

    def bestsellers_report(self) -> ReportResult:
        return self.run_report(ReportKey.BESTSELLERS)

    def sales_report(self) -> ReportResult:
        return self.run_report(ReportKey.SALES)

    def management_analysis_report(self) -> ReportResult:
        return self.run_report(ReportKey.MANAGEMENT_ANALYSIS)

    def overall_status_report(self) -> ReportResult:
        return self.run_report(ReportKey.OVERALL_STATUS)

    def generate_all_reports(self) -> List[ReportResult]:
        """
        Runs every report in the fixed order. A report that fails is logged and
        replaced by an error result; the remaining reports still run.
        """
        results = []
        for key in REPORT_ORDER:
            try:
                results.append(self.run_report(key))
            except Exception as e:
                self._logger.exception(
                    f"Report failed: {key.value}",
                    extra={"exception_type": type(e).__name__},
                )
                error = e if isinstance(e, AppException) else ReportGenerationException(str(e))
                results.append(
                    ReportResult(
                        key=key,
                        title=self._reports[key].title if key in self._reports else key.value,
                        lines=[f"Report could not be generated: {error}"],
                        meta={"report": key.value, "error": str(error)},
                    )
                )
        return results
