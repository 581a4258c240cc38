from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models.enums import ReportKey
from models.policy import ReportContext
from models.product import Food, Product
from models.sales import SalesLedger


@dataclass(frozen=True)
class ReportDataset:
    """Immutable inputs shared by every report of an engine session."""
    products: Tuple[Product, ...]
    ledger: SalesLedger
    context: ReportContext
    today: date
    index: Mapping[str, Product]

    def find(self, name: str) -> Optional[Product]:
        return self.index.get(name)

    def foods(self) -> List[Food]:
        return [p for p in self.products if isinstance(p, Food)]


@dataclass
class ReportResult:
    """Standardized result wrapper for report execution."""
    key: ReportKey
    title: str
    lines: List[str]
    data: List[Dict[str, Any]] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return "error" not in self.meta

    @property
    def warnings(self) -> List[str]:
        return self.meta.get("warnings", [])

    def render(self) -> str:
        return "\n".join(self.lines)


class Report(ABC):
    """Abstract base class for all inventory reports."""

    @property
    @abstractmethod
    def key(self) -> ReportKey:
        """Unique identifier for the report."""
        pass

    @property
    @abstractmethod
    def title(self) -> str:
        """Heading shown above the report lines."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the report shows."""
        pass

    @abstractmethod
    def collect(self, dataset: ReportDataset) -> List[Dict[str, Any]]:
        """Returns the report rows, in display order."""
        pass

    @abstractmethod
    def render(self, rows: List[Dict[str, Any]], meta: Dict[str, Any],
               dataset: ReportDataset) -> List[str]:
        """Turns rows and summary values into display lines."""
        pass

    def summarize(self, rows: List[Dict[str, Any]], dataset: ReportDataset) -> Dict[str, Any]:
        """Optional hook computing report-level totals from the rows."""
        return {}

    def validate_dataset(self, dataset: ReportDataset) -> None:
        """Optional hook to reject a dataset before the report runs."""
        pass
