from enum import Enum

class ProductCategory(str, Enum):
    FOOD = "food"
    BEVERAGE = "beverage"
    SNACK = "snack"
    HOUSEHOLD = "household"

class ReportKey(str, Enum):
    URGENT_STOCK = "urgent_stock"
    EXPIRY = "expiry"
    BESTSELLERS = "bestsellers"
    SALES = "sales"
    MANAGEMENT_ANALYSIS = "management_analysis"
    OVERALL_STATUS = "overall_status"

# Fixed order used when every report is generated in one run
REPORT_ORDER = (
    ReportKey.URGENT_STOCK,
    ReportKey.EXPIRY,
    ReportKey.BESTSELLERS,
    ReportKey.SALES,
    ReportKey.MANAGEMENT_ANALYSIS,
    ReportKey.OVERALL_STATUS,
)

# Constants
MAX_PRICE = 100_000_000
DEFAULT_BESTSELLER_LIMIT = 5
OVERSTOCK_RATIO = 0.5
