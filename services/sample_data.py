"""Demo convenience-store data used when no store file is given."""
from datetime import date, timedelta
from typing import Dict, List, Optional

from models.product import Beverage, Food, Household, Product, Snack


def demo_products(today: Optional[date] = None) -> List[Product]:
    today = today or date.today()
    return [
        Snack("새우깡", 1500, 30, 5),
        Beverage("콜라 500ml", 1500, 25, 8, 500),
        Food("김치찌개 도시락", 5500, 20, 3, today + timedelta(days=2)),
        Food("참치마요 삼각김밥", 1500, 15, 12, today + timedelta(days=1)),
        Food("딸기 샌드위치", 2800, 10, 2, today),
        Beverage("물 500ml", 1000, 50, 25, 500),
        Snack("초코파이", 3000, 20, 15),
        Food("즉석라면", 1200, 40, 45, today + timedelta(days=30)),
        Household("물티슈", 2000, 30, 10),
    ]


def demo_sales() -> Dict[str, int]:
    return {
        "새우깡": 15,
        "콜라 500ml": 12,
        "참치마요 삼각김밥": 10,
        "초코파이": 8,
        "물 500ml": 7,
        "딸기 샌드위치": 3,
        "김치찌개 도시락": 2,
        "물티슈": 5,
    }

