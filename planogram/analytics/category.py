from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from planogram.analytics.compliance import occupied_width, resolve_placements
from planogram.models.product import Product
from planogram.models.shelf import Shelf


@dataclass
class CategoryPerformance:
    """Per-category totals on one shelf; shares are percentages of the shelf-wide totals"""
    category: str
    occupied_width: float = 0.0  # cm
    sales_velocity: float = 0.0  # sum of velocity x facings
    profit_margin: float = 0.0  # sum of margin x facings
    profit: float = 0.0  # sum of velocity x facings x margin
    days_of_supply: float = 0.0
    inventory_turn: float = 0.0
    sales_per_cm: float = 0.0
    profit_per_cm: float = 0.0
    space_share: float = 0.0
    sales_share: float = 0.0
    profit_share: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'category': self.category,
            'occupiedWidth': self.occupied_width,
            'salesVelocity': self.sales_velocity,
            'profitMargin': self.profit_margin,
            'profit': self.profit,
            'spaceShare': self.space_share,
            'salesShare': self.sales_share,
            'profitShare': self.profit_share,
            'daysOfSupply': self.days_of_supply,
            'inventoryTurn': self.inventory_turn,
            'salesPerCm': self.sales_per_cm,
            'profitPerCm': self.profit_per_cm
        }


def _shares(values: List[float]) -> np.ndarray:
    """Percent of total for each value; all zeros when the total is zero"""
    values = np.asarray(values, dtype=float)
    total = values.sum()
    if total == 0:
        return np.zeros_like(values)
    return values / total * 100


def category_performance(shelf: Shelf, catalog: List[Product]) -> List[CategoryPerformance]:
    """Group the shelf's placements by category, in first-encounter order"""
    categories: Dict[str, CategoryPerformance] = {}

    for placement, product in resolve_placements(shelf.products, catalog):
        data = categories.setdefault(product.category, CategoryPerformance(category=product.category))
        facings = placement.facings
        width = occupied_width(product, placement)
        daily_sales = product.daily_sales(facings)

        data.occupied_width += width
        data.sales_velocity += daily_sales
        data.profit_margin += product.profit_margin * facings
        data.profit += daily_sales * product.profit_margin
        data.days_of_supply += product.days_of_supply(facings)
        data.inventory_turn += product.inventory_turn
        if width > 0:
            data.sales_per_cm += daily_sales / width
            data.profit_per_cm += daily_sales * product.profit_margin / width

    results = list(categories.values())

    # Normalize to shares of the shelf-wide totals
    space_shares = _shares([c.occupied_width for c in results])
    sales_shares = _shares([c.sales_velocity for c in results])
    profit_shares = _shares([c.profit for c in results])
    for i, data in enumerate(results):
        data.space_share = float(space_shares[i])
        data.sales_share = float(sales_shares[i])
        data.profit_share = float(profit_shares[i])

    return results
