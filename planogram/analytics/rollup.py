"""Performance roll-ups for bays, equipment and doors"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from planogram.analytics.compliance import occupied_width, resolve_placements
from planogram.models.fixture import Bay, Door, Equipment
from planogram.models.product import Product
from planogram.models.shelf import Shelf


@dataclass
class PerformanceSummary:
    total_sales: float = 0.0
    total_profit: float = 0.0
    space_utilization: float = 0.0  # occupied width over summed shelf width, %

    def to_dict(self) -> Dict:
        return {
            'totalSales': self.total_sales,
            'totalProfit': self.total_profit,
            'spaceUtilization': self.space_utilization
        }


def summarize_shelves(shelves: Iterable[Shelf], catalog: List[Product]) -> PerformanceSummary:
    summary = PerformanceSummary()
    total_width = 0.0
    used_width = 0.0

    for shelf in shelves:
        total_width += shelf.width
        for placement, product in resolve_placements(shelf.products, catalog):
            daily_sales = product.daily_sales(placement.facings)
            summary.total_sales += daily_sales
            summary.total_profit += daily_sales * product.profit_margin
            used_width += occupied_width(product, placement)

    summary.space_utilization = (used_width / total_width) * 100 if total_width > 0 else 0.0
    return summary


def summarize_bay(bay: Bay, catalog: List[Product]) -> PerformanceSummary:
    return summarize_shelves(bay.shelves, catalog)


def summarize_equipment(equipment: Equipment, catalog: List[Product]) -> PerformanceSummary:
    return summarize_shelves((s for bay in equipment.bays for s in bay.shelves), catalog)


def summarize_door(door: Door, catalog: List[Product]) -> PerformanceSummary:
    return summarize_shelves(
        (s for equipment in door.equipment for bay in equipment.bays for s in bay.shelves),
        catalog
    )
