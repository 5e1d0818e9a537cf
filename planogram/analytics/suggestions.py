import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from planogram.analytics.compliance import ShelfAnalytics, resolve_placements
from planogram.models.product import Product
from planogram.models.shelf import Shelf
from planogram.utils.constants import (
    FACING_BUFFER_DAYS, FACING_SUGGESTION_PRIORITY, SPACE_SUGGESTION_PRIORITY,
    TARGET_UTILIZATION, UNDERUTILIZED_THRESHOLD, UPLIFT_FACTOR,
)


class SuggestionType(Enum):
    SPACE = "space"
    FACING = "facing"
    POSITION = "position"
    ASSORTMENT = "assortment"
    INVENTORY = "inventory"


@dataclass
class SuggestionImpact:
    sales: float = 0.0
    profit: float = 0.0
    space_utilization: float = 0.0
    days_of_supply: Optional[float] = None

    def to_dict(self) -> Dict:
        return {
            'sales': self.sales,
            'profit': self.profit,
            'spaceUtilization': self.space_utilization,
            'daysOfSupply': self.days_of_supply
        }


@dataclass
class OptimizationSuggestion:
    type: SuggestionType
    priority: int  # higher first
    current_value: float
    suggested_value: float
    message: str
    impact: SuggestionImpact = field(default_factory=SuggestionImpact)
    product_id: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'type': self.type.value,
            'priority': self.priority,
            'currentValue': self.current_value,
            'suggestedValue': self.suggested_value,
            'impact': self.impact.to_dict(),
            'message': self.message,
            'productId': self.product_id
        }


def optimal_facings(product: Product, buffer_days: float = FACING_BUFFER_DAYS) -> int:
    """Facings needed to hold `buffer_days` of sales"""
    return math.ceil(product.sales_velocity * buffer_days)


def optimization_suggestions(shelf: Shelf,
                             catalog: List[Product],
                             report: ShelfAnalytics,
                             rules: Optional[Dict] = None) -> List[OptimizationSuggestion]:
    """
    Rule-based improvement suggestions for a shelf.

    Args:
        shelf: Shelf whose placements are inspected for facing changes
        catalog: Product catalog
        report: Compliance report for the same shelf
        rules: Optional overrides for the thresholds in constants

    Returns:
        Suggestions ordered by priority, highest first; equal priorities keep
        the order they were found in
    """
    rules = rules or {}
    threshold = rules.get('underutilized_threshold', UNDERUTILIZED_THRESHOLD)
    target = rules.get('target_utilization', TARGET_UTILIZATION)
    uplift = rules.get('uplift_factor', UPLIFT_FACTOR)
    buffer_days = rules.get('facing_buffer_days', FACING_BUFFER_DAYS)

    suggestions = []

    # Space optimization
    if report.space_utilization < threshold:
        suggestions.append(OptimizationSuggestion(
            type=SuggestionType.SPACE,
            priority=SPACE_SUGGESTION_PRIORITY,
            current_value=report.space_utilization,
            suggested_value=target,
            impact=SuggestionImpact(
                sales=report.sales_potential * uplift,
                profit=report.profit_potential * uplift,
                space_utilization=target - report.space_utilization
            ),
            message="Shelf space underutilized. Consider adding more products or increasing facings."
        ))

    # Facing adjustments per placement
    for placement, product in resolve_placements(shelf.products, catalog):
        optimal = optimal_facings(product, buffer_days)
        if placement.facings >= optimal or not product.max_facings or optimal > product.max_facings:
            continue

        additional = optimal - placement.facings
        additional_sales = product.sales_velocity * additional
        suggestions.append(OptimizationSuggestion(
            type=SuggestionType.FACING,
            priority=FACING_SUGGESTION_PRIORITY,
            current_value=placement.facings,
            suggested_value=optimal,
            impact=SuggestionImpact(
                sales=additional_sales,
                profit=additional_sales * product.profit_margin,
                space_utilization=(product.width * additional / shelf.width) * 100 if shelf.width > 0 else 0.0,
                days_of_supply=product.days_of_supply(optimal) - product.days_of_supply(placement.facings)
            ),
            message=f"Increase {product.name} facings to match sales velocity",
            product_id=product.id
        ))

    # sorted() is stable, so ties keep encounter order
    return sorted(suggestions, key=lambda s: s.priority, reverse=True)
