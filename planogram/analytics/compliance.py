"""
Shelf compliance analysis.

Aggregates space, weight, sales and inventory figures over a shelf's
placements and flags facing, inventory and weight problems. Pure: nothing
here mutates the shelf or the catalog.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from planogram.models.lookup import product_index
from planogram.models.product import Product
from planogram.models.shelf import Orientation, PlacedProduct, Shelf
from planogram.utils.constants import LOW_DAYS_OF_SUPPLY
from planogram.utils.error_handler import NotFoundError
from planogram.utils.monitor import monitor


class IssueType(Enum):
    SPACING = "spacing"
    FACING = "facing"
    WEIGHT = "weight"
    TEMPERATURE = "temperature"
    CATEGORY = "category"
    ORIENTATION = "orientation"
    INVENTORY = "inventory"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class IssueImpact:
    sales: Optional[float] = None
    profit: Optional[float] = None
    days_of_supply: Optional[float] = None

    def to_dict(self) -> Dict:
        return {
            'sales': self.sales,
            'profit': self.profit,
            'daysOfSupply': self.days_of_supply
        }


@dataclass
class ComplianceIssue:
    type: IssueType
    severity: Severity
    message: str
    product_id: Optional[str] = None  # None for shelf-level issues
    recommendation: Optional[str] = None
    impact: Optional[IssueImpact] = None

    def to_dict(self) -> Dict:
        return {
            'type': self.type.value,
            'severity': self.severity.value,
            'message': self.message,
            'productId': self.product_id,
            'recommendation': self.recommendation,
            'impact': self.impact.to_dict() if self.impact else None
        }


@dataclass
class ShelfPerformance:
    total_sales: float = 0.0
    total_profit: float = 0.0
    sales_per_cm: float = 0.0
    profit_per_cm: float = 0.0
    average_inventory_turn: float = 0.0
    days_of_supply: float = 0.0  # average across placements

    def to_dict(self) -> Dict:
        return {
            'totalSales': self.total_sales,
            'totalProfit': self.total_profit,
            'salesPerCm': self.sales_per_cm,
            'profitPerCm': self.profit_per_cm,
            'averageInventoryTurn': self.average_inventory_turn,
            'daysOfSupply': self.days_of_supply
        }


@dataclass
class ShelfAnalytics:
    """Compliance report for one shelf"""
    space_utilization: float
    facing_count: int
    total_products: int
    weight_load: float  # kg
    sales_potential: float  # units per day
    profit_potential: float
    compliance_issues: List[ComplianceIssue] = field(default_factory=list)
    performance: ShelfPerformance = field(default_factory=ShelfPerformance)

    @property
    def has_issues(self) -> bool:
        return len(self.compliance_issues) > 0

    def to_dict(self) -> Dict:
        return {
            'spaceUtilization': self.space_utilization,
            'facingCount': self.facing_count,
            'totalProducts': self.total_products,
            'weightLoad': self.weight_load,
            'salesPotential': self.sales_potential,
            'profitPotential': self.profit_potential,
            'complianceIssues': [i.to_dict() for i in self.compliance_issues],
            'performance': self.performance.to_dict()
        }


def occupied_width(product: Product, placement: PlacedProduct) -> float:
    """Front-facing placements use the product width, other orientations its depth"""
    extent = product.width if placement.orientation == Orientation.FRONT else product.depth
    return extent * placement.facings


def resolve_placements(placements: List[PlacedProduct],
                       catalog: List[Product]) -> List[Tuple[PlacedProduct, Product]]:
    """Pair each placement with its catalog product; dangling references are errors"""
    products = product_index(catalog)
    resolved = []
    for placement in placements:
        product = products.get(placement.product_id)
        if product is None:
            raise NotFoundError('product', placement.product_id)
        resolved.append((placement, product))
    return resolved


@monitor.time_it
def compliance_analysis(shelf: Shelf,
                        catalog: List[Product],
                        placements: Optional[List[PlacedProduct]] = None,
                        rules: Optional[Dict] = None) -> ShelfAnalytics:
    """Analyze a shelf's placements (defaults to the shelf's own products)"""
    rules = rules or {}
    low_days = rules.get('low_days_of_supply', LOW_DAYS_OF_SUPPLY)
    placements = shelf.products if placements is None else placements

    issues = []
    total_width = 0.0
    total_weight = 0.0
    total_sales = 0.0
    total_profit = 0.0
    total_inventory_turn = 0.0
    total_days_of_supply = 0.0

    resolved = resolve_placements(placements, catalog)
    for placement, product in resolved:
        facings = placement.facings

        total_width += occupied_width(product, placement)
        total_weight += product.weight_kg * facings

        daily_sales = product.daily_sales(facings)
        total_sales += daily_sales
        total_profit += daily_sales * product.profit_margin

        days_of_supply = product.days_of_supply(facings)
        total_days_of_supply += days_of_supply
        total_inventory_turn += product.inventory_turn

        if product.min_facings and facings < product.min_facings:
            potential_sales = product.sales_velocity * (product.min_facings - facings)
            issues.append(ComplianceIssue(
                type=IssueType.FACING,
                severity=Severity.HIGH,
                message=f"{product.name} has {facings} facings, minimum required is {product.min_facings}",
                product_id=product.id,
                recommendation=f"Increase facings to at least {product.min_facings}",
                impact=IssueImpact(sales=potential_sales, profit=potential_sales * product.profit_margin)
            ))

        if days_of_supply < low_days:
            issues.append(ComplianceIssue(
                type=IssueType.INVENTORY,
                severity=Severity.HIGH,
                message=f"Low stock for {product.name} ({days_of_supply:.1f} days of supply)",
                product_id=product.id,
                recommendation="Restock soon to prevent stockouts",
                impact=IssueImpact(days_of_supply=low_days - days_of_supply)
            ))

    if shelf.max_weight and total_weight > shelf.max_weight:
        issues.append(ComplianceIssue(
            type=IssueType.WEIGHT,
            severity=Severity.HIGH,
            message=f"Shelf weight load ({total_weight:.1f}kg) exceeds maximum capacity ({shelf.max_weight}kg)",
            recommendation="Remove items or redistribute to other shelves"
        ))

    # Calculate performance metrics
    count = len(resolved)
    performance = ShelfPerformance(
        total_sales=total_sales,
        total_profit=total_profit,
        sales_per_cm=total_sales / total_width if total_width > 0 else 0.0,
        profit_per_cm=total_profit / total_width if total_width > 0 else 0.0,
        average_inventory_turn=total_inventory_turn / count if count else 0.0,
        days_of_supply=total_days_of_supply / count if count else 0.0
    )

    return ShelfAnalytics(
        space_utilization=(total_width / shelf.width) * 100 if shelf.width > 0 else 0.0,
        facing_count=sum(p.facings for p in placements),
        total_products=count,
        weight_load=total_weight,
        sales_potential=total_sales,
        profit_potential=total_profit,
        compliance_issues=issues,
        performance=performance
    )
