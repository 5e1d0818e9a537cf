import uuid
from dataclasses import dataclass, field
from typing import Optional, Dict

from planogram.utils.constants import GRAMS_PER_KG, DAYS_PER_YEAR


def generate_id() -> str:
    """Generate a fresh, never reused entity id"""
    return str(uuid.uuid4())


@dataclass
class Product:
    """Catalog product (master data), referenced by placements"""
    # Basic info
    name: str
    sku: str
    category: str

    # Dimensions (in cm)
    width: float
    height: float
    depth: float

    # Weight in grams
    weight: float

    # Inventory and sales data
    stock: int
    sales_velocity: float  # units sold per day
    profit_margin: float  # decimal, 0.15 = 15%

    # Facing constraints
    min_facings: int = 1
    max_facings: int = 1

    priority: int = 50  # 1-100, higher means more important
    image_url: Optional[str] = None
    id: str = field(default_factory=generate_id)

    @property
    def weight_kg(self) -> float:
        return self.weight / GRAMS_PER_KG

    def daily_sales(self, facings: int = 1) -> float:
        """Projected daily unit sales at the given facing count"""
        return self.sales_velocity * facings

    def daily_profit(self, facings: int = 1) -> float:
        return self.daily_sales(facings) * self.profit_margin

    def days_of_supply(self, facings: int = 1) -> float:
        """Days until the current stock sells through at the given facing count"""
        daily = self.daily_sales(facings)
        if daily <= 0:
            return float('inf')
        return self.stock / daily

    @property
    def inventory_turn(self) -> float:
        """Annualized sales velocity divided by stock"""
        if self.stock <= 0:
            return 0.0
        return (self.sales_velocity * DAYS_PER_YEAR) / self.stock

    @property
    def sales_per_cm(self) -> float:
        return self.sales_velocity / self.width if self.width > 0 else 0.0

    @property
    def profit_per_cm(self) -> float:
        return self.sales_velocity * self.profit_margin / self.width if self.width > 0 else 0.0

    def to_dict(self) -> Dict:
        """Convert product to dictionary for export"""
        return {
            'id': self.id,
            'name': self.name,
            'sku': self.sku,
            'category': self.category,
            'width': self.width,
            'height': self.height,
            'depth': self.depth,
            'weight': self.weight,
            'stock': self.stock,
            'salesVelocity': self.sales_velocity,
            'profitMargin': self.profit_margin,
            'minFacings': self.min_facings,
            'maxFacings': self.max_facings,
            'priority': self.priority,
            'imageUrl': self.image_url
        }
