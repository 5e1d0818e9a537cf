from dataclasses import dataclass, field
from typing import List, Dict, Optional
from enum import Enum

from planogram.models.product import generate_id


class ShelfType(Enum):
    STANDARD = "standard"
    REFRIGERATED = "refrigerated"
    PROMOTIONAL = "promotional"


class Orientation(Enum):
    FRONT = "front"
    SIDE = "side"
    TOP = "top"


@dataclass
class PlacedProduct:
    """One product's instance-of-use on a shelf"""
    product_id: str
    position_x: float = 0.0  # cm from left
    position_y: float = 0.0  # cm from top
    facings: int = 1
    orientation: Orientation = Orientation.FRONT

    def __post_init__(self):
        if self.facings < 1:
            raise ValueError(f"Facings must be at least 1, got {self.facings}")

    def to_dict(self) -> Dict:
        return {
            'productId': self.product_id,
            'positionX': self.position_x,
            'positionY': self.position_y,
            'facings': self.facings,
            'orientation': self.orientation.value
        }


@dataclass
class Shelf:
    """Shelf (layer) data model"""
    name: str
    width: float  # cm
    height: float  # cm
    depth: float  # cm
    max_weight: float  # kg
    shelf_type: ShelfType = ShelfType.STANDARD
    temperature: Optional[float] = None  # refrigerated shelves only

    # Product placements on this shelf, in display order
    products: List[PlacedProduct] = field(default_factory=list)
    id: str = field(default_factory=generate_id)

    def placements_for(self, product_id: str) -> List[PlacedProduct]:
        """All placements of a product on this shelf"""
        return [p for p in self.products if p.product_id == product_id]

    def add_product(self, placement: PlacedProduct):
        """Append a placement; constraint checks happen before this is called"""
        self.products.append(placement)

    def remove_product(self, product_id: str) -> bool:
        """Remove every placement of a product from the shelf"""
        original_count = len(self.products)
        self.products = [p for p in self.products if p.product_id != product_id]
        return len(self.products) < original_count

    def to_dict(self) -> Dict:
        """Convert shelf to dictionary for export"""
        return {
            'id': self.id,
            'name': self.name,
            'width': self.width,
            'height': self.height,
            'depth': self.depth,
            'maxWeight': self.max_weight,
            'shelfType': self.shelf_type.value,
            'temperature': self.temperature,
            'products': [p.to_dict() for p in self.products]
        }
