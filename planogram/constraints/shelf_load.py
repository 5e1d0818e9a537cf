from dataclasses import dataclass, field
from typing import Dict, List, Optional

from planogram.models.product import Product
from planogram.models.shelf import PlacedProduct, Shelf
from planogram.models.lookup import product_index
from planogram.utils.error_handler import NotFoundError


@dataclass
class ShelfLoad:
    """Physical and inventory load a set of placements puts on a shelf"""
    shelf_width: float
    max_weight: float
    total_width: float = 0.0  # cm, width x facings
    total_weight: float = 0.0  # kg
    total_facings: int = 0
    used_stock: Dict[str, int] = field(default_factory=dict)  # product id -> facings committed

    @property
    def remaining_space(self) -> float:
        return self.shelf_width - self.total_width

    @property
    def remaining_weight(self) -> float:
        return self.max_weight - self.total_weight

    @property
    def space_utilization(self) -> float:
        return (self.total_width / self.shelf_width) * 100 if self.shelf_width > 0 else 0.0

    def add(self, product: Product, facings: int):
        self.total_width += product.width * facings
        self.total_weight += product.weight_kg * facings
        self.total_facings += facings
        self.used_stock[product.id] = self.used_stock.get(product.id, 0) + facings


def compute_shelf_load(shelf: Shelf, occupants: List[PlacedProduct], catalog: List[Product],
                       products: Optional[Dict[str, Product]] = None) -> ShelfLoad:
    """Sum width, weight and committed stock over the shelf's occupants"""
    products = products if products is not None else product_index(catalog)
    load = ShelfLoad(shelf_width=shelf.width, max_weight=shelf.max_weight)

    for placement in occupants:
        product = products.get(placement.product_id)
        if product is None:
            raise NotFoundError('product', placement.product_id)
        load.add(product, placement.facings)

    return load
