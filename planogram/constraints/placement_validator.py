"""
Admissibility checks for a candidate placement on a shelf.

Checks run in a fixed order and stop at the first failure:
dimension -> space -> weight -> stock. Nothing here mutates its inputs, so
the same call can be repeated for pre-flight feedback before a command is
issued.
"""

from enum import Enum
from typing import Dict, List, Optional

from planogram.constraints.shelf_load import ShelfLoad, compute_shelf_load
from planogram.models.lookup import product_index
from planogram.models.product import Product
from planogram.models.shelf import PlacedProduct, Shelf
from planogram.utils.constants import FLOAT_TOLERANCE
from planogram.utils.error_handler import NotFoundError, ValidationError


class ConstraintCheck(Enum):
    DIMENSION = "dimension"
    SPACE = "space"
    WEIGHT = "weight"
    STOCK = "stock"


def _exceeds(value: float, limit: float) -> bool:
    return value > limit + FLOAT_TOLERANCE


def check_dimensions(shelf: Shelf, product: Product):
    """Product must fit the shelf's height and depth; width is a space concern"""
    if _exceeds(product.height, shelf.height):
        raise ValidationError(
            ConstraintCheck.DIMENSION, product.height, shelf.height,
            f"Product height ({product.height}cm) exceeds layer height ({shelf.height}cm)"
        )
    if _exceeds(product.depth, shelf.depth):
        raise ValidationError(
            ConstraintCheck.DIMENSION, product.depth, shelf.depth,
            f"Product depth ({product.depth}cm) exceeds layer depth ({shelf.depth}cm)"
        )


def check_space(load: ShelfLoad, product: Product, facings: int):
    required = product.width * facings
    total = load.total_width + required
    if _exceeds(total, load.shelf_width):
        raise ValidationError(
            ConstraintCheck.SPACE, total, load.shelf_width,
            f"Not enough layer space ({load.remaining_space:.1f}cm remaining)",
            remaining=load.remaining_space
        )


def check_weight(load: ShelfLoad, product: Product, facings: int):
    total = load.total_weight + product.weight_kg * facings
    if _exceeds(total, load.max_weight):
        raise ValidationError(
            ConstraintCheck.WEIGHT, total, load.max_weight,
            f"Would exceed layer weight limit ({load.remaining_weight:.1f}kg remaining)",
            remaining=load.remaining_weight
        )


def check_stock(load: ShelfLoad, product: Product, facings: int):
    used = load.used_stock.get(product.id, 0)
    total = used + facings
    if total > product.stock:
        remaining = product.stock - used
        raise ValidationError(
            ConstraintCheck.STOCK, total, product.stock,
            f"Not enough stock available ({remaining} units remaining)",
            remaining=remaining
        )


def validate_placement(shelf: Shelf,
                       occupants: List[PlacedProduct],
                       catalog: List[Product],
                       candidate: PlacedProduct,
                       moving_within_shelf: bool = False,
                       products: Optional[Dict[str, Product]] = None) -> ShelfLoad:
    """
    Decide whether `candidate` may be committed to `shelf`.

    `occupants` is the snapshot of the shelf's current placements. When the
    candidate is being moved within the same shelf, every existing placement of
    the same product is left out first, so it is judged against the other
    occupants only.

    Returns the shelf load including the candidate; raises ValidationError with
    the failed check, actual value and limit otherwise.
    """
    products = products if products is not None else product_index(catalog)
    product = products.get(candidate.product_id)
    if product is None:
        raise NotFoundError('product', candidate.product_id)

    if candidate.facings < 1:
        raise ValueError(f"Facings must be at least 1, got {candidate.facings}")

    if moving_within_shelf:
        occupants = [p for p in occupants if p.product_id != candidate.product_id]

    load = compute_shelf_load(shelf, occupants, catalog, products)

    check_dimensions(shelf, product)
    check_space(load, product, candidate.facings)
    check_weight(load, product, candidate.facings)
    check_stock(load, product, candidate.facings)

    load.add(product, candidate.facings)
    return load


def can_place(shelf: Shelf, occupants: List[PlacedProduct], catalog: List[Product],
              candidate: PlacedProduct, moving_within_shelf: bool = False) -> bool:
    """Boolean form of validate_placement for pre-flight UI feedback; unknown products are not placeable"""
    try:
        validate_placement(shelf, occupants, catalog, candidate, moving_within_shelf)
        return True
    except (ValidationError, NotFoundError):
        return False
