from .shelf_load import ShelfLoad, compute_shelf_load
from .placement_validator import ConstraintCheck, validate_placement, can_place

__all__ = ['ShelfLoad', 'compute_shelf_load', 'ConstraintCheck', 'validate_placement', 'can_place']
