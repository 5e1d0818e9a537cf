from .product import Product, generate_id
from .shelf import Shelf, PlacedProduct, ShelfType, Orientation
from .fixture import Door, Equipment, Bay
from .state import PlanogramState, Project, Selection
from .lookup import NodePath, find_path, search_catalog, catalog_categories

__all__ = ['Product', 'generate_id', 'Shelf', 'PlacedProduct', 'ShelfType', 'Orientation',
           'Door', 'Equipment', 'Bay', 'PlanogramState', 'Project', 'Selection',
           'NodePath', 'find_path', 'search_catalog', 'catalog_categories']
