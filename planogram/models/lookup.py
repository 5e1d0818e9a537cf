"""
Read-only lookups over a planogram snapshot.

All traversal is downward from the snapshot root; entities never hold a
reference to their parent. Lookups return None for missing ids so they can be
used as existence checks; callers decide whether absence is an error.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union

from planogram.models.fixture import Bay, Door, Equipment
from planogram.models.product import Product
from planogram.models.shelf import Shelf
from planogram.models.state import PlanogramState


@dataclass
class NodePath:
    """Records along the path from a door down to the located node"""
    door: Door
    equipment: Optional[Equipment] = None
    bay: Optional[Bay] = None
    shelf: Optional[Shelf] = None

    @property
    def level(self) -> str:
        """Deepest level present on the path"""
        if self.shelf is not None:
            return 'shelf'
        if self.bay is not None:
            return 'bay'
        if self.equipment is not None:
            return 'equipment'
        return 'door'

    @property
    def node(self) -> Union[Door, Equipment, Bay, Shelf]:
        return getattr(self, self.level)

    def ids(self) -> Dict[str, Optional[str]]:
        return {
            'door': self.door.id,
            'equipment': self.equipment.id if self.equipment else None,
            'bay': self.bay.id if self.bay else None,
            'shelf': self.shelf.id if self.shelf else None
        }


def iter_paths(state: PlanogramState) -> Iterator[NodePath]:
    """Depth-first walk yielding the path to every node in the tree"""
    for door in state.doors:
        yield NodePath(door)
        for equipment in door.equipment:
            yield NodePath(door, equipment)
            for bay in equipment.bays:
                yield NodePath(door, equipment, bay)
                for shelf in bay.shelves:
                    yield NodePath(door, equipment, bay, shelf)


def find_path(state: PlanogramState, node_id: str, level: Optional[str] = None) -> Optional[NodePath]:
    """Locate a node by id, optionally restricted to one level"""
    for path in iter_paths(state):
        if path.node.id == node_id and (level is None or path.level == level):
            return path
    return None


def find_door(state: PlanogramState, door_id: str) -> Optional[Door]:
    return next((d for d in state.doors if d.id == door_id), None)


def find_equipment(state: PlanogramState, equipment_id: str) -> Optional[Equipment]:
    path = find_path(state, equipment_id, 'equipment')
    return path.equipment if path else None


def find_bay(state: PlanogramState, bay_id: str) -> Optional[Bay]:
    path = find_path(state, bay_id, 'bay')
    return path.bay if path else None


def find_shelf(state: PlanogramState, shelf_id: str) -> Optional[Shelf]:
    path = find_path(state, shelf_id, 'shelf')
    return path.shelf if path else None


def iter_shelves(state: PlanogramState) -> Iterator[Shelf]:
    for door in state.doors:
        for equipment in door.equipment:
            for bay in equipment.bays:
                yield from bay.shelves


def all_node_ids(state: PlanogramState) -> List[str]:
    """Ids of every door, equipment, bay and shelf in depth-first order"""
    return [path.node.id for path in iter_paths(state)]


def subtree_ids(node: Union[Door, Equipment, Bay, Shelf]) -> List[str]:
    """Ids of a node and all of its descendants"""
    ids = [node.id]
    for child in _children(node):
        ids.extend(subtree_ids(child))
    return ids


def _children(node) -> list:
    if isinstance(node, Door):
        return node.equipment
    if isinstance(node, Equipment):
        return node.bays
    if isinstance(node, Bay):
        return node.shelves
    return []


def product_index(catalog: List[Product]) -> Dict[str, Product]:
    """Map product id -> catalog product"""
    return {p.id: p for p in catalog}


def get_product(source: Union[PlanogramState, List[Product]], product_id: str) -> Optional[Product]:
    catalog = source.catalog if isinstance(source, PlanogramState) else source
    return next((p for p in catalog if p.id == product_id), None)


def search_catalog(catalog: List[Product], term: str = "", category: Optional[str] = None) -> List[Product]:
    """Filter catalog by name/SKU substring (case-insensitive) and category"""
    term = term.lower()
    results = []
    for product in catalog:
        matches_search = term in product.name.lower() or term in product.sku.lower()
        matches_category = not category or product.category == category
        if matches_search and matches_category:
            results.append(product)
    return results


def catalog_categories(catalog: List[Product]) -> List[str]:
    """Distinct categories in catalog order"""
    categories = []
    for product in catalog:
        if product.category not in categories:
            categories.append(product.category)
    return categories
