"""
Pure transition function: (snapshot, command) -> new snapshot.

The input snapshot is never modified. Each command is applied to a deep copy;
if any precondition or constraint fails the handler raises and the copy is
thrown away, so callers only ever see the old snapshot or the fully applied
new one.
"""

import copy
from dataclasses import fields
from datetime import datetime
from typing import Callable, Dict, List

from planogram.constraints.placement_validator import validate_placement
from planogram.data_processing.layout_parser import validate_batch_entries
from planogram.engine.commands import (
    AddBay, AddDoor, AddEquipment, AddShelf, ApplyPlacementBatch, Command,
    PlaceProduct, RemoveBay, RemoveDoor, RemoveEquipment, RemoveProductFromShelf,
    RemoveShelf, SelectBay, SelectDoor, SelectEquipment, SelectShelf, UpdateBay,
    UpdateDoor, UpdateEquipment, UpdateProject, UpdateShelf,
)
from planogram.models.fixture import Bay, Door, Equipment
from planogram.models.lookup import NodePath, all_node_ids, find_path, product_index, subtree_ids
from planogram.models.shelf import PlacedProduct, Shelf
from planogram.models.state import PlanogramState, Selection
from planogram.utils.error_handler import DuplicateIdError, NotFoundError, ValidationError
from planogram.utils.monitor import monitor

# Child collection attribute per level; shelves own placements, not nodes
CHILDREN = {
    'door': 'equipment',
    'equipment': 'bays',
    'bay': 'shelves',
    'shelf': 'products'
}


def reduce(state: PlanogramState, command: Command) -> PlanogramState:
    """Apply one command and return the next snapshot; raise on rejection"""
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown command: {type(command).__name__}")

    snapshot = copy.deepcopy(state)
    handler(snapshot, command)
    return snapshot


def replay(state: PlanogramState, commands: List[Command]) -> PlanogramState:
    """Apply commands in order; stops at the first rejected command"""
    for command in commands:
        state = reduce(state, command)
    return state


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require(state: PlanogramState, node_id: str, level: str) -> NodePath:
    path = find_path(state, node_id, level)
    if path is None:
        raise NotFoundError(level, node_id)
    return path


def _focus(state: PlanogramState, node_id: str, level: str):
    """Select a node, its ancestors, and clear everything below it"""
    path = _require(state, node_id, level)
    state.selection.focus(level, path.ids())


def _check_new_subtree(state: PlanogramState, node):
    """Every id in an added subtree must be fresh; placements must pass the shelf checks"""
    live_ids = set(all_node_ids(state))
    for node_id in subtree_ids(node):
        if node_id in live_ids:
            raise DuplicateIdError(node_id)
        live_ids.add(node_id)

    products = product_index(state.catalog)
    for shelf in _nested_shelves(node):
        _check_shelf_contents(state, shelf, products)


def _nested_shelves(node) -> List[Shelf]:
    if isinstance(node, Shelf):
        return [node]
    if isinstance(node, Door):
        return [shelf for equipment in node.equipment for bay in equipment.bays for shelf in bay.shelves]
    if isinstance(node, Equipment):
        return [shelf for bay in node.bays for shelf in bay.shelves]
    if isinstance(node, Bay):
        return list(node.shelves)
    return []


def _check_shelf_contents(state: PlanogramState, shelf: Shelf, products: Dict):
    """Re-run the placement checks over a pre-filled shelf, in order"""
    accepted: List[PlacedProduct] = []
    for placement in shelf.products:
        validate_placement(shelf, accepted, state.catalog, placement, products=products)
        accepted.append(placement)


def _add(state: PlanogramState, parent_id, level: str, child, parent_level: str = None):
    if parent_level is None:
        siblings = state.doors
    else:
        parent = _require(state, parent_id, parent_level).node
        siblings = getattr(parent, CHILDREN[parent_level])

    child = copy.deepcopy(child)
    _check_new_subtree(state, child)
    siblings.append(child)

    _focus(state, child.id, level)


def _update(state: PlanogramState, record, level: str):
    """Replace a node's own attributes; id and children are kept"""
    target = _require(state, record.id, level).node
    for f in fields(target):
        if f.name in ('id', CHILDREN[level]):
            continue
        setattr(target, f.name, copy.deepcopy(getattr(record, f.name)))


def _remove(state: PlanogramState, node_id: str, level: str):
    path = _require(state, node_id, level)
    node = path.node

    if level == 'door':
        state.doors.remove(node)
    else:
        parent_level = Selection.LEVELS[Selection.LEVELS.index(level) - 1]
        getattr(getattr(path, parent_level), CHILDREN[parent_level]).remove(node)

    # Clear any focus pointing into the removed subtree
    removed = set(subtree_ids(node))
    for selected_level in Selection.LEVELS[Selection.LEVELS.index(level):]:
        if state.selection.get(selected_level) in removed:
            state.selection.clear_from(selected_level)
            break


def _select(state: PlanogramState, node_id, level: str):
    if node_id is None:
        state.selection.clear_from(level)
    else:
        _focus(state, node_id, level)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _add_door(state: PlanogramState, command: AddDoor):
    _add(state, None, 'door', command.door)


def _add_equipment(state: PlanogramState, command: AddEquipment):
    _add(state, command.door_id, 'equipment', command.equipment, 'door')


def _add_bay(state: PlanogramState, command: AddBay):
    _add(state, command.equipment_id, 'bay', command.bay, 'equipment')


def _add_shelf(state: PlanogramState, command: AddShelf):
    _add(state, command.bay_id, 'shelf', command.shelf, 'bay')


def _update_door(state: PlanogramState, command: UpdateDoor):
    _update(state, command.door, 'door')


def _update_equipment(state: PlanogramState, command: UpdateEquipment):
    _update(state, command.equipment, 'equipment')


def _update_bay(state: PlanogramState, command: UpdateBay):
    _update(state, command.bay, 'bay')


def _update_shelf(state: PlanogramState, command: UpdateShelf):
    _update(state, command.shelf, 'shelf')


def _update_project(state: PlanogramState, command: UpdateProject):
    if command.name is not None:
        state.project.name = command.name
    if command.description is not None:
        state.project.description = command.description
    state.project.updated_at = datetime.now()


def _remove_door(state: PlanogramState, command: RemoveDoor):
    _remove(state, command.door_id, 'door')


def _remove_equipment(state: PlanogramState, command: RemoveEquipment):
    _remove(state, command.equipment_id, 'equipment')


def _remove_bay(state: PlanogramState, command: RemoveBay):
    _remove(state, command.bay_id, 'bay')


def _remove_shelf(state: PlanogramState, command: RemoveShelf):
    _remove(state, command.shelf_id, 'shelf')


def _place_product(state: PlanogramState, command: PlaceProduct):
    shelf = _require(state, command.shelf_id, 'shelf').shelf
    source = None
    if command.source_shelf_id is not None:
        source = _require(state, command.source_shelf_id, 'shelf').shelf

    placement = copy.deepcopy(command.placement)
    validate_placement(
        shelf, shelf.products, state.catalog, placement,
        moving_within_shelf=command.source_shelf_id == command.shelf_id
    )

    # Source removal and destination append land in the same snapshot
    if source is not None:
        source.remove_product(placement.product_id)
    shelf.add_product(placement)


def _remove_product_from_shelf(state: PlanogramState, command: RemoveProductFromShelf):
    shelf = _require(state, command.shelf_id, 'shelf').shelf
    if not shelf.remove_product(command.product_id):
        raise NotFoundError('placement', command.product_id)


@monitor.time_it
def _apply_placement_batch(state: PlanogramState, command: ApplyPlacementBatch):
    shelf = _require(state, command.shelf_id, 'shelf').shelf
    placements = validate_batch_entries(command.entries, state.catalog)

    products = product_index(state.catalog)
    shelf.products = []
    for index, placement in enumerate(placements):
        try:
            validate_placement(shelf, shelf.products, state.catalog, placement, products=products)
        except ValidationError as e:
            raise e.at_index(index) from e
        shelf.add_product(placement)


def _select_door(state: PlanogramState, command: SelectDoor):
    _select(state, command.door_id, 'door')


def _select_equipment(state: PlanogramState, command: SelectEquipment):
    _select(state, command.equipment_id, 'equipment')


def _select_bay(state: PlanogramState, command: SelectBay):
    _select(state, command.bay_id, 'bay')


def _select_shelf(state: PlanogramState, command: SelectShelf):
    _select(state, command.shelf_id, 'shelf')


_HANDLERS: Dict[type, Callable[[PlanogramState, Command], None]] = {
    AddDoor: _add_door,
    AddEquipment: _add_equipment,
    AddBay: _add_bay,
    AddShelf: _add_shelf,
    UpdateDoor: _update_door,
    UpdateEquipment: _update_equipment,
    UpdateBay: _update_bay,
    UpdateShelf: _update_shelf,
    UpdateProject: _update_project,
    RemoveDoor: _remove_door,
    RemoveEquipment: _remove_equipment,
    RemoveBay: _remove_bay,
    RemoveShelf: _remove_shelf,
    PlaceProduct: _place_product,
    RemoveProductFromShelf: _remove_product_from_shelf,
    ApplyPlacementBatch: _apply_placement_batch,
    SelectDoor: _select_door,
    SelectEquipment: _select_equipment,
    SelectBay: _select_bay,
    SelectShelf: _select_shelf,
}
