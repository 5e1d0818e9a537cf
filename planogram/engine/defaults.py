"""
Add commands for new, default-sized fixtures under the current selection.

Each builder names the new node after its position among its siblings
("Bay 3") and returns None when the parent level has nothing selected.
"""

from typing import Optional

from planogram.engine.commands import AddBay, AddDoor, AddEquipment, AddShelf
from planogram.models.fixture import Bay, Door, Equipment
from planogram.models.lookup import find_bay, find_door, find_equipment
from planogram.models.shelf import Shelf
from planogram.models.state import PlanogramState
from planogram.utils.constants import DEFAULT_FIXTURES


def new_door(state: PlanogramState) -> AddDoor:
    defaults = DEFAULT_FIXTURES['door']
    return AddDoor(Door(
        name=f"Door {len(state.doors) + 1}",
        location=defaults['location'],
        traffic_flow=defaults['traffic_flow']
    ))


def new_equipment(state: PlanogramState) -> Optional[AddEquipment]:
    door = find_door(state, state.selection.door_id)
    if door is None:
        return None

    defaults = DEFAULT_FIXTURES['equipment']
    return AddEquipment(door.id, Equipment(name=f"Equipment {len(door.equipment) + 1}", **defaults))


def new_bay(state: PlanogramState) -> Optional[AddBay]:
    equipment = find_equipment(state, state.selection.equipment_id)
    if equipment is None:
        return None

    defaults = DEFAULT_FIXTURES['bay']
    return AddBay(equipment.id, Bay(name=f"Bay {len(equipment.bays) + 1}", **defaults))


def new_shelf(state: PlanogramState) -> Optional[AddShelf]:
    bay = find_bay(state, state.selection.bay_id)
    if bay is None:
        return None

    defaults = DEFAULT_FIXTURES['shelf']
    return AddShelf(bay.id, Shelf(name=f"Shelf {len(bay.shelves) + 1}", **defaults))
