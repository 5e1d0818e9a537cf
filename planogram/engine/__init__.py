from .commands import (
    AddBay, AddDoor, AddEquipment, AddShelf, ApplyPlacementBatch, Command,
    PlaceProduct, RemoveBay, RemoveDoor, RemoveEquipment, RemoveProductFromShelf,
    RemoveShelf, SelectBay, SelectDoor, SelectEquipment, SelectShelf, UpdateBay,
    UpdateDoor, UpdateEquipment, UpdateProject, UpdateShelf,
)
from .reducer import reduce, replay
from .store import CommandResult, PlanogramStore
from .defaults import new_bay, new_door, new_equipment, new_shelf

__all__ = [
    'AddDoor', 'AddEquipment', 'AddBay', 'AddShelf',
    'UpdateDoor', 'UpdateEquipment', 'UpdateBay', 'UpdateShelf', 'UpdateProject',
    'RemoveDoor', 'RemoveEquipment', 'RemoveBay', 'RemoveShelf',
    'PlaceProduct', 'RemoveProductFromShelf', 'ApplyPlacementBatch',
    'SelectDoor', 'SelectEquipment', 'SelectBay', 'SelectShelf',
    'Command', 'reduce', 'replay', 'CommandResult', 'PlanogramStore',
    'new_door', 'new_equipment', 'new_bay', 'new_shelf'
]
