"""
Command dataclasses: the closed set of structural edits the engine accepts.

Commands are plain data. They carry everything one transition needs; all
validation is done by the reducer against the snapshot it is applied to.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from planogram.models.fixture import Bay, Door, Equipment
from planogram.models.shelf import PlacedProduct, Shelf


# Add

@dataclass(frozen=True)
class AddDoor:
    door: Door


@dataclass(frozen=True)
class AddEquipment:
    door_id: str
    equipment: Equipment


@dataclass(frozen=True)
class AddBay:
    equipment_id: str
    bay: Bay


@dataclass(frozen=True)
class AddShelf:
    bay_id: str
    shelf: Shelf


# Update: full replacement record for an existing id

@dataclass(frozen=True)
class UpdateDoor:
    door: Door


@dataclass(frozen=True)
class UpdateEquipment:
    equipment: Equipment


@dataclass(frozen=True)
class UpdateBay:
    bay: Bay


@dataclass(frozen=True)
class UpdateShelf:
    shelf: Shelf


@dataclass(frozen=True)
class UpdateProject:
    """Project metadata; fields left as None keep their current value"""
    name: Optional[str] = None
    description: Optional[str] = None


# Remove: cascades to the whole subtree

@dataclass(frozen=True)
class RemoveDoor:
    door_id: str


@dataclass(frozen=True)
class RemoveEquipment:
    equipment_id: str


@dataclass(frozen=True)
class RemoveBay:
    bay_id: str


@dataclass(frozen=True)
class RemoveShelf:
    shelf_id: str


# Products on shelves

@dataclass(frozen=True)
class PlaceProduct:
    """Place a product on a shelf.

    Attributes:
        shelf_id:        Destination shelf.
        placement:       Candidate placement (product reference, position, facings).
        source_shelf_id: Shelf the product is being moved from, if any. Equal to
                         shelf_id for an in-place move or resize.
    """
    shelf_id: str
    placement: PlacedProduct
    source_shelf_id: Optional[str] = None


@dataclass(frozen=True)
class RemoveProductFromShelf:
    shelf_id: str
    product_id: str


@dataclass(frozen=True)
class ApplyPlacementBatch:
    """Replace a shelf's occupants with an externally proposed layout.

    Attributes:
        shelf_id: Target shelf.
        entries:  Raw, untrusted entries shaped like
                  {productId: str, positionX: number, positionY: number, facings: number}.
    """
    shelf_id: str
    entries: Sequence[Mapping[str, Any]] = field(default_factory=tuple)


# Selection: None clears that level and everything below it

@dataclass(frozen=True)
class SelectDoor:
    door_id: Optional[str]


@dataclass(frozen=True)
class SelectEquipment:
    equipment_id: Optional[str]


@dataclass(frozen=True)
class SelectBay:
    bay_id: Optional[str]


@dataclass(frozen=True)
class SelectShelf:
    shelf_id: Optional[str]


Command = Union[
    AddDoor, AddEquipment, AddBay, AddShelf,
    UpdateDoor, UpdateEquipment, UpdateBay, UpdateShelf, UpdateProject,
    RemoveDoor, RemoveEquipment, RemoveBay, RemoveShelf,
    PlaceProduct, RemoveProductFromShelf, ApplyPlacementBatch,
    SelectDoor, SelectEquipment, SelectBay, SelectShelf,
]
