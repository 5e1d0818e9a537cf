from dataclasses import dataclass, field
from typing import List, Dict, Optional

from planogram.models.product import generate_id
from planogram.models.shelf import Shelf


@dataclass
class Bay:
    """Vertical section of equipment"""
    name: str
    width: float
    height: float
    depth: float
    max_weight: float  # kg
    flow_direction: str = "left-to-right"
    category: Optional[str] = None  # primary category for this bay
    shelves: List[Shelf] = field(default_factory=list)
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'width': self.width,
            'height': self.height,
            'depth': self.depth,
            'maxWeight': self.max_weight,
            'flowDirection': self.flow_direction,
            'category': self.category,
            'shelves': [s.to_dict() for s in self.shelves]
        }


@dataclass
class Equipment:
    """Fixture such as a shelf unit, cooler or display stand"""
    name: str
    type: str
    width: float
    height: float
    depth: float
    temperature: Optional[float] = None  # refrigerated equipment
    bays: List[Bay] = field(default_factory=list)
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'width': self.width,
            'height': self.height,
            'depth': self.depth,
            'temperature': self.temperature,
            'bays': [b.to_dict() for b in self.bays]
        }


@dataclass
class Door:
    """Storefront location grouping equipment"""
    name: str
    location: str = ""
    traffic_flow: float = 50  # customer traffic score, 1-100
    equipment: List[Equipment] = field(default_factory=list)
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'location': self.location,
            'trafficFlow': self.traffic_flow,
            'equipment': [e.to_dict() for e in self.equipment]
        }
