from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Optional

from planogram.models.product import Product, generate_id
from planogram.models.fixture import Door


@dataclass
class Project:
    """Planning workspace metadata"""
    name: str = "New Project"
    description: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat()
        }


@dataclass
class Selection:
    """Current focus path: door -> equipment -> bay -> shelf"""
    door_id: Optional[str] = None
    equipment_id: Optional[str] = None
    bay_id: Optional[str] = None
    shelf_id: Optional[str] = None

    # Ordered from shallowest to deepest
    LEVELS = ('door', 'equipment', 'bay', 'shelf')

    def get(self, level: str) -> Optional[str]:
        return getattr(self, f"{level}_id")

    def focus(self, level: str, path_ids: Dict[str, Optional[str]]):
        """Point every level down to `level` at the given path, clear deeper levels"""
        depth = self.LEVELS.index(level)
        for i, name in enumerate(self.LEVELS):
            setattr(self, f"{name}_id", path_ids.get(name) if i <= depth else None)

    def clear_from(self, level: str):
        """Clear `level` and every deeper level"""
        depth = self.LEVELS.index(level)
        for name in self.LEVELS[depth:]:
            setattr(self, f"{name}_id", None)

    def to_dict(self) -> Dict:
        return {
            'selectedDoorId': self.door_id,
            'selectedEquipmentId': self.equipment_id,
            'selectedBayId': self.bay_id,
            'selectedShelfId': self.shelf_id
        }


@dataclass
class PlanogramState:
    """Complete snapshot: project, fixture tree, focus and product catalog"""
    project: Project = field(default_factory=Project)
    doors: List[Door] = field(default_factory=list)
    selection: Selection = field(default_factory=Selection)
    catalog: List[Product] = field(default_factory=list)

    @classmethod
    def empty(cls, catalog: Optional[List[Product]] = None, project_name: str = "New Project") -> 'PlanogramState':
        """Initial snapshot: no doors, nothing selected"""
        return cls(project=Project(name=project_name), catalog=list(catalog or []))

    def to_dict(self) -> Dict:
        data = {
            'project': self.project.to_dict(),
            'doors': [d.to_dict() for d in self.doors],
            'productCatalog': [p.to_dict() for p in self.catalog]
        }
        data.update(self.selection.to_dict())
        return data
