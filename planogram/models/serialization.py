"""Conversion between snapshot records and plain dicts (camelCase keys)."""

from datetime import datetime
from typing import Dict

from planogram.models.fixture import Bay, Door, Equipment
from planogram.models.product import Product, generate_id
from planogram.models.shelf import Orientation, PlacedProduct, Shelf, ShelfType
from planogram.models.state import PlanogramState, Project, Selection


def product_from_dict(data: Dict) -> Product:
    return Product(
        id=data.get('id') or generate_id(),
        name=data['name'],
        sku=data.get('sku', ''),
        category=data.get('category', 'other'),
        width=float(data['width']),
        height=float(data['height']),
        depth=float(data['depth']),
        weight=float(data.get('weight', 0)),
        stock=int(data.get('stock', 0)),
        sales_velocity=float(data.get('salesVelocity', 0)),
        profit_margin=float(data.get('profitMargin', 0)),
        min_facings=int(data.get('minFacings', 1)),
        max_facings=int(data.get('maxFacings', 1)),
        priority=int(data.get('priority', 50)),
        image_url=data.get('imageUrl')
    )


def placement_from_dict(data: Dict) -> PlacedProduct:
    return PlacedProduct(
        product_id=data['productId'],
        position_x=float(data.get('positionX', 0)),
        position_y=float(data.get('positionY', 0)),
        facings=int(data.get('facings', 1)),
        orientation=Orientation(data.get('orientation', 'front'))
    )


def shelf_from_dict(data: Dict) -> Shelf:
    return Shelf(
        id=data.get('id') or generate_id(),
        name=data['name'],
        width=float(data['width']),
        height=float(data['height']),
        depth=float(data['depth']),
        max_weight=float(data.get('maxWeight', 0)),
        shelf_type=ShelfType(data.get('shelfType', 'standard')),
        temperature=data.get('temperature'),
        products=[placement_from_dict(p) for p in data.get('products', [])]
    )


def bay_from_dict(data: Dict) -> Bay:
    return Bay(
        id=data.get('id') or generate_id(),
        name=data['name'],
        width=float(data['width']),
        height=float(data['height']),
        depth=float(data['depth']),
        max_weight=float(data.get('maxWeight', 0)),
        flow_direction=data.get('flowDirection', 'left-to-right'),
        category=data.get('category'),
        shelves=[shelf_from_dict(s) for s in data.get('shelves', [])]
    )


def equipment_from_dict(data: Dict) -> Equipment:
    return Equipment(
        id=data.get('id') or generate_id(),
        name=data['name'],
        type=data.get('type', 'shelf unit'),
        width=float(data['width']),
        height=float(data['height']),
        depth=float(data['depth']),
        temperature=data.get('temperature'),
        bays=[bay_from_dict(b) for b in data.get('bays', [])]
    )


def door_from_dict(data: Dict) -> Door:
    return Door(
        id=data.get('id') or generate_id(),
        name=data['name'],
        location=data.get('location', ''),
        traffic_flow=data.get('trafficFlow', 50),
        equipment=[equipment_from_dict(e) for e in data.get('equipment', [])]
    )


def project_from_dict(data: Dict) -> Project:
    project = Project(
        id=data.get('id') or generate_id(),
        name=data.get('name', 'New Project'),
        description=data.get('description')
    )
    if data.get('createdAt'):
        project.created_at = datetime.fromisoformat(data['createdAt'])
    if data.get('updatedAt'):
        project.updated_at = datetime.fromisoformat(data['updatedAt'])
    return project


def state_from_dict(data: Dict) -> PlanogramState:
    """Build a snapshot from the dict shape produced by `state_to_dict`"""
    return PlanogramState(
        project=project_from_dict(data.get('project', {})),
        doors=[door_from_dict(d) for d in data.get('doors', [])],
        selection=Selection(
            door_id=data.get('selectedDoorId'),
            equipment_id=data.get('selectedEquipmentId'),
            bay_id=data.get('selectedBayId'),
            shelf_id=data.get('selectedShelfId')
        ),
        catalog=[product_from_dict(p) for p in data.get('productCatalog', [])]
    )


def state_to_dict(state: PlanogramState) -> Dict:
    return state.to_dict()

