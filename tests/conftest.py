"""Shared fixtures: a small catalog and a one-door layout with a single 100cm shelf."""

import pytest

from planogram.models import (
    Bay, Door, Equipment, PlacedProduct, PlanogramState, Product, Selection, Shelf,
)


def make_product(product_id, category="beverages", width=10.0, height=20.0, depth=8.0,
                 weight=500.0, stock=100, sales_velocity=2.0, profit_margin=0.3,
                 min_facings=1, max_facings=6, name=None):
    return Product(
        id=product_id,
        name=name or product_id.title(),
        sku=f"SKU-{product_id.upper()}",
        category=category,
        width=width,
        height=height,
        depth=depth,
        weight=weight,
        stock=stock,
        sales_velocity=sales_velocity,
        profit_margin=profit_margin,
        min_facings=min_facings,
        max_facings=max_facings
    )


def make_shelf(shelf_id="shelf-1", width=100.0, height=40.0, depth=50.0, max_weight=50.0, products=None):
    return Shelf(
        id=shelf_id,
        name=f"Shelf {shelf_id}",
        width=width,
        height=height,
        depth=depth,
        max_weight=max_weight,
        products=list(products or [])
    )


def make_state(catalog, shelves=None, selection=None):
    """door-1 > equip-1 > bay-1 > given shelves"""
    bay = Bay(id="bay-1", name="Bay 1", width=100, height=200, depth=50, max_weight=200,
              shelves=list(shelves or []))
    equipment = Equipment(id="equip-1", name="Unit 1", type="shelf unit",
                          width=100, height=200, depth=50, bays=[bay])
    door = Door(id="door-1", name="Front", location="Entrance", equipment=[equipment])
    return PlanogramState(doors=[door], catalog=list(catalog), selection=selection or Selection())


@pytest.fixture
def cola():
    return make_product("cola", category="beverages", width=10.0, weight=500.0, stock=20, sales_velocity=2.0)


@pytest.fixture
def chips():
    return make_product("chips", category="snacks", width=20.0, height=25.0, weight=200.0,
                        stock=15, sales_velocity=1.0, profit_margin=0.4)


@pytest.fixture
def catalog(cola, chips):
    return [cola, chips]


@pytest.fixture
def shelf():
    return make_shelf()


@pytest.fixture
def state(catalog):
    """Layout with two empty shelves and the first one selected"""
    shelves = [make_shelf("shelf-1"), make_shelf("shelf-2")]
    selection = Selection(door_id="door-1", equipment_id="equip-1", bay_id="bay-1", shelf_id="shelf-1")
    return make_state(catalog, shelves, selection)


@pytest.fixture
def stocked_state(catalog):
    """shelf-1 holds 2 cola and 1 chips facing, nothing selected"""
    shelves = [
        make_shelf("shelf-1", products=[
            PlacedProduct("cola", position_x=0, facings=2),
            PlacedProduct("chips", position_x=20, facings=1)
        ]),
        make_shelf("shelf-2")
    ]
    return make_state(catalog, shelves)
