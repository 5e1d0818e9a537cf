import math

import pytest

from planogram.models import Orientation, PlacedProduct, Selection, catalog_categories, find_path, search_catalog
from planogram.models.lookup import all_node_ids, find_shelf, get_product, iter_shelves, subtree_ids
from planogram.models.serialization import state_from_dict, state_to_dict

from conftest import make_product


class TestProduct:
    """Derived figures on catalog products"""

    def test_weight_is_converted_from_grams(self):
        product = make_product("p", weight=1500.0)
        assert product.weight_kg == pytest.approx(1.5)

    def test_sales_and_days_of_supply_scale_with_facings(self):
        product = make_product("p", stock=30, sales_velocity=3.0, profit_margin=0.2)
        assert product.daily_sales(2) == pytest.approx(6.0)
        assert product.daily_profit(2) == pytest.approx(1.2)
        assert product.days_of_supply(2) == pytest.approx(5.0)

    def test_zero_velocity_gives_infinite_days_of_supply(self):
        product = make_product("p", sales_velocity=0.0)
        assert math.isinf(product.days_of_supply(1))

    def test_zero_stock_gives_zero_inventory_turn(self):
        product = make_product("p", stock=0)
        assert product.inventory_turn == 0.0

    def test_inventory_turn_is_annualized(self):
        product = make_product("p", stock=73, sales_velocity=2.0)
        assert product.inventory_turn == pytest.approx(10.0)

    def test_zero_width_gives_zero_per_cm_figures(self):
        product = make_product("p", width=0.0)
        assert product.sales_per_cm == 0.0
        assert product.profit_per_cm == 0.0


class TestShelf:

    def test_placement_requires_at_least_one_facing(self):
        with pytest.raises(ValueError):
            PlacedProduct("cola", facings=0)

    def test_remove_product_removes_every_placement(self, shelf):
        shelf.add_product(PlacedProduct("cola", position_x=0))
        shelf.add_product(PlacedProduct("chips", position_x=10))
        shelf.add_product(PlacedProduct("cola", position_x=30, facings=2))

        assert shelf.remove_product("cola") is True
        assert [p.product_id for p in shelf.products] == ["chips"]
        assert shelf.remove_product("cola") is False

    def test_placement_export_uses_camel_case(self):
        data = PlacedProduct("cola", position_x=5, facings=2, orientation=Orientation.SIDE).to_dict()
        assert data == {'productId': 'cola', 'positionX': 5, 'positionY': 0.0,
                        'facings': 2, 'orientation': 'side'}


class TestSelection:

    def test_focus_sets_ancestors_and_clears_deeper_levels(self):
        selection = Selection(door_id="d0", equipment_id="e0", bay_id="b0", shelf_id="s0")
        selection.focus('equipment', {'door': 'd1', 'equipment': 'e1', 'bay': None, 'shelf': None})
        assert selection == Selection(door_id="d1", equipment_id="e1")

    def test_clear_from_keeps_shallower_levels(self):
        selection = Selection(door_id="d", equipment_id="e", bay_id="b", shelf_id="s")
        selection.clear_from('bay')
        assert selection == Selection(door_id="d", equipment_id="e")


class TestLookup:
    """Depth-first lookups over the fixture tree"""

    def test_find_path_returns_every_ancestor(self, state):
        path = find_path(state, "shelf-2")
        assert path.level == 'shelf'
        assert path.ids() == {'door': 'door-1', 'equipment': 'equip-1', 'bay': 'bay-1', 'shelf': 'shelf-2'}

    def test_find_path_respects_level(self, state):
        assert find_path(state, "bay-1", 'shelf') is None
        assert find_path(state, "bay-1", 'bay').node.name == "Bay 1"

    def test_missing_ids_return_none(self, state):
        assert find_path(state, "nope") is None
        assert find_shelf(state, "nope") is None
        assert get_product(state, "nope") is None

    def test_node_ids_are_depth_first(self, state):
        assert all_node_ids(state) == ["door-1", "equip-1", "bay-1", "shelf-1", "shelf-2"]
        assert subtree_ids(state.doors[0].equipment[0]) == ["equip-1", "bay-1", "shelf-1", "shelf-2"]
        assert [s.id for s in iter_shelves(state)] == ["shelf-1", "shelf-2"]


class TestCatalogQueries:

    def test_search_matches_name_or_sku_case_insensitively(self, catalog):
        assert [p.id for p in search_catalog(catalog, "COLA")] == ["cola"]
        assert [p.id for p in search_catalog(catalog, "sku-chi")] == ["chips"]

    def test_search_filters_by_category(self, catalog):
        assert [p.id for p in search_catalog(catalog, "", category="snacks")] == ["chips"]
        assert len(search_catalog(catalog)) == 2

    def test_categories_in_catalog_order(self, catalog):
        catalog.append(make_product("water", category="beverages"))
        assert catalog_categories(catalog) == ["beverages", "snacks"]


class TestSerialization:

    def test_snapshot_survives_dict_conversion(self, stocked_state):
        stocked_state.selection.focus('shelf', find_path(stocked_state, "shelf-1").ids())
        restored = state_from_dict(state_to_dict(stocked_state))
        assert restored == stocked_state

    def test_missing_ids_are_generated(self):
        state = state_from_dict({'doors': [{'name': 'Side door'}]})
        assert state.doors[0].id
        assert state.doors[0].location == ''
