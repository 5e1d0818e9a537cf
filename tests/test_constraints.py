import pytest

from planogram.constraints import ConstraintCheck, can_place, compute_shelf_load, validate_placement
from planogram.models import PlacedProduct
from planogram.utils.error_handler import NotFoundError, ValidationError

from conftest import make_product, make_shelf


class TestSpaceCheck:

    def test_overfull_shelf_reports_remaining_space(self):
        """100cm shelf with 80cm occupied rejects a 30cm product, 20cm remaining"""
        filler = make_product("filler", width=20.0, weight=100.0, stock=10)
        candidate = make_product("wide", width=30.0, weight=100.0)
        shelf = make_shelf(width=100.0, products=[PlacedProduct("filler", facings=4)])

        with pytest.raises(ValidationError) as exc:
            validate_placement(shelf, shelf.products, [filler, candidate], PlacedProduct("wide"))

        error = exc.value
        assert error.check == ConstraintCheck.SPACE
        assert error.remaining == pytest.approx(20.0)
        assert error.actual == pytest.approx(110.0)
        assert error.limit == 100.0
        assert "20.0cm remaining" in error.message

    def test_exact_fill_is_accepted(self):
        product = make_product("p", width=25.0, weight=100.0, stock=10)
        shelf = make_shelf(width=100.0, products=[PlacedProduct("p", facings=3)])
        load = validate_placement(shelf, shelf.products, [product], PlacedProduct("p"))
        assert load.total_width == pytest.approx(100.0)
        assert load.remaining_space == pytest.approx(0.0)


class TestWeightCheck:
    """Existing load of 45kg on a 50kg shelf"""

    @pytest.fixture
    def loaded(self):
        base = make_product("base", width=10.0, weight=9000.0, stock=10)
        shelf = make_shelf(max_weight=50.0, products=[PlacedProduct("base", facings=5)])
        return shelf, base

    def test_six_kg_candidate_is_rejected(self, loaded):
        shelf, base = loaded
        heavy = make_product("heavy", weight=6000.0)

        with pytest.raises(ValidationError) as exc:
            validate_placement(shelf, shelf.products, [base, heavy], PlacedProduct("heavy"))

        assert exc.value.check == ConstraintCheck.WEIGHT
        assert exc.value.actual == pytest.approx(51.0)
        assert exc.value.remaining == pytest.approx(5.0)

    def test_four_kg_candidate_is_accepted(self, loaded):
        shelf, base = loaded
        light = make_product("light", weight=4000.0)

        load = validate_placement(shelf, shelf.products, [base, light], PlacedProduct("light"))
        assert load.total_weight == pytest.approx(49.0)


class TestStockCheck:
    """Product with 10 units in stock and 7 facings already placed"""

    @pytest.fixture
    def setup(self):
        product = make_product("p", width=5.0, weight=10.0, stock=10)
        shelf = make_shelf(products=[PlacedProduct("p", facings=7)])
        return shelf, [product]

    def test_four_more_is_rejected(self, setup):
        shelf, catalog = setup
        with pytest.raises(ValidationError) as exc:
            validate_placement(shelf, shelf.products, catalog, PlacedProduct("p", position_x=50, facings=4))

        assert exc.value.check == ConstraintCheck.STOCK
        assert exc.value.actual == 11
        assert exc.value.limit == 10

    def test_three_more_is_accepted(self, setup):
        shelf, catalog = setup
        load = validate_placement(shelf, shelf.products, catalog, PlacedProduct("p", position_x=50, facings=3))
        assert load.used_stock["p"] == 10


class TestCheckOrder:

    def test_dimension_check_runs_first(self):
        """A too-tall product on a full shelf fails on dimension, not space"""
        tall = make_product("tall", height=60.0, width=200.0)
        shelf = make_shelf(height=40.0, width=100.0)

        with pytest.raises(ValidationError) as exc:
            validate_placement(shelf, [], [tall], PlacedProduct("tall"))
        assert exc.value.check == ConstraintCheck.DIMENSION
        assert exc.value.actual == 60.0
        assert exc.value.limit == 40.0

    def test_depth_is_checked(self):
        deep = make_product("deep", depth=80.0)
        shelf = make_shelf(depth=50.0)
        with pytest.raises(ValidationError) as exc:
            validate_placement(shelf, [], [deep], PlacedProduct("deep"))
        assert "depth" in exc.value.message


class TestMovingWithinShelf:

    def test_own_placements_are_excluded(self):
        """Resizing in place is judged against the other occupants only"""
        product = make_product("p", width=30.0, weight=100.0, stock=10)
        shelf = make_shelf(width=100.0, products=[PlacedProduct("p", facings=3)])
        candidate = PlacedProduct("p", facings=3)

        assert can_place(shelf, shelf.products, [product], candidate) is False
        assert can_place(shelf, shelf.products, [product], candidate, moving_within_shelf=True) is True

    def test_unknown_product_is_not_placeable(self):
        shelf = make_shelf()
        assert can_place(shelf, [], [make_product("p")], PlacedProduct("ghost")) is False

    def test_validator_does_not_mutate_inputs(self):
        product = make_product("p", width=30.0, weight=100.0, stock=10)
        occupants = [PlacedProduct("p", facings=2)]
        shelf = make_shelf(products=list(occupants))

        validate_placement(shelf, shelf.products, [product], PlacedProduct("p"), moving_within_shelf=True)
        assert shelf.products == occupants


class TestShelfLoad:

    def test_sums_width_weight_and_stock(self, catalog):
        shelf = make_shelf(products=[PlacedProduct("cola", facings=2), PlacedProduct("chips")])
        load = compute_shelf_load(shelf, shelf.products, catalog)

        assert load.total_width == pytest.approx(40.0)
        assert load.total_weight == pytest.approx(1.2)
        assert load.total_facings == 3
        assert load.space_utilization == pytest.approx(40.0)
        assert load.used_stock == {"cola": 2, "chips": 1}

    def test_unknown_product_is_not_found(self, catalog):
        shelf = make_shelf()
        with pytest.raises(NotFoundError):
            validate_placement(shelf, [], catalog, PlacedProduct("ghost"))
