import json

import pytest

from planogram.data_processing import CatalogLoader, DataValidator, parse_layout_response, validate_batch_entries
from planogram.models import Orientation, PlacedProduct
from planogram.utils.error_handler import DataLoadError, MalformedExternalPayload, NotFoundError

from conftest import make_product


def entry(product_id="cola", **overrides):
    data = {'productId': product_id, 'positionX': 0, 'positionY': 0, 'facings': 1}
    data.update(overrides)
    return data


class TestParseLayoutResponse:

    def test_extracts_products_from_surrounding_text(self):
        text = 'Here is the layout:\n```json\n{"products": [{"productId": "cola", "positionX": 0, ' \
               '"positionY": 0, "facings": 2}]}\n```\nLet me know!'
        products = parse_layout_response(text)
        assert products == [{'productId': 'cola', 'positionX': 0, 'positionY': 0, 'facings': 2}]

    def test_no_json_object(self):
        with pytest.raises(MalformedExternalPayload):
            parse_layout_response("Sorry, I cannot help with that.")

    def test_invalid_json(self):
        with pytest.raises(MalformedExternalPayload) as exc:
            parse_layout_response('{"products": [}')
        assert "Invalid JSON" in exc.value.message

    def test_missing_products_array(self):
        with pytest.raises(MalformedExternalPayload):
            parse_layout_response('{"layout": []}')


class TestValidateBatchEntries:

    def test_builds_placements(self, catalog):
        placements = validate_batch_entries(
            [entry("cola", positionX=5, facings=2.0), entry("chips", orientation="side")], catalog
        )
        assert placements == [
            PlacedProduct("cola", position_x=5.0, facings=2),
            PlacedProduct("chips", orientation=Orientation.SIDE),
        ]

    @pytest.mark.parametrize("bad, field", [
        (entry(productId=""), 'productId'),
        (entry(productId=7), 'productId'),
        (entry(positionY=None), 'positionY'),
        (entry(positionX=True), 'positionX'),
        (entry(positionX=float('nan')), 'positionX'),
        (entry(facings=1.5), 'facings'),
        (entry(facings=0), 'facings'),
        (entry(facings="2"), 'facings'),
        (entry(orientation="upside-down"), 'orientation'),
    ])
    def test_mistyped_fields(self, catalog, bad, field):
        with pytest.raises(MalformedExternalPayload) as exc:
            validate_batch_entries([entry(), bad], catalog)
        assert exc.value.index == 1
        assert exc.value.field == field

    @pytest.mark.parametrize("field", ['positionX', 'facings'])
    def test_integers_too_large_for_float(self, catalog, field):
        text = json.dumps({'products': [entry(**{field: 10 ** 400})]})
        with pytest.raises(MalformedExternalPayload) as exc:
            validate_batch_entries(parse_layout_response(text), catalog)
        assert exc.value.index == 0
        assert exc.value.field == field

    def test_missing_field(self, catalog):
        incomplete = {'productId': 'cola', 'positionX': 0, 'positionY': 0}
        with pytest.raises(MalformedExternalPayload) as exc:
            validate_batch_entries([incomplete], catalog)
        assert exc.value.field == 'facings'
        assert exc.value.message == "Invalid facings at index 0: missing field"

    def test_type_errors_reported_before_unknown_products(self, catalog):
        """Every entry is type-checked before any product is resolved"""
        with pytest.raises(MalformedExternalPayload):
            validate_batch_entries([entry("ghost"), entry(facings=-1)], catalog)

    def test_unknown_product(self, catalog):
        with pytest.raises(NotFoundError) as exc:
            validate_batch_entries([entry("cola"), entry("ghost")], catalog)
        assert exc.value.index == 1
        assert exc.value.node_id == "ghost"

    def test_not_a_list(self, catalog):
        with pytest.raises(MalformedExternalPayload):
            validate_batch_entries({'productId': 'cola'}, catalog)


class TestDataValidator:

    def test_clean_catalog(self, catalog):
        is_valid, issues = DataValidator().validate_catalog(catalog)
        assert is_valid
        assert issues == []

    def test_catalog_errors_and_warnings(self):
        products = [
            make_product("a", width=0.0),
            make_product("a", profit_margin=1.5),
            make_product("b", min_facings=4, max_facings=2),
        ]
        validator = DataValidator()
        is_valid, issues = validator.validate_catalog(products)

        assert not is_valid
        assert any("Duplicate product IDs" in i for i in issues)
        assert any("Invalid dimensions" in i for i in issues)
        assert any("Min facings > Max facings" in i for i in issues)
        assert len(validator.warnings) == 1

    def test_valid_state(self, stocked_state):
        is_valid, _ = DataValidator().validate_state(stocked_state)
        assert is_valid

    def test_state_with_dangling_reference_and_stale_selection(self, stocked_state):
        shelf = stocked_state.doors[0].equipment[0].bays[0].shelves[1]
        shelf.products.append(PlacedProduct("ghost"))
        stocked_state.selection.bay_id = "shelf-1"

        validator = DataValidator()
        is_valid, issues = validator.validate_state(stocked_state)

        assert not is_valid
        assert any("unknown product ghost" in i for i in issues)
        assert any("Selected bay shelf-1" in i for i in issues)
        assert "ERRORS (2)" in validator.generate_validation_report()

    def test_duplicate_node_ids(self, stocked_state):
        bay = stocked_state.doors[0].equipment[0].bays[0]
        bay.shelves[1].id = "shelf-1"
        is_valid, issues = DataValidator().validate_state(stocked_state)
        assert not is_valid
        assert any("Duplicate node ID" in i for i in issues)


class TestCatalogLoader:

    def test_load_catalog_csv(self, tmp_path):
        (tmp_path / "catalog.csv").write_text(
            "id,name,sku,category,width,height,depth,weight,stock,salesVelocity,profitMargin,minFacings,maxFacings\n"
            "cola,Cola 330ml,SKU1,beverages,6.5,12,6.5,350,48,3.5,0.3,2,6\n"
            ",Crisps,,snacks,15,25,8,150,20,,0.4,,\n"
        )
        products = CatalogLoader(tmp_path).load_catalog("catalog.csv")

        assert len(products) == 2
        cola, crisps = products
        assert cola.id == "cola"
        assert cola.sales_velocity == pytest.approx(3.5)
        assert cola.min_facings == 2
        assert cola.weight_kg == pytest.approx(0.35)
        assert crisps.id
        assert crisps.sku == ''
        assert crisps.sales_velocity == 0.0
        assert crisps.max_facings == 1

    def test_missing_required_columns(self, tmp_path):
        (tmp_path / "catalog.csv").write_text("name,width\nCola,6\n")
        with pytest.raises(DataLoadError):
            CatalogLoader(tmp_path).load_catalog("catalog.csv")

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            CatalogLoader(tmp_path).load_catalog("nope.csv")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DataLoadError):
            CatalogLoader(tmp_path / "absent")

    def test_load_layout(self, tmp_path, stocked_state, cola):
        (tmp_path / "layout.json").write_text(json.dumps(stocked_state.to_dict()))

        loader = CatalogLoader(tmp_path)
        assert loader.load_layout("layout.json") == stocked_state

        replaced = loader.load_layout("layout.json", catalog=[cola])
        assert [p.id for p in replaced.catalog] == ["cola"]

    def test_invalid_layout(self, tmp_path):
        (tmp_path / "layout.json").write_text('{"doors": [{"location": "no name"}]}')
        with pytest.raises(DataLoadError):
            CatalogLoader(tmp_path).load_layout("layout.json")

    def test_load_response(self, tmp_path):
        (tmp_path / "response.txt").write_text('{"products": []}', encoding='utf-8')
        assert CatalogLoader(tmp_path).load_response("response.txt") == '{"products": []}'

    def test_undecodable_response(self, tmp_path):
        (tmp_path / "response.txt").write_bytes(b'{"products": [\xff\xfe]}')
        with pytest.raises(DataLoadError):
            CatalogLoader(tmp_path).load_response("response.txt")
