"""
Boundary for placement batches produced outside the core, e.g. by a
generative layout proposer.

Everything arriving here is untrusted. Entries are type-checked and their
product references resolved before any of them is turned into a placement;
the first bad entry rejects the whole batch.
"""

import json
import math
from numbers import Real
from typing import Any, Dict, List, Mapping

from planogram.models.product import Product
from planogram.models.shelf import Orientation, PlacedProduct
from planogram.models.lookup import product_index
from planogram.utils.error_handler import MalformedExternalPayload, NotFoundError
from planogram.utils.logger import get_logger

REQUIRED_FIELDS = ('productId', 'positionX', 'positionY', 'facings')


def sanitize_json_response(text: str) -> str:
    """Keep only the span from the first '{' to the last '}'"""
    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end == -1 or end < start:
        raise MalformedExternalPayload('No valid JSON object found in response')
    return text[start:end + 1]


def parse_layout_response(text: str) -> List[Dict[str, Any]]:
    """Extract the raw `products` entries from a layout proposer's text response"""
    logger = get_logger()
    logger.debug(f"Raw layout response: {text[:200]}")

    try:
        layout = json.loads(sanitize_json_response(text))
    except json.JSONDecodeError as e:
        raise MalformedExternalPayload(f"Invalid JSON: {e.msg}") from e

    if not isinstance(layout, dict) or not isinstance(layout.get('products'), list):
        raise MalformedExternalPayload('Invalid response format: missing products array')

    return layout['products']


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _fits_float(value: Real, check) -> bool:
    # json.loads keeps arbitrarily large integer literals as int
    try:
        return check(value)
    except OverflowError:
        return False


def _check_entry(entry: Any, index: int):
    if not isinstance(entry, Mapping):
        raise MalformedExternalPayload('entry is not an object', index, 'entry')

    for field_name in REQUIRED_FIELDS:
        if field_name not in entry:
            raise MalformedExternalPayload('missing field', index, field_name)

    product_id = entry['productId']
    if not isinstance(product_id, str) or not product_id:
        raise MalformedExternalPayload('expected non-empty string', index, 'productId')

    for field_name in ('positionX', 'positionY'):
        if not _is_number(entry[field_name]) or not _fits_float(entry[field_name], math.isfinite):
            raise MalformedExternalPayload('expected number', index, field_name)

    facings = entry['facings']
    if not _is_number(facings) or not _fits_float(facings, lambda v: float(v).is_integer()):
        raise MalformedExternalPayload('expected whole number', index, 'facings')
    if facings < 1:
        raise MalformedExternalPayload('must be at least 1', index, 'facings')

    orientation = entry.get('orientation', Orientation.FRONT.value)
    if orientation not in [o.value for o in Orientation]:
        raise MalformedExternalPayload('expected front, side or top', index, 'orientation')


def validate_batch_entries(entries: Any, catalog: List[Product]) -> List[PlacedProduct]:
    """
    Type-check every entry and resolve every product reference, then build
    the placements. Raises on the first invalid entry; nothing is built
    unless all entries pass.
    """
    if not isinstance(entries, (list, tuple)):
        raise MalformedExternalPayload('expected a list of placements')

    for index, entry in enumerate(entries):
        _check_entry(entry, index)

    products = product_index(catalog)
    for index, entry in enumerate(entries):
        if entry['productId'] not in products:
            raise NotFoundError('product', entry['productId'], index=index)

    return [
        PlacedProduct(
            product_id=entry['productId'],
            position_x=float(entry['positionX']),
            position_y=float(entry['positionY']),
            facings=int(entry['facings']),
            orientation=Orientation(entry.get('orientation', Orientation.FRONT.value))
        )
        for entry in entries
    ]
