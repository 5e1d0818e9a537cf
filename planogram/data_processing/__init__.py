from .data_loader import CatalogLoader
from .data_validator import DataValidator
from .layout_parser import parse_layout_response, validate_batch_entries

__all__ = ['CatalogLoader', 'DataValidator', 'parse_layout_response', 'validate_batch_entries']
