import pandas as pd
import json
from pathlib import Path
from typing import List, Dict, Optional

from planogram.models.product import Product, generate_id
from planogram.models.state import PlanogramState
from planogram.models.serialization import state_from_dict
from planogram.utils.error_handler import DataLoadError
from planogram.utils.logger import get_logger


class CatalogLoader:
    """Read product catalogs and layout snapshots (read-only)"""

    # CSV column -> Product field
    COLUMN_MAPPING = {
        'id': 'id',
        'name': 'name',
        'sku': 'sku',
        'category': 'category',
        'width': 'width',
        'height': 'height',
        'depth': 'depth',
        'weight': 'weight',
        'stock': 'stock',
        'sales_velocity': 'sales_velocity',
        'salesVelocity': 'sales_velocity',
        'profit_margin': 'profit_margin',
        'profitMargin': 'profit_margin',
        'min_facings': 'min_facings',
        'minFacings': 'min_facings',
        'max_facings': 'max_facings',
        'maxFacings': 'max_facings',
        'priority': 'priority',
        'image_url': 'image_url',
        'imageUrl': 'image_url'
    }

    REQUIRED_COLUMNS = ['name', 'category', 'width', 'height', 'depth']

    def __init__(self, data_path: str = "."):
        self.data_path = Path(data_path)
        self.logger = get_logger()

        if not self.data_path.exists():
            raise DataLoadError(f"Required path not found: {self.data_path}")

    def _resolve(self, filename: str) -> Path:
        file_path = self.data_path / filename
        if not file_path.exists():
            raise DataLoadError(f"Data file not found: {file_path}")
        return file_path

    def load_catalog(self, filename: str) -> List[Product]:
        """Load a product catalog from CSV"""
        file_path = self._resolve(filename)
        try:
            df = pd.read_csv(file_path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DataLoadError(f"Could not read catalog {file_path}: {e}") from e

        products = self._dataframe_to_products(df)
        self.logger.info(f"Loaded {len(products)} products from {file_path.name}")
        return products

    def _dataframe_to_products(self, df: pd.DataFrame) -> List[Product]:
        """Convert DataFrame rows to Product objects"""
        df = df.rename(columns={k: v for k, v in self.COLUMN_MAPPING.items() if k in df.columns})

        missing_columns = set(self.REQUIRED_COLUMNS) - set(df.columns)
        if missing_columns:
            raise DataLoadError(f"Missing required columns: {sorted(missing_columns)}")

        # Fill optional numeric columns
        defaults = {
            'weight': 0.0,
            'stock': 0,
            'sales_velocity': 0.0,
            'profit_margin': 0.0,
            'min_facings': 1,
            'max_facings': 1,
            'priority': 50
        }
        for column, default in defaults.items():
            if column not in df.columns:
                df[column] = default
            df[column] = df[column].fillna(default)

        products = []
        for _, row in df.iterrows():
            product_id = row.get('id')
            products.append(Product(
                id=str(product_id) if pd.notna(product_id) else generate_id(),
                name=str(row['name']),
                sku=str(row['sku']) if 'sku' in row and pd.notna(row['sku']) else '',
                category=str(row['category']),
                width=float(row['width']),
                height=float(row['height']),
                depth=float(row['depth']),
                weight=float(row['weight']),
                stock=int(row['stock']),
                sales_velocity=float(row['sales_velocity']),
                profit_margin=float(row['profit_margin']),
                min_facings=int(row['min_facings']),
                max_facings=int(row['max_facings']),
                priority=int(row['priority']),
                image_url=row['image_url'] if 'image_url' in row and pd.notna(row['image_url']) else None
            ))

        return products

    def load_layout(self, filename: str, catalog: Optional[List[Product]] = None) -> PlanogramState:
        """Load a layout snapshot from JSON, optionally replacing its catalog"""
        file_path = self._resolve(filename)
        try:
            with open(file_path) as f:
                data: Dict = json.load(f)
            state = state_from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise DataLoadError(f"Invalid layout file {file_path}: {e}") from e

        if catalog is not None:
            state.catalog = list(catalog)

        self.logger.info(f"Loaded layout with {len(state.doors)} doors from {file_path.name}")
        return state

    def load_response(self, filename: str) -> str:
        """Read the raw text of an external layout proposal"""
        file_path = self._resolve(filename)
        try:
            with open(file_path, encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise DataLoadError(f"Could not decode response {file_path}: {e}") from e
