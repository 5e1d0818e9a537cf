from typing import List, Tuple
from datetime import datetime

from planogram.models.product import Product
from planogram.models.state import PlanogramState, Selection
from planogram.models.lookup import iter_paths, product_index


class DataValidator:
    """Validate catalog and snapshot data quality"""

    def __init__(self):
        self.warnings = []
        self.errors = []

    def validate_catalog(self, products: List[Product]) -> Tuple[bool, List[str]]:
        """Validate product catalog and return (is_valid, issues)"""
        self.warnings = []
        self.errors = []

        # Check for duplicates
        product_ids = [p.id for p in products]
        if len(product_ids) != len(set(product_ids)):
            duplicates = {pid for pid in product_ids if product_ids.count(pid) > 1}
            self.errors.append(f"Duplicate product IDs found: {duplicates}")

        # Validate each product
        for product in products:
            self._validate_single_product(product)

        all_issues = self.errors + self.warnings
        return len(self.errors) == 0, all_issues

    def _validate_single_product(self, product: Product):
        """Validate individual product data"""
        # Check dimensions
        if product.width <= 0 or product.height <= 0 or product.depth <= 0:
            self.errors.append(f"{product.name}: Invalid dimensions")

        if product.weight < 0:
            self.errors.append(f"{product.name}: Negative weight")

        # Check inventory and sales data
        if product.stock < 0:
            self.errors.append(f"{product.name}: Negative stock")

        if product.sales_velocity < 0:
            self.errors.append(f"{product.name}: Negative sales velocity")

        # Check facing constraints
        if product.min_facings < 0 or product.max_facings < 0:
            self.errors.append(f"{product.name}: Negative facing limits")
        elif product.min_facings > product.max_facings:
            self.errors.append(f"{product.name}: Min facings > Max facings")

        # Margin is a decimal fraction
        if product.profit_margin < 0:
            self.warnings.append(f"{product.name}: Negative profit margin")
        elif product.profit_margin > 1:
            self.warnings.append(f"{product.name}: Profit margin above 100% ({product.profit_margin})")

    def validate_state(self, state: PlanogramState) -> Tuple[bool, List[str]]:
        """Validate a snapshot's tree, placements and selection"""
        self.validate_catalog(state.catalog)
        products = product_index(state.catalog)

        seen_ids = set()
        live_ids = {level: set() for level in Selection.LEVELS}

        for path in iter_paths(state):
            node = path.node
            if node.id in seen_ids:
                self.errors.append(f"Duplicate node ID found: {node.id}")
            seen_ids.add(node.id)
            live_ids[path.level].add(node.id)

            if path.level != 'shelf':
                continue

            shelf = path.shelf
            if shelf.width <= 0 or shelf.height <= 0 or shelf.depth <= 0:
                self.errors.append(f"Shelf {shelf.name} has invalid dimensions")

            for placement in shelf.products:
                if placement.product_id not in products:
                    self.errors.append(f"Shelf {shelf.name} references unknown product {placement.product_id}")
                if placement.facings < 1:
                    self.errors.append(f"Shelf {shelf.name} has a placement with {placement.facings} facings")

        # Selection pointers must reference live nodes
        for level in Selection.LEVELS:
            selected = state.selection.get(level)
            if selected is not None and selected not in live_ids[level]:
                self.errors.append(f"Selected {level} {selected} does not exist")

        all_issues = self.errors + self.warnings
        return len(self.errors) == 0, all_issues

    def generate_validation_report(self) -> str:
        """Generate a comprehensive validation report"""
        report = []
        report.append("DATA VALIDATION REPORT")
        report.append("=" * 50)
        report.append(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        report.append("")

        if self.errors:
            report.append(f"ERRORS ({len(self.errors)}):")
            report.append("-" * 30)
            for error in self.errors:
                report.append(f"❌ {error}")
            report.append("")

        if self.warnings:
            report.append(f"WARNINGS ({len(self.warnings)}):")
            report.append("-" * 30)
            for warning in self.warnings:
                report.append(f"⚠️  {warning}")
            report.append("")

        if not self.errors and not self.warnings:
            report.append("✅ All validations passed!")

        return "\n".join(report)
