#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

# Setup paths
project_root = Path(__file__).parent.absolute()
sys.path.insert(0, str(project_root))


def load_snapshot(args, logger):
    """Load the layout (and optional catalog) into a validated store"""
    from planogram.data_processing.data_loader import CatalogLoader
    from planogram.data_processing.data_validator import DataValidator
    from planogram.engine.store import PlanogramStore

    loader = CatalogLoader(args.data_dir)
    catalog = loader.load_catalog(args.catalog) if args.catalog else None
    state = loader.load_layout(args.layout, catalog=catalog)

    if args.validate:
        validator = DataValidator()
        validator.validate_state(state)
        print(validator.generate_validation_report())

    store = PlanogramStore(state)
    logger.info(f"Project '{store.project.name}' loaded with {len(store.catalog)} catalog products")
    return store


def resolve_shelf(store, shelf_id: Optional[str]):
    """Use the given shelf, else the selected one, else the first shelf in the layout"""
    from planogram.models.lookup import find_shelf, iter_shelves
    from planogram.utils.error_handler import NotFoundError, PlanogramError

    shelf_id = shelf_id or store.selection.shelf_id
    if shelf_id:
        shelf = find_shelf(store.state, shelf_id)
        if shelf is None:
            raise NotFoundError('shelf', shelf_id)
        return shelf

    shelf = next(iter_shelves(store.state), None)
    if shelf is None:
        raise PlanogramError("Layout has no shelves")
    return shelf


def print_table(title: str, df: pd.DataFrame):
    print(f"\n{title}")
    print("-" * 60)
    if df.empty:
        print("(none)")
    else:
        print(df.to_string(index=False))


def run_analyze(store, shelf):
    from planogram.analytics import compliance_analysis, issues_to_dataframe, metrics_to_dataframe

    report = compliance_analysis(shelf, store.catalog)
    print_table(f"SHELF METRICS: {shelf.name}", metrics_to_dataframe(report))
    print_table("COMPLIANCE ISSUES", issues_to_dataframe(report.compliance_issues, store.catalog))
    return report


def run_suggest(store, shelf):
    from planogram.analytics import compliance_analysis, optimization_suggestions, suggestions_to_dataframe

    report = compliance_analysis(shelf, store.catalog)
    suggestions = optimization_suggestions(shelf, store.catalog, report)
    print_table(f"OPTIMIZATION SUGGESTIONS: {shelf.name}", suggestions_to_dataframe(suggestions, store.catalog))


def run_categories(store, shelf):
    from planogram.analytics import category_performance, category_performance_to_dataframe

    categories = category_performance(shelf, store.catalog)
    print_table(f"CATEGORY PERFORMANCE: {shelf.name}", category_performance_to_dataframe(categories))


def run_summary(store):
    """Roll up sales, profit and space utilization for every door, equipment and bay"""
    from planogram.analytics import summarize_bay, summarize_door, summarize_equipment

    rows = []
    for door in store.state.doors:
        rows.append(('Door', door.name, summarize_door(door, store.catalog)))
        for equipment in door.equipment:
            rows.append(('Equipment', equipment.name, summarize_equipment(equipment, store.catalog)))
            for bay in equipment.bays:
                rows.append(('Bay', bay.name, summarize_bay(bay, store.catalog)))

    df = pd.DataFrame([{
        'Level': level,
        'Name': name,
        'Daily Sales': round(summary.total_sales, 2),
        'Daily Profit': round(summary.total_profit, 2),
        'Space Utilization (%)': round(summary.space_utilization, 1)
    } for level, name, summary in rows])
    print_table("LAYOUT SUMMARY", df)


def run_apply_batch(store, shelf, args, logger):
    """Parse an external layout response and apply it to the shelf as one batch"""
    from planogram.data_processing.data_loader import CatalogLoader
    from planogram.data_processing.layout_parser import parse_layout_response
    from planogram.engine.commands import ApplyPlacementBatch

    entries = parse_layout_response(CatalogLoader(args.data_dir).load_response(args.response))

    logger.info(f"Applying {len(entries)} proposed placements to {shelf.name}")
    store.dispatch(ApplyPlacementBatch(shelf_id=shelf.id, entries=entries))

    updated = resolve_shelf(store, shelf.id)
    print(f"\n✅ Applied {len(updated.products)} placements to {updated.name}")
    run_analyze(store, updated)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Planogram Designer: shelf analytics and layout batches',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --layout layout.json analyze
  python main.py --layout layout.json --catalog catalog.csv --shelf <id> suggest
  python main.py --layout layout.json categories
  python main.py --layout layout.json summary
  python main.py --layout layout.json --shelf <id> apply-batch --response response.txt
        """
    )

    parser.add_argument('--layout', '-l', required=True,
                        help='Layout snapshot JSON')
    parser.add_argument('--catalog', '-c',
                        help='Product catalog CSV (replaces the catalog stored in the layout)')
    parser.add_argument('--data-dir', '-d', default='.',
                        help='Directory the layout, catalog and response paths are relative to')
    parser.add_argument('--shelf', '-s',
                        help='Shelf id (defaults to the selected shelf, then the first shelf)')
    parser.add_argument('--validate', '-v', action='store_true',
                        help='Print a data validation report before running')

    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser('analyze', help='Shelf metrics and compliance issues')
    subparsers.add_parser('suggest', help='Rule-based optimization suggestions')
    subparsers.add_parser('categories', help='Category space, sales and profit shares')
    subparsers.add_parser('summary', help='Door, equipment and bay roll-ups')
    batch_parser = subparsers.add_parser('apply-batch', help='Apply an external layout proposal')
    batch_parser.add_argument('--response', '-r', required=True,
                              help='File holding the raw response text')

    args = parser.parse_args(argv)

    from planogram.utils.error_handler import PlanogramError
    from planogram.utils.logger import get_logger

    logger = get_logger()

    try:
        store = load_snapshot(args, logger)

        if args.command == 'summary':
            run_summary(store)
            return 0

        shelf = resolve_shelf(store, args.shelf)
        if args.command == 'analyze':
            run_analyze(store, shelf)
        elif args.command == 'suggest':
            run_suggest(store, shelf)
        elif args.command == 'categories':
            run_categories(store, shelf)
        elif args.command == 'apply-batch':
            run_apply_batch(store, shelf, args, logger)

    except (PlanogramError, OSError) as e:
        logger.error(f"Error running {args.command}: {e}")
        print(f"\n❌ Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
