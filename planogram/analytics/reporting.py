"""Tabular views of analytics results for printing and export"""

from typing import Dict, List, Optional

import pandas as pd

from planogram.analytics.category import CategoryPerformance
from planogram.analytics.compliance import ComplianceIssue, ShelfAnalytics
from planogram.analytics.suggestions import OptimizationSuggestion
from planogram.models.lookup import product_index
from planogram.models.product import Product

ISSUE_COLUMNS = ['Type', 'Severity', 'Product', 'Message', 'Recommendation',
                 'Sales Impact', 'Profit Impact', 'Days of Supply Impact']
SUGGESTION_COLUMNS = ['Type', 'Priority', 'Product', 'Current', 'Suggested', 'Message',
                      'Sales Impact', 'Profit Impact', 'Space Impact (%)', 'Days of Supply Impact']
CATEGORY_COLUMNS = ['Category', 'Occupied Width (cm)', 'Space Share (%)', 'Sales Velocity',
                    'Sales Share (%)', 'Profit', 'Profit Share (%)', 'Days of Supply',
                    'Inventory Turn', 'Sales per cm', 'Profit per cm']


def _product_name(products: Dict[str, Product], product_id: Optional[str]) -> str:
    if product_id is None:
        return ''
    product = products.get(product_id)
    return product.name if product else product_id


def metrics_to_dataframe(report: ShelfAnalytics) -> pd.DataFrame:
    """Headline shelf metrics as Metric/Value rows"""
    perf = report.performance
    metrics_data = [
        {'Metric': 'Space Utilization', 'Value': f"{report.space_utilization:.1f}%"},
        {'Metric': 'Total Products', 'Value': report.total_products},
        {'Metric': 'Total Facings', 'Value': report.facing_count},
        {'Metric': 'Weight Load', 'Value': f"{report.weight_load:.1f}kg"},
        {'Metric': 'Daily Sales', 'Value': f"{perf.total_sales:.1f} units"},
        {'Metric': 'Daily Profit', 'Value': f"{perf.total_profit:.2f}"},
        {'Metric': 'Sales per cm', 'Value': f"{perf.sales_per_cm:.3f}"},
        {'Metric': 'Profit per cm', 'Value': f"{perf.profit_per_cm:.3f}"},
        {'Metric': 'Average Inventory Turn', 'Value': f"{perf.average_inventory_turn:.1f}"},
        {'Metric': 'Average Days of Supply', 'Value': f"{perf.days_of_supply:.1f}"},
        {'Metric': 'Compliance Issues', 'Value': len(report.compliance_issues)},
    ]
    return pd.DataFrame(metrics_data)


def issues_to_dataframe(issues: List[ComplianceIssue], catalog: Optional[List[Product]] = None) -> pd.DataFrame:
    products = product_index(catalog or [])
    rows = []
    for issue in issues:
        impact = issue.impact
        rows.append({
            'Type': issue.type.value,
            'Severity': issue.severity.value,
            'Product': _product_name(products, issue.product_id),
            'Message': issue.message,
            'Recommendation': issue.recommendation or '',
            'Sales Impact': impact.sales if impact else None,
            'Profit Impact': impact.profit if impact else None,
            'Days of Supply Impact': impact.days_of_supply if impact else None
        })
    return pd.DataFrame(rows, columns=ISSUE_COLUMNS)


def suggestions_to_dataframe(suggestions: List[OptimizationSuggestion],
                             catalog: Optional[List[Product]] = None) -> pd.DataFrame:
    products = product_index(catalog or [])
    rows = []
    for suggestion in suggestions:
        rows.append({
            'Type': suggestion.type.value,
            'Priority': suggestion.priority,
            'Product': _product_name(products, suggestion.product_id),
            'Current': suggestion.current_value,
            'Suggested': suggestion.suggested_value,
            'Message': suggestion.message,
            'Sales Impact': suggestion.impact.sales,
            'Profit Impact': suggestion.impact.profit,
            'Space Impact (%)': suggestion.impact.space_utilization,
            'Days of Supply Impact': suggestion.impact.days_of_supply
        })
    return pd.DataFrame(rows, columns=SUGGESTION_COLUMNS)


def category_performance_to_dataframe(categories: List[CategoryPerformance]) -> pd.DataFrame:
    """Category summary sheet, largest space share first"""
    rows = []
    for data in categories:
        rows.append({
            'Category': data.category,
            'Occupied Width (cm)': data.occupied_width,
            'Space Share (%)': round(data.space_share, 1),
            'Sales Velocity': data.sales_velocity,
            'Sales Share (%)': round(data.sales_share, 1),
            'Profit': data.profit,
            'Profit Share (%)': round(data.profit_share, 1),
            'Days of Supply': data.days_of_supply,
            'Inventory Turn': data.inventory_turn,
            'Sales per cm': data.sales_per_cm,
            'Profit per cm': data.profit_per_cm
        })

    df = pd.DataFrame(rows, columns=CATEGORY_COLUMNS)
    return df.sort_values('Space Share (%)', ascending=False, kind='stable').reset_index(drop=True)
