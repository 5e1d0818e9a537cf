from .compliance import (
    ComplianceIssue, IssueImpact, IssueType, Severity, ShelfAnalytics, ShelfPerformance,
    compliance_analysis, occupied_width,
)
from .suggestions import OptimizationSuggestion, SuggestionImpact, SuggestionType, optimization_suggestions
from .category import CategoryPerformance, category_performance
from .rollup import PerformanceSummary, summarize_bay, summarize_door, summarize_equipment
from .reporting import (
    category_performance_to_dataframe, issues_to_dataframe, metrics_to_dataframe,
    suggestions_to_dataframe,
)

__all__ = [
    'ComplianceIssue', 'IssueImpact', 'IssueType', 'Severity', 'ShelfAnalytics', 'ShelfPerformance',
    'compliance_analysis', 'occupied_width',
    'OptimizationSuggestion', 'SuggestionImpact', 'SuggestionType', 'optimization_suggestions',
    'CategoryPerformance', 'category_performance',
    'PerformanceSummary', 'summarize_bay', 'summarize_equipment', 'summarize_door',
    'metrics_to_dataframe', 'issues_to_dataframe', 'suggestions_to_dataframe',
    'category_performance_to_dataframe'
]
