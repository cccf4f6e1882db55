"""Settings comparison and reporting."""

from gram.diff.comparator import compare, ordered_keys, values_equal
from gram.diff.reporter import RichDiffReporter, format_diff_lines, format_diff_report, format_value

__all__ = [
    "RichDiffReporter",
    "compare",
    "format_diff_lines",
    "format_diff_report",
    "format_value",
    "ordered_keys",
    "values_equal",
]
