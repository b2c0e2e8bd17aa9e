"""Output formatting modules."""

from .formatters import format_table, format_json, format_exams, format_methods, get_scaling_method_name
from .csv_export import generate_csv, export_to_csv

__all__ = [
    "format_table",
    "format_json",
    "format_exams",
    "format_methods",
    "get_scaling_method_name",
    "generate_csv",
    "export_to_csv",
]
