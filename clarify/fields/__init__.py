"""Field types for encoding queries, filters and values as JSON."""

__all__ = [
    "errors",
    "timestamp",
    "duration",
    "binary",
    "number",
    "comparison",
    "resource_filter",
    "resource_query",
    "evaluate",
    "maps",
    "data_filter",
    "data_query",
]