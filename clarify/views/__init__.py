"""Views of Clarify resources, data frames and selection results."""

__all__ = ["resource", "signal", "item", "data_frame", "response"]