"""JSON-RPC request bodies and named parameters."""

__all__ = ["request"]