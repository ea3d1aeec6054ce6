"""Value types, queries, resource views and request bodies for the Clarify JSON-RPC API."""

__version__ = "0.1.0"
__all__ = ["fields", "jsonrpc", "views", "prettylog"]