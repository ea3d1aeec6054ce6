"""RPC requests and their named parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = ["DEFAULT_API_VERSION", "ParamName", "Param", "Request", "new_request"]

DEFAULT_API_VERSION = "1.0"


def _to_jsonable(value: Any) -> Any:
    """Convert a parameter value into plain JSON-compatible data."""
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return _to_jsonable(to_json())
    if isinstance(value, Mapping):
        return {str(key): _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


class ParamName(str):
    """The name of an RPC parameter."""

    __slots__ = ()

    def value(self, v: Any) -> Param:
        """Return a parameter with this name and the value ``v``."""
        return Param(name=str(self), value=v)


@dataclass(frozen=True)
class Param:
    """A named parameter."""

    name: str
    value: Any


@dataclass
class Request:
    """An RPC request; build one with ``new_request``."""

    method: str
    params: dict[str, Any] = field(default_factory=dict)
    jsonrpc: str = "2.0"
    id: int = 1
    api_version: str = DEFAULT_API_VERSION

    def to_json(self) -> dict[str, Any]:
        """Return the request body; the API version travels as a header."""
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "id": self.id,
            "params": _to_jsonable(self.params),
        }


def new_request(method: str, *params: Param) -> Request:
    """Return a request for ``method``; later parameters override earlier ones."""
    return Request(
        method=method,
        params={param.name: param.value for param in params},
    )