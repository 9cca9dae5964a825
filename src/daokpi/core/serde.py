"""
Canonical JSON serialization/deserialization for result models.

Provides a single canonical JSON policy (`json_dumps_canonical`) and thin helpers to
serialize pydantic result models to canonical JSON and back. This module is zero-IO.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Round-trip contract: model_from_json(type(m), model_to_json(m)) == m, so every numeric
      field survives serialize -> deserialize unchanged.
    - Enum fields serialize to their lower_snake values.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel

__all__ = [
    "json_dumps_canonical",
    "json_loads",
    "model_to_dict",
    "model_to_json",
    "model_from_json",
    "models_to_json",
]

M = TypeVar("M", bound=BaseModel)


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.

    Notes:
        This function assumes the input is JSON-serializable and does not perform
        coercion of unsupported types; use model_to_dict for pydantic models.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Args:
        s (str): JSON string to parse.

    Returns:
        Any: Decoded Python object (dict, list, str, int, float, bool, or None).
    """
    return json.loads(s)


def model_to_dict(model: BaseModel) -> dict[str, Any]:
    """Return a JSON-compatible dict for a model (enums as values, tuples as lists)."""
    return model.model_dump(mode="json")


def model_to_json(model: BaseModel) -> str:
    """
    Serialize a result model to canonical JSON.

    Args:
        model (BaseModel): Any daokpi.core.schema model.

    Returns:
        str: Canonical JSON string.

    Examples:
        >>> from daokpi.core.schema import DensityPoint
        >>> model_to_json(DensityPoint(x=1.0, density=0.25))
        '{"density":0.25,"x":1.0}'
    """
    return json_dumps_canonical(model_to_dict(model))


def model_from_json(model_cls: type[M], s: str) -> M:
    """
    Deserialize canonical (or any valid) JSON into a result model.

    Args:
        model_cls (type[M]): Target model class.
        s (str): JSON string produced by model_to_json or equivalent.

    Returns:
        M: Validated model instance.

    Raises:
        pydantic.ValidationError: If the payload does not satisfy the model.
    """
    return model_cls.model_validate_json(s)


def models_to_json(models: Iterable[BaseModel]) -> str:
    """Serialize a sequence of models as a canonical JSON array."""
    return json_dumps_canonical([model_to_dict(m) for m in models])
