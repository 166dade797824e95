"""Partial decoding of frame payloads.

The outer frame schema is shared by every event, the payload under ``d`` is
not. Decoding is therefore staged: pull ``d`` out without looking at its
contents, then validate only that sub-document against the caller's model.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import DecodeError
from .payload import DATA_FIELD

T = TypeVar("T", bound=BaseModel)


def extract_data(raw: bytes | str) -> Any:
    """Return the ``d`` sub-document of a frame, unvalidated.

    Raises:
        DecodeError: If the frame is not a JSON object or has no ``d`` member
    """
    try:
        outer = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Invalid frame: {e}") from e

    if not isinstance(outer, dict):
        raise DecodeError(f"Frame must be a JSON object, got {type(outer).__name__}")
    if outer.get(DATA_FIELD) is None:
        raise DecodeError(f"Frame has no '{DATA_FIELD}' payload")
    return outer[DATA_FIELD]


def parse_data(raw: bytes | str, model: type[T]) -> T:
    """Decode the ``d`` payload of a frame into ``model``.

    Args:
        raw: Complete frame as received from the gateway
        model: Record type the payload is expected to match

    Returns:
        A fresh instance of ``model``

    Raises:
        DecodeError: If ``d`` is missing, not an object, or does not match ``model``
    """
    data = extract_data(raw)
    if not isinstance(data, dict):
        raise DecodeError(
            f"'{DATA_FIELD}' payload for {model.__name__} must be an object, "
            f"got {type(data).__name__}"
        )
    # JSON-mode strict validation: no "5" -> 5 or 5.0 -> 5 coercion, while
    # nested records still accept JSON objects
    try:
        return model.model_validate_json(json.dumps(data), strict=True)
    except ValidationError as e:
        raise DecodeError(f"Payload does not match {model.__name__}: {e}") from e
