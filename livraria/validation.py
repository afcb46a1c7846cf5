"""
Schema validation independent of the HTTP layer.

Shapes are the pydantic models in ``livraria.schemas``. FastAPI applies them to
request bodies, path parameters and responses; ``validate`` applies them to any
raw payload so they can be exercised without a running server.
"""

from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from livraria.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_REQUEST_LOCATIONS = {"body", "path", "query", "header", "cookie"}


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts)


def violations_from(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Convert pydantic/FastAPI error entries into ``{field, message}`` violations."""
    return [{"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")} for err in errors]


def validate(schema: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate a raw payload against a declared shape.

    Args:
        schema: pydantic model describing the fields and their constraints
        payload: untyped input (usually a decoded JSON object)

    Returns:
        A constraint-satisfying instance of ``schema``

    Raises:
        ValidationError: with one violation per offending field
    """
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(violations_from(e.errors()))
