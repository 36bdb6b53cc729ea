"""Request Validation — body → named schema → normalized model, or VALIDATION_ERROR.

Invariants:
    - Only the first failing rule is reported to the client
    - On success the route receives the normalized model (trimmed, lowercased)
    - A failing body never reaches a controller or a store
"""

from typing import Any, Awaitable, Callable, Sequence, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from app.core.errors import ApiError, ErrorKind

ModelT = TypeVar("ModelT", bound=BaseModel)

_NOT_AN_OBJECT = {"model_type", "model_attributes_type", "dict_type"}


def first_error_message(errors: Sequence[dict[str, Any]]) -> str:
    """Human-readable message of the first failing rule."""
    if not errors:
        return "Validation failed"
    error = errors[0]
    if error["type"] in _NOT_AN_OBJECT:
        return "Request body must be a JSON object"
    if error["type"] == "missing" and error.get("loc"):
        field = str(error["loc"][-1])
        return f"{field.capitalize()} is required"
    return error["msg"]


def validated_body(schema: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """FastAPI dependency validating the parsed body against schema."""

    async def dependency(request: Request) -> ModelT:
        payload = getattr(request.state, "body", None)
        if payload is None:
            payload = {}
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise ApiError(
                ErrorKind.VALIDATION_ERROR, first_error_message(e.errors()),
            ) from e

    return dependency
