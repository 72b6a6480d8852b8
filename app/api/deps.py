from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from app.core.error_handlers import format_validation_errors
from app.core.errors import RequestValidationFailed

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate_request(schema: type[SchemaT]):
    """Dependency factory that checks query, path params and body against an endpoint schema.

    Every violation is collected; any violation short-circuits the route with a 400.
    On success the route receives the coerced, defaulted request model.
    """
    async def validator(request: Request) -> SchemaT:
        raw = {
            "query": dict(request.query_params),
            "params": dict(request.path_params),
            "body": await _read_json_body(request),
        }
        try:
            return schema.model_validate(raw)
        except ValidationError as exc:
            raise RequestValidationFailed(format_validation_errors(exc.errors()))
    return validator


async def _read_json_body(request: Request):
    if not await request.body():
        return {}
    try:
        return await request.json()
    except ValueError:
        raise RequestValidationFailed([{"path": "body", "message": "Invalid JSON body"}])
