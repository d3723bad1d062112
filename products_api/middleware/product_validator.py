"""
Request-body validator for mutating product routes.

Runs ahead of the controller: it either hands back a ProductPayload or raises
InvalidProductError, which stops the request with a 400.
"""
import json
from typing import Any, Dict, List

from fastapi import Request
from pydantic import ValidationError
import structlog

from products_api.core.exceptions import InvalidProductError
from products_api.schemas.product_schemas import ProductPayload

logger = structlog.get_logger()


def _field_errors(exc: ValidationError) -> List[Dict[str, str]]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return errors


def validate_product_payload(body: Any) -> ProductPayload:
    if not isinstance(body, dict):
        raise InvalidProductError(errors=[{"field": "body", "message": "Request body must be a JSON object"}])

    try:
        return ProductPayload.model_validate(body)
    except ValidationError as e:
        errors = _field_errors(e)
        logger.warning("Product payload rejected", errors=errors)
        raise InvalidProductError(errors=errors) from e


async def validate_product_request(request: Request) -> ProductPayload:
    """FastAPI dependency wrapping validate_product_payload around the raw body."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Product payload is not valid JSON", path=request.url.path)
        raise InvalidProductError(errors=[{"field": "body", "message": "Request body must be valid JSON"}]) from e
    return validate_product_payload(body)


def product_request_body() -> Dict[str, Any]:
    """OpenAPI requestBody generated from the same model the validator enforces."""
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": ProductPayload.model_json_schema()}
            },
        }
    }
