"""
Declarative route table support.

A RouteSpec describes one method + path binding together with everything the
OpenAPI document needs to say about it. build_router turns a sequence of them
into an APIRouter, so the table handed to create_app is the single source for
both dispatch and documentation.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from fastapi import APIRouter, Depends

from products_api.schemas.product_schemas import ErrorResponse


@dataclass(frozen=True)
class RouteSpec:
    method: str
    path: str
    endpoint: Callable[..., Any]
    summary: str
    status_code: int = 200
    response_model: Any = None
    response_description: str = "Successful Response"
    # status code -> description, rendered with the shared error body
    error_responses: Mapping[int, str] = field(default_factory=dict)
    # run in order before the endpoint; an endpoint depending on the same
    # callable receives the cached result instead of a second run
    pre_steps: Tuple[Callable[..., Any], ...] = ()
    openapi_extra: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> str:
        return self.endpoint.__name__


def build_router(routes: Sequence[RouteSpec], tags: Sequence[str] = ("Products",)) -> APIRouter:
    router = APIRouter(tags=list(tags))
    for route in routes:
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            name=route.name,
            summary=route.summary,
            status_code=route.status_code,
            response_model=route.response_model,
            response_description=route.response_description,
            responses={
                code: {"model": ErrorResponse, "description": description}
                for code, description in route.error_responses.items()
            },
            dependencies=[Depends(step) for step in route.pre_steps],
            openapi_extra=route.openapi_extra,
        )
    return router
