"""Visitor-facing routes: the redirect and the health check."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

import shortlinks
from shortlinks.errors import LinkError
from ..api.schemas import HealthResponse
from ..errors import error_response

router = APIRouter()


# Registered before the redirect: "healthz" is itself a well-formed code
@router.get("/healthz", response_model=HealthResponse, include_in_schema=False)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    if not await service.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Service unhealthy"},
        )

    return HealthResponse(ok=True, version=shortlinks.__version__)


@router.get("/{code}", include_in_schema=False)
async def redirect_to_url(request: Request, code: str):
    """Redirect a visitor to the link's URL, counting the visit."""
    resolver = request.app.state.resolver
    # Picked up by LoggingMiddleware for the visit log line
    request.state.link_code = code

    result = await resolver.resolve(code)
    if isinstance(result, LinkError):
        return error_response(result)

    # 302 rather than 301 so browsers come back and every visit is counted
    return RedirectResponse(url=result, status_code=status.HTTP_302_FOUND)
