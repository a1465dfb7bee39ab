"""API routes for link owners."""

from typing import List

from fastapi import APIRouter, Request, status

from .schemas import (
    CreateLinkRequest,
    LinkResponse,
    DeleteResponse,
    ErrorResponse,
)
from shortlinks.errors import LinkError, NotFoundError
from ..errors import error_response

router = APIRouter()


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid url or code"},
        409: {"model": ErrorResponse, "description": "Code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create link",
    description="Create a link. Optionally provide the code; otherwise one is generated.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a link."""
    service = request.app.state.service
    config = request.app.state.config

    result = await service.create(url=body.url, code=body.code)
    if isinstance(result, LinkError):
        return error_response(result)

    return LinkResponse.from_link(result, config.base_url)


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="List links",
    description="List every link, newest first.",
)
async def list_links(request: Request):
    """List all links."""
    service = request.app.state.service
    config = request.app.state.config

    result = await service.list_all()
    if isinstance(result, LinkError):
        return error_response(result)

    return [LinkResponse.from_link(link, config.base_url) for link in result]


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid code format"},
        404: {"model": ErrorResponse, "description": "Unknown code"},
    },
    summary="Get link",
    description="Get one link including its click count.",
)
async def get_link(request: Request, code: str):
    """Get one link."""
    service = request.app.state.service
    config = request.app.state.config

    result = await service.read_one(code)
    if isinstance(result, LinkError):
        return error_response(result)

    return LinkResponse.from_link(result, config.base_url)


@router.delete(
    "/links/{code}",
    response_model=DeleteResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown code"},
    },
    summary="Delete link",
)
async def delete_link(request: Request, code: str):
    """Delete a link."""
    service = request.app.state.service

    result = await service.remove(code)
    if isinstance(result, LinkError):
        return error_response(result)
    if not result:
        return error_response(NotFoundError())

    return DeleteResponse(ok=True)
