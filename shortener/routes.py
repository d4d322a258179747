"""FastAPI route definitions for the URL shortener REST API.

This module translates HTTP requests into code registry calls and registry
results into status codes and payloads.

API Endpoint Overview
=====================
::
    GET    /health
        └─ HealthResponse (200)

    POST   /api/encode
        ├─ URLCreate (request body)
        └─ URLResponse (201) or 422

    GET    /api/decode/:code
        └─ DecodeResponse (200) or 404

    GET    /api/statistic/:code
        └─ URLStats (200) or 404

    GET    /api/list
        └─ list[URLResponse] (200)

    GET    /api/search?q=
        └─ list[URLResponse] (200, empty for q shorter than 3)

    GET    /:code
        └─ 302 Redirect or 404

    DELETE /:code
        └─ 204 or 404

Request Flow Diagram
====================
::
    ┌─────────────┐
    │  HTTP       │
    │  Request    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Validate &  │
    │ Parse       │
    │ (Pydantic)  │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Inject      │
    │ registry &  │
    │ context     │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Call        │
    │ CodeRegistry│
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Serialize   │
    │ Response    │
    └─────────────┘

Key Behaviours
===============
- Registry lookups return None for unknown codes; handlers turn that into 404.
- A redirect is two calls, resolve() then record_visit(), so a failed visit
  update never blocks the redirect.
- Short URLs are BASE_URL + "/" + short_code.
- Fixed /api/* and /health routes are declared before the /{code} catch-all.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import RedirectResponse

from shortener.dependencies import RequestContext, get_registry, get_request_context
from shortener.enums import HealthStatus
from shortener.exceptions import CodeAllocationError
from shortener.registry import CodeRegistry
from shortener.schemas import DecodeResponse, HealthResponse, URLCreate, URLResponse, URLStats

__all__ = ["router"]

router = APIRouter()

NOT_FOUND_DETAIL = "Short URL not found"


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> HealthResponse:
    records = len(registry)
    ctx.logger.debug(f"Health check: {records} records")
    return HealthResponse(status=HealthStatus.HEALTHY, registry=HealthStatus.HEALTHY, records=records)


@router.post("/api/encode", response_model=URLResponse, status_code=201, tags=["urls"])
async def encode_url(
    payload: URLCreate,
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> URLResponse:
    ctx.add_tag("url_creation")
    ctx.logger.info(
        f"URL shortening requested: {payload.url}",
        extra={"operation": "encode", "target_url": payload.url},
    )

    try:
        record = registry.register(payload.url)
    except CodeAllocationError as exc:
        ctx.logger.error(
            f"URL shortening failed: {exc}",
            extra={"operation": "encode", "error": str(exc), "duration_ms": ctx.get_duration()},
        )
        raise HTTPException(status_code=500, detail="Could not allocate a short code") from exc

    ctx.logger.info(
        f"URL shortened successfully: {record.short_code}",
        extra={"operation": "encode", "short_code": record.short_code, "duration_ms": ctx.get_duration()},
    )
    return URLResponse.from_record(record, ctx.settings.BASE_URL)


@router.get("/api/decode/{code}", response_model=DecodeResponse, tags=["urls"])
async def decode_url(
    code: str,
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> DecodeResponse:
    record = registry.resolve(code)
    if record is None:
        ctx.logger.warning(f"Decode failed - short code not found: {code}")
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return DecodeResponse(original_url=record.original_url)


@router.get("/api/statistic/{code}", response_model=URLStats, tags=["urls"])
async def get_statistics(
    code: str,
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> URLStats:
    ctx.logger.info(f"Stats requested for short code: {code}")
    stats = registry.statistics(code)
    if stats is None:
        ctx.logger.warning(f"Stats not found for short code: {code}")
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return URLStats.model_validate(stats)


@router.get("/api/list", response_model=list[URLResponse], tags=["urls"])
async def list_urls(
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> list[URLResponse]:
    return [URLResponse.from_record(record, ctx.settings.BASE_URL) for record in registry.list_all()]


@router.get("/api/search", response_model=list[URLResponse], tags=["urls"])
async def search_urls(
    q: str = Query("", description="Substring to look for in original URLs"),
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> list[URLResponse]:
    results = registry.search(q)
    ctx.logger.debug(f"Search '{q}' matched {len(results)} records")
    return [URLResponse.from_record(record, ctx.settings.BASE_URL) for record in results]


@router.get("/{code}", tags=["redirect"])
async def redirect_to_url(
    code: str,
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> RedirectResponse:
    ctx.add_tag("redirect")

    record = registry.resolve(code)
    if record is None:
        ctx.logger.warning(
            f"Redirect failed - short code not found: {code}",
            extra={"operation": "redirect", "short_code": code, "error": "not_found"},
        )
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)

    if not registry.record_visit(code):
        # removed between resolve() and record_visit(); the redirect still stands
        ctx.logger.warning(f"Visit not recorded for {code}: record no longer registered")

    ctx.logger.info(
        f"Redirect successful: {code} -> {record.original_url}",
        extra={
            "operation": "redirect",
            "short_code": code,
            "target_url": record.original_url,
            "duration_ms": ctx.get_duration(),
        },
    )
    return RedirectResponse(url=record.original_url, status_code=302)


@router.delete("/{code}", status_code=204, tags=["urls"])
async def delete_url(
    code: str,
    ctx: RequestContext = Depends(get_request_context),
    registry: CodeRegistry = Depends(get_registry),
) -> Response:
    if not registry.remove(code):
        ctx.logger.warning(f"Delete failed - short code not found: {code}")
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    ctx.logger.info(f"Short URL deleted: {code}")
    return Response(status_code=204)
