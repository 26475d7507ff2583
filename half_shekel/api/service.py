"""FastAPI application serving the live half shekel value."""

import logging
from datetime import UTC, datetime
from typing import Annotated, Final

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..market_data.errors import MarketDataError
from ..pricing.calculator import HalfShekelPricer
from .models import ErrorResponse, HalfShekelResponse
from .settings import api_settings

ERROR_MARKET_DATA_UNAVAILABLE: Final[str] = (
    "Unable to load market data right now. Please try again in a minute."
)
ERROR_NOT_FOUND: Final[str] = "Endpoint not found"
ERROR_INTERNAL_ERROR: Final[str] = "An internal server error occurred"

NO_STORE: Final[dict[str, str]] = {"Cache-Control": "no-store"}
PUBLIC_CACHE: Final[dict[str, str]] = {"Cache-Control": "public, max-age=300"}

logger = logging.getLogger(__name__)


def get_pricer() -> HalfShekelPricer:
    """
    Dependency function to provide a pricer.

    Returns:
        HalfShekelPricer: Pricer wired to the default provider chains
    """
    return HalfShekelPricer()


def get_base_url(request: Request) -> str:
    """Public base URL of the site, honouring a reverse proxy's scheme."""
    if api_settings.public_base_url:
        return api_settings.public_base_url.rstrip("/")

    forwarded_proto = request.headers.get("x-forwarded-proto", "")
    proto = forwarded_proto.split(",")[0].strip() or "https"
    host = request.headers.get("host") or "localhost"
    return f"{proto}://{host}"


app = FastAPI(
    title="Half Shekel API",
    description="Live value of the half shekel in silver, in USD and ILS",
    version="1.0.0",
)


@app.get("/health", response_model=dict[str, str])
async def health() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        dict[str, str]: Health status information
    """
    return {"message": "Half Shekel API is running", "status": "healthy"}


@app.get(
    "/api/half-shekel",
    response_model=HalfShekelResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_half_shekel(
    pricer: Annotated[HalfShekelPricer, Depends(get_pricer)],
) -> JSONResponse:
    """
    Compute the current half shekel value from live market data.

    Every request fetches fresh quotes; nothing is cached.

    Args:
        pricer: Pricer dependency resolving both market quotes

    Returns:
        JSONResponse: Constants, market quotes with sources and the derived values
    """
    try:
        pricing = await pricer.price()
    except MarketDataError as e:
        return JSONResponse(
            status_code=500,
            headers=NO_STORE,
            content=ErrorResponse(
                error=ERROR_MARKET_DATA_UNAVAILABLE, details=str(e)
            ).model_dump(),
        )

    return JSONResponse(
        headers=NO_STORE,
        content=HalfShekelResponse.from_pricing(pricing).model_dump(
            mode="json", by_alias=True
        ),
    )


@app.get("/robots.txt", response_class=PlainTextResponse)
async def robots(request: Request) -> PlainTextResponse:
    base_url = get_base_url(request)
    return PlainTextResponse(
        f"User-agent: *\nAllow: /\n\nSitemap: {base_url}/sitemap.xml\n",
        headers=PUBLIC_CACHE,
    )


@app.get("/sitemap.xml")
async def sitemap(request: Request) -> Response:
    base_url = get_base_url(request)
    now = datetime.now(UTC).isoformat()
    body = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        "  <url>\n"
        f"    <loc>{base_url}/</loc>\n"
        f"    <lastmod>{now}</lastmod>\n"
        "    <changefreq>hourly</changefreq>\n"
        "    <priority>1.0</priority>\n"
        "  </url>\n"
        "</urlset>\n"
    )
    return Response(body, media_type="application/xml", headers=PUBLIC_CACHE)


@app.exception_handler(404)
async def not_found_handler(_: Request, __: Exception) -> JSONResponse:
    """Handle 404 errors.

    Returns:
        JSONResponse: Error response in JSON format
    """
    return JSONResponse(
        status_code=404,
        content=ErrorResponse(error=ERROR_NOT_FOUND).model_dump(),
    )


@app.exception_handler(Exception)
async def internal_error_handler(_: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors.

    Args:
        exc: The exception that was raised

    Returns:
        JSONResponse: Error response in JSON format
    """
    logger.error(f"Internal server error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        headers=NO_STORE,
        content=ErrorResponse(
            error=ERROR_INTERNAL_ERROR, details=str(exc)
        ).model_dump(),
    )


async def main() -> None:
    """Main entry point for the API server."""
    config = uvicorn.Config(
        app,
        host=api_settings.api_host,
        port=api_settings.api_port,
        log_level=api_settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
