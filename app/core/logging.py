import logging
import sys

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from app.core.exceptions import AppError


def configure_logger(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure loguru with a single stdout sink.

    Args:
        level: Minimum level written to stdout.
        json_logs: Serialize records as JSON instead of the colored format.
    """
    logger.remove()  # drop the default stderr sink

    if json_logs:
        logger.add(sink=sys.stdout, level=level, serialize=True, diagnose=False)
    else:
        logger.add(
            sink=sys.stdout,
            level=level,
            diagnose=False,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | {message} | <dim>{extra}</dim>",
        )

    # Keep SQLAlchemy quiet unless DEBUG echo is on
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def handle_broad_exceptions(request: Request, call_next):
    """Turn anything a more specific handler did not catch into a 500."""
    try:
        return await call_next(request)
    except Exception as err:  # pylint: disable=broad-except
        logger.bind(
            http_method=request.method, url_path=str(request.url.path)
        ).opt(exception=err).error("Unhandled exception: {}: {}", type(err).__name__, err)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "code": "INTERNAL_SERVER_ERROR"},
        )


async def handle_app_errors(request: Request, exc: AppError) -> JSONResponse:
    """Render typed errors with their code."""
    if exc.status_code >= 500:
        logger.bind(url_path=str(request.url.path)).error("{}: {}", exc.code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
        headers=exc.headers,
    )
