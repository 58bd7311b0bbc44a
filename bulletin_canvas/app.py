"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bulletin_canvas import __version__

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return 422 with the error locations and messages, without echoing the input."""
    errors = [
        {key: value for key, value in error.items() if key not in ('input', 'ctx', 'url')}
        for error in exc.errors()
    ]
    logger.warning(f"Validation error for {request.url.path}: {len(errors)} errors")
    return JSONResponse(status_code=422, content={"detail": errors})


def create_api_app() -> FastAPI:
    """Create the canvas layout API application."""
    from bulletin_canvas.api import api_router

    app = FastAPI(
        title="Bulletin Canvas API",
        version=__version__,
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(api_router)
    return app


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    from bulletin_canvas.config import settings

    uvicorn.run(create_api_app(), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
