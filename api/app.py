"""
api/app.py
FastAPI application entry point.
Run with:  uvicorn api.app:app --port 8000
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models import ErrorResponse
from config.settings import settings


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=(
            "Laytime and demurrage position for CHEMROAD JOURNEY voyage 124. "
            "Time-type totals per port, cargo-volume proration of shared time, "
            "the Port Qasim attribution table, and the voyage demurrage summary."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # read-only API consumed by the dashboard front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def _global_handler(request: Request, exc: Exception) -> JSONResponse:
        from monitoring import get_logger
        get_logger(__name__).error("Unhandled error", path=request.url.path, error=str(exc))
        body = ErrorResponse(error="Internal server error", detail=str(exc))
        return JSONResponse(status_code=500, content=body.model_dump())

    from api.routes import router
    app.include_router(router, prefix="/api/v1", tags=["Laytime"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.app:app", host=settings.api_host, port=settings.api_port, log_level="info")
