"""
FastAPI application of the timesheet reporting service.
Wires settings, logging, the error mapping and the reports router.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from typing import Dict, Any

from timesheet.config import settings
from timesheet.application.dto.base_dto import ErrorResponseDTO, HealthCheckResponseDTO
from timesheet.domain.models.time_window import Granularity
from timesheet.domain.services.report_view import ReportType
from timesheet.infrastructure.db.database import create_all_tables
from timesheet.infrastructure.web.middleware.error_handler import ErrorHandlerMiddleware
from timesheet.infrastructure.web.routers import reports

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema outside production and log the reporting setup."""
    logger.info(f"Starting {settings.api_title} v{settings.api_version} ({settings.environment})")
    logger.info(
        f"Reports in {settings.timezone}, default time span '{settings.default_granularity}', "
        f"walk page size {settings.report_page_size}"
    )

    if settings.is_development or settings.is_testing:
        create_all_tables()
        logger.info("Activity and project tables ready")

    yield

    logger.info("Reporting service stopped")


def create_application() -> FastAPI:
    """Build the reporting API."""
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(ErrorHandlerMiddleware)

    reports_path = f"{settings.api_prefix}/reports"
    app.include_router(reports.router, prefix=reports_path, tags=["Reports"])

    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Describe the report endpoint and the selectors it accepts."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "reports": reports_path,
            "time_spans": [g.value for g in Granularity],
            "report_types": [r.value for r in ReportType],
            "timezone": settings.timezone,
        }

    @app.get(f"{settings.api_prefix}/health", response_model=HealthCheckResponseDTO)
    async def health_check() -> HealthCheckResponseDTO:
        return HealthCheckResponseDTO(
            status="healthy",
            environment=settings.environment,
            version=settings.api_version,
            reference_timezone=settings.timezone
        )

    @app.exception_handler(status.HTTP_404_NOT_FOUND)
    async def not_found_handler(request: Request, exc):
        body = ErrorResponseDTO(
            error="Not Found",
            message=f"No report resource at {request.url.path}",
            details={"path": request.url.path, "reports": reports_path}
        )
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump(mode="json"))

    return app


app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "timesheet.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
