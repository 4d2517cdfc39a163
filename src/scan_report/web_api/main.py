"""
FastAPI Application
===================
Main entry point for the Scan Report API.

Run with:
    uvicorn scan_report.web_api.main:app --reload
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scan_report import __version__
from scan_report.web_api.config import settings
from scan_report.web_api.routers import health, report

# Create application
app = FastAPI(
    title="Scan Report API",
    description="Render security-scanner output as pull-request comments",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(report.router, prefix="/report", tags=["Report"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Scan Report API",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# For running directly: python -m scan_report.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
