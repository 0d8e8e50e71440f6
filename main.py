from fastapi import FastAPI
from shortlink_app.config import settings
from shortlink_app.log_config import setup_logging
from shortlink_app.api.v1 import urls, statistics, logs, redirect

setup_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with expiring links and click analytics built with FastAPI",
    debug=settings.debug
)

@app.get("/")
async def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}




######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(statistics.router, prefix="/api/v1")
app.include_router(logs.router, prefix="/api/v1")
# Catch-all /{short_code} goes last
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
