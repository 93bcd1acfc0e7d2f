"""
Main FastAPI application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kitchen_ops.config import get_settings
from kitchen_ops.database import engine, create_tables
from kitchen_ops.api import functions, haccp, reports, inventory, checklists
from kitchen_ops.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("Database tables created")

    yield

    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(functions.router, prefix="/api/functions", tags=["Functions"])
app.include_router(haccp.router, prefix="/api/haccp", tags=["HACCP"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(inventory.router, prefix="/api/inventory", tags=["Inventory"])
app.include_router(checklists.router, prefix="/api/checklists", tags=["Checklists"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "kitchen_ops.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
