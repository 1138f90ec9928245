from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path
import logging
import os
from datetime import datetime
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")

# Add the parent directory to sys.path
sys.path.append(str(Path(__file__).parent.parent))

from app.routers import auth, users, items, bookings
from app.database import engine, Base
from app import models  # noqa: F401  registers every model on Base
import uvicorn

APP_VERSION = "1.0.0"

app = FastAPI(
    title="LocMaroc API",
    description="API for a peer-to-peer rental marketplace: listings, bookings and users",
    version=APP_VERSION,
)


def _cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["authentication"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(items.router, prefix="/items", tags=["items"])
app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])


@app.on_event("startup")
def create_tables():
    # Production schemas are managed by Alembic
    if os.getenv("AUTO_CREATE_TABLES", "true").lower() in {"1", "true", "yes"}:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)


@app.get("/")
def read_root():
    return {"message": "Welcome to LocMaroc API"}


@app.get("/health")
def health():
    return {
        "status": "OK",
        "message": "LocMaroc API online",
        "timestamp": datetime.utcnow().isoformat(),
        "version": APP_VERSION,
        "environment": os.getenv("ENVIRONMENT", "development"),
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        "Invalid request | path=%s | method=%s", request.url.path, request.method
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "code": "invalid_input",
                "message": "Invalid request data",
                "errors": jsonable_encoder(exc.errors()),
            }
        },
    )


# Global unhandled exception handler -> logs ERROR
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")), reload=True)
