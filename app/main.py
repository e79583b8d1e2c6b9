from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os
from datetime import datetime
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")

from app.routers import (
    auth,
    tutors,
    courses,
    bookings,
    payments,
    reviews,
    kyc,
    chat,
    notifications,
)
from app.database import engine, Base, SessionLocal
from app.exceptions import TutorMitraError
from app.init_db import create_initial_admins
from app.services.email import error_report_service
import uvicorn


def _error_emails_enabled() -> bool:
    return os.getenv("ENABLE_ERROR_EMAILS", "false").lower() in {"1", "true", "yes"}


def _configure_email_error_reporting() -> None:
    if not _error_emails_enabled():
        logger.info(
            "Email error reporting disabled (ENABLE_ERROR_EMAILS not set or false)"
        )
        return

    if not error_report_service.is_configured():
        logger.warning("Email error reporting enabled but SMTP settings are missing")
        return

    logger.info("Email error reporting configured successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)

    logger.info("Initializing database with the platform admin...")
    db = SessionLocal()
    try:
        create_initial_admins(db)
    finally:
        db.close()

    _configure_email_error_reporting()
    yield


app = FastAPI(
    title="TutorMitra API",
    description="API for tutor discovery, session bookings, payments and KYC",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["authentication"])
app.include_router(tutors.router, prefix="/tutors", tags=["tutors"])
app.include_router(courses.router, prefix="/courses", tags=["courses"])
app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
app.include_router(payments.router, prefix="/payments", tags=["payments"])
app.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
app.include_router(kyc.router, prefix="/kyc", tags=["kyc"])
app.include_router(chat.router, prefix="/chat", tags=["chat"])
app.include_router(notifications.router, prefix="/notifications", tags=["notifications"])


@app.get("/")
def read_root():
    return {"message": "Welcome to TutorMitra API"}


@app.exception_handler(TutorMitraError)
async def tutormitra_error_handler(request: Request, exc: TutorMitraError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message, "error": "validation_error"},
    )


# Global unhandled exception handler -> logs ERROR and sends email
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )

    if _error_emails_enabled() and error_report_service.is_configured():
        error_report_service.send_error_email(
            {
                "path": request.url.path,
                "method": request.method,
                "client": request.client.host if request.client else "unknown",
                "user": getattr(request.state, "user_email", "Anonymous"),
                "exception": exc,
                "timestamp": datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S"),
            }
        )

    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal Server Error"},
    )


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=5009, reload=True)
