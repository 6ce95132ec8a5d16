from fastapi import FastAPI, APIRouter, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from eventboard.api import pages
from eventboard.api.v1.routes import (
    admin_secret as admin_secret_router,
    auth as auth_router,
    events as events_router,
    health as health_router,
)
from eventboard.core.config import settings
from eventboard.core.limiter import limiter
from eventboard.core.logging import request_logger
from eventboard.middleware.session_gate import SessionGateMiddleware

app = FastAPI(title="EventBoard")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are client errors: answer 400 with the first problem found."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header"))
        detail = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    request_logger(request).warning(f"Integrity error: {exc.orig}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "Database constraint violation"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    request_logger(request).exception("Unhandled error")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Internal server error"})


app.add_middleware(SessionGateMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router.router)
api_router.include_router(events_router.router)
api_router.include_router(admin_secret_router.router)
api_router.include_router(health_router.router)

app.include_router(api_router)
app.include_router(pages.router)
