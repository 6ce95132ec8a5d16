"""Browser pages. Each is a static HTML shell that drives the JSON API with fetch."""
from pathlib import Path
from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(include_in_schema=False)


@router.get("/login")
async def login_page():
    return FileResponse(STATIC_DIR / "login.html")


@router.get("/dashboard")
async def dashboard_page():
    return FileResponse(STATIC_DIR / "dashboard.html")


@router.get("/admin-secret")
async def admin_secret_page():
    return FileResponse(STATIC_DIR / "admin_secret.html")
