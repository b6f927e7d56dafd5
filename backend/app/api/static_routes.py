"""
Static file routes for the web client.

Serves static/index.html at / and everything under static/ at /static/.
Production deployments should put a real web server in front of these.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse

from app.core.config import get_settings

router = APIRouter(tags=["static"])

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
}

NO_CACHE = {"Cache-Control": "no-cache"}


def _file_response(path: Path) -> FileResponse:
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    media_type = CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")
    return FileResponse(path, media_type=media_type, headers=NO_CACHE)


@router.get("/", include_in_schema=False)
def serve_index() -> FileResponse:
    return _file_response(get_settings().static_dir / "index.html")


@router.get("/static/{file_path:path}", include_in_schema=False)
def serve_static(file_path: str) -> FileResponse:
    # Reject directory traversal
    if ".." in file_path:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    static_dir = get_settings().static_dir.resolve()
    # An absolute file_path replaces static_dir in the join
    path = (static_dir / file_path).resolve()
    if not path.is_relative_to(static_dir):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return _file_response(path)
