"""
Pages router - Serve the front-end HTML pages.
"""

from pathlib import Path
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse

from api.config import settings

# Create router
router = APIRouter(include_in_schema=False)

# URL path -> file under PUBLIC_DIR
PAGES = {
    '/': 'index.html',
    '/registered': 'registered.html',
    '/rounds': 'rounds.html',
    '/admin': 'admin-login.html',
    '/admin/dashboard': 'admin-dashboard.html',
}


def page_response(filename: str) -> FileResponse:
    path = Path(settings.PUBLIC_DIR) / filename
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Page {filename} not found")
    return FileResponse(path, media_type='text/html')


def _page_endpoint(filename: str):
    async def serve_page():
        return page_response(filename)
    return serve_page


for url_path, page_file in PAGES.items():
    router.add_api_route(url_path, _page_endpoint(page_file), methods=['GET'])
