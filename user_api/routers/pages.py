from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from ..schemas import HealthStatus

router = APIRouter(tags=["pages"])

STATUS_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        body {{ font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; background: #f4f5fb; display: flex; align-items: center; justify-content: center; min-height: 100vh; margin: 0; }}
        .card {{ background: white; padding: 2.5rem; border-radius: 10px; box-shadow: 0 10px 40px rgba(0,0,0,0.15); max-width: 560px; text-align: center; }}
        .badge {{ display: inline-block; background: #28a745; color: white; padding: 0.4rem 1rem; border-radius: 20px; }}
        ul {{ list-style: none; padding: 0; text-align: left; }}
        li {{ margin: 0.6rem 0; }}
        a {{ color: #4a55c8; text-decoration: none; font-weight: 500; }}
    </style>
</head>
<body>
    <div class="card">
        <h1>{name}</h1>
        <p>Version {version}</p>
        <div class="badge">Running</div>
        <ul>
            <li><a href="/swagger">/swagger</a> - interactive API documentation</li>
            <li><a href="/users">/users</a> - list users (GET, bearer token required)</li>
            <li><a href="/health">/health</a> - health check</li>
        </ul>
    </div>
</body>
</html>"""

FAVICON_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="64" height="64" viewBox="0 0 64 64">'
    '<rect width="100%" height="100%" fill="#0366d6"/>'
    '<text x="50%" y="55%" font-size="36" font-family="Segoe UI,Arial" fill="#fff" '
    'text-anchor="middle">U</text></svg>'
)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def status_page(request: Request):
    """Human-readable landing page so browsers don't get raw JSON."""
    app = request.app
    return HTMLResponse(STATUS_PAGE.format(name=app.title, version=app.version))


@router.get("/favicon.ico", include_in_schema=False)
def favicon():
    return Response(content=FAVICON_SVG, media_type="image/svg+xml")


@router.get("/health", response_model=HealthStatus)
def health() -> HealthStatus:
    return HealthStatus(status="ok")
