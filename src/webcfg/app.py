"""
FastAPI application serving a ConfigPage.

Routes:
- GET  /, /index.html          rendered form; queued notifications are
                               cleared once rendered
- POST /{section}              apply the submitted form, then 303 to /
- GET  /assets/css/custom.css  theme CSS, 404 without a theme
- GET  /assets/favicon.ico     from the page's assets directory
- GET  /assets/icon.png        from the page's assets directory
"""

import logging
import time
from typing import Callable, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, RedirectResponse, Response

from webcfg.hooks import Notification
from webcfg.page import FAILURE_PREFIX, ConfigPage
from webcfg.theme import theme_css
from webcfg.view import render_index

logger = logging.getLogger(__name__)

CUSTOM_ASSETS = ("favicon.ico", "icon.png")


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        # Only log slow requests (>1s) or errors
        if process_time > 1.0 or response.status_code >= 400:
            logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.2f}s")
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(f"{request.method} {request.url.path} - ERROR: {str(e)} - {process_time:.2f}s")
        raise


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return PlainTextResponse("Internal server error", status_code=500)


async def read_form_values(request: Request) -> Dict[str, str]:
    """First submitted value per form name; file uploads are ignored."""
    form = await request.form()
    values: Dict[str, str] = {}
    for key, value in form.multi_items():
        if isinstance(value, str):
            values.setdefault(key, value)
    return values


def create_app(config_page: ConfigPage, title: str = "webcfg") -> FastAPI:
    """Build the FastAPI application for one ConfigPage."""
    app = FastAPI(title=title, docs_url=None, redoc_url=None, openapi_url=None)

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    @app.exception_handler(Exception)
    async def _global_exception_handler(request, exc):
        return await global_exception_handler(request, exc)

    @app.get("/assets/css/custom.css")
    def custom_css():
        if config_page.theme is None:
            raise HTTPException(status_code=404, detail="Not Found")
        return Response(content=theme_css(config_page.theme), media_type="text/css")

    @app.get("/assets/{asset_name}")
    def custom_asset(asset_name: str):
        if config_page.assets_dir is None or asset_name not in CUSTOM_ASSETS:
            raise HTTPException(status_code=404, detail="Not Found")
        path = config_page.assets_dir / asset_name
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(path)

    @app.get("/")
    @app.get("/index.html")
    def index():
        try:
            body = render_index(config_page.build_page())
        except Exception as e:
            logger.error(f"Failed to render index: {e}", exc_info=True)
            return PlainTextResponse(str(e), status_code=500)
        finally:
            config_page.take_notifications()
        return HTMLResponse(body)

    @app.get("/{path:path}")
    def not_found(path: str):
        # Unmatched GETs answer 404, not 405 from the POST route below
        raise HTTPException(status_code=404, detail="Not Found")

    @app.post("/{section_name}")
    async def update_section(section_name: str, request: Request):
        logger.info(f"Update request for {section_name}")
        try:
            values = await read_form_values(request)
        except Exception as e:
            logger.warning(f"Could not read form for {section_name}: {e}")
            config_page.notify(Notification(f"{FAILURE_PREFIX}{e}", "danger"))
            return RedirectResponse(url="/", status_code=303)
        # Hooks may block and update() takes a threading lock
        result = await run_in_threadpool(config_page.update, section_name, values)
        if not result.ok:
            logger.warning(f"Update of {section_name} failed: {result.error}")
        return RedirectResponse(url="/", status_code=303)

    return app
