"""PlainWiki FastAPI application."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from plainwiki.config import Settings
from plainwiki.core.models import Page
from plainwiki.core.routes import RouteValidator, WikiRoute, matched_title
from plainwiki.core.storage import FileStorage, Storage
from plainwiki.core.templates import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Wiki:
    """Process-wide, read-only state shared by all requests."""

    settings: Settings
    storage: Storage
    renderer: TemplateRenderer
    validator: RouteValidator


def get_wiki(request: Request) -> Wiki:
    return request.app.state.wiki


def internal_error(exc: Exception) -> PlainTextResponse:
    """500 response carrying the raw error text."""
    return PlainTextResponse(str(exc), status_code=500)


async def view_page(
    request: Request,
    title: str = Depends(matched_title),
    wiki: Wiki = Depends(get_wiki),
):
    """View a wiki page."""
    try:
        page = await wiki.storage.load_page(title)
    except OSError:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)
    return wiki.renderer.render(request, "view", page=page)


async def edit_page(
    request: Request,
    title: str = Depends(matched_title),
    wiki: Wiki = Depends(get_wiki),
):
    """Edit page form."""
    try:
        page = await wiki.storage.load_page(title)
    except OSError:
        page = Page(title=title)
    return wiki.renderer.render(request, "edit", page=page)


async def save_page(
    request: Request,
    title: str = Depends(matched_title),
    wiki: Wiki = Depends(get_wiki),
    body: str = Form(""),
):
    """Save page content submitted from the edit form."""
    if request.method != "POST":
        raise HTTPException(status_code=405, headers={"Allow": "POST"})
    page = Page(title=title, body=body.encode("utf-8"))
    try:
        await wiki.storage.save_page(page)
    except OSError as exc:
        logger.exception("Failed to save page %s", title)
        return internal_error(exc)
    return RedirectResponse(url=f"/view/{title}", status_code=302)


async def view_front_page(request: Request, wiki: Wiki = Depends(get_wiki)):
    """Front page - list all pages."""
    try:
        titles = await wiki.storage.list_titles()
    except OSError as exc:
        logger.exception("Failed to list pages")
        return internal_error(exc)
    if wiki.settings.sort_front_page:
        titles.sort()
    return wiki.renderer.render(request, "view_frontpage", pages=titles)


async def not_found(request: Request, exc: Exception) -> Response:
    return PlainTextResponse("404 page not found", status_code=404)


async def method_not_allowed(request: Request, exc: HTTPException) -> Response:
    """Only the save route answers 405; every other path is a 404."""
    match = request.app.state.wiki.validator.match(request.url.path)
    if match is not None and match.action == "save":
        return await http_exception_handler(request, exc)
    return await not_found(request, exc)


WIKI_ROUTES = (
    WikiRoute("view", ("GET",), view_page),
    WikiRoute("edit", ("GET",), edit_page),
    WikiRoute("save", ("GET", "POST"), save_page),
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Templates are compiled and the page directory created here, so a
    broken template set fails before the server starts listening.
    """
    if settings is None:
        settings = Settings()

    wiki = Wiki(
        settings=settings,
        storage=FileStorage(settings.page_dir, suffix=settings.page_suffix),
        renderer=TemplateRenderer(
            settings.template_dir,
            globals={
                "app_title": settings.app_title,
                "front_page": settings.front_page,
            },
        ),
        validator=RouteValidator(reserved=(settings.front_page,)),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: log where pages are served from."""
        logger.info("Serving pages from %s", settings.page_dir.resolve())
        yield
        logger.info("Shutting down")

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.wiki = wiki
    app.add_exception_handler(404, not_found)
    app.add_exception_handler(405, method_not_allowed)

    async def root_redirect():
        """Redirect to the front page."""
        return RedirectResponse(url=f"/view/{settings.front_page}", status_code=302)

    app.add_api_route("/", root_redirect, methods=["GET"])
    # must precede /view/{title}, which refuses the front page title
    app.add_api_route(
        f"/view/{settings.front_page}",
        view_front_page,
        methods=["GET"],
        response_class=HTMLResponse,
    )
    for route in WIKI_ROUTES:
        app.add_api_route(
            route.path,
            route.handler,
            methods=list(route.methods),
            response_class=HTMLResponse,
        )
    return app
