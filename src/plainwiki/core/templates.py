"""HTML rendering for wiki pages."""

import logging
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

logger = logging.getLogger(__name__)

TEMPLATE_NAMES = ("edit", "view", "view_frontpage")


class TemplateRenderer:
    """Fixed set of named templates, compiled once at construction.

    A missing or malformed template raises here, so the application
    cannot start with a broken template set.
    """

    def __init__(
        self,
        directory: Path,
        names: tuple[str, ...] = TEMPLATE_NAMES,
        globals: dict[str, Any] | None = None,
    ):
        env = Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            auto_reload=False,
        )
        env.globals.update(globals or {})
        self.names = names
        self.templates = Jinja2Templates(env=env)
        for name in names:
            self.templates.get_template(self._filename(name))
        logger.info("Loaded templates %s from %s", ", ".join(names), directory)

    @staticmethod
    def _filename(name: str) -> str:
        return f"{name}.html"

    def render(self, request: Request, name: str, **context: Any) -> Response:
        """Render a named template, or a 500 response carrying the error."""
        if name not in self.names:
            raise KeyError(name)
        try:
            return self.templates.TemplateResponse(
                request, self._filename(name), context
            )
        except TemplateError as exc:
            logger.error("Failed to render template %s: %s", name, exc)
            return PlainTextResponse(str(exc), status_code=500)
