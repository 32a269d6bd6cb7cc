"""URL validation for the page routes.

Only ``/<action>/<title>`` paths with an alphanumeric title are accepted.
Reserved titles (the front page) are refused so they can never be edited,
saved or viewed through the generic page handlers.
"""

import re
from dataclasses import dataclass
from typing import Awaitable, Callable, NamedTuple

from fastapi import HTTPException, Request
from starlette.responses import Response

PAGE_ACTIONS = ("edit", "save", "view")


class RouteMatch(NamedTuple):
    """Result of a successful path match."""

    action: str
    title: str


@dataclass(frozen=True)
class WikiRoute:
    """One entry of the page dispatch table."""

    action: str
    methods: tuple[str, ...]
    handler: Callable[..., Awaitable[Response]]

    @property
    def path(self) -> str:
        return f"/{self.action}/{{title}}"


class RouteValidator:
    """Matches request paths against the page route pattern."""

    def __init__(
        self,
        actions: tuple[str, ...] = PAGE_ACTIONS,
        reserved: tuple[str, ...] = ("FrontPage",),
    ):
        self.actions = actions
        self.reserved = frozenset(reserved)
        self.pattern = re.compile(
            r"^/(%s)/([a-zA-Z0-9]+)$" % "|".join(re.escape(a) for a in actions)
        )

    def match(self, path: str) -> RouteMatch | None:
        """Return the action and title for ``path``, or None if refused."""
        m = self.pattern.fullmatch(path)
        if m is None:
            return None
        # editing the front page as a regular page would look like a bug
        if m.group(2) in self.reserved:
            return None
        return RouteMatch(action=m.group(1), title=m.group(2))


def matched_title(request: Request) -> str:
    """FastAPI dependency: validated page title for the current request."""
    match = request.app.state.wiki.validator.match(request.url.path)
    if match is None:
        raise HTTPException(status_code=404)
    return match.title
