"""HTML rendering with Jinja2."""

from pathlib import Path
from typing import Any

from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

PAGE_TEMPLATE = "index.html"


class PageRenderer:
    """Renders templates to a complete string before building the response.

    Templates are compiled at construction so a missing or broken template
    fails at startup rather than on the first request.
    """

    def __init__(self, template_dir: Path, preload: tuple[str, ...] = (PAGE_TEMPLATE,)) -> None:
        self._env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )
        for name in preload:
            self._env.get_template(name)

    def render(self, name: str, **context: Any) -> HTMLResponse:
        try:
            body = self._env.get_template(name).render(**context)
        except TemplateError as e:
            raise RenderError(name, e) from e
        return HTMLResponse(body)


class RenderError(Exception):
    def __init__(self, template: str, cause: Exception) -> None:
        self.template = template
        self.cause = cause
        super().__init__(f"rendering {template} failed: {cause}")
