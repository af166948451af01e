"""Server-side HTML renderer.

Walks a ``LayoutTree`` with Jinja2 templates.  Every region is emitted as an
element carrying ``data-region`` and every section as one carrying
``data-section``, in tree order, so the markup can be checked structurally
against the layout contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from resume_builder.rendering.contract import LayoutTree

__all__ = ["RenderedMarkup", "render_markup", "wrap_document"]

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

PROFICIENCY_LABELS = {1: "Beginner", 2: "Elementary", 3: "Intermediate", 4: "Advanced", 5: "Expert"}
_env.globals["proficiency_labels"] = PROFICIENCY_LABELS


@dataclass(slots=True)
class RenderedMarkup:
    html: str
    css: str


def render_markup(tree: LayoutTree, *, title: str = "Resume") -> RenderedMarkup:
    """Render the body markup and its stylesheet for *tree*."""
    html = _env.get_template("resume.html").render(tree=tree, theme=tree.theme, title=title)
    css = _env.get_template("resume.css").render(tree=tree, theme=tree.theme)
    return RenderedMarkup(html=html, css=css)


def wrap_document(html: str, css: str, *, title: str = "Resume") -> str:
    """Embed a markup/stylesheet pair into a standalone page for printing.

    The pair may come from ``render_markup`` or from the client preview, so
    both are inserted as-is.
    """
    return _env.get_template("document.html").render(
        title=title, body=Markup(html), css=Markup(css)
    )
