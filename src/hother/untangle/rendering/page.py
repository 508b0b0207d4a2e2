"""
Page templating with Jinja2.

Templates receive ``body`` (rendered HTML, inserted as-is) and ``file``
(display name of the source file, escaped).
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, PackageLoader, TemplateError, select_autoescape

from ..core.exceptions import TemplateRenderError
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TEMPLATE = "page.html.j2"


def _environment(loader: PackageLoader | FileSystemLoader) -> Environment:
    return Environment(
        loader=loader,
        autoescape=select_autoescape(enabled_extensions=("html", "html.j2", "htm")),
        keep_trailing_newline=True,
    )


def render_page(body: str, file: str, template_path: str | Path | None = None) -> str:
    """
    Wrap an HTML fragment in a page template.

    Args:
        body: HTML fragment of the document
        file: Source file name shown in the page
        template_path: Custom template file; the packaged page if None

    Returns:
        The complete HTML page

    Raises:
        TemplateRenderError: If the template is missing or fails to render
    """
    if template_path is None:
        env = _environment(PackageLoader("hother.untangle", "templates"))
        name = DEFAULT_TEMPLATE
    else:
        template_path = Path(template_path)
        env = _environment(FileSystemLoader(template_path.parent))
        name = template_path.name

    try:
        template = env.get_template(name)
        return template.render(body=body, file=file)
    except TemplateError as e:
        logger.error("Template rendering failed", template=str(template_path or name), error=str(e))
        raise TemplateRenderError(template_path or name, str(e) or type(e).__name__) from e
