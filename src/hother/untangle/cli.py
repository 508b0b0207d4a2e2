"""
Command line entry point.

    untangle path/to/program.js > program.html
"""

import argparse
import sys
from pathlib import Path

import anyio
from pydantic import ValidationError

from .config import UntangleConfig
from .core.exceptions import UntangleError
from .rendering import render_markdown, render_page
from .streaming import untangle_file
from .utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="untangle",
        description="Convert a program written in a semi-literate style to HTML.",
    )
    parser.add_argument("file", type=Path, help="Source file to untangle")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write to this file instead of stdout")
    parser.add_argument("--markdown", action="store_true", help="Emit the extracted markdown instead of HTML")
    parser.add_argument("--template", type=Path, default=None, help="Custom Jinja2 page template")
    parser.add_argument("--separator", default="::", help="Separator shown in signature tables (default: %(default)s)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: %(default)s)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    return parser


def convert(path: Path, config: UntangleConfig, markdown_only: bool = False) -> str:
    """Read ``path`` and return its markdown document or HTML page."""
    document = anyio.run(untangle_file, path, config, config.debug)
    logger.info("Extracted document", file=str(path), lines=document.count("\n") + 1 if document else 0)

    if markdown_only:
        return document
    return render_page(render_markdown(document), path.name, config.template_path)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = UntangleConfig(
            signature_separator=args.separator,
            template_path=args.template,
            log_level=args.log_level,
            json_logs=args.json_logs,
        )
    except ValidationError as e:
        parser.error(str(e))

    configure_logging(config.log_level, json_output=config.json_logs)

    try:
        output = convert(args.file, config, markdown_only=args.markdown)
        if output and not output.endswith("\n"):
            output += "\n"

        if args.output is None:
            sys.stdout.write(output)
        else:
            try:
                args.output.write_text(output, encoding="utf-8")
            except OSError as e:
                raise UntangleError(f"Cannot write output file {args.output}: {e}") from e
    except UntangleError as e:
        logger.error("Untangle failed", error=e.message)
        print(f"untangle: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
