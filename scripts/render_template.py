"""Render a Word template from the command line.

Usage:
    python scripts/render_template.py letter.docx out.docx --set name=Ada
    python scripts/render_template.py letter.docx out.docx \\
        --multiline address="1 Main St\\nLondon" --no-escape
    python scripts/render_template.py letter.docx --list
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docx_template.core.config import get_settings
from docx_template.core.factory import ComponentFactory
from docx_template.interfaces.template import TemplateError


def parse_assignment(raw: str) -> tuple[str, str]:
    """Split NAME=VALUE, turning a literal \\n in the value into a newline."""
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{raw}'")
    return name, value.replace("\\n", "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fill {placeholders} in a .docx template.")
    parser.add_argument("source", type=Path, help="Template to render")
    parser.add_argument("destination", type=Path, nargs="?", help="Where to save the result")
    parser.add_argument(
        "--set",
        dest="values",
        action="append",
        default=[],
        type=parse_assignment,
        metavar="NAME=VALUE",
        help="Single-line substitution (repeatable)",
    )
    parser.add_argument(
        "--multiline",
        action="append",
        default=[],
        type=parse_assignment,
        metavar="NAME=VALUE",
        help="Substitution whose lines become line breaks (repeatable)",
    )
    parser.add_argument(
        "--no-escape",
        dest="escape",
        action="store_false",
        help="Insert values without escaping XML special characters",
    )
    parser.add_argument("--temp-dir", type=Path, help="Scratch directory override")
    parser.add_argument("--list", action="store_true", help="List placeholders and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Render a template. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.list and args.destination is None:
        parser.error("destination is required unless --list is given")

    template = ComponentFactory(get_settings()).get_template()
    try:
        if args.temp_dir is not None:
            template.set_temp_directory(args.temp_dir)
        template.open(args.source)

        if args.list:
            for name in template.placeholders():
                print(name)
            return 0

        template.replace(dict(args.values), escape=args.escape)
        for name, value in args.multiline:
            template.replace_multiline(name, value, escape=args.escape)
        saved = template.save(args.destination)
    except TemplateError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        template.discard()

    print(f"Saved {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
