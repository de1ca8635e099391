"""CLI for generating TypeScript declaration files from documentation trees."""

import argparse
import sys
from pathlib import Path

from declgen.doclets import DocNode
from declgen.exceptions import DeclgenError
from declgen.loader import load_namespace_trees, load_options_tree
from declgen.logging import setup_logging
from declgen.products import build_modules
from declgen.render import render_module, render_source_variant


def _parse_options_argument(value: str) -> tuple[str, Path]:
    """Split a ``MODULE=FILE`` argument."""
    module, separator, file = value.partition("=")
    if not separator or not module or not file:
        raise argparse.ArgumentTypeError(f"expected MODULE=FILE, got {value!r}")
    return module, Path(file)


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``declgen`` command."""
    parser = argparse.ArgumentParser(prog="declgen", description="TypeScript declaration generator")
    parser.add_argument("--log-level", help="Log level of the declgen loggers")
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Generate .d.ts files")
    generate.add_argument("--tree", type=Path, required=True, help="Namespace tree JSON keyed by module path")
    generate.add_argument(
        "--options",
        type=_parse_options_argument,
        action="append",
        default=[],
        metavar="MODULE=FILE",
        help="Options tree JSON of a module (repeatable)",
    )
    generate.add_argument("--output-dir", type=Path, required=True, help="Directory the modules are written to")

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code == 0 else 1

    if not args.command:
        parser.print_help()
        return 1

    if args.log_level:
        setup_logging(level=args.log_level)

    return _run_generate(args.tree, dict(args.options), args.output_dir)


def _run_generate(tree_file: Path, options_files: dict[str, Path], output_dir: Path) -> int:
    """Generate all modules and write the ``.d.ts`` and ``.src.d.ts`` variants."""
    try:
        namespace_trees = load_namespace_trees(tree_file)
        options_trees: dict[str, DocNode] = {
            module: load_options_tree(file) for module, file in options_files.items()
        }
        modules = build_modules(namespace_trees, options_trees)
    except DeclgenError as exc:
        print(f"FAIL: {exc}", file=sys.stderr)
        return 1

    written = 0
    for module, declaration in modules.items():
        content = render_module(declaration)
        for path, text in (
            (output_dir / f"{module}.d.ts", content),
            (output_dir / f"{module}.src.d.ts", render_source_variant(content)),
        ):
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            written += 1
            print(f"  wrote {path} ({len(text.encode('utf-8')):,} bytes)")

    print(f"\nGenerated {len(modules)} modules ({written} files)")
    return 0
