import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .core.ast_parser import ParseResult, is_supported_file, parse_file, should_skip_directory
from .core.constants import (
    DEFAULT_INDENT_SIZE,
    DEFAULT_LOG_LEVEL,
    ENV_INDENT_SIZE,
    ENV_LOG_LEVEL,
    PUML_EXTENSION,
)
from .core.diagrams import generate_class_diagram


def setup_logging(log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


logger = logging.getLogger(__name__)


def _report_errors(result: ParseResult) -> None:
    for error in result.errors:
        level = logging.ERROR if error.severity == "error" else logging.WARNING
        logger.log(level, f"{error.file_path}:{error.line}: {error.message}")


def convert_file(input_path: Path, output_path: Path, indent: str) -> bool:
    """Convert one source file into a .puml file.

    Returns:
        True if the diagram was written without error-severity parse errors
    """
    result = parse_file(str(input_path))
    _report_errors(result)
    if result.has_errors:
        return False

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(generate_class_diagram(result.tree, indent))

    logger.info(f"Wrote {output_path}")
    return True


def collect_sources(root: Path) -> List[Path]:
    """Find supported source files under root, skipping build and VCS folders."""
    sources = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_directory(d))
        for filename in sorted(filenames):
            if is_supported_file(filename):
                sources.append(Path(dirpath) / filename)
    return sources


def plan_outputs(
    input_path: Path, output_path: Optional[Path], directory_mode: bool
) -> List[Tuple[Path, Path]]:
    """Pair every input file with the .puml path it is written to."""
    if directory_mode:
        out_root = output_path or input_path
        return [
            (src, (out_root / src.relative_to(input_path)).with_suffix(PUML_EXTENSION))
            for src in collect_sources(input_path)
        ]

    if output_path is None:
        return [(input_path, input_path.with_suffix(PUML_EXTENSION))]
    if output_path.is_dir():
        return [(input_path, output_path / input_path.with_suffix(PUML_EXTENSION).name)]
    return [(input_path, output_path)]


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _default_log_level() -> str:
    raw = (os.getenv(ENV_LOG_LEVEL) or "").strip().upper()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if raw not in LOG_LEVELS:
        logger.warning(f"Ignoring unknown {ENV_LOG_LEVEL}={raw!r}")
        return DEFAULT_LOG_LEVEL
    return raw


def _default_indent_size() -> int:
    raw = os.getenv(ENV_INDENT_SIZE)
    if not raw:
        return DEFAULT_INDENT_SIZE
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {ENV_INDENT_SIZE}={raw!r}")
        return DEFAULT_INDENT_SIZE


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classloom",
        description="ClassLoom - PlantUML class diagrams from C# source",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="C# source file, or a directory with --dir"
    )
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Output .puml file or directory (defaults next to the input)"
    )
    parser.add_argument(
        "--dir",
        action="store_true",
        dest="directory_mode",
        help="Convert every .cs file under the input directory"
    )
    indent = parser.add_mutually_exclusive_group()
    indent.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help=f"Spaces per nesting level (default {DEFAULT_INDENT_SIZE}, or ${ENV_INDENT_SIZE})"
    )
    indent.add_argument(
        "--tab",
        action="store_true",
        help="Indent with tabs instead of spaces"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=_default_log_level(),
        choices=LOG_LEVELS,
        help="Logging level"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for ClassLoom."""
    args = build_arg_parser().parse_args(argv)

    setup_logging(args.log_level)

    if args.tab:
        indent = "\t"
    else:
        indent = " " * (args.indent if args.indent is not None else _default_indent_size())

    if args.directory_mode and not args.input.is_dir():
        logger.error(f"Input directory not found: {args.input}")
        return 1
    if not args.directory_mode and not args.input.is_file():
        logger.error(f"Input file not found: {args.input}")
        return 1

    jobs = plan_outputs(args.input, args.output, args.directory_mode)
    if not jobs:
        logger.warning(f"No C# sources found under {args.input}")

    failures = 0
    for src, dst in jobs:
        try:
            ok = convert_file(src, dst, indent)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to convert {src}: {e}")
            ok = False
        if not ok:
            failures += 1

    logger.info(f"Converted {len(jobs) - failures}/{len(jobs)} file(s)")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
