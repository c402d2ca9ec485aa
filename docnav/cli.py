"""CLI entrypoints for docnav commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .pipeline import BuildPipeline, StructureOutcome
from .scanner import DocsRootNotFoundError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write the build log, including warnings, to this file.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root holding .docnav.yml (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docnav",
        description="Compile documentation frontmatter into navigation manifests and trees.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    commands = (
        ("build", "Generate _meta.json manifests, then the navigation tree and flat page list."),
        ("meta", "Generate _meta.json manifests for every documentation directory."),
        ("structure", "Assemble existing manifests into the navigation tree and flat page list."),
    )
    for name, help_text in commands:
        subparser = subparsers.add_parser(name, help=help_text)
        _add_verbose_option(subparser, suppress_default=True)
        _add_log_file_option(subparser, suppress_default=True)
        _add_path_argument(subparser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docnav commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        pipeline = BuildPipeline.from_path(args.path)
        if args.command == "build":
            result = pipeline.run()
            print(f"Generated {len(result.manifests)} manifest(s)")
            _print_summary(result.outcome, len(result.diagnostics))
        elif args.command == "meta":
            manifests, diagnostics = pipeline.generate_meta()
            print(f"Generated {len(manifests)} manifest(s)")
            if len(diagnostics):
                print(f"Warnings: {len(diagnostics)}")
        elif args.command == "structure":
            outcome, diagnostics = pipeline.generate_structure()
            _print_summary(outcome, len(diagnostics))
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except DocsRootNotFoundError as exc:
        parser.exit(1, f"Error: {exc}\nPlease create the directory and add your documentation.\n")
    except ConfigError as exc:
        parser.exit(1, f"docnav {args.command} failed: {exc}\n")


def _print_summary(outcome: StructureOutcome, warning_count: int) -> None:
    stats = outcome.stats
    print("Documentation Statistics:")
    print(f"  Total categories: {stats.total_categories}")
    print(f"  Total pages: {stats.total_pages}")
    print(f"  Deepest nesting: {stats.deepest_level} levels")
    if warning_count:
        print(f"  Warnings: {warning_count}")
    print(f"Navigation structure written to: {_relativize(outcome.structure_path)}")
    print(f"Flat page list written to: {_relativize(outcome.flat_path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
