"""CLI entrypoint for the Skillpack compiler."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from skillpack import __version__
from skillpack.compiler import build_bundle, compile_workspace
from skillpack.constants.branding import CLI_DESCRIPTION
from skillpack.exceptions import ConfigError, SkillpackError, ValidationError
from skillpack.exceptions.validation import format_violations
from skillpack.model import CompileResult
from skillpack.reporting.stdout import BuildReporter
from skillpack.validation import preflight_validate


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="skillpack",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_cmd = subparsers.add_parser("compile", help="Compile a skill source tree into a JSON bundle")
    compile_cmd.add_argument("source_dir", type=Path, help="Root directory of the skill sources")
    compile_cmd.add_argument("out_file", type=Path, help="Path of the bundle file to write")
    _add_build_arguments(compile_cmd)
    compile_cmd.add_argument("--no-stdout", action="store_true", help="Silence the stdout summary")

    validate = subparsers.add_parser("validate", help="Run every check without writing a bundle")
    validate.add_argument("source_dir", type=Path, help="Root directory of the skill sources")
    _add_build_arguments(validate)

    validate_config = subparsers.add_parser("validate-config", help="Validate configuration without compiling")
    validate_config.add_argument("source_dir", type=Path, help="Root directory of the skill sources")
    validate_config.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def _add_build_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument(
        "--overlay",
        type=Path,
        action="append",
        default=[],
        help="Override layer directory; earlier flags take priority (repeat for multiple layers)",
    )
    parser.add_argument(
        "--strict-links",
        action="store_true",
        default=None,
        help="Treat dangling links as violations",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show diagnostics and debug logging")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return _handle_validate_config(args)

    overlays = tuple(args.overlay)
    violations = preflight_validate(args.source_dir, args.config, overlays=overlays)
    if violations:
        print(format_violations(violations), file=sys.stderr)
        return 2

    if args.command == "validate":
        return _handle_validate(args, overlays)

    if args.command != "compile":
        parser.error(f"Unsupported command: {args.command}")

    try:
        result = build_bundle(
            root=args.source_dir,
            out=args.out_file,
            config_path=args.config,
            overlays=overlays,
            strict_links=args.strict_links,
        )
    except ValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except SkillpackError as exc:
        print(f"Compiler error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Cannot write bundle {args.out_file}: {exc}", file=sys.stderr)
        return 1

    if not args.no_stdout:
        _print_report(result, args, out_path=args.out_file)
    return 0


def _handle_validate(args: argparse.Namespace, overlays: tuple[Path, ...]) -> int:
    """Compile without emitting and report every problem."""
    try:
        result = compile_workspace(
            root=args.source_dir,
            config_path=args.config,
            overlays=overlays,
            strict_links=args.strict_links,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    _print_report(result, args)
    if result.violations:
        print(str(ValidationError(result.violations)), file=sys.stderr)
        return 1
    return 0


def _handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    violations = preflight_validate(args.source_dir, args.config)
    if violations:
        print(format_violations(violations), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def _print_report(result: CompileResult, args: argparse.Namespace, *, out_path: Path | None = None) -> None:
    use_color = not args.no_color and sys.stdout.isatty()
    print(BuildReporter(result, out_path=out_path, color=use_color, verbose=args.verbose).render())


if __name__ == "__main__":
    raise SystemExit(main())
