#!/usr/bin/env python3
"""
vibecss CLI - Entry point for pip-installed package.

Handles config discovery, initialization, and delegates to the runner.
"""

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import __version__
from .config import (
    CONFIG_FILENAME,
    ConfigError,
    debounce_seconds,
    find_config,
    get_default_config_path,
    load_config,
    options_from_config,
    validate_config,
    with_defaults,
)
from .log import configure_logging, set_level
from .runner import generate_stylesheet, scan_project
from .scanner_types import BLUE, GREEN, NC, RED, YELLOW, GenerationOptions

logger = logging.getLogger(__name__)

MAX_LISTED_RECOGNIZED = 50
MAX_LISTED_UNKNOWN = 20


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1", "on"):
        return True
    if lowered in ("false", "no", "0", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _split_patterns(value: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in value.split(",") if p.strip())


def format_size(size: int) -> str:
    """Human-readable byte count (512 B, 1.5 KB, 2.0 MB)."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _load_settings(args) -> dict | None:
    """Load the config named by --config, the discovered one, or defaults.

    Returns None (after logging why) when the config cannot be used.
    """
    config_path = Path(args.config) if args.config else find_config()
    if config_path is None:
        return with_defaults({})

    try:
        config = load_config(config_path, defaults=False)
    except (FileNotFoundError, ValueError, ConfigError) as e:
        logger.info(f"{RED}ERROR:{NC} {e}")
        return None

    errors = validate_config(config)
    if errors:
        logger.info(f"{RED}ERROR:{NC} Invalid config {config_path}:")
        for error in errors:
            logger.info(f"  - {error}")
        return None

    logger.debug("Using config %s", config_path)
    return with_defaults(config)


def build_options(config: dict, args) -> GenerationOptions:
    """Config values, overridden by whatever was given on the command line."""
    options = options_from_config(config)
    if args.prefix is not None:
        options.prefix = args.prefix
    if args.allow_unprefixed:
        options.allow_unprefixed = True
    if args.patterns:
        options.scan_patterns = _split_patterns(args.patterns)
    if getattr(args, "with_base", None) is not None:
        options.include_base = args.with_base
    return options


def _check_directory(path: Path) -> bool:
    if not path.is_dir():
        logger.info(f"{RED}Error:{NC} Directory not found: {path}")
        return False
    return True


def _list_classes(title: str, classes, limit: int) -> None:
    logger.info(title)
    ordered = sorted(classes)
    for cls in ordered[:limit]:
        logger.info(f"  - {cls}")
    if len(ordered) > limit:
        logger.info(f"  ... and {len(ordered) - limit} more")


def cmd_scan(args) -> int:
    """Scan only: report recognized and unknown classes."""
    config = _load_settings(args)
    if config is None:
        return 1
    options = build_options(config, args)

    project = Path(args.path)
    if not _check_directory(project):
        return 1

    logger.info(f"{BLUE}Scanning{NC} {project} for CSS classes...")
    result = scan_project(
        project,
        options.scan_patterns,
        options.prefix,
        options.allow_unprefixed,
        options.ignore_classes,
        options.exclude_dirs,
    )

    logger.info("=" * 40)
    logger.info(f"Total classes found: {result.total_classes}")
    logger.info(f"{GREEN}Recognized classes:{NC} {len(result.recognized_classes)}")
    logger.info(f"{YELLOW}Unknown classes:{NC} {len(result.unknown_classes)}")
    logger.info("=" * 40)

    if result.recognized_classes:
        _list_classes(f"{GREEN}Recognized classes:{NC}", result.recognized_classes, MAX_LISTED_RECOGNIZED)
    if result.unknown_classes:
        _list_classes(
            f"{YELLOW}Unknown classes (not generated):{NC}", result.unknown_classes, MAX_LISTED_UNKNOWN
        )
    return 0


def cmd_generate(args) -> int:
    """Generate the stylesheet (once, or continuously with --watch)."""
    config = _load_settings(args)
    if config is None:
        return 1
    options = build_options(config, args)

    project = Path(args.path)
    if not _check_directory(project):
        return 1

    # -o is taken as given; the configured output is relative to the project
    output = Path(args.output) if args.output else project / config["output"]

    if args.watch:
        from .watch import run_watch_mode
        return 0 if run_watch_mode(project, output, options, debounce_seconds(config)) else 1

    logger.info(f"{BLUE}Generating CSS{NC} from {project}...")
    result = generate_stylesheet(project, output, options)
    if not result.success:
        logger.info(f"{RED}Error:{NC} {result.error}")
        return 1

    logger.info("=" * 40)
    logger.info(f"Classes found:       {result.total_classes_found}")
    logger.info(f"CSS rules generated: {result.classes_generated}")
    logger.info(f"Output file:         {result.output_path}")
    logger.info(f"File size:           {format_size(result.css_size)}")
    logger.info("=" * 40)

    if result.unknown_classes:
        _list_classes(
            f"{YELLOW}Warning:{NC} {len(result.unknown_classes)} unknown classes were skipped:",
            result.unknown_classes,
            MAX_LISTED_UNKNOWN,
        )

    logger.info(f"{GREEN}OK{NC} CSS generated successfully at {BLUE}{result.output_path}{NC}")
    return 0


def init_config(target: Path = Path(CONFIG_FILENAME)) -> bool:
    """Initialize vibecss.yaml in current project."""
    if target.exists():
        logger.info(f"{YELLOW}{target} already exists{NC}")
        return False

    default_config = get_default_config_path()
    if not default_config.exists():
        logger.info(f"{RED}ERROR: Default config not found at {default_config}{NC}")
        return False

    shutil.copy(default_config, target)
    logger.info(f"{GREEN}Created {target}{NC}")
    logger.info("Next steps:")
    logger.info(f"  1. Edit {target} to set your prefix and scan patterns")
    logger.info("  2. Run: vibecss generate")
    logger.info("  3. Or keep it fresh while you work: vibecss generate --watch")
    return True


def cmd_init(args) -> int:
    return 0 if init_config(Path(args.target)) else 1


def cmd_validate(args) -> int:
    """Validate the config file; exit 1 on any problem."""
    config_path = Path(args.config) if args.config else find_config()
    if config_path is None:
        logger.info(f"{RED}ERROR: No {CONFIG_FILENAME} found{NC}")
        logger.info("Run: vibecss init")
        return 1

    try:
        config = load_config(config_path, defaults=False)
    except (FileNotFoundError, ValueError, ConfigError) as e:
        logger.info(f"{RED}ERROR:{NC} {e}")
        return 1

    errors = validate_config(config)
    if errors:
        logger.info("Validation errors:")
        for error in errors:
            logger.info(f"  - {error}")
        return 1

    logger.info(f"{config_path} is valid")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", nargs="?", default=".", help="Project directory (default: .)")
    parser.add_argument("--patterns", help="Comma-separated file globs, e.g. '*.razor,*.html'")
    parser.add_argument("--prefix", help="Class prefix (default: vibe)")
    parser.add_argument("--allow-unprefixed", action="store_true", help="Also accept unprefixed utilities")
    parser.add_argument("--config", "-c", help=f"Path to {CONFIG_FILENAME}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vibecss",
        description="vibecss - JIT utility CSS for Razor, Blazor and HTML projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vibecss scan                     Show recognized and unknown classes
  vibecss generate                 Write wwwroot/css/vibe.css
  vibecss generate -o site.css     Write to a custom path
  vibecss generate --watch         Regenerate on save
  vibecss init                     Create vibecss.yaml
  vibecss validate                 Check vibecss.yaml
        """,
    )
    parser.add_argument("--version", action="version", version=f"vibecss {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan for classes without generating")
    _add_common_arguments(scan)
    scan.set_defaults(func=cmd_scan)

    generate = subparsers.add_parser("generate", help="Generate the stylesheet")
    _add_common_arguments(generate)
    generate.add_argument("--output", "-o", help="Output file (default: from config)")
    generate.add_argument(
        "--with-base",
        nargs="?",
        const=True,
        default=None,
        type=_parse_bool,
        metavar="true|false",
        help="Prepend the base stylesheet (default: true)",
    )
    generate.add_argument("--watch", "-w", action="store_true", help="Regenerate on file changes")
    generate.set_defaults(func=cmd_generate)

    init = subparsers.add_parser("init", help=f"Create {CONFIG_FILENAME}")
    init.add_argument("target", nargs="?", default=CONFIG_FILENAME, help="Where to write the config")
    init.set_defaults(func=cmd_init, verbose=False)

    validate = subparsers.add_parser("validate", help=f"Validate {CONFIG_FILENAME}")
    validate.add_argument("--config", "-c", help=f"Path to {CONFIG_FILENAME}")
    validate.set_defaults(func=cmd_validate, verbose=False)

    return parser


def main(argv=None) -> None:
    configure_logging()
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
