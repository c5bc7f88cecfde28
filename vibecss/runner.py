"""
vibecss runner - scan and generate passes over a project.

Ties the scanner and the generator together: classify every scanned token,
assemble the stylesheet in a fixed order and write it out. Output I/O
failures are turned into a failed GenerationResult here and nowhere else.
"""

import logging
from pathlib import Path

from .generator import UtilityGenerator
from .log import log_pass, pass_timer
from .scanner import ClassScanner
from .scanner_types import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_PREFIX,
    ContentKind,
    CssRule,
    GenerationOptions,
    GenerationResult,
    ScanResult,
)

logger = logging.getLogger(__name__)

# Project-local base stylesheet, relative to the scanned root
PROJECT_BASE_CSS = Path("wwwroot") / "css" / "vibe-base.css"
BUNDLED_BASE_CSS = Path(__file__).parent / "assets" / "vibe-base.css"


def classify(classes, generator: UtilityGenerator) -> tuple[set[str], set[str]]:
    """Split tokens into (recognized, unknown) using the generator."""
    recognized: set[str] = set()
    unknown: set[str] = set()
    for token in classes:
        if generator.generate(token) is None:
            unknown.add(token)
        else:
            recognized.add(token)
    return recognized, unknown


def scan_project(
    path,
    patterns=None,
    prefix: str = DEFAULT_PREFIX,
    allow_unprefixed: bool = False,
    ignore_classes=(),
    exclude_dirs=DEFAULT_EXCLUDE_DIRS,
) -> ScanResult:
    """Scan a project and classify tokens without generating anything."""
    scanner = ClassScanner(prefix, allow_unprefixed, ignore_classes, exclude_dirs)
    generator = UtilityGenerator(prefix, allow_unprefixed)

    with pass_timer() as timer:
        classes = scanner.scan_directory(path, patterns)
        recognized, unknown = classify(classes, generator)

    log_pass("scan_complete", {
        "path": str(path),
        "total": len(classes),
        "recognized": len(recognized),
        "unknown": len(unknown),
        "duration_ms": round(timer.ms, 1),
    })
    return ScanResult(len(classes), recognized, unknown)


# ============================================
# Stylesheet assembly
# ============================================


def build_stylesheet(classes, generator: UtilityGenerator, base_css: str | None = None) -> tuple[str, set[str], set[str]]:
    """Assemble the stylesheet text for a set of tokens.

    Order: base CSS verbatim, unconditional rules sorted by token, then one
    @media block per query in the order its first token appears in the
    sorted token list. Rules with no declarations (the group marker) are
    recognized but not written.

    Returns:
        (css, recognized tokens, unknown tokens)
    """
    recognized: set[str] = set()
    unknown: set[str] = set()
    seen: set[CssRule] = set()
    top_level: list[str] = []
    blocks: dict[str, list[str]] = {}

    for token in sorted(classes):
        rules = generator.generate_all(token)
        if not rules:
            unknown.add(token)
            continue
        recognized.add(token)
        for rule in rules:
            if not rule.declarations or rule in seen:
                continue
            seen.add(rule)
            if rule.media_query is None:
                top_level.append(rule.to_css())
            else:
                blocks.setdefault(rule.media_query, []).append(
                    f"  {rule.selector} {{ {rule.declarations} }}"
                )

    sections: list[str] = []
    if base_css:
        sections.append(base_css if base_css.endswith("\n") else base_css + "\n")
    if top_level:
        sections.append("\n".join(top_level) + "\n")
    for media_query, lines in blocks.items():
        sections.append(f"@media {media_query} {{\n" + "\n".join(lines) + "\n}\n")

    return "\n".join(sections), recognized, unknown


def load_base_css(root, options: GenerationOptions) -> str:
    """Find the base stylesheet: explicit path, project copy, bundled default.

    root may be None to skip the project lookup.
    """
    if options.base_css_path:
        return Path(options.base_css_path).read_text(encoding="utf-8")

    project_base = Path(root) / PROJECT_BASE_CSS if root is not None else None
    if project_base is not None and project_base.is_file():
        logger.debug("Using project base stylesheet %s", project_base)
        return project_base.read_text(encoding="utf-8")

    bundled = BUNDLED_BASE_CSS.read_text(encoding="utf-8")
    prefix = options.prefix or DEFAULT_PREFIX
    if prefix != DEFAULT_PREFIX:
        bundled = bundled.replace(f"--{DEFAULT_PREFIX}-", f"--{prefix}-")
    return bundled


def generate_stylesheet(path, output_path, options: GenerationOptions | None = None) -> GenerationResult:
    """Scan a project and write its stylesheet.

    Returns a failed result (never raises) when reading sources or writing
    the output fails.
    """
    options = options or GenerationOptions()
    output = Path(output_path)

    try:
        with pass_timer() as timer:
            scanner = ClassScanner(
                options.prefix,
                options.allow_unprefixed,
                options.ignore_classes,
                options.exclude_dirs,
            )
            generator = UtilityGenerator(options.prefix, options.allow_unprefixed)
            classes = scanner.scan_directory(path, options.scan_patterns)

            base_css = load_base_css(path, options) if options.include_base else None
            css, recognized, unknown = build_stylesheet(classes, generator, base_css)

            output.parent.mkdir(parents=True, exist_ok=True)
            encoded = css.encode("utf-8")
            output.write_bytes(encoded)
    except (OSError, UnicodeError) as e:
        log_pass("generate_failed", {"path": str(path), "error": str(e)}, level=logging.WARNING)
        return GenerationResult(success=False, error=str(e), output_path=str(output))

    log_pass("generate_complete", {
        "path": str(path),
        "output": str(output),
        "total": len(classes),
        "generated": len(recognized),
        "unknown": len(unknown),
        "bytes": len(encoded),
        "duration_ms": round(timer.ms, 1),
    })
    return GenerationResult(
        success=True,
        total_classes_found=len(classes),
        classes_generated=len(recognized),
        output_path=str(output),
        css_size=len(encoded),
        unknown_classes=unknown,
    )


def generate_from_content(
    content: str,
    options: GenerationOptions | None = None,
    kind: ContentKind | str = ContentKind.MARKUP,
) -> str:
    """Generate CSS for the classes used in a content string (no file I/O
    beyond reading the base stylesheet when include_base is set)."""
    options = options or GenerationOptions()
    scanner = ClassScanner(options.prefix, options.allow_unprefixed, options.ignore_classes)
    generator = UtilityGenerator(options.prefix, options.allow_unprefixed)

    classes = scanner.scan_content(content, kind)
    base_css = load_base_css(None, options) if options.include_base else None
    css, _recognized, _unknown = build_stylesheet(classes, generator, base_css)
    return css
