"""
vibecss scanner - extracts utility class tokens from source files.

Extraction is heuristic: a handful of narrow regex passes, each matching one
way of writing a class list, unioned together. Markup files (.razor, .cshtml,
.html) go through the attribute passes, C# files through the string-literal
passes.

Usage:
    scanner = ClassScanner(prefix="vibe")
    classes = scanner.scan_directory("src", ["*.razor", "*.cs"])
"""

import logging
import re
from pathlib import Path

from .scanner_types import DEFAULT_EXCLUDE_DIRS, DEFAULT_PREFIX, DEFAULT_SCAN_PATTERNS, ContentKind
from .scanner_utils import (
    CSS_CLASS_TOKEN_REGEX,
    clean_token,
    is_excluded,
    is_expression_fragment,
    looks_like_utility_token,
)

logger = logging.getLogger(__name__)

# class="..." or Class="..."
CLASS_ATTRIBUTE_REGEX = re.compile(r'(?:class|Class)\s*=\s*"([^"]*)"')
# @class="..."
BLAZOR_CLASS_REGEX = re.compile(r'@class\s*=\s*"([^"]*)"')
# class=@"..."
BLAZOR_INTERPOLATED_CLASS_REGEX = re.compile(r'class\s*=\s*@"([^"]*)"')
# class="@(...)" - captures the expression inside
BLAZOR_EXPRESSION_CLASS_REGEX = re.compile(r'class\s*=\s*"@\(([^)]+)\)"')
# className="..."
CLASS_NAME_ATTRIBUTE_REGEX = re.compile(r'className\s*=\s*"([^"]*)"')
# AdditionalClasses="..." and friends on components
ADDITIONAL_CLASSES_REGEX = re.compile(
    r'(?:AdditionalClasses|CssClass|ExtraClasses|ClassNames)\s*=\s*"([^"]*)"', re.IGNORECASE
)

# Passes whose captured value is a class list (may embed @(...) expressions)
MARKUP_VALUE_PATTERNS = (
    CLASS_ATTRIBUTE_REGEX,
    BLAZOR_CLASS_REGEX,
    BLAZOR_INTERPOLATED_CLASS_REGEX,
    CLASS_NAME_ATTRIBUTE_REGEX,
    ADDITIONAL_CLASSES_REGEX,
)

# C# string literals "..." (escape aware)
STRING_LITERAL_REGEX = re.compile(r'"([^"\\]*(?:\\.[^"\\]*)*)"')
# CssClass = "...", Class = "...", etc.
CSS_CLASS_ASSIGNMENT_REGEX = re.compile(
    r'(?:CssClass|Class|ClassName|Classes)\s*=\s*"([^"]*)"', re.IGNORECASE
)


class ClassScanner:
    """Scans source files (.razor, .cshtml, .html, .cs) for utility class names."""

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        allow_unprefixed: bool = False,
        ignore_classes=(),
        exclude_dirs=DEFAULT_EXCLUDE_DIRS,
    ):
        self.prefix = prefix or ""
        self.allow_unprefixed = allow_unprefixed
        self.ignored = set(ignore_classes)
        self.exclude_dirs = set(exclude_dirs)

    def ignore_classes(self, *class_names: str) -> None:
        """Add classes to the ignore list (they won't be extracted)."""
        self.ignored.update(class_names)

    def scan_directory(self, root: str | Path, patterns=None) -> set[str]:
        """Scan every file under root matching any pattern.

        Raises:
            FileNotFoundError: root does not exist
            NotADirectoryError: root is a file
        """
        root = Path(root)
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        patterns = patterns or DEFAULT_SCAN_PATTERNS
        classes: set[str] = set()
        seen: set[Path] = set()

        for pattern in patterns:
            for path in sorted(root.rglob(pattern)):
                if path in seen or not path.is_file():
                    continue
                if is_excluded(path, root, self.exclude_dirs):
                    continue
                seen.add(path)
                classes |= self.scan_file(path)

        logger.debug("Scanned %d file(s) under %s, %d class(es)", len(seen), root, len(classes))
        return classes

    def scan_file(self, filepath: str | Path) -> set[str]:
        """Scan a single file. Read errors propagate to the caller."""
        path = Path(filepath)
        content = path.read_text(encoding="utf-8", errors="replace")
        return self.scan_content(content, ContentKind.for_extension(path.suffix))

    def scan_content(self, content: str, kind: ContentKind | str = ContentKind.MARKUP) -> set[str]:
        """Scan a content string for class usages."""
        if isinstance(kind, str) and not isinstance(kind, ContentKind):
            kind = ContentKind.for_extension(kind) if kind.startswith(".") else ContentKind(kind)

        classes: set[str] = set()
        if kind is ContentKind.CODE:
            self._extract_from_code(content, classes)
        else:
            self._extract_from_markup(content, classes)
        return classes

    def _extract_from_markup(self, content: str, classes: set[str]) -> None:
        for regex in MARKUP_VALUE_PATTERNS:
            for match in regex.finditer(content):
                value = match.group(1)
                self._extract_classes(value, classes)
                if "@(" in value:
                    self._extract_from_expression(value, classes)

        # class="@(isActive ? "a" : "b")" - only the literals are reachable
        for match in BLAZOR_EXPRESSION_CLASS_REGEX.finditer(content):
            self._extract_from_expression(match.group(1), classes)

    def _extract_from_code(self, content: str, classes: set[str]) -> None:
        for match in STRING_LITERAL_REGEX.finditer(content):
            value = match.group(1)
            if self._looks_like_css_classes(value):
                self._extract_classes(value, classes)

        for match in CSS_CLASS_ASSIGNMENT_REGEX.finditer(content):
            self._extract_classes(match.group(1), classes)

    def _extract_from_expression(self, expression: str, classes: set[str]) -> None:
        for match in STRING_LITERAL_REGEX.finditer(expression):
            self._extract_classes(match.group(1), classes)

    def _extract_classes(self, class_string: str, classes: set[str]) -> None:
        for token in class_string.split():
            trimmed = clean_token(token)
            if not trimmed or trimmed in self.ignored:
                continue
            if is_expression_fragment(trimmed):
                continue
            if not CSS_CLASS_TOKEN_REGEX.match(trimmed):
                continue
            # Strict-prefix mode keeps utility tokens only, not component class names
            if not self.allow_unprefixed and not looks_like_utility_token(trimmed, self.prefix):
                continue
            classes.add(trimmed)

    def _looks_like_css_classes(self, value: str) -> bool:
        if not value or not value.strip():
            return False
        if self.allow_unprefixed:
            return True
        return looks_like_utility_token(value, self.prefix)
