"""Type definitions and constants for the vibecss scanner and generator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

# Colors for terminal output
RED = "\033[0;31m"
YELLOW = "\033[1;33m"
GREEN = "\033[0;32m"
BLUE = "\033[0;34m"
NC = "\033[0m"  # No Color

DEFAULT_PREFIX = "vibe"
DEFAULT_SCAN_PATTERNS = ("*.razor", "*.cshtml", "*.html", "*.cs")
DEFAULT_EXCLUDE_DIRS = (".git", "node_modules", "bin", "obj", ".vs", "__pycache__")
DEFAULT_OUTPUT = "wwwroot/css/vibe.css"

# Extensions scanned with the code-literal strategy instead of markup
CODE_EXTENSIONS = frozenset({".cs"})


class ContentKind(str, Enum):
    """Extraction strategy selector for scanned text."""

    MARKUP = "markup"
    CODE = "code"

    @classmethod
    def for_extension(cls, extension: str) -> "ContentKind":
        """Pick the strategy for a file extension like '.cs' or '.razor'."""
        return cls.CODE if extension.lower() in CODE_EXTENSIONS else cls.MARKUP


class CssRule(NamedTuple):
    """A single generated CSS rule."""

    selector: str
    declarations: str  # "prop: value;" pairs on one line
    media_query: str | None = None  # e.g. "(min-width: 640px)"

    def to_css(self) -> str:
        """Render the rule, wrapped in its media query when it has one."""
        rule = f"{self.selector} {{ {self.declarations} }}"
        if self.media_query:
            return f"@media {self.media_query} {{ {rule} }}"
        return rule


@dataclass
class ScanResult:
    """Classification of scanned tokens into recognized and unknown."""

    total_classes: int
    recognized_classes: set[str] = field(default_factory=set)
    unknown_classes: set[str] = field(default_factory=set)


@dataclass
class GenerationResult:
    """Outcome of a generate pass. Failures carry an error message."""

    success: bool
    error: str | None = None
    total_classes_found: int = 0
    classes_generated: int = 0
    output_path: str = ""
    css_size: int = 0  # bytes, UTF-8
    unknown_classes: set[str] = field(default_factory=set)


@dataclass
class GenerationOptions:
    """Options shared by scan and generate passes."""

    prefix: str = DEFAULT_PREFIX
    allow_unprefixed: bool = False
    scan_patterns: tuple[str, ...] = DEFAULT_SCAN_PATTERNS
    include_base: bool = True
    base_css_path: str | None = None
    ignore_classes: frozenset[str] = frozenset()
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
