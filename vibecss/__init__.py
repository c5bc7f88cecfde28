"""
vibecss - JIT utility CSS for Razor, Blazor and HTML projects.

Scans source files for utility class tokens (vibe-flex, hover:vibe-bg-primary,
md:vibe-w-1/2) and generates only the CSS rules that are actually used.
"""

__version__ = "1.0.0"

from .generator import UtilityGenerator, generate
from .runner import build_stylesheet, generate_from_content, generate_stylesheet, scan_project
from .scanner import ClassScanner
from .scanner_types import (
    ContentKind,
    CssRule,
    GenerationOptions,
    GenerationResult,
    ScanResult,
)

__all__ = [
    "ClassScanner",
    "UtilityGenerator",
    "generate",
    "scan_project",
    "generate_stylesheet",
    "generate_from_content",
    "build_stylesheet",
    "ContentKind",
    "CssRule",
    "ScanResult",
    "GenerationResult",
    "GenerationOptions",
    "__version__",
]
