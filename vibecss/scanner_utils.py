"""Utility functions for the vibecss scanner."""

import re
from fnmatch import fnmatch
from pathlib import Path

# Rough validation for class tokens (supports variants + arbitrary values)
CSS_CLASS_TOKEN_REGEX = re.compile(r"^[A-Za-z0-9_:\[\]\-./%#]+$")

# C# operators that show up when Razor expressions are split on whitespace
OPERATOR_TOKENS = frozenset({"==", "!=", "&&", "||", "?", ":", "=>", "="})


def matches_pattern(filepath: str | Path, patterns) -> bool:
    """Check if a file name (or path, for ** globs) matches any pattern."""
    path = Path(filepath)
    for p in patterns:
        if "**" in p or "/" in p:
            if path.match(p):
                return True
        elif fnmatch(path.name, p):
            return True
    return False


def is_excluded(filepath: Path, root: Path, exclude_dirs) -> bool:
    """Check if any directory between root and filepath is excluded."""
    try:
        parts = filepath.relative_to(root).parts[:-1]
    except ValueError:
        parts = filepath.parts[:-1]
    return any(part in exclude_dirs for part in parts)


def looks_like_utility_token(value: str, prefix: str) -> bool:
    """Check if value is a (possibly variant-qualified) prefixed utility."""
    if not value or not value.strip():
        return False
    if not prefix:
        return True

    markers = (prefix + "-", "-" + prefix + "-")
    if value.startswith(markers):
        return True

    # hover:vibe-..., dark:sm:hover:vibe-...
    last_colon = value.rfind(":")
    return last_colon > 0 and value[last_colon + 1:].startswith(markers)


def clean_token(token: str) -> str:
    """Strip quotes and stray parens/punctuation left over from Razor expressions."""
    trimmed = token.strip().strip("\"'")
    trimmed = trimmed.rstrip("),;")
    return trimmed.lstrip("(")


def is_expression_fragment(token: str) -> bool:
    """Check if a cleaned token is expression syntax rather than a class name."""
    if token.startswith("@"):
        return True
    if any(ch in token for ch in "({}"):
        return True
    return token in OPERATOR_TOKENS
