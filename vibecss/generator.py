"""
vibecss generator - compiles one utility class token into CSS rules.

A token is ``[variant:]*<prefix>-<utility>``. The utility name is resolved
against a fixed sequence of strategies (first match wins); an arbitrary
``name-[value]`` utility only ever goes through the arbitrary strategy.
Unrecognized input of any shape yields None, never an exception.

Usage:
    generator = UtilityGenerator(prefix="vibe")
    rule = generator.generate("hover:vibe-bg-red-500/50")
    rule.to_css()  # '.hover\\:vibe-bg-red-500\\/50:hover { background-color: rgb(239 68 68 / 0.5); }'
"""

from enum import Enum
from functools import lru_cache
from typing import Callable, NamedTuple

from ._tables import (
    ARBITRARY_COLOR_PROPERTIES,
    ARBITRARY_FORBIDDEN,
    ARBITRARY_PROPERTIES,
    ARBITRARY_RE,
    BREAKPOINTS,
    COLOR_PROPERTIES,
    COLOR_VALUE_RE,
    COMPOSITE,
    DARK_VARIANT,
    EXACT,
    GRADIENT_DIRECTIONS,
    GRADIENT_STOPS,
    GRID_SPAN_RE,
    GRID_TEMPLATE_RE,
    GROUP_CLASS,
    GROUP_VARIANTS,
    KEYFRAMES,
    MAX_GRID_COLUMNS,
    MULTI_RULES,
    ORDER_RE,
    PALETTE,
    PSEUDO_ELEMENT_VARIANTS,
    ROTATE_RE,
    SCALE_FAMILIES,
    SCALE_TRANSFORM_RE,
    SEMANTIC_COLORS,
    SPECIAL_COLORS,
    STATE_VARIANTS,
    TIMING_RE,
    TRANSFORM_COMPOSE,
    TRANSLATE_RE,
    alpha_value,
    hex_to_rgb,
    palette_hex,
    scale_factor,
    scale_value,
    translate_value,
)
from .scanner_types import DEFAULT_PREFIX, CssRule

DEFAULT_CACHE_SIZE = 4096


class Strategy(str, Enum):
    """How a utility name was resolved."""

    ARBITRARY = "arbitrary"
    EXACT = "exact"
    SCALE = "scale"
    COLOR = "color"
    COMPOSITE = "composite"
    FORMULA = "formula"
    TRANSFORM = "transform"
    GRADIENT = "gradient"
    MULTI = "multi"


class ParsedToken(NamedTuple):
    """A token split into its variants and utility name."""

    token: str
    variants: tuple[str, ...]
    name: str  # prefix stripped, e.g. "bg-red-500/50"
    negative: bool = False
    arbitrary: tuple[str, str] | None = None  # ("w", "500px") for w-[500px]
    opacity: str | None = None  # "50" for a trailing /50


class Resolution(NamedTuple):
    """Declarations produced by one strategy."""

    strategy: Strategy
    declarations: str
    selector_suffix: str = ""  # e.g. the child combinator for space-x
    extra: tuple[tuple[str, str], ...] = ()  # (selector template, declarations)
    keyframes: tuple[str, ...] = ()


# ============================================
# Token parsing
# ============================================


def split_variants(token: str) -> list[str]:
    """Split on ':' outside square brackets (w-[url(a:b)] stays whole)."""
    segments = []
    depth = 0
    start = 0
    for index, ch in enumerate(token):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(depth - 1, 0)
        elif ch == ":" and depth == 0:
            segments.append(token[start:index])
            start = index + 1
    segments.append(token[start:])
    return segments


def is_variant(name: str) -> bool:
    return (
        name in STATE_VARIANTS
        or name in GROUP_VARIANTS
        or name in PSEUDO_ELEMENT_VARIANTS
        or name in BREAKPOINTS
        or name == DARK_VARIANT
    )


def _strip_prefix(base: str, prefix: str, allow_unprefixed: bool) -> tuple[str, bool] | None:
    """Return (utility name, negative) or None when the prefix gate fails."""
    if prefix:
        marker = prefix + "-"
        if base.startswith(marker):
            name = base[len(marker):]
        elif base.startswith("-" + marker):
            return base[len(marker) + 1:], True
        elif allow_unprefixed:
            name = base
        else:
            return None
    else:
        name = base

    if name.startswith("-"):
        return name[1:], True
    return name, False


def parse_token(token, prefix: str = DEFAULT_PREFIX, allow_unprefixed: bool = False) -> ParsedToken | None:
    """Parse a token into variants and utility name, or None if malformed."""
    if not isinstance(token, str) or not token:
        return None

    *variants, base = split_variants(token)
    if not base or not all(is_variant(v) for v in variants):
        return None

    stripped = _strip_prefix(base, prefix or "", allow_unprefixed)
    if stripped is None:
        return None
    name, negative = stripped
    if not name:
        return None

    arbitrary = None
    opacity = None
    match = ARBITRARY_RE.match(name)
    if match:
        arbitrary = (match.group(1), match.group(2))
    else:
        head, sep, tail = name.rpartition("/")
        if sep and head and tail.isascii() and tail.isdigit():
            opacity = tail

    return ParsedToken(token, tuple(variants), name, negative, arbitrary, opacity)


# ============================================
# Resolution strategies
# ============================================


def declare(properties, value: str) -> str:
    """Join one value over several properties: 'a: v; b: v;'."""
    return " ".join(f"{prop}: {value};" for prop in properties)


def _resolve_arbitrary(parsed: ParsedToken, prefix: str) -> Resolution | None:
    if parsed.arbitrary is None or parsed.negative:
        return None
    key, value = parsed.arbitrary
    if not value.strip() or any(ch in ARBITRARY_FORBIDDEN for ch in value):
        return None

    if key in ARBITRARY_COLOR_PROPERTIES and COLOR_VALUE_RE.match(value):
        properties = ARBITRARY_COLOR_PROPERTIES[key]
    else:
        properties = ARBITRARY_PROPERTIES.get(key)
    if properties is None:
        return None
    return Resolution(Strategy.ARBITRARY, declare(properties, value))


def _resolve_exact(parsed: ParsedToken, prefix: str) -> Resolution | None:
    if parsed.negative:
        return None
    declarations = EXACT.get(parsed.name)
    if declarations is None:
        return None
    return Resolution(Strategy.EXACT, declarations)


def _resolve_scale(parsed: ParsedToken, prefix: str) -> Resolution | None:
    head, sep, key = parsed.name.rpartition("-")
    if not sep or head not in SCALE_FAMILIES:
        return None
    properties, scale, negatable, suffix = SCALE_FAMILIES[head]

    value = scale_value(scale, key)
    if value is None:
        return None
    if parsed.negative:
        # Only lengths negate; -mt-auto is not a thing
        if not negatable or not value[0].isdigit():
            return None
        if value != "0":
            value = "-" + value
    return Resolution(Strategy.SCALE, declare(properties, value), suffix)


def _color_value(color: str, prefix: str) -> tuple[str, str | None] | None:
    """Resolve a color name to (css value, hex or None)."""
    semantic = color[: -len("-foreground")] if color.endswith("-foreground") else color
    if semantic in SEMANTIC_COLORS:
        return f"var(--{prefix or DEFAULT_PREFIX}-{color})", None
    if color in SPECIAL_COLORS:
        value = SPECIAL_COLORS[color]
        return value, value if value.startswith("#") else None

    family, sep, shade = color.rpartition("-")
    if not sep or family not in PALETTE:
        return None
    hex_value = palette_hex(family, shade)
    if hex_value is None:
        return None
    return hex_value, hex_value


def _color_css(color: str, opacity: str | None, prefix: str) -> str | None:
    """Resolve a color name plus optional /alpha suffix to a CSS value.

    Hex colors become rgb() with an alpha channel, semantic colors are mixed
    with transparent, and keywords (transparent, currentColor, inherit) keep
    their keyword.
    """
    resolved = _color_value(color, prefix)
    if resolved is None:
        return None
    value, hex_value = resolved
    if opacity is None:
        return value

    alpha = alpha_value(opacity)
    if alpha is None:
        return None
    if hex_value is not None:
        r, g, b = hex_to_rgb(hex_value)
        return f"rgb({r} {g} {b} / {alpha})"
    if value.startswith("var("):
        return f"color-mix(in srgb, {value} {int(opacity)}%, transparent)"
    return value


def _split_opacity(parsed: ParsedToken, color: str) -> str:
    if parsed.opacity is not None:
        return color[: -len(parsed.opacity) - 1]
    return color


def _resolve_color(parsed: ParsedToken, prefix: str) -> Resolution | None:
    if parsed.negative:
        return None
    head, sep, color = parsed.name.partition("-")
    if not sep or head not in COLOR_PROPERTIES:
        return None
    prop, suffix = COLOR_PROPERTIES[head]

    value = _color_css(_split_opacity(parsed, color), parsed.opacity, prefix)
    if value is None:
        return None
    return Resolution(Strategy.COLOR, f"{prop}: {value};", suffix)


def _resolve_composite(parsed: ParsedToken, prefix: str) -> Resolution | None:
    if parsed.negative or parsed.name not in COMPOSITE:
        return None
    declarations, suffix = COMPOSITE[parsed.name]
    return Resolution(Strategy.COMPOSITE, declarations, suffix)


def _grid_template(kind: str, count: str) -> str | None:
    prop = "grid-template-columns" if kind == "cols" else "grid-template-rows"
    if count in ("none", "subgrid"):
        return f"{prop}: {count};"
    n = int(count)
    if not 1 <= n <= MAX_GRID_COLUMNS:
        return None
    return f"{prop}: repeat({n}, minmax(0, 1fr));"


def _grid_span(kind: str, span: str) -> str | None:
    prop = "grid-column" if kind == "col" else "grid-row"
    if span == "auto":
        return f"{prop}: auto;"
    if span == "full":
        return f"{prop}: 1 / -1;"
    n = int(span)
    if not 1 <= n <= MAX_GRID_COLUMNS:
        return None
    return f"{prop}: span {n} / span {n};"


_ORDER_KEYWORDS = {"first": "-9999", "last": "9999", "none": "0"}


def _resolve_formula(parsed: ParsedToken, prefix: str) -> Resolution | None:
    if parsed.negative:
        return None
    name = parsed.name
    declarations = None

    grid_template = GRID_TEMPLATE_RE.match(name)
    grid_span = GRID_SPAN_RE.match(name)
    timing = TIMING_RE.match(name)
    order = ORDER_RE.match(name)
    if grid_template:
        declarations = _grid_template(grid_template.group(1), grid_template.group(2))
    elif grid_span:
        declarations = _grid_span(grid_span.group(1), grid_span.group(2))
    elif timing:
        prop = "transition-duration" if timing.group(1) == "duration" else "transition-delay"
        declarations = f"{prop}: {int(timing.group(2))}ms;"
    elif order:
        key = order.group(1)
        declarations = f"order: {_ORDER_KEYWORDS.get(key) or int(key)};"

    if declarations is None:
        return None
    return Resolution(Strategy.FORMULA, declarations)


def _resolve_transform(parsed: ParsedToken, prefix: str) -> Resolution | None:
    name = parsed.name
    translate = TRANSLATE_RE.match(name)
    rotate = ROTATE_RE.match(name)
    scale = SCALE_TRANSFORM_RE.match(name)

    if translate:
        axis, key = translate.groups()
        value = translate_value(key)
        if value is None:
            return None
        if parsed.negative and value != "0":
            value = "-" + value
        return Resolution(Strategy.TRANSFORM, f"--tw-translate-{axis}: {value}; {TRANSFORM_COMPOSE}")
    if rotate:
        degrees = int(rotate.group(1))
        if parsed.negative and degrees:
            degrees = -degrees
        return Resolution(Strategy.TRANSFORM, f"--tw-rotate: {degrees}deg; {TRANSFORM_COMPOSE}")
    if scale and not parsed.negative:
        factor = scale_factor(scale.group(1))
        return Resolution(
            Strategy.TRANSFORM,
            f"--tw-scale-x: {factor}; --tw-scale-y: {factor}; {TRANSFORM_COMPOSE}",
        )
    return None


def _resolve_gradient(parsed: ParsedToken, prefix: str) -> Resolution | None:
    if parsed.negative:
        return None
    name = parsed.name
    if name.startswith("bg-gradient-to-"):
        direction = GRADIENT_DIRECTIONS.get(name[len("bg-gradient-to-"):])
        if direction is None:
            return None
        return Resolution(
            Strategy.GRADIENT,
            f"background-image: linear-gradient(to {direction}, var(--tw-gradient-stops));",
        )

    stop, sep, color = name.partition("-")
    if not sep or stop not in GRADIENT_STOPS:
        return None
    value = _color_css(_split_opacity(parsed, color), parsed.opacity, prefix)
    if value is None:
        return None
    return Resolution(Strategy.GRADIENT, GRADIENT_STOPS[stop].format(color=value))


def _resolve_multi(parsed: ParsedToken, prefix: str) -> Resolution | None:
    if parsed.negative or parsed.name not in MULTI_RULES:
        return None
    rule = MULTI_RULES[parsed.name]
    return Resolution(Strategy.MULTI, rule.declarations, rule.suffix, rule.extra, rule.keyframes)


Resolver = Callable[[ParsedToken, str], "Resolution | None"]

# Tried in order for every non-arbitrary utility name
RESOLVERS: tuple[tuple[Strategy, Resolver], ...] = (
    (Strategy.EXACT, _resolve_exact),
    (Strategy.SCALE, _resolve_scale),
    (Strategy.COLOR, _resolve_color),
    (Strategy.COMPOSITE, _resolve_composite),
    (Strategy.FORMULA, _resolve_formula),
    (Strategy.TRANSFORM, _resolve_transform),
    (Strategy.GRADIENT, _resolve_gradient),
    (Strategy.MULTI, _resolve_multi),
)


def resolve(parsed: ParsedToken, prefix: str = DEFAULT_PREFIX) -> Resolution | None:
    """Run the strategies over a parsed token; first match wins."""
    if parsed.arbitrary is not None:
        return _resolve_arbitrary(parsed, prefix)
    for _strategy, resolver in RESOLVERS:
        resolution = resolver(parsed, prefix)
        if resolution is not None:
            return resolution
    return None


# ============================================
# Selector assembly
# ============================================


def escape_selector(token: str) -> str:
    """Escape a class name for use after '.' in a selector.

    Mirrors CSS.escape(): ASCII outside [A-Za-z0-9_-] gets a backslash,
    control characters and a leading digit get a hex escape.
    """
    out = []
    for index, ch in enumerate(token):
        code = ord(ch)
        if code == 0:
            out.append("\ufffd")
        elif code < 0x20 or code == 0x7F:
            out.append(f"\\{code:x} ")
        elif "0" <= ch <= "9" and (index == 0 or (index == 1 and token[0] == "-")):
            out.append(f"\\{code:x} ")
        elif ch == "-" and index == 0 and len(token) == 1:
            out.append("\\-")
        elif code >= 0x80 or ch.isalnum() or ch in "-_":
            out.append(ch)
        else:
            out.append("\\" + ch)
    return "".join(out)


def selector_parts(token: str, variants, suffix: str = "", prefix: str = "") -> tuple[list[str], str | None]:
    """Apply variants to the escaped token. Returns (selector list, media query).

    Group variants produce one selector per group marker class: the bare
    ``group`` class, plus the prefixed one when a prefix is configured.
    """
    pseudo: list[str] = []
    group_states: list[str] = []
    pseudo_element = ""
    dark = False
    media_query = None

    for variant in variants:
        if variant in STATE_VARIANTS:
            if STATE_VARIANTS[variant] not in pseudo:
                pseudo.append(STATE_VARIANTS[variant])
        elif variant in GROUP_VARIANTS:
            if GROUP_VARIANTS[variant] not in group_states:
                group_states.append(GROUP_VARIANTS[variant])
        elif variant in PSEUDO_ELEMENT_VARIANTS:
            pseudo_element = PSEUDO_ELEMENT_VARIANTS[variant]
        elif variant == DARK_VARIANT:
            dark = True
        elif variant in BREAKPOINTS and media_query is None:
            # First breakpoint wins; sm:md:x is treated as sm:x
            media_query = f"(min-width: {BREAKPOINTS[variant]}px)"

    selector = "." + escape_selector(token) + "".join(pseudo) + suffix + pseudo_element
    ancestors = [""]
    if group_states:
        states = "".join(group_states)
        ancestors = [f".{GROUP_CLASS}{states} "]
        if prefix:
            ancestors.append(f".{escape_selector(prefix + '-' + GROUP_CLASS)}{states} ")
    if dark:
        ancestors = [".dark " + ancestor for ancestor in ancestors]
    return [ancestor + selector for ancestor in ancestors], media_query


def build_selector(token: str, variants, suffix: str = "", prefix: str = "") -> tuple[str, str | None]:
    """Apply variants to the escaped token. Returns (selector, media query)."""
    parts, media_query = selector_parts(token, variants, suffix, prefix)
    return ", ".join(parts), media_query


# ============================================
# Generator
# ============================================


class UtilityGenerator:
    """Generates CSS rules for utility class tokens, memoized per instance."""

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        allow_unprefixed: bool = False,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self.prefix = prefix or ""
        self.allow_unprefixed = allow_unprefixed
        self._generate_cached = lru_cache(maxsize=cache_size)(self._generate_all)

    def generate(self, token) -> CssRule | None:
        """Generate the rule for a token, or None when it is not a utility."""
        rules = self.generate_all(token)
        for rule in rules:
            if not rule.selector.startswith("@keyframes"):
                return rule
        return None

    def generate_all(self, token) -> tuple[CssRule, ...]:
        """Every rule a token needs: keyframes first, then its own rule, then extras.

        Empty for tokens that are not utilities. Only multi-rule utilities
        (prose, the entrance animations) yield more than one rule.
        """
        if not isinstance(token, str) or not token:
            return ()
        return self._generate_cached(token)

    def is_recognized(self, token) -> bool:
        return self.generate(token) is not None

    def parse(self, token) -> ParsedToken | None:
        return parse_token(token, self.prefix, self.allow_unprefixed)

    def explain(self, token) -> Resolution | None:
        """Resolve a token without building the rule (which strategy matched)."""
        parsed = self.parse(token)
        return resolve(parsed, self.prefix) if parsed is not None else None

    def cache_info(self):
        return self._generate_cached.cache_info()

    def _generate_all(self, token: str) -> tuple[CssRule, ...]:
        parsed = self.parse(token)
        if parsed is None:
            return ()
        resolution = resolve(parsed, self.prefix)
        if resolution is None:
            return ()

        rules = [CssRule(f"@keyframes {name}", KEYFRAMES[name]) for name in resolution.keyframes]
        selector, media_query = build_selector(
            token, parsed.variants, resolution.selector_suffix, self.prefix
        )
        rules.append(CssRule(selector, resolution.declarations, media_query))
        if resolution.extra:
            parts, _ = selector_parts(token, parsed.variants, prefix=self.prefix)
            for template, declarations in resolution.extra:
                extra_selector = ", ".join(template.format(sel=part) for part in parts)
                rules.append(CssRule(extra_selector, declarations, media_query))
        return tuple(rules)


def generate(token, prefix: str = DEFAULT_PREFIX, allow_unprefixed: bool = False) -> CssRule | None:
    """One-off generation (builds a throwaway generator)."""
    return UtilityGenerator(prefix, allow_unprefixed).generate(token)
