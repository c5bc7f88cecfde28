"""Utility tables for the generator - extracted from generator.py."""

import re
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import NamedTuple

# ── Variants ──────────────────────────────────────────────────────────

STATE_VARIANTS = {
    "hover": ":hover",
    "focus": ":focus",
    "active": ":active",
    "disabled": ":disabled",
    "visited": ":visited",
    "focus-visible": ":focus-visible",
    "focus-within": ":focus-within",
    "checked": ":checked",
    "required": ":required",
    "invalid": ":invalid",
    "first": ":first-child",
    "last": ":last-child",
    "odd": ":nth-child(odd)",
    "even": ":nth-child(even)",
}

# Ancestor state on the group marker: group-hover:x -> .group:hover .x
GROUP_VARIANTS = {
    "group-hover": ":hover",
    "group-focus": ":focus",
    "group-focus-within": ":focus-within",
}

PSEUDO_ELEMENT_VARIANTS = {
    "placeholder": "::placeholder",
}

GROUP_CLASS = "group"

# min-width in px
BREAKPOINTS = {
    "sm": 640,
    "md": 768,
    "lg": 1024,
    "xl": 1280,
    "2xl": 1536,
}

DARK_VARIANT = "dark"

CHILD_SELECTOR = " > :not([hidden]) ~ :not([hidden])"

# ── Spacing scale ─────────────────────────────────────────────────────

# index n resolves to n/4 rem
SPACING_KEYS = (
    "0", "0.5", "1", "1.5", "2", "2.5", "3", "3.5", "4", "5", "6", "7", "8",
    "9", "10", "11", "12", "14", "16", "20", "24", "28", "32", "36", "40",
    "44", "48", "52", "56", "60", "64", "72", "80", "96",
)
_SPACING_KEY_SET = frozenset(SPACING_KEYS)

FRACTION_RE = re.compile(r"^([0-9]{1,2})/([0-9]{1,2})$")
FRACTION_DENOMINATORS = frozenset({2, 3, 4, 5, 6, 12})

SIZING_KEYWORDS = {
    "auto": "auto",
    "full": "100%",
    "screen": "100vw",
    "svw": "100svw",
    "lvw": "100lvw",
    "dvw": "100dvw",
    "min": "min-content",
    "max": "max-content",
    "fit": "fit-content",
}

HEIGHT_KEYWORDS = {
    **SIZING_KEYWORDS,
    "screen": "100vh",
    "svh": "100svh",
    "lvh": "100lvh",
    "dvh": "100dvh",
}
for _key in ("svw", "lvw", "dvw"):
    del HEIGHT_KEYWORDS[_key]

INSET_KEYWORDS = {"auto": "auto", "full": "100%"}


def format_decimal(value: Decimal) -> str:
    """Format without exponent or trailing zeros: 4.00 -> '4', 0.50 -> '0.5'."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def spacing_value(key: str) -> str | None:
    """Resolve a spacing index ('4', '0.5', 'px') to its CSS length."""
    if key == "px":
        return "1px"
    if key not in _SPACING_KEY_SET:
        return None
    if key == "0":
        return "0"
    return format_decimal(Decimal(key) / 4) + "rem"


def fraction_value(key: str) -> str | None:
    """Resolve 'N/M' to an exact percentage rounded to six decimals."""
    match = FRACTION_RE.match(key)
    if not match:
        return None
    numerator, denominator = int(match.group(1)), int(match.group(2))
    if denominator not in FRACTION_DENOMINATORS or not 0 < numerator < denominator:
        return None
    percent = Fraction(numerator * 100, denominator)
    if percent.denominator == 1:
        return f"{percent.numerator}%"
    rounded = (Decimal(percent.numerator) / Decimal(percent.denominator)).quantize(
        Decimal("0.000001"), rounding=ROUND_HALF_UP
    )
    return format_decimal(rounded) + "%"


def alpha_value(alpha: str) -> str | None:
    """Convert a 0-100 opacity suffix to an exact 0-1 decimal string."""
    if not (alpha.isascii() and alpha.isdigit()) or len(alpha) > 3:
        return None
    amount = int(alpha)
    if amount > 100:
        return None
    return format_decimal(Decimal(amount) / 100)


# ── Scale families ────────────────────────────────────────────────────

# prefix -> (css properties, scale, negatable, selector suffix)
SCALE_FAMILIES = {
    "p": (("padding",), "spacing", False, ""),
    "px": (("padding-left", "padding-right"), "spacing", False, ""),
    "py": (("padding-top", "padding-bottom"), "spacing", False, ""),
    "pt": (("padding-top",), "spacing", False, ""),
    "pr": (("padding-right",), "spacing", False, ""),
    "pb": (("padding-bottom",), "spacing", False, ""),
    "pl": (("padding-left",), "spacing", False, ""),
    "ps": (("padding-inline-start",), "spacing", False, ""),
    "pe": (("padding-inline-end",), "spacing", False, ""),
    "m": (("margin",), "margin", True, ""),
    "mx": (("margin-left", "margin-right"), "margin", True, ""),
    "my": (("margin-top", "margin-bottom"), "margin", True, ""),
    "mt": (("margin-top",), "margin", True, ""),
    "mr": (("margin-right",), "margin", True, ""),
    "mb": (("margin-bottom",), "margin", True, ""),
    "ml": (("margin-left",), "margin", True, ""),
    "ms": (("margin-inline-start",), "margin", True, ""),
    "me": (("margin-inline-end",), "margin", True, ""),
    "gap": (("gap",), "spacing", False, ""),
    "gap-x": (("column-gap",), "spacing", False, ""),
    "gap-y": (("row-gap",), "spacing", False, ""),
    "space-x": (("margin-left",), "spacing", True, CHILD_SELECTOR),
    "space-y": (("margin-top",), "spacing", True, CHILD_SELECTOR),
    "w": (("width",), "sizing", False, ""),
    "min-w": (("min-width",), "sizing", False, ""),
    "max-w": (("max-width",), "sizing", False, ""),
    "h": (("height",), "height", False, ""),
    "min-h": (("min-height",), "height", False, ""),
    "max-h": (("max-height",), "height", False, ""),
    "size": (("width", "height"), "sizing", False, ""),
    "basis": (("flex-basis",), "sizing", False, ""),
    "inset": (("inset",), "inset", True, ""),
    "inset-x": (("left", "right"), "inset", True, ""),
    "inset-y": (("top", "bottom"), "inset", True, ""),
    "top": (("top",), "inset", True, ""),
    "right": (("right",), "inset", True, ""),
    "bottom": (("bottom",), "inset", True, ""),
    "left": (("left",), "inset", True, ""),
    "leading": (("line-height",), "spacing", False, ""),
}


def scale_value(scale: str, key: str) -> str | None:
    """Resolve a key against one of the named scales."""
    if scale == "spacing":
        return spacing_value(key)
    if scale == "margin":
        return "auto" if key == "auto" else spacing_value(key)
    if scale == "sizing":
        return SIZING_KEYWORDS.get(key) or fraction_value(key) or spacing_value(key)
    if scale == "height":
        return HEIGHT_KEYWORDS.get(key) or fraction_value(key) or spacing_value(key)
    if scale == "inset":
        return INSET_KEYWORDS.get(key) or fraction_value(key) or spacing_value(key)
    return None


# ── Exact (single declaration) keywords ───────────────────────────────


def _family(prop: str, values: dict, prefix: str = "") -> dict:
    return {f"{prefix}{name}": f"{prop}: {value};" for name, value in values.items()}


_RADII = {
    "none": "0", "sm": "0.125rem", "": "0.25rem", "md": "0.375rem", "lg": "0.5rem",
    "xl": "0.75rem", "2xl": "1rem", "3xl": "1.5rem", "full": "9999px",
}

_RADIUS_CORNERS = {
    "t": ("border-top-left-radius", "border-top-right-radius"),
    "r": ("border-top-right-radius", "border-bottom-right-radius"),
    "b": ("border-bottom-left-radius", "border-bottom-right-radius"),
    "l": ("border-top-left-radius", "border-bottom-left-radius"),
    "tl": ("border-top-left-radius",),
    "tr": ("border-top-right-radius",),
    "bl": ("border-bottom-left-radius",),
    "br": ("border-bottom-right-radius",),
}

_BORDER_SIDES = {
    "t": "border-top-width",
    "r": "border-right-width",
    "b": "border-bottom-width",
    "l": "border-left-width",
}

_BORDER_WIDTHS = {"": "1px", "-0": "0px", "-2": "2px", "-4": "4px", "-8": "8px"}

_RING_WIDTHS = {"": "3px", "-0": "0px", "-1": "1px", "-2": "2px", "-4": "4px", "-8": "8px"}

_CURSORS = (
    "auto", "default", "pointer", "wait", "text", "move", "help", "not-allowed", "none",
    "context-menu", "progress", "cell", "crosshair", "vertical-text", "alias", "copy",
    "no-drop", "grab", "grabbing", "all-scroll", "col-resize", "row-resize", "n-resize",
    "e-resize", "s-resize", "w-resize", "ne-resize", "nw-resize", "se-resize", "sw-resize",
    "ew-resize", "ns-resize", "nesw-resize", "nwse-resize", "zoom-in", "zoom-out",
)

_SHADOWS = {
    "shadow-sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
    "shadow": "0 1px 3px 0 rgb(0 0 0 / 0.1), 0 1px 2px -1px rgb(0 0 0 / 0.1)",
    "shadow-md": "0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1)",
    "shadow-lg": "0 10px 15px -3px rgb(0 0 0 / 0.1), 0 4px 6px -4px rgb(0 0 0 / 0.1)",
    "shadow-xl": "0 20px 25px -5px rgb(0 0 0 / 0.1), 0 8px 10px -6px rgb(0 0 0 / 0.1)",
    "shadow-2xl": "0 25px 50px -12px rgb(0 0 0 / 0.25)",
    "shadow-inner": "inset 0 2px 4px 0 rgb(0 0 0 / 0.05)",
    "shadow-none": "0 0 #0000",
}

_MAX_WIDTHS = {
    "none": "none", "xs": "20rem", "sm": "24rem", "md": "28rem", "lg": "32rem",
    "xl": "36rem", "2xl": "42rem", "3xl": "48rem", "4xl": "56rem", "5xl": "64rem",
    "6xl": "72rem", "7xl": "80rem", "prose": "65ch", "screen-sm": "640px",
    "screen-md": "768px", "screen-lg": "1024px", "screen-xl": "1280px",
    "screen-2xl": "1536px",
}


def _build_exact() -> dict:
    table: dict = {}
    table.update(_family("display", {
        "hidden": "none", "block": "block", "inline": "inline", "inline-block": "inline-block",
        "flex": "flex", "inline-flex": "inline-flex", "grid": "grid", "inline-grid": "inline-grid",
        "contents": "contents", "flow-root": "flow-root", "table": "table",
        "table-row": "table-row", "table-cell": "table-cell", "list-item": "list-item",
    }))
    table.update(_family("flex-direction", {
        "row": "row", "row-reverse": "row-reverse", "col": "column", "col-reverse": "column-reverse",
    }, "flex-"))
    table.update(_family("flex-wrap", {
        "wrap": "wrap", "wrap-reverse": "wrap-reverse", "nowrap": "nowrap",
    }, "flex-"))
    table.update(_family("flex", {
        "1": "1 1 0%", "auto": "1 1 auto", "initial": "0 1 auto", "none": "none",
    }, "flex-"))
    table.update(_family("flex-grow", {"grow": "1", "grow-0": "0"}))
    table.update(_family("flex-shrink", {"shrink": "1", "shrink-0": "0"}))
    table.update(_family("align-items", {
        "start": "flex-start", "end": "flex-end", "center": "center",
        "baseline": "baseline", "stretch": "stretch",
    }, "items-"))
    table.update(_family("justify-content", {
        "start": "flex-start", "end": "flex-end", "center": "center",
        "between": "space-between", "around": "space-around", "evenly": "space-evenly",
        "stretch": "stretch", "normal": "normal",
    }, "justify-"))
    table.update(_family("justify-items", {
        "start": "start", "end": "end", "center": "center", "stretch": "stretch",
    }, "justify-items-"))
    table.update(_family("align-content", {
        "start": "flex-start", "end": "flex-end", "center": "center",
        "between": "space-between", "around": "space-around", "evenly": "space-evenly",
    }, "content-"))
    table.update(_family("align-self", {
        "auto": "auto", "start": "flex-start", "end": "flex-end", "center": "center",
        "stretch": "stretch", "baseline": "baseline",
    }, "self-"))
    table.update(_family("position", {
        name: name for name in ("static", "fixed", "absolute", "relative", "sticky")
    }))
    for axis in ("", "x-", "y-"):
        prop = "overflow" if not axis else f"overflow-{axis[0]}"
        table.update(_family(prop, {
            name: name for name in ("auto", "hidden", "clip", "visible", "scroll")
        }, f"overflow-{axis}"))
    table.update(_family("object-fit", {
        name: name for name in ("contain", "cover", "fill", "none", "scale-down")
    }, "object-"))
    table.update(_family("visibility", {
        "visible": "visible", "invisible": "hidden", "collapse": "collapse",
    }))
    table.update(_family("z-index", {
        "0": "0", "10": "10", "20": "20", "30": "30", "40": "40", "50": "50", "auto": "auto",
    }, "z-"))
    table.update(_family("cursor", {name: name for name in _CURSORS}, "cursor-"))
    table.update(_family("pointer-events", {"none": "none", "auto": "auto"}, "pointer-events-"))
    table.update(_family("user-select", {
        name: name for name in ("none", "text", "all", "auto")
    }, "select-"))
    table.update(_family("touch-action", {
        "auto": "auto", "none": "none", "pan-x": "pan-x", "pan-left": "pan-left",
        "pan-right": "pan-right", "pan-y": "pan-y", "pan-up": "pan-up",
        "pan-down": "pan-down", "pinch-zoom": "pinch-zoom", "manipulation": "manipulation",
    }, "touch-"))
    table.update(_family("resize", {
        "resize-none": "none", "resize-y": "vertical", "resize-x": "horizontal", "resize": "both",
    }))
    table.update(_family("scroll-behavior", {"auto": "auto", "smooth": "smooth"}, "scroll-"))

    # Typography
    table.update(_family("text-align", {
        name: name for name in ("left", "center", "right", "justify", "start", "end")
    }, "text-"))
    transforms = {
        "uppercase": "uppercase", "lowercase": "lowercase",
        "capitalize": "capitalize", "normal-case": "none",
    }
    table.update(_family("text-transform", transforms))
    table.update(_family("text-transform", transforms, "text-"))
    decorations = {
        "underline": "underline", "overline": "overline",
        "line-through": "line-through", "no-underline": "none",
    }
    table.update(_family("text-decoration-line", decorations))
    table.update(_family("text-decoration-line", decorations, "text-"))
    table.update(_family("text-wrap", {
        name: name for name in ("wrap", "nowrap", "balance", "pretty")
    }, "text-"))
    table.update(_family("text-overflow", {"ellipsis": "ellipsis", "clip": "clip"}, "text-"))
    table.update(_family("white-space", {
        name: name for name in ("normal", "nowrap", "pre", "pre-line", "pre-wrap", "break-spaces")
    }, "whitespace-"))
    table["break-words"] = "overflow-wrap: break-word;"
    table["break-all"] = "word-break: break-all;"
    table["break-keep"] = "word-break: keep-all;"
    table.update(_family("font-weight", {
        "thin": "100", "extralight": "200", "light": "300", "normal": "400", "medium": "500",
        "semibold": "600", "bold": "700", "extrabold": "800", "black": "900",
    }, "font-"))
    for prefix in ("", "font-"):
        table.update(_family("font-style", {"italic": "italic", "not-italic": "normal"}, prefix))
    table.update(_family("font-family", {
        "sans": 'ui-sans-serif, system-ui, sans-serif, "Apple Color Emoji", '
                '"Segoe UI Emoji", "Segoe UI Symbol", "Noto Color Emoji"',
        "serif": 'ui-serif, Georgia, Cambria, "Times New Roman", Times, serif',
        "mono": 'ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, '
                '"Liberation Mono", "Courier New", monospace',
    }, "font-"))
    table.update(_family("line-height", {
        "none": "1", "tight": "1.25", "snug": "1.375", "normal": "1.5",
        "relaxed": "1.625", "loose": "2",
    }, "leading-"))
    table.update(_family("letter-spacing", {
        "tighter": "-0.05em", "tight": "-0.025em", "normal": "0em",
        "wide": "0.025em", "wider": "0.05em", "widest": "0.1em",
    }, "tracking-"))

    # Borders
    for suffix, width in _BORDER_WIDTHS.items():
        table[f"border{suffix}"] = f"border-width: {width};"
        for side, prop in _BORDER_SIDES.items():
            table[f"border-{side}{suffix}"] = f"{prop}: {width};"
    table.update(_family("border-style", {
        name: name for name in ("solid", "dashed", "dotted", "double", "hidden", "none")
    }, "border-"))
    for name, radius in _RADII.items():
        table["rounded" if not name else f"rounded-{name}"] = f"border-radius: {radius};"
        for corner, props in _RADIUS_CORNERS.items():
            key = f"rounded-{corner}" if not name else f"rounded-{corner}-{name}"
            table[key] = " ".join(f"{prop}: {radius};" for prop in props)

    # Effects
    table.update(_family("opacity", {
        str(step): format_decimal(Decimal(step) / 100) for step in range(0, 101, 5)
    }, "opacity-"))
    table.update(_family("box-shadow", _SHADOWS))
    for suffix, width in _RING_WIDTHS.items():
        table[f"ring{suffix}"] = (
            f"box-shadow: var(--tw-ring-inset) 0 0 0 calc({width} + "
            f"var(--tw-ring-offset-width)) var(--tw-ring-color);"
        )
    table["ring-inset"] = "--tw-ring-inset: inset;"
    table.update(_family("transition-timing-function", {
        "linear": "linear", "in": "cubic-bezier(0.4, 0, 1, 1)",
        "out": "cubic-bezier(0, 0, 0.2, 1)", "in-out": "cubic-bezier(0.4, 0, 0.2, 1)",
    }, "ease-"))
    table.update(_family("animation", {
        "none": "none",
        "spin": "spin 1s linear infinite",
        "ping": "ping 1s cubic-bezier(0, 0, 0.2, 1) infinite",
        "pulse": "pulse 2s cubic-bezier(0.4, 0, 0.6, 1) infinite",
        "bounce": "bounce 1s infinite",
    }, "animate-"))
    table["transition-none"] = "transition-property: none;"

    # Sizing names that are not on the scale
    table.update(_family("max-width", _MAX_WIDTHS, "max-w-"))

    # Marker for group-* variants; recognized, emits nothing
    table[GROUP_CLASS] = ""
    return table


EXACT = _build_exact()

# ── Composite (multi declaration) utilities ───────────────────────────

FONT_SIZES = {
    "xs": ("0.75rem", "1rem"),
    "sm": ("0.875rem", "1.25rem"),
    "base": ("1rem", "1.5rem"),
    "lg": ("1.125rem", "1.75rem"),
    "xl": ("1.25rem", "1.75rem"),
    "2xl": ("1.5rem", "2rem"),
    "3xl": ("1.875rem", "2.25rem"),
    "4xl": ("2.25rem", "2.5rem"),
    "5xl": ("3rem", "1"),
    "6xl": ("3.75rem", "1"),
    "7xl": ("4.5rem", "1"),
    "8xl": ("6rem", "1"),
    "9xl": ("8rem", "1"),
}

_TRANSITION_TAIL = "transition-timing-function: cubic-bezier(0.4, 0, 0.2, 1); transition-duration: 150ms;"

_TRANSITIONS = {
    "transition": "color, background-color, border-color, text-decoration-color, fill, "
                  "stroke, opacity, box-shadow, transform, filter, backdrop-filter",
    "transition-all": "all",
    "transition-colors": "color, background-color, border-color, text-decoration-color, fill, stroke",
    "transition-opacity": "opacity",
    "transition-shadow": "box-shadow",
    "transition-transform": "transform",
}


def _build_composite() -> dict:
    # name -> (declarations, selector suffix)
    table = {
        f"text-{name}": (f"font-size: {size}; line-height: {line_height};", "")
        for name, (size, line_height) in FONT_SIZES.items()
    }
    table["truncate"] = ("overflow: hidden; text-overflow: ellipsis; white-space: nowrap;", "")
    table["sr-only"] = (
        "position: absolute; width: 1px; height: 1px; padding: 0; margin: -1px; "
        "overflow: hidden; clip: rect(0, 0, 0, 0); white-space: nowrap; border-width: 0;",
        "",
    )
    table["not-sr-only"] = (
        "position: static; width: auto; height: auto; padding: 0; margin: 0; "
        "overflow: visible; clip: auto; white-space: normal;",
        "",
    )
    table["break-normal"] = ("overflow-wrap: normal; word-break: normal;", "")
    table["divide-x"] = ("border-right-width: 0px; border-left-width: 1px;", CHILD_SELECTOR)
    table["divide-y"] = ("border-top-width: 1px; border-bottom-width: 0px;", CHILD_SELECTOR)
    for name, properties in _TRANSITIONS.items():
        table[name] = (f"transition-property: {properties}; {_TRANSITION_TAIL}", "")
    return table


COMPOSITE = _build_composite()

# ── Formula utilities ─────────────────────────────────────────────────

MAX_GRID_COLUMNS = 12

GRID_TEMPLATE_RE = re.compile(r"^grid-(cols|rows)-(none|subgrid|[0-9]{1,2})$")
GRID_SPAN_RE = re.compile(r"^(col|row)-span-(auto|full|[0-9]{1,2})$")
TIMING_RE = re.compile(r"^(duration|delay)-([0-9]{1,5})$")
ORDER_RE = re.compile(r"^order-(first|last|none|[0-9]{1,2})$")

# ── Transforms ────────────────────────────────────────────────────────

# Each transform utility sets its own variable and recomposes the whole
# transform, so translate, rotate and scale combine on one element.
TRANSFORM_COMPOSE = (
    "transform: translate(var(--tw-translate-x, 0), var(--tw-translate-y, 0)) "
    "rotate(var(--tw-rotate, 0)) scaleX(var(--tw-scale-x, 1)) scaleY(var(--tw-scale-y, 1));"
)

TRANSLATE_RE = re.compile(r"^translate-(x|y)-(.+)$")
ROTATE_RE = re.compile(r"^rotate-([0-9]{1,3})$")
SCALE_TRANSFORM_RE = re.compile(r"^scale-([0-9]{1,3})$")


def translate_value(key: str) -> str | None:
    """Resolve a translate key: full, a fraction or a spacing index."""
    if key == "full":
        return "100%"
    return fraction_value(key) or spacing_value(key)


def scale_factor(key: str) -> str:
    """scale-95 -> 0.95, scale-110 -> 1.1"""
    return format_decimal(Decimal(int(key)) / 100)


# ── Gradients ─────────────────────────────────────────────────────────

GRADIENT_DIRECTIONS = {
    "t": "top",
    "tr": "top right",
    "r": "right",
    "br": "bottom right",
    "b": "bottom",
    "bl": "bottom left",
    "l": "left",
    "tl": "top left",
}

_TRANSPARENT_STOP = "rgb(255 255 255 / 0)"

# stop -> declarations template, {color} filled with the resolved color
GRADIENT_STOPS = {
    "from": "--tw-gradient-from: {color}; --tw-gradient-stops: var(--tw-gradient-from), "
            f"var(--tw-gradient-to, {_TRANSPARENT_STOP});",
    "via": "--tw-gradient-stops: var(--tw-gradient-from), {color}, "
           f"var(--tw-gradient-to, {_TRANSPARENT_STOP});",
    "to": "--tw-gradient-to: {color};",
}

# ── Multi-rule utilities ──────────────────────────────────────────────


class MultiRule(NamedTuple):
    """A utility that emits more than one rule.

    ``extra`` holds (selector template, declarations) pairs; ``{sel}`` in a
    template is replaced by the utility's own selector.
    """

    declarations: str
    suffix: str = ""
    extra: tuple[tuple[str, str], ...] = ()
    keyframes: tuple[str, ...] = ()


KEYFRAMES = {
    "vibe-staggerFadeUp": "from { opacity: 0; transform: translateY(20px); } "
                          "to { opacity: 1; transform: translateY(0); }",
    "vibe-pageEnter": "from { opacity: 0; transform: translateY(12px); } "
                      "to { opacity: 1; transform: translateY(0); }",
    "vibe-overlayEnter": "from { opacity: 0; } to { opacity: 1; }",
    "vibe-modalEnter": "from { opacity: 0; transform: scale(0.95) translateY(-10px); } "
                       "to { opacity: 1; transform: scale(1) translateY(0); }",
    "vibe-float": "0%, 100% { transform: translateY(0); } 50% { transform: translateY(-20px); }",
    "vibe-pulseDot": "0%, 100% { opacity: 1; transform: scale(1); } "
                     "50% { opacity: 0.6; transform: scale(1.25); }",
    "vibe-checkBounceIn": "0% { opacity: 0; transform: scale(0); } 50% { transform: scale(1.2); } "
                          "100% { opacity: 1; transform: scale(1); }",
    "vibe-gradientShift": "0%, 100% { background-position: 0% 50%; } "
                          "50% { background-position: 100% 50%; }",
}

_SPRING = "cubic-bezier(0.34, 1.56, 0.64, 1)"
_GRID_LINE = "linear-gradient(to {side}, rgb({rgb}) 1px, transparent 1px)"


def _grid_lines(rgb: str) -> str:
    return ", ".join(_GRID_LINE.format(side=side, rgb=rgb) for side in ("right", "bottom"))


MULTI_RULES = {
    "stagger-children": MultiRule(
        "opacity: 0; animation: vibe-staggerFadeUp 0.6s ease-out forwards; "
        "animation-delay: calc(var(--stagger-index, 0) * 80ms);",
        suffix=" > *",
        keyframes=("vibe-staggerFadeUp",),
    ),
    "page-enter": MultiRule(
        "animation: vibe-pageEnter 0.4s ease-out forwards;",
        keyframes=("vibe-pageEnter",),
    ),
    "overlay-enter": MultiRule(
        "animation: vibe-overlayEnter 0.2s ease-out forwards;",
        keyframes=("vibe-overlayEnter",),
    ),
    "modal-enter": MultiRule(
        f"animation: vibe-modalEnter 0.25s {_SPRING} forwards;",
        keyframes=("vibe-modalEnter",),
    ),
    "press-effect": MultiRule(
        "transform: scale(0.98); transition: transform 0.1s ease;",
        suffix=":active",
    ),
    "animate-float": MultiRule(
        "animation: vibe-float 6s ease-in-out infinite;",
        keyframes=("vibe-float",),
    ),
    "animate-float-delayed": MultiRule(
        "animation: vibe-float 6s ease-in-out 3s infinite;",
        keyframes=("vibe-float",),
    ),
    "pulse-dot": MultiRule(
        "animation: vibe-pulseDot 1.5s ease-in-out infinite;",
        keyframes=("vibe-pulseDot",),
    ),
    "copy-success-icon": MultiRule(
        f"animation: vibe-checkBounceIn 0.3s {_SPRING} forwards;",
        keyframes=("vibe-checkBounceIn",),
    ),
    "bg-grid-pattern": MultiRule(
        f"background-image: {_grid_lines('228 228 231 / 0.6')}; background-size: 64px 64px;",
        extra=((".dark {sel}", f"background-image: {_grid_lines('63 63 70 / 0.35')};"),),
    ),
    "gradient-orb": MultiRule("border-radius: 9999px; filter: blur(80px); pointer-events: none;"),
    "gradient-orb-teal": MultiRule(
        "background: radial-gradient(circle at 30% 30%, rgb(6 84 101 / 0.9), rgb(6 84 101 / 0));"
    ),
    "gradient-orb-lilac": MultiRule(
        "background: radial-gradient(circle at 30% 30%, rgb(170 152 169 / 0.9), rgb(170 152 169 / 0));"
    ),
    "text-gradient-animated": MultiRule(
        "background-size: 200% 100%; -webkit-background-clip: text; background-clip: text; "
        "-webkit-text-fill-color: transparent; color: transparent; "
        "animation: vibe-gradientShift 3s ease infinite;",
        keyframes=("vibe-gradientShift",),
    ),
    "prose": MultiRule(
        "line-height: 1.75;",
        extra=(
            ("{sel} > :first-child", "margin-top: 0;"),
            ("{sel} > :last-child", "margin-bottom: 0;"),
            ("{sel} p", "margin: 1rem 0;"),
            ("{sel} h2", "margin: 2.25rem 0 1rem; font-size: 1.5rem; font-weight: 700; letter-spacing: -0.01em;"),
            ("{sel} h3", "margin: 1.75rem 0 0.75rem; font-size: 1.25rem; font-weight: 700; letter-spacing: -0.01em;"),
            ("{sel} ul, {sel} ol", "margin: 1rem 0; padding-left: 1.25rem;"),
            ("{sel} li", "margin: 0.5rem 0;"),
            ("{sel} a", "text-decoration: underline; text-underline-offset: 3px;"),
            ("{sel} code", "padding: 0.15rem 0.35rem; border-radius: 0.375rem; background: rgb(244 244 245);"),
            ("{sel} blockquote", "margin: 1rem 0; padding-left: 1rem; border-left: 3px solid rgb(161 161 170);"),
            ("{sel} table", "width: 100%; border-collapse: collapse;"),
            ("{sel} thead th", "text-align: left; font-size: 0.875rem; font-weight: 600; "
                               "padding: 0.5rem 0.75rem; border-bottom: 1px solid rgb(228 228 231);"),
            ("{sel} tbody td", "padding: 0.5rem 0.75rem; border-bottom: 1px solid rgb(244 244 245); "
                               "vertical-align: top;"),
        ),
    ),
    # Only overrides; the rule itself is empty and is not emitted
    "prose-invert": MultiRule(
        "",
        extra=(
            ("{sel} code", "background: rgb(39 39 42);"),
            ("{sel} blockquote", "border-left-color: rgb(82 82 91);"),
            ("{sel} thead th", "border-bottom-color: rgb(63 63 70);"),
            ("{sel} tbody td", "border-bottom-color: rgb(39 39 42);"),
        ),
    ),
}

# ── Colors ────────────────────────────────────────────────────────────

# utility prefix -> (css property, selector suffix)
COLOR_PROPERTIES = {
    "bg": ("background-color", ""),
    "text": ("color", ""),
    "border": ("border-color", ""),
    "ring": ("--tw-ring-color", ""),
    "accent": ("accent-color", ""),
    "caret": ("caret-color", ""),
    "fill": ("fill", ""),
    "stroke": ("stroke", ""),
    "outline": ("outline-color", ""),
    "decoration": ("text-decoration-color", ""),
    "divide": ("border-color", CHILD_SELECTOR),
}

SEMANTIC_COLORS = frozenset({
    "primary", "secondary", "muted", "accent", "destructive", "success", "warning",
    "info", "background", "foreground", "card", "popover", "border", "input", "ring",
})

SPECIAL_COLORS = {
    "black": "#000000",
    "white": "#ffffff",
    "transparent": "transparent",
    "current": "currentColor",
    "inherit": "inherit",
}

# Tailwind CSS v3.4 palette
PALETTE = {
    "slate": {
        50: "#f8fafc", 100: "#f1f5f9", 200: "#e2e8f0", 300: "#cbd5e1",
        400: "#94a3b8", 500: "#64748b", 600: "#475569", 700: "#334155",
        800: "#1e293b", 900: "#0f172a", 950: "#020617",
    },
    "gray": {
        50: "#f9fafb", 100: "#f3f4f6", 200: "#e5e7eb", 300: "#d1d5db",
        400: "#9ca3af", 500: "#6b7280", 600: "#4b5563", 700: "#374151",
        800: "#1f2937", 900: "#111827", 950: "#030712",
    },
    "zinc": {
        50: "#fafafa", 100: "#f4f4f5", 200: "#e4e4e7", 300: "#d4d4d8",
        400: "#a1a1aa", 500: "#71717a", 600: "#52525b", 700: "#3f3f46",
        800: "#27272a", 900: "#18181b", 950: "#09090b",
    },
    "neutral": {
        50: "#fafafa", 100: "#f5f5f5", 200: "#e5e5e5", 300: "#d4d4d4",
        400: "#a3a3a3", 500: "#737373", 600: "#525252", 700: "#404040",
        800: "#262626", 900: "#171717", 950: "#0a0a0a",
    },
    "stone": {
        50: "#fafaf9", 100: "#f5f5f4", 200: "#e7e5e4", 300: "#d6d3d1",
        400: "#a8a29e", 500: "#78716c", 600: "#57534e", 700: "#44403c",
        800: "#292524", 900: "#1c1917", 950: "#0c0a09",
    },
    "red": {
        50: "#fef2f2", 100: "#fee2e2", 200: "#fecaca", 300: "#fca5a5",
        400: "#f87171", 500: "#ef4444", 600: "#dc2626", 700: "#b91c1c",
        800: "#991b1b", 900: "#7f1d1d", 950: "#450a0a",
    },
    "orange": {
        50: "#fff7ed", 100: "#ffedd5", 200: "#fed7aa", 300: "#fdba74",
        400: "#fb923c", 500: "#f97316", 600: "#ea580c", 700: "#c2410c",
        800: "#9a3412", 900: "#7c2d12", 950: "#431407",
    },
    "amber": {
        50: "#fffbeb", 100: "#fef3c7", 200: "#fde68a", 300: "#fcd34d",
        400: "#fbbf24", 500: "#f59e0b", 600: "#d97706", 700: "#b45309",
        800: "#92400e", 900: "#78350f", 950: "#451a03",
    },
    "yellow": {
        50: "#fefce8", 100: "#fef9c3", 200: "#fef08a", 300: "#fde047",
        400: "#facc15", 500: "#eab308", 600: "#ca8a04", 700: "#a16207",
        800: "#854d0e", 900: "#713f12", 950: "#422006",
    },
    "lime": {
        50: "#f7fee7", 100: "#ecfccb", 200: "#d9f99d", 300: "#bef264",
        400: "#a3e635", 500: "#84cc16", 600: "#65a30d", 700: "#4d7c0f",
        800: "#3f6212", 900: "#365314", 950: "#1a2e05",
    },
    "green": {
        50: "#f0fdf4", 100: "#dcfce7", 200: "#bbf7d0", 300: "#86efac",
        400: "#4ade80", 500: "#22c55e", 600: "#16a34a", 700: "#15803d",
        800: "#166534", 900: "#14532d", 950: "#052e16",
    },
    "emerald": {
        50: "#ecfdf5", 100: "#d1fae5", 200: "#a7f3d0", 300: "#6ee7b7",
        400: "#34d399", 500: "#10b981", 600: "#059669", 700: "#047857",
        800: "#065f46", 900: "#064e3b", 950: "#022c22",
    },
    "teal": {
        50: "#f0fdfa", 100: "#ccfbf1", 200: "#99f6e4", 300: "#5eead4",
        400: "#2dd4bf", 500: "#14b8a6", 600: "#0d9488", 700: "#0f766e",
        800: "#115e59", 900: "#134e4a", 950: "#042f2e",
    },
    "cyan": {
        50: "#ecfeff", 100: "#cffafe", 200: "#a5f3fc", 300: "#67e8f9",
        400: "#22d3ee", 500: "#06b6d4", 600: "#0891b2", 700: "#0e7490",
        800: "#155e75", 900: "#164e63", 950: "#083344",
    },
    "sky": {
        50: "#f0f9ff", 100: "#e0f2fe", 200: "#bae6fd", 300: "#7dd3fc",
        400: "#38bdf8", 500: "#0ea5e9", 600: "#0284c7", 700: "#0369a1",
        800: "#075985", 900: "#0c4a6e", 950: "#082f49",
    },
    "blue": {
        50: "#eff6ff", 100: "#dbeafe", 200: "#bfdbfe", 300: "#93c5fd",
        400: "#60a5fa", 500: "#3b82f6", 600: "#2563eb", 700: "#1d4ed8",
        800: "#1e40af", 900: "#1e3a8a", 950: "#172554",
    },
    "indigo": {
        50: "#eef2ff", 100: "#e0e7ff", 200: "#c7d2fe", 300: "#a5b4fc",
        400: "#818cf8", 500: "#6366f1", 600: "#4f46e5", 700: "#4338ca",
        800: "#3730a3", 900: "#312e81", 950: "#1e1b4b",
    },
    "violet": {
        50: "#f5f3ff", 100: "#ede9fe", 200: "#ddd6fe", 300: "#c4b5fd",
        400: "#a78bfa", 500: "#8b5cf6", 600: "#7c3aed", 700: "#6d28d9",
        800: "#5b21b6", 900: "#4c1d95", 950: "#2e1065",
    },
    "purple": {
        50: "#faf5ff", 100: "#f3e8ff", 200: "#e9d5ff", 300: "#d8b4fe",
        400: "#c084fc", 500: "#a855f7", 600: "#9333ea", 700: "#7e22ce",
        800: "#6b21a8", 900: "#581c87", 950: "#3b0764",
    },
    "fuchsia": {
        50: "#fdf4ff", 100: "#fae8ff", 200: "#f5d0fe", 300: "#f0abfc",
        400: "#e879f9", 500: "#d946ef", 600: "#c026d3", 700: "#a21caf",
        800: "#86198f", 900: "#701a75", 950: "#4a044e",
    },
    "pink": {
        50: "#fdf2f8", 100: "#fce7f3", 200: "#fbcfe8", 300: "#f9a8d4",
        400: "#f472b6", 500: "#ec4899", 600: "#db2777", 700: "#be185d",
        800: "#9d174d", 900: "#831843", 950: "#500724",
    },
    "rose": {
        50: "#fff1f2", 100: "#ffe4e6", 200: "#fecdd3", 300: "#fda4af",
        400: "#fb7185", 500: "#f43f5e", 600: "#e11d48", 700: "#be123c",
        800: "#9f1239", 900: "#881337", 950: "#4c0519",
    },
}


def palette_hex(family: str, shade: str) -> str | None:
    """Look up '<family>-<shade>' in the palette."""
    if not (shade.isascii() and shade.isdigit()) or len(shade) > 3:
        return None
    return PALETTE.get(family, {}).get(int(shade))


def hex_to_rgb(hex_value: str) -> tuple[int, int, int]:
    """Decompose '#rrggbb' (or '#rgb') into channel integers."""
    digits = hex_value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)

# ── Arbitrary values ──────────────────────────────────────────────────

ARBITRARY_RE = re.compile(r"^(.+?)-\[(.+)\]$", re.DOTALL)

# Characters that would let a value escape its declaration
ARBITRARY_FORBIDDEN = frozenset(";{}\n\r\t\x00")

ARBITRARY_PROPERTIES = {
    "w": ("width",),
    "h": ("height",),
    "min-w": ("min-width",),
    "min-h": ("min-height",),
    "max-w": ("max-width",),
    "max-h": ("max-height",),
    "size": ("width", "height"),
    "basis": ("flex-basis",),
    "p": ("padding",),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "m": ("margin",),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "gap": ("gap",),
    "gap-x": ("column-gap",),
    "gap-y": ("row-gap",),
    "text": ("font-size",),
    "bg": ("background-color",),
    "border": ("border-width",),
    "rounded": ("border-radius",),
    "top": ("top",),
    "right": ("right",),
    "bottom": ("bottom",),
    "left": ("left",),
    "inset": ("inset",),
    "z": ("z-index",),
    "opacity": ("opacity",),
    "leading": ("line-height",),
    "tracking": ("letter-spacing",),
    "grid-cols": ("grid-template-columns",),
    "grid-rows": ("grid-template-rows",),
    "col-span": ("grid-column",),
    "row-span": ("grid-row",),
    "duration": ("transition-duration",),
    "accent": ("accent-color",),
    "caret": ("caret-color",),
    "fill": ("fill",),
    "stroke": ("stroke",),
}

# text-[#fff] is a color, text-[14px] a font size
ARBITRARY_COLOR_PROPERTIES = {
    "text": ("color",),
    "border": ("border-color",),
}

COLOR_VALUE_RE = re.compile(r"^(#[0-9a-fA-F]{3,8}|(rgba?|hsla?|oklch|color-mix)\(.*\))$")
