"""Pattern rule tables for category, tag and type assignment.

Every table is an ordered tuple of immutable rules. Category tables are
evaluated first-match-wins; tag tables are evaluated exhaustively and every
matching rule contributes its label. All patterns are matched against
lower-cased text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Rule:
    """A label emitted when *pattern* is found in the inspected text."""

    label: str
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rx(label: str, pattern: str) -> Rule:
    return Rule(label, re.compile(pattern))


def _kw(label: str, *words: str) -> Rule:
    """Rule matching any of *words* as a plain substring."""
    return Rule(label, re.compile("|".join(re.escape(w) for w in words or (label,))))


def first_match(rules: tuple[Rule, ...], text: str) -> str | None:
    """Return the label of the first rule matching *text*, or None."""
    for rule in rules:
        if rule.matches(text):
            return rule.label
    return None


def all_matches(rules: tuple[Rule, ...], text: str) -> list[str]:
    """Return the labels of every rule matching *text*, table order, no duplicates."""
    return list(dict.fromkeys(rule.label for rule in rules if rule.matches(text)))


# ---------------------------------------------------------------------------
# Fallback labels
# ---------------------------------------------------------------------------

DEFAULT_JSON_CATEGORY = "divi-component"
UNKNOWN_JSON_CATEGORY = "unknown-json"
DEFAULT_IMAGE_CATEGORY = "image"
UNKNOWN_CATEGORY = "unknown"

# ---------------------------------------------------------------------------
# Page-builder markers
# ---------------------------------------------------------------------------

SECTION_MARKER = "et_pb_section"
ROW_MARKER = "et_pb_row"
COLUMN_MARKER = "et_pb_column"
MODULE_PREFIX = "et_pb_"
MODULE_MARKER_RE: re.Pattern[str] = re.compile(r"et_pb_\w+")

# Node "type" values that mark a section inside an export's content tree.
SECTION_NODE_TYPES: frozenset[str] = frozenset(["section", "et_pb_section"])

# ---------------------------------------------------------------------------
# Filename tags (applied to every entry)
# ---------------------------------------------------------------------------

FILENAME_TAG_RULES: tuple[Rule, ...] = (
    _rx("responsive", r"responsive|mobile|tablet"),
    _rx("ecommerce", r"shop|store|ecommerce|woocommerce|cart|checkout"),
    _rx("business", r"business|corporate|company|office"),
    _rx("portfolio", r"portfolio|gallery|showcase|work"),
    _rx("blog", r"blog|article|post|news"),
    _rx("landing", r"landing|lp|lead"),
    _rx("header", r"header|nav|menu|navigation"),
    _rx("footer", r"footer"),
    _rx("hero", r"hero|banner|jumbotron"),
    _rx("contact", r"contact|form|touch"),
    _rx("about", r"about|team|staff|bio"),
    _rx("services", r"service|feature|offer"),
    _rx("pricing", r"pricing|price|plan|package"),
    _rx("testimonial", r"testimonial|review|feedback"),
    _rx("call-to-action", r"cta|action|button"),
    _rx("modern", r"modern|contemporary|clean"),
    _rx("creative", r"creative|artistic|design"),
    _rx("minimal", r"minimal|simple|clean"),
    _rx("dark", r"dark|night|black"),
    _rx("light", r"light|bright|white"),
)

# ---------------------------------------------------------------------------
# Content tags
# ---------------------------------------------------------------------------

# Serialized page-builder documents (archive JSON entries, full layouts).
DOCUMENT_TAG_RULES: tuple[Rule, ...] = (
    _kw("woocommerce"),
    _kw("contact-form", "contact"),
    _kw("gallery"),
    _kw("slider"),
    _kw("testimonials", "testimonial"),
    _kw("pricing"),
    _kw("team"),
    _kw("portfolio"),
    _kw("blog"),
    _kw("call-to-action", "cta", "call_to_action"),
    _kw("video"),
    _kw("audio"),
    _kw("map"),
    _kw("social"),
    _kw("newsletter"),
    _kw("accordion"),
    _kw("tabs"),
    _kw("toggle"),
    _kw("countdown"),
    _kw("progress-bar", "progress"),
    _kw("responsive", "tablet", "mobile"),
    _kw("animated", "animation"),
)

# Items of a collection export.
ITEM_TAG_RULES: tuple[Rule, ...] = (
    _kw("responsive"),
    _kw("mobile"),
    _kw("animated", "animation"),
    _kw("gallery"),
    _kw("slider"),
    _kw("contact"),
    _kw("portfolio"),
    _kw("testimonials", "testimonial"),
    _kw("pricing"),
    _kw("team"),
    _kw("blog"),
    _kw("woocommerce"),
)

# Sections carved out of a layout's content.
SECTION_TAG_RULES: tuple[Rule, ...] = (
    _kw("gallery"),
    _kw("slider"),
    _kw("testimonials", "testimonial"),
    _kw("pricing"),
    _kw("contact"),
    _kw("team"),
    _kw("portfolio"),
    _kw("blog"),
    _kw("woocommerce"),
)

# Stylesheets, scripts, markup and other text entries.
TEXT_TAG_RULES: tuple[Rule, ...] = (
    _kw("responsive"),
    _kw("mobile"),
    _kw("tablet"),
    _kw("animated", "animation"),
    _kw("jquery"),
    _kw("bootstrap"),
)

# Image filenames.
IMAGE_TAG_RULES: tuple[Rule, ...] = (
    _kw("retina", "retina", "2x"),
    _kw("thumbnail", "thumb"),
    _kw("placeholder"),
)

# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

IMAGE_CATEGORY_RULES: tuple[Rule, ...] = (
    _kw("hero-image", "hero", "banner"),
    _kw("background", "background", "bg"),
    _kw("header-image", "header"),
    _kw("footer-image", "footer"),
    _kw("logo"),
    _kw("icon"),
    _kw("gallery-image", "gallery"),
    _kw("portfolio-image", "portfolio"),
    _kw("testimonial-image", "testimonial"),
    _kw("team-image", "team", "staff"),
    _kw("product-image", "product"),
)

# Filename keywords, consulted only when no content signature matched.
JSON_FILENAME_CATEGORY_RULES: tuple[Rule, ...] = (
    _kw("layout"),
    _kw("section"),
    _kw("module"),
    _kw("header"),
    _kw("footer"),
    _kw("page"),
    _kw("template"),
)

# Items of a collection export (content substrings).
ITEM_CATEGORY_RULES: tuple[Rule, ...] = (
    _kw("section", SECTION_MARKER),
    _kw("row", ROW_MARKER),
    _kw("module", MODULE_PREFIX),
    _kw("layout"),
    _kw("template"),
    _kw("page"),
)

# extension -> (content rules, default category)
TEXT_CATEGORY_RULES: dict[str, tuple[tuple[Rule, ...], str]] = {
    "css": (
        (
            _kw("responsive-css", "@media"),
            _kw("animation-css", "animation", "keyframes"),
        ),
        "stylesheet",
    ),
    "js": (
        (
            _kw("jquery-script", "jquery"),
            _kw("animation-script", "animation"),
        ),
        "script",
    ),
    "php": (
        (
            _kw("php-function", "function"),
            _kw("shortcode"),
        ),
        "php-code",
    ),
    "html": ((), "html-template"),
    "htm": ((), "html-template"),
}

EXTENSION_CATEGORIES: dict[str, str] = {
    "pdf": "document",
    "doc": "document",
    "docx": "document",
    "txt": "text-file",
    "md": "markdown",
    "xml": "xml-data",
    "svg": "vector-graphic",
    "psd": "photoshop-file",
    "ai": "illustrator-file",
    "sketch": "sketch-file",
    "fig": "figma-file",
    "zip": "archive",
    "rar": "archive",
    "woff": "font-file",
    "woff2": "font-file",
    "ttf": "font-file",
    "otf": "font-file",
}

# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    ["jpg", "jpeg", "png", "gif", "svg", "webp", "bmp", "tiff"]
)

EXTENSION_TYPES: dict[str, str] = {
    **{ext: "image" for ext in IMAGE_EXTENSIONS},
    "pdf": "document",
    "doc": "document",
    "docx": "document",
    "txt": "document",
    "md": "document",
    "rtf": "document",
    "json": "code",
    "css": "code",
    "js": "code",
    "html": "code",
    "php": "code",
    "xml": "code",
    "scss": "code",
    "sass": "code",
    "woff": "font",
    "woff2": "font",
    "ttf": "font",
    "otf": "font",
    "zip": "archive",
    "rar": "archive",
    "7z": "archive",
    "psd": "design",
    "ai": "design",
    "sketch": "design",
    "fig": "design",
}
