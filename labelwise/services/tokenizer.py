"""
Ingredient extraction from raw OCR label text.

OCR output is noisy: the ingredient list is usually buried among marketing
copy, nutrition panels and manufacturer details, and line breaks fall in
arbitrary places. extract_ingredients() runs the text through a fixed chain
of small pure stages:

1. normalize_text       lowercase, unify line endings, squeeze spaces
2. locate_section       find the ingredient list by its marker phrase
3. truncate_disclaimers drop everything from the first disclaimer onwards
4. normalize_connectors and/or, hyphen breaks, "2% or less of" qualifiers
5. strip_brackets       remove parenthetical sub-clarifications
6. split_fragments      split on the delimiter set
7. clean_fragment       trim punctuation, quantities, units, percentages
8. is_candidate         drop empty, numeric and connective fragments

Bracket policy: contents of (), [] and {} are treated as clarifications of
the preceding ingredient and removed in a single left-to-right pass, nested
groups included, so "enriched flour (wheat flour, niacin)" yields
"enriched flour". A bracket without a partner becomes a delimiter.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Without a marker, text shorter than this is assumed to be the list itself
SECTION_FALLBACK_THRESHOLD = 300

# Checked in this order; the first marker present wins regardless of position
SECTION_MARKERS = (
    "ingredients:",
    "contains:",
    "made with:",
    "components:",
    "allergy advice:",
    "allergy information:",
    "may contain traces of:",
)

DISCLAIMER_KEYWORDS = (
    "manufactured by",
    "distributed by",
    "packed by",
    "produced by",
    "best before",
    "use by",
    "nutrition facts",
    "nutrition information",
    "nutritional information",
    "calories",
    "storage instructions",
    "store in",
    "keep refrigerated",
    "net wt",
    "net weight",
)

UNIT_WORDS = (
    "g", "mg", "ml", "oz", "kg", "lb", "lbs",
    "cup", "cups", "tbsp", "tsp",
    "serving", "servings", "piece", "pieces", "slice", "slices",
)

STOPWORDS = frozenset(
    {
        "contains",
        "ingredients",
        "ingredient",
        "nutrition",
        "facts",
        "allergy",
        "allergens",
        "allergy information",
        "allergy advice",
        "information",
        "made in",
        "processed in",
        "manufactured in",
        "distributed by",
        "best before",
        "use by",
        "e.g.",
        "i.e.",
        "eg",
        "ie",
        "and",
        "or",
        "with",
        "less than",
        "of",
        "may contain",
    }
)

# Origin and date statements ("made in usa", "best before 12/25")
STOP_PREFIXES = (
    "made in ",
    "processed in ",
    "manufactured in ",
    "distributed by ",
    "best before ",
    "use by ",
)

_INLINE_SPACE = re.compile(r"[ \t\f\v]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_SPACE_BEFORE_COLON = re.compile(r"(?<!\s)\s+:")
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
_WHITESPACE = re.compile(r"\s+")
# "ingredients" opening a line with no colon after it
_BARE_HEADER = re.compile(r"^ingredients\b", re.MULTILINE)

_DISCLAIMER = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in DISCLAIMER_KEYWORDS) + r")\b"
)

_QUANTITY_QUALIFIER = re.compile(
    r"(?:\bcontains\s+)?(?:\bless than\s+)?(?<![\d.])\d+(?:\.\d+)?\s*%\s*(?:or less\s+)?of\b:?"
)
_AND_OR = re.compile(r"\s+and/or\s+")
# "mono- and diglycerides" is one ingredient
_AND_OR_WORD = re.compile(r"(?<!-)\s+(?:and|or)\s+")
_SHARED_PREFIX = re.compile(r"(?<=\w)-(?=\s(?:and|or)\s)")
_SPACED_HYPHEN = re.compile(r"\s+-\s+")
_HYPHEN_BREAK = re.compile(r"\s-(?=\S)")
_ABBREVIATION = re.compile(r"\b(?:e\.g|i\.e)\.?")

_BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSING_BRACKETS = frozenset(_BRACKET_PAIRS.values())

# Sentence punctuation splits unless a digit sits on both sides ("12.5")
_DELIMITERS = re.compile(r"[,;:•*·]|(?<!\d)[.!?]|[.!?](?!\d)")

_UNITS = "|".join(UNIT_WORDS)
_QUANTITY = re.compile(rf"\b\d+(?:[.,/]\d+)?\s*(?:{_UNITS})\b")
_PERCENTAGE = re.compile(r"(?<![\d.])\d+(?:\.\d+)?\s*%")
_LEADING_LABEL = re.compile(r"^(?:may\s+)?contains?\b\s*(?:traces\s+of\b)?\s*")
_EDGE_CHARS = " \t,;:.!?•*·-_/\\|'\"`~+&#"
_HAS_LETTER = re.compile(r"[a-z]")


def normalize_text(raw_text: str) -> str:
    """Lowercase, unify line endings and squeeze spaces, keeping paragraph breaks."""
    text = raw_text.lower().replace("\r\n", "\n").replace("\r", "\n")
    text = _INLINE_SPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _SPACE_BEFORE_COLON.sub(":", text)
    return text.strip()


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def locate_section(text: str, threshold: int = SECTION_FALLBACK_THRESHOLD) -> str:
    """
    Return the part of the label that holds the ingredient list.

    With a marker, the section runs from just after the marker to the next
    blank line. A line opening with a bare "ingredients" counts as a marker
    when no marker phrase is present. Without either, short text is used
    whole; longer text falls back to its first comma-bearing paragraph, and
    finally to all of it.

    Args:
        text: Output of normalize_text (paragraph breaks intact)
        threshold: Length below which marker-less text is taken whole
    """
    for marker in SECTION_MARKERS:
        start = text.find(marker)
        if start != -1:
            section = text[start + len(marker):].lstrip()
            return _PARAGRAPH_BREAK.split(section, maxsplit=1)[0]

    header = _BARE_HEADER.search(text)
    if header:
        section = text[header.end():].lstrip(" \n:")
        return _PARAGRAPH_BREAK.split(section, maxsplit=1)[0]

    if len(text) < threshold:
        return text

    for paragraph in _PARAGRAPH_BREAK.split(text):
        if "," in paragraph:
            logger.debug("No ingredient marker found; using first list-like paragraph")
            return paragraph

    logger.debug(
        "No ingredient marker found in %d chars of text; using all of it", len(text)
    )
    return text


def truncate_disclaimers(section: str) -> str:
    match = _DISCLAIMER.search(section)
    return section[: match.start()] if match else section


def normalize_connectors(section: str) -> str:
    """Turn connective words into delimiters and repair hyphenated breaks."""
    text = _QUANTITY_QUALIFIER.sub(", ", section)
    text = _AND_OR.sub(", ", text)
    text = _AND_OR_WORD.sub(", ", text)
    text = _SHARED_PREFIX.sub("", text)
    text = _SPACED_HYPHEN.sub(" ", text)
    text = _HYPHEN_BREAK.sub(" ", text)
    return _ABBREVIATION.sub(", ", text)


def strip_brackets(section: str) -> str:
    """
    Remove bracketed clarifications in one left-to-right pass.

    A closing bracket pairs with the innermost open bracket when the kinds
    match; the pair and everything between collapse to a single space. Unpaired
    brackets on either side become ", ".
    """
    kept: list[str] = []
    open_brackets: list[tuple[str, int]] = []
    for char in section:
        if char in _BRACKET_PAIRS:
            open_brackets.append((_BRACKET_PAIRS[char], len(kept)))
            kept.append(char)
        elif char in _CLOSING_BRACKETS:
            if open_brackets and open_brackets[-1][0] == char:
                _, start = open_brackets.pop()
                del kept[start:]
                kept.append(" ")
            else:
                kept.append(", ")
        else:
            kept.append(char)

    for _, start in open_brackets:
        kept[start] = ", "
    return "".join(kept)


def split_fragments(section: str) -> list[str]:
    return _DELIMITERS.split(section)


def clean_fragment(fragment: str) -> str:
    """Trim one split fragment down to a bare ingredient name (may return "")."""
    text = _PERCENTAGE.sub(" ", fragment)
    text = _QUANTITY.sub(" ", text)
    text = collapse_whitespace(text).strip(_EDGE_CHARS)
    text = _LEADING_LABEL.sub("", text)
    text = collapse_whitespace(text).strip(_EDGE_CHARS)
    if text in UNIT_WORDS:
        return ""
    return text


def is_candidate(fragment: str) -> bool:
    if len(fragment) < 2:
        return False
    # Covers purely numeric and percentage fragments
    if not _HAS_LETTER.search(fragment):
        return False
    if fragment in STOPWORDS:
        return False
    return not fragment.startswith(STOP_PREFIXES)


def extract_ingredients(raw_text: str) -> list[str]:
    """
    Extract candidate ingredient names from raw label text.

    Pure and deterministic; never raises for string input. Returns names in
    first-seen order with duplicates removed.
    """
    if not raw_text or not raw_text.strip():
        return []

    text = normalize_text(raw_text)
    section = collapse_whitespace(locate_section(text))
    section = truncate_disclaimers(section)
    section = normalize_connectors(section)
    section = strip_brackets(section)

    cleaned = (clean_fragment(fragment) for fragment in split_fragments(section))
    return list(dict.fromkeys(c for c in cleaned if is_candidate(c)))
