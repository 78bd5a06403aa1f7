"""
Text normalization for extracted entity strings.

Turns noisy breakdown strings ("Rachel's cellphone", "THE PISTOL") into
grouping keys ("phone", "gun"). Every function here is pure and total:
any string in, a string out.
"""
import re
from typing import Iterable, List

APOSTROPHE_RE = re.compile(r"[’‘`´]")
WHITESPACE_RE = re.compile(r"\s+")

LEADING_DETERMINER_RE = re.compile(r"^(?:his|her|their|the|a|an)\s+")
# Up to three words ending in a possessive, or followed by a dash separator
LEADING_POSSESSIVE_RE = re.compile(r"^(?:[\w'\-]+\s+){0,2}[\w'\-]*\w's?\s+")
LEADING_DASH_OWNER_RE = re.compile(r"^(?:[\w'\-]+\s+){0,2}[\w'\-]+\s*[-–—]\s+")

# Ordered literal substitutions; the captured group keeps a plural "s".
SYNONYM_SUBSTITUTIONS = [
    (
        re.compile(r"\b(?:telephone|cellphone|cell phone|mobile phone|smartphone|mobile(?! home))(s?)\b"),
        r"phone\1",
    ),
    (
        re.compile(r"\b(?:handgun|pistol|revolver|rifle|firearm|shotgun)(s?)\b"),
        r"gun\1",
    ),
    (
        re.compile(r"\b(?:laptop|notebook computer)(s?)\b"),
        r"computer\1",
    ),
    (
        re.compile(r"\b(?:photo|picture|pic)(s?)\b"),
        r"photograph\1",
    ),
]

NON_ALNUM_RE = re.compile(r"[^\w\s]|_")

SMALL_WORDS = {"of", "the", "a", "an", "and", "in", "on", "with", "for", "to"}


def normalize_apostrophes(value: str) -> str:
    """Fold curly quotes/backticks to ' and collapse whitespace."""
    if not value:
        return ""
    return WHITESPACE_RE.sub(" ", APOSTROPHE_RE.sub("'", value)).strip()


def casefold_key(value: str) -> str:
    """Case-insensitive identity of a display string (used for de-duplication)."""
    return normalize_apostrophes(value).casefold()


def strip_punctuation(value: str) -> str:
    """Drop apostrophes, turn other punctuation into spaces, collapse whitespace."""
    value = value.replace("'", "")
    value = NON_ALNUM_RE.sub(" ", value)
    return WHITESPACE_RE.sub(" ", value).strip()


def apply_synonyms(value: str) -> str:
    """Apply the ordered synonym substitutions to a lower-cased string."""
    for pattern, replacement in SYNONYM_SUBSTITUTIONS:
        value = pattern.sub(replacement, value)
    return value


def normalize_key(raw: str) -> str:
    """
    Normalize a raw item into its grouping key.

    Rules, in order: lower-case; strip a leading his/her/their/the/a/an;
    strip a leading possessive clause (up to three words ending in 's, or
    followed by a dash); apply synonym substitutions; strip punctuation;
    collapse whitespace.

    Examples:
        >>> normalize_key("Rachel's Cellphone")
        'phone'
        >>> normalize_key("the detective's car")
        'car'
        >>> normalize_key("Old Photos")
        'old photographs'

    :param raw: Raw extracted string
    :return: Normalized key (possibly empty)
    """
    if not raw or not isinstance(raw, str):
        return ""

    value = normalize_apostrophes(raw).lower()
    value = LEADING_DETERMINER_RE.sub("", value)

    stripped = LEADING_POSSESSIVE_RE.sub("", value, count=1)
    if stripped == value:
        stripped = LEADING_DASH_OWNER_RE.sub("", value, count=1)
    # Never strip the whole string away
    if stripped.strip():
        value = stripped

    value = apply_synonyms(value)
    return strip_punctuation(value)


def normalize_owner(owner: str) -> str:
    """Owner identity: lower-cased, article-free, punctuation-free."""
    if not owner:
        return ""
    value = normalize_apostrophes(owner).lower()
    value = LEADING_DETERMINER_RE.sub("", value)
    return strip_punctuation(value)


def singularize(text: str) -> str:
    """
    Naively singularize the last word of a phrase.

    Handles -ies, -sses/-shes/-ches/-xes/-zes and a plain trailing -s; leaves
    short words and -ss/-us/-is endings alone.
    """
    if not text:
        return text

    head, sep, last = text.rpartition(" ")

    if len(last) > 4 and last.endswith("ies"):
        last = last[:-3] + "y"
    elif len(last) > 4 and last.endswith(("sses", "shes", "ches", "xes", "zes")):
        last = last[:-2]
    elif len(last) > 3 and last.endswith("s") and not last.endswith(("ss", "us", "is")):
        last = last[:-1]

    return f"{head}{sep}{last}"


def collapse_spaces(text: str) -> str:
    """'cop car' -> 'copcar'."""
    return text.replace(" ", "")


def is_all_caps(value: str) -> bool:
    """True when the string has letters and none of them are lower-case."""
    return any(ch.isalpha() for ch in value) and value == value.upper()


def title_case(value: str) -> str:
    """
    Title-case a display string for presentation.

    All-caps and all-lower words are capitalised; mixed-case words
    ("iPhone", "McAllister") are kept; small joining words stay lower-case
    unless they start the string. Idempotent.
    """
    words = []
    for index, word in enumerate(normalize_apostrophes(value).split(" ")):
        if not word:
            continue
        lowered = word.lower()
        if index > 0 and lowered in SMALL_WORDS:
            words.append(lowered)
        elif word.isupper() or word.islower():
            words.append(word[:1].upper() + word[1:].lower())
        else:
            words.append(word)
    return " ".join(words)


def dedupe_casefold(items: Iterable[str]) -> List[str]:
    """
    Drop blank/non-string items and case-insensitive duplicates.

    The first display form of each item wins; input order is preserved.
    """
    seen = set()
    result: List[str] = []
    for item in items or []:
        if not isinstance(item, str):
            continue
        display = normalize_apostrophes(item)
        if not display:
            continue
        key = display.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(display)
    return result
