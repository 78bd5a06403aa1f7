"""
Ownership parsing.

Splits an item such as "Rachel's phone", "RACHEL - blue dress" or
"Phone (Rachel's)" into an owner and a head noun. The patterns form an
ordered rule table; the first rule that matches wins.
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple

from ..models import ParsedOwnership
from .normalizer import normalize_apostrophes, normalize_key, normalize_owner

MAX_OWNER_WORDS = 3


@dataclass(frozen=True)
class OwnershipRule:
    """One (pattern, extractor) pair of the ownership rule table."""
    name: str
    pattern: Pattern
    extract: Callable[["re.Match"], Tuple[str, str]]

    def apply(self, value: str) -> Optional[Tuple[str, str]]:
        match = self.pattern.match(value)
        if not match:
            return None
        owner, noun = self.extract(match)
        owner, noun = owner.strip(), noun.strip()
        if not owner or not noun:
            return None
        # "A bottle of Rachel's perfume" is not owned by "a bottle of rachel"
        if len(normalize_owner(owner).split()) > MAX_OWNER_WORDS:
            return None
        return owner, noun


OWNERSHIP_RULES: List[OwnershipRule] = [
    OwnershipRule(
        name="possessive",
        pattern=re.compile(r"^(.+?)'s?\s+(.+)$", re.IGNORECASE),
        extract=lambda m: (m.group(1), m.group(2)),
    ),
    OwnershipRule(
        name="separator",
        pattern=re.compile(r"^(.+?)\s*[-–—:]\s+(.+)$"),
        extract=lambda m: (m.group(1), m.group(2)),
    ),
    OwnershipRule(
        name="parenthetical",
        pattern=re.compile(r"^(.+?)\s*\((.+?)'s?\)$", re.IGNORECASE),
        extract=lambda m: (m.group(2), m.group(1)),
    ),
]


def parse_ownership(raw: str, rules: Optional[List[OwnershipRule]] = None) -> ParsedOwnership:
    """
    Parse an optional owner and a head noun out of a raw item.

    Never raises; an item without ownership marking yields owner "" and the
    normalized whole string as noun.

    :param raw: Raw extracted string
    :param rules: Rule table override (defaults to OWNERSHIP_RULES)
    :return: ParsedOwnership
    """
    original = raw if isinstance(raw, str) else ""
    value = normalize_apostrophes(original)

    for rule in rules if rules is not None else OWNERSHIP_RULES:
        extracted = rule.apply(value)
        if extracted is None:
            continue
        owner, noun = extracted
        noun_key = normalize_key(noun)
        if not noun_key:
            continue
        return ParsedOwnership(
            owner=owner,
            noun=noun_key,
            original=original,
            rule=rule.name,
            owner_key=normalize_owner(owner),
        )

    return ParsedOwnership(owner="", noun=normalize_key(value), original=original)
