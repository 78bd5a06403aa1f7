"""
"glasses" disambiguation.

A bare "glasses" is either drinkware or eyewear. The sense is decided from
the vocabulary of the scenes the item appears in, before grouping, so the
two senses never land in the same bucket. Without a drink signal the item
is eyewear.
"""
import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..normalization.normalizer import casefold_key, dedupe_casefold
from ..normalization.ownership import parse_ownership
from ..schemas import SceneContext

logger = logging.getLogger(__name__)

DRINKWARE = "drinkware"
EYEWEAR = "eyewear"

AMBIGUOUS_NOUNS = {"glasses"}

SENSE_NOUNS = {
    DRINKWARE: "drinking glasses",
    EYEWEAR: "eyeglasses",
}

DRINKWARE_TERMS = {
    "beer", "wine", "whiskey", "whisky", "scotch", "bourbon", "vodka", "gin",
    "rum", "tequila", "champagne", "cocktail", "cocktails", "martini", "liquor",
    "booze", "drink", "drinks", "drinking", "pour", "pours", "poured", "toast",
    "cheers", "bottle", "bottles", "bar", "bartender", "pub", "tavern", "juice",
    "soda", "ice", "pitcher", "decanter", "keg",
}

EYEWEAR_TERMS = {
    "reading", "reads", "read", "book", "books", "newspaper", "magazine",
    "spectacles", "lens", "lenses", "frames", "optometrist", "squint",
    "squints", "squinting", "eyes", "sunglasses", "prescription", "nearsighted",
    "farsighted", "library",
}

WORD_RE = re.compile(r"[a-z]+")


def is_ambiguous_glasses(item: str) -> bool:
    """True for an item whose head noun is a bare "glasses" ("Howard's glasses")."""
    return parse_ownership(item).noun in AMBIGUOUS_NOUNS


def context_terms(texts: Iterable[str]) -> Set[str]:
    """Lower-case word set of the given context strings."""
    terms: Set[str] = set()
    for text in texts:
        if isinstance(text, str):
            terms.update(WORD_RE.findall(text.lower()))
    return terms


def classify_glasses(context: Iterable[str]) -> str:
    """
    Classify "glasses" by context vocabulary.

    :param context: Context strings (other key objects, location, description)
    :return: DRINKWARE when drink terms outnumber eyewear terms, else EYEWEAR
    """
    terms = context_terms(context)
    drink_hits = len(terms & DRINKWARE_TERMS)
    eye_hits = len(terms & EYEWEAR_TERMS)
    return DRINKWARE if drink_hits > eye_hits else EYEWEAR


def scene_context_for(item: str, scenes: Sequence[SceneContext], source_field: str = "key_objects") -> List[str]:
    """Context strings from every scene that lists the item, excluding the item itself."""
    target = casefold_key(item)
    context: List[str] = []
    for scene in scenes:
        listed = getattr(scene, source_field, []) or []
        if not any(casefold_key(entry) == target for entry in listed):
            continue
        context.extend(entry for entry in scene.key_objects if casefold_key(entry) != target)
        context.extend(scene.wardrobe)
        context.append(scene.location_name)
        if scene.description:
            context.append(scene.description)
    return context


def glasses_overrides(
    items: Iterable[str],
    scenes: Optional[Sequence[SceneContext]] = None,
    source_field: str = "key_objects",
) -> Dict[str, str]:
    """
    Noun overrides that send every ambiguous "glasses" item to one sense.

    :param items: Raw items of the category
    :param scenes: Scene evidence (absent evidence means eyewear)
    :param source_field: SceneContext field the items come from
    :return: item -> replacement noun key
    """
    overrides: Dict[str, str] = {}
    for item in dedupe_casefold(items):
        if not is_ambiguous_glasses(item):
            continue
        sense = classify_glasses(scene_context_for(item, scenes or [], source_field))
        overrides[item] = SENSE_NOUNS[sense]
        logger.debug(f"'{item}' classified as {sense}")
    return overrides
