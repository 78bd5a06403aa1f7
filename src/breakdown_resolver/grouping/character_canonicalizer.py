"""
Character name canonicalization.

People names get their own path: titles, cue extensions and partial names
make generic noun normalization too lossy. A name folds into another when
its tokens are a strict subset of the other's ("Rachel" -> "Rachel Wells").
"""
import logging
import re
from typing import Dict, List, Optional, Set

from ..ids import IdGenerator
from ..models import CategoryResult, EntityGroup
from ..normalization.normalizer import dedupe_casefold, normalize_apostrophes, normalize_owner
from .label_selector import LabelSelector

logger = logging.getLogger(__name__)

PARENTHETICAL_RE = re.compile(r"\s*\(.*?\)\s*")
UNCLOSED_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*$")
ANNOTATION_SEPARATORS = (" - ", ": ", ", ")

HONORIFIC_RE = re.compile(
    r"^(?:DR\.?|MR\.?|MRS\.?|MS\.?|MISS|PROFESSOR|PROF\.?|CAPTAIN|CAPT\.?|DETECTIVE|DET\.?|"
    r"OFFICER|AGENT|REVEREND|REV\.?|FATHER|SISTER|BROTHER|SERGEANT|SGT\.?|LIEUTENANT|LT\.?|"
    r"GENERAL|GEN\.?|COLONEL|COL\.?|MAJOR|MAJ\.?|CORPORAL|CPL\.?|PRIVATE|PVT\.?|JUDGE|"
    r"SENATOR|GOVERNOR|GOV\.?|PRESIDENT|KING|QUEEN|PRINCE|PRINCESS|LORD|LADY|SIR|DAME)\s+",
    re.IGNORECASE,
)

# Tokens that make a multi-word cue a device or voice rather than a person
NON_PERSON_INDICATORS = {
    "answering", "machine", "speaker", "radio", "tv", "television", "phone",
    "computer", "voice", "screen", "monitor", "sign", "alarm", "system",
    "recording", "message", "announcement", "intercom", "loudspeaker", "pa",
    "narrator", "news", "dispatcher", "operator", "911",
}


def clean_character_name(raw: str) -> str:
    """
    Strip cue extensions and trailing descriptions from a name.

    "HOWARD WELLS (40s)" -> "HOWARD WELLS"; "JOHN - a bartender" -> "JOHN";
    "Rachel (V.O.)" -> "Rachel".
    """
    name = normalize_apostrophes(raw)
    name = PARENTHETICAL_RE.sub(" ", name)
    name = UNCLOSED_PARENTHETICAL_RE.sub("", name).strip()

    cuts = [name.find(sep) for sep in ANNOTATION_SEPARATORS]
    cuts = [index for index in cuts if index > 0]
    if cuts:
        name = name[:min(cuts)]
    return " ".join(name.split())


def strip_honorific(name: str) -> str:
    stripped = HONORIFIC_RE.sub("", name, count=1).strip()
    return stripped or name


def character_key(raw: str) -> str:
    """Case-folded, title-free identity of a character name."""
    name = strip_honorific(clean_character_name(raw))
    name = name.lower().replace(".", " ")
    return " ".join(name.split())


def is_person_key(key: str) -> bool:
    return not any(token in NON_PERSON_INDICATORS for token in key.split())


def canonical_owner_key(owner: str, aliases: Optional[Dict[str, str]] = None) -> str:
    """
    Owner key with character variants folded onto their canonical character,
    so "Rachel's coat" and a scene credited to "RACHEL WELLS" share one owner.

    :param owner: Owner as written (or a character display name)
    :param aliases: character key -> canonical display name
    :return: Owner key; non-characters keep their plain owner key
    """
    if not owner:
        return ""
    canonical = (aliases or {}).get(character_key(owner))
    return normalize_owner(canonical or owner)


class CharacterCanonicalizer:
    """
    Groups character name variants.

    Usage:
        canonicalizer = CharacterCanonicalizer()
        result = canonicalizer.canonicalize(["Rachel", "Dr. Rachel Wells"], id_generator)
        aliases = canonicalizer.canonical_names(["Rachel", "Rachel Wells"])  # key -> canonical name
    """

    def __init__(self, label_selector: Optional[LabelSelector] = None):
        self._labels = label_selector or LabelSelector()

    def _register(self, names: List[str]):
        keys: Dict[str, str] = {}
        displays: Dict[str, List[str]] = {}
        for name in names:
            key = character_key(name) or name.casefold()
            keys[name] = key
            display = strip_honorific(clean_character_name(name)) or name
            displays.setdefault(key, []).append(display)
        return keys, displays

    def resolve_keys(self, keys: List[str]) -> Dict[str, str]:
        """
        Map each key to the key it folds into.

        A key folds into another when its tokens are a strict subset of the
        other's. Keys are visited from most to fewest tokens, so every
        superset is resolved before its subsets and a single pass suffices.
        A key whose supersets resolve to different roots is ambiguous and
        stays on its own.
        """
        unique = list(dict.fromkeys(keys))
        tokens: Dict[str, Set[str]] = {key: set(key.split()) for key in unique}
        order = sorted(unique, key=lambda k: -len(tokens[k]))

        roots: Dict[str, str] = {}
        for key in order:
            supersets = [
                other for other in unique
                if other != key
                and len(tokens[key]) < len(tokens[other])
                and tokens[key] <= tokens[other]
                and is_person_key(other)
            ]
            candidate_roots = {roots.get(other, other) for other in supersets}
            if len(candidate_roots) == 1:
                roots[key] = candidate_roots.pop()
                logger.debug(f"Character '{key}' folds into '{roots[key]}'")
            else:
                if len(candidate_roots) > 1:
                    logger.debug(
                        f"Character '{key}' is ambiguous between {sorted(candidate_roots)}; left standalone"
                    )
                roots[key] = key
        return roots

    def canonical_names(self, names: List[str]) -> Dict[str, str]:
        """Map every character key to the display name of its canonical character."""
        names = dedupe_casefold(names)
        keys, displays = self._register(names)
        roots = self.resolve_keys(list(keys.values()))
        return {
            key: self._labels.choose_display(displays[root])
            for key, root in roots.items()
        }

    def canonicalize(self, names: List[str], id_generator: IdGenerator) -> CategoryResult:
        """
        Group character names.

        :param names: Raw character strings
        :param id_generator: Id source for this resolution pass
        :return: CategoryResult; a canonical character with one variant is ungrouped
        """
        names = dedupe_casefold(names)
        keys, displays = self._register(names)
        roots = self.resolve_keys(list(keys.values()))

        variants_by_root: Dict[str, List[str]] = {}
        for name in names:
            variants_by_root.setdefault(roots[keys[name]], []).append(name)

        result = CategoryResult()
        for root, variants in variants_by_root.items():
            if len(variants) > 1:
                result.groups.append(EntityGroup(
                    id=id_generator.next_id(),
                    parent_name=self._labels.choose_display(displays[root]),
                    variants=variants,
                ))
            else:
                result.ungrouped.append(variants[0])

        logger.info(
            f"Characters: {len(names)} names -> {len(result.groups)} groups, "
            f"{len(result.ungrouped)} ungrouped"
        )
        return result
