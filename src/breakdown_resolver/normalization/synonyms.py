"""
Synonym family index.

A family is a list of nouns treated as interchangeable for grouping
("car", "sedan", "corvette"). The index maps any member, including simple
plural and spacing variants, to a family id.
"""
import logging
from typing import Dict, List, Optional, Sequence

from ..exceptions import FamilyTableError
from .normalizer import collapse_spaces, normalize_key, singularize

logger = logging.getLogger(__name__)

FamilyTable = Sequence[Sequence[str]]

VEHICLE_FAMILIES: List[List[str]] = [
    [
        "car", "sedan", "coupe", "convertible", "hatchback", "automobile", "auto",
        "corvette", "mustang", "tesla", "miata", "porsche", "ferrari",
        "cop car", "police car", "squad car", "patrol car", "cruiser",
    ],
    ["truck", "pickup", "pickup truck", "pick up truck"],
    ["van", "minivan"],
    ["suv", "jeep"],
    ["motorcycle", "motorbike"],
    ["bicycle", "bike"],
    ["taxi", "cab", "taxicab"],
    ["limo", "limousine"],
    ["bus", "school bus"],
    ["ambulance"],
    ["boat", "yacht", "speedboat"],
    ["helicopter", "chopper"],
    ["plane", "airplane", "jet"],
]

PROP_FAMILIES: List[List[str]] = [
    ["phone", "iphone", "flip phone", "burner phone"],
    ["gun", "weapon"],
    ["computer", "pc", "macbook"],
    ["photograph", "polaroid", "snapshot", "headshot"],
    ["bag", "purse", "handbag"],
    ["journal", "diary"],
    ["knife", "blade", "switchblade"],
    ["key", "car key", "keychain"],
    ["wallet", "billfold"],
    ["eyeglasses", "eyeglass", "spectacles", "reading glasses", "eyewear"],
    ["drinking glass", "drinking glasses", "wine glass", "tumbler", "shot glass", "drinkware"],
    ["letter", "envelope"],
    ["briefcase", "attache case"],
]


class SynonymFamilyIndex:
    """
    Maps nouns to family ids.

    Usage:
        index = SynonymFamilyIndex.from_tables([VEHICLE_FAMILIES, PROP_FAMILIES])
        index.lookup("corvettes")   # same id as index.lookup("car")
    """

    def __init__(self, families: FamilyTable, strict: bool = True, prefix: str = "F"):
        """
        Build the index.

        :param families: List of families (each a list of synonym strings)
        :param strict: Raise FamilyTableError if a member appears in two families;
                       otherwise the first-registered family wins and a warning is logged
        :param prefix: Prefix for family ids
        """
        self._index: Dict[str, str] = {}
        self._members: Dict[str, List[str]] = {}
        self.strict = strict

        for position, family in enumerate(families):
            family_id = f"{prefix}{position}"
            self._members[family_id] = [m for m in family if isinstance(m, str) and m.strip()]
            for member in self._members[family_id]:
                key = normalize_key(member)
                if not key:
                    continue
                self._register(key, family_id, member)
                self._register(collapse_spaces(key), family_id, member)

    @classmethod
    def from_tables(cls, tables: Sequence[FamilyTable], strict: bool = True) -> "SynonymFamilyIndex":
        """Build one index over several category tables (ids stay unique)."""
        families: List[Sequence[str]] = []
        for table in tables:
            families.extend(table)
        return cls(families, strict=strict)

    def _register(self, key: str, family_id: str, member: str) -> None:
        existing = self._index.get(key)
        if existing is None:
            self._index[key] = family_id
            return
        if existing == family_id:
            return
        if self.strict:
            raise FamilyTableError(
                f"'{member}' (key '{key}') appears in families {existing} and {family_id}. "
                f"Synonym families must be disjoint."
            )
        logger.warning(
            f"Synonym '{member}' appears in families {existing} and {family_id}; "
            f"keeping first-registered family {existing}"
        )

    def lookup(self, noun: str) -> Optional[str]:
        """
        Find the family id for a normalized noun.

        Tries, in order: exact, naive singular, space-collapsed, singular of
        space-collapsed.

        :param noun: Normalized noun (see normalize_key)
        :return: Family id, or None
        """
        if not noun:
            return None
        collapsed = collapse_spaces(noun)
        for candidate in (noun, singularize(noun), collapsed, singularize(collapsed)):
            family_id = self._index.get(candidate)
            if family_id is not None:
                return family_id
        return None

    def family_key(self, noun: str) -> str:
        """Family id of the noun, or "N_" + its singular when it belongs to no family."""
        return self.lookup(noun) or f"N_{singularize(noun)}"

    def members(self, family_id: str) -> List[str]:
        return list(self._members.get(family_id, []))

    def __len__(self) -> int:
        return len(self._members)
