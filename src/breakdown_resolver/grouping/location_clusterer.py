"""
Location base clustering.

Locations sharing a base ("Wells House", "Wells House - Kitchen") are
clustered under the most general base. Clusters are scanned in creation
order, which follows input order, so the result never depends on
incidental collection ordering.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..ids import IdGenerator
from ..models import CategoryResult, EntityGroup
from ..normalization.filters import LOCATION_CONTEXT_RE, is_likely_vehicle_location
from ..normalization.normalizer import casefold_key, dedupe_casefold, normalize_apostrophes
from .label_selector import LabelSelector

logger = logging.getLogger(__name__)

HEADING_PREFIX_RE = re.compile(r"^(?:INT|EXT|I/E)(?:\.|\b)[-–—.\s]*", re.IGNORECASE)

TIME_PATTERNS = [
    re.compile(
        r"\s*[-–—]\s*(?:DAY|NIGHT|DAWN|DUSK|MORNING|EVENING|AFTERNOON|SUNRISE|SUNSET|"
        r"LATE MORNING|LATE AFTERNOON|LATE EVENING|EARLY MORNING|EARLY NEXT MORNING|LATE NIGHT)\s*$",
        re.IGNORECASE,
    ),
    re.compile(
        r"\s*[-–—]\s*(?:CONTINUOUS|LATER|SAME TIME|MOMENTS LATER|A MOMENT LATER|SAME|"
        r"NEXT MORNING|NEXT DAY|SAME DAY)\s*$",
        re.IGNORECASE,
    ),
    # "364 DAYS EARLIER", "A FEW DAYS LATER", "MANY MOMENTS LATER"
    re.compile(
        r"\s*[-–—]?\s*\b(?:\d+|ONE|TWO|THREE|FOUR|FIVE|SIX|SEVEN|EIGHT|NINE|TEN|SEVERAL|A FEW|MANY)\s+"
        r"(?:DAYS?|WEEKS?|MONTHS?|YEARS?|HOURS?|MINUTES?|MOMENTS?)\s+(?:EARLIER|LATER|BEFORE|AFTER|AGO)\s*$",
        re.IGNORECASE,
    ),
    re.compile(
        r"\.\s*(?:DAY|NIGHT|DAWN|DUSK|MORNING|EVENING|AFTERNOON|SUNRISE|SUNSET)\s*$", re.IGNORECASE
    ),
    re.compile(r"\s*[-–—]\s*(?:\d{4}|PRESENT\s*DAY|PRESENT)\s*$", re.IGNORECASE),
    re.compile(r"\.\s*\d+\s+DAYS?\s+EARLIER\s*$", re.IGNORECASE),
    re.compile(r"\s*[-–—]\s*[A-Z]+(?:'S)?\s+TIME\s+FRAME\s*$", re.IGNORECASE),
    re.compile(r"\s*[-–—]?\s*\bANNIVERSARY\s+(?:NIGHT|DAY|EVENING)\.?\s*$", re.IGNORECASE),
]

SEPARATOR_RE = re.compile(r"^(.+?)\s*[-–—]\s+(.+)$")
DOT_SEPARATOR_RE = re.compile(r"(\S+)\.\s+")
ABBREVIATIONS = {"dr", "mr", "mrs", "ms", "st", "mt", "jr", "sr", "ft"}

LOCATION_SUFFIXES = [
    "ROOM", "HALL", "HALLWAY", "CORRIDOR", "LOBBY", "PARKING LOT", "LOT", "OFFICE",
    "LAB", "LABORATORY", "KITCHEN", "BEDROOM", "BATHROOM", "DECK", "ENTRANCE",
    "EXIT", "STAIRCASE", "STREET", "ROAD", "HIGHWAY", "SIDE DOOR",
]
SUFFIX_RE = re.compile(
    r"\s+(?:" + "|".join(re.escape(s) for s in sorted(LOCATION_SUFFIXES, key=len, reverse=True)) + r")$",
    re.IGNORECASE,
)

SUB_LOCATION_MARKER = " - "


def _dot_separators(value: str) -> str:
    """'HOSPITAL. ROOM 4' -> 'HOSPITAL - ROOM 4'; abbreviations like 'Dr. ' are kept."""
    def replace(match):
        word = match.group(1)
        if word.lower().strip("'") in ABBREVIATIONS:
            return match.group(0)
        return f"{word} - "
    return DOT_SEPARATOR_RE.sub(replace, value)


def strip_time_suffixes(value: str) -> str:
    """Iteratively strip time-of-day and continuity markers ("- NIGHT", "- LATER")."""
    result = value
    for _ in range(5):
        before = result
        for pattern in TIME_PATTERNS:
            stripped = pattern.sub("", result).strip()
            if stripped:
                result = stripped
        result = result.rstrip(". ").strip() or result
        if result == before:
            break
    return result


def normalize_location_key(value: str) -> str:
    """Grouping key of a location: upper-case, HOUSE == HOME, LAB == LABORATORY."""
    key = _dot_separators(normalize_apostrophes(value)).upper()
    key = re.sub(r"\bHOUSE\b", "HOME", key)
    key = re.sub(r"\bLAB\b", "LABORATORY", key)
    return " ".join(key.split())


def split_and_clean_locations(raw: str, picture_vehicles: Iterable[str] = ()) -> Tuple[List[str], List[str]]:
    """
    Split a raw location field into clean location names.

    Splits on "/", strips INT./EXT. prefixes and time suffixes, drops a
    vehicle tail after a place ("Parking Lot - Rachel's Car" -> "Parking
    Lot"), and excludes parts that are vehicles.

    :param raw: Raw location field
    :param picture_vehicles: Vehicle names known for the scene
    :return: (kept locations, excluded vehicle-like parts)
    """
    kept: List[str] = []
    excluded: List[str] = []
    vehicle_keys = [normalize_location_key(v) for v in picture_vehicles if v and v.strip()]

    for part in re.split(r"\s*/\s*", normalize_apostrophes(raw or "")):
        cleaned = HEADING_PREFIX_RE.sub("", part).strip()
        cleaned = strip_time_suffixes(cleaned) if cleaned else cleaned
        if not cleaned:
            continue

        dash_parts = re.split(r"\s*[-–—]\s*", cleaned)
        if len(dash_parts) >= 2:
            head = dash_parts[0].strip()
            tail = " - ".join(dash_parts[1:]).strip()
            if head and tail and is_likely_vehicle_location(tail) and LOCATION_CONTEXT_RE.search(head):
                cleaned = head

        key = normalize_location_key(cleaned)
        if is_likely_vehicle_location(cleaned) or any(
            v and (key == v or v in key or key in v) for v in vehicle_keys
        ):
            excluded.append(cleaned)
            continue

        # One field can name the same place twice ("Wells House / WELLS HOME")
        duplicate = next((i for i, k in enumerate(kept) if normalize_location_key(k) == key), None)
        if duplicate is None:
            kept.append(cleaned)
        elif len(cleaned) > len(kept[duplicate]):
            kept[duplicate] = cleaned

    return kept, excluded


def location_base(value: str) -> Tuple[str, str]:
    """
    Base of a location: the part before a dash separator, else the name
    without a trailing room-type suffix, else the whole name.

    :return: (base key, base display form)
    """
    display = _dot_separators(normalize_apostrophes(value))

    match = SEPARATOR_RE.match(display)
    if match and match.group(1).strip():
        head = match.group(1).strip()
        return normalize_location_key(head), head

    without_suffix = SUFFIX_RE.sub("", display).strip()
    if without_suffix and without_suffix != display:
        return normalize_location_key(without_suffix), without_suffix

    return normalize_location_key(display), display


def bases_match(cluster_key: str, base_key: str) -> bool:
    """Equal, whitespace-bounded prefix/suffix of each other, or differing by a trailing 'S."""
    if cluster_key == base_key:
        return True
    for short, long in ((cluster_key, base_key), (base_key, cluster_key)):
        if long.startswith(short + " ") or long.endswith(" " + short):
            return True
        if long == short + "'S":
            return True
    return False


@dataclass
class LocationCluster:
    key: str
    displays: List[str] = field(default_factory=list)
    members: List[str] = field(default_factory=list)

    def is_group(self) -> bool:
        if len({casefold_key(m) for m in self.members}) >= 2:
            return True
        return len(self.members) == 1 and SUB_LOCATION_MARKER in normalize_apostrophes(self.members[0])


class LocationClusterer:
    """
    Clusters locations by shared base.

    Usage:
        clusterer = LocationClusterer()
        result = clusterer.cluster(["Wells House", "Wells House - Kitchen"], id_generator)
    """

    def __init__(self, label_selector: Optional[LabelSelector] = None):
        self._labels = label_selector or LabelSelector()

    def build_clusters(self, locations: List[str]) -> List[LocationCluster]:
        clusters: List[LocationCluster] = []

        for location in dedupe_casefold(locations):
            base_key, base_display = location_base(location)
            target = next((c for c in clusters if bases_match(c.key, base_key)), None)

            if target is None:
                clusters.append(LocationCluster(key=base_key, displays=[base_display], members=[location]))
                continue

            target.members.append(location)
            if len(target.key) > len(base_key):
                logger.debug(f"Rekeyed location cluster '{target.key}' -> '{base_key}'")
                target.key = base_key
                target.displays = [base_display]
            elif target.key == base_key:
                target.displays.append(base_display)

        return clusters

    def cluster(self, locations: List[str], id_generator: IdGenerator) -> CategoryResult:
        """
        Cluster locations into groups keyed by their most general base.

        :param locations: Clean location names (see split_and_clean_locations)
        :param id_generator: Id source for this resolution pass
        :return: CategoryResult
        """
        result = CategoryResult()
        for cluster in self.build_clusters(locations):
            if cluster.is_group():
                result.groups.append(EntityGroup(
                    id=id_generator.next_id(),
                    parent_name=self._labels.choose_display(cluster.displays),
                    variants=list(cluster.members),
                ))
            else:
                result.ungrouped.extend(cluster.members)

        logger.info(
            f"Locations: {len(result.groups)} groups, {len(result.ungrouped)} ungrouped"
        )
        return result
