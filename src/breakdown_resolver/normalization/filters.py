"""
Category filters.

Keyword rules that keep vehicles out of props/locations and drop
weather/architecture nouns that breakdown passes report as props.
"""
import re

from .normalizer import normalize_apostrophes, normalize_key, singularize

VEHICLE_KEYWORDS = {
    "CAR", "TRUCK", "VAN", "BUS", "SUV", "SEDAN", "PICKUP", "MOTORCYCLE",
    "MOTORBIKE", "BIKE", "BICYCLE", "TAXI", "CAB", "LIMO", "LIMOUSINE",
    "CONVERTIBLE", "COUPE", "AMBULANCE", "TESLA", "MIATA", "CORVETTE",
    "MUSTANG", "FERRARI", "PORSCHE", "MERCEDES", "BMW", "AUDI", "TOYOTA",
    "HONDA", "NISSAN", "FORD", "CHEVY", "CHEVROLET", "JEEP", "BOAT", "YACHT",
    "HELICOPTER", "PLANE", "AIRPLANE", "JET", "TRAIN", "SUBWAY", "SCOOTER",
    "ATV", "RV", "MOTORHOME", "MINIVAN", "HATCHBACK", "WAGON", "CRUISER",
}

# Items that contain a vehicle keyword but are not vehicles
VEHICLE_EXCLUSIONS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\bCAR\s+DOOR", r"\bCAR\s+SEAT", r"\bCAR\s+KEY", r"\bCAR\s+ALARM",
        r"\bCAR\s+RADIO", r"\bCAR\s+SPEAKER", r"\bCAR\s+PHONE", r"\bCAR\s+JACK",
        r"\bCAR\s+BATTERY", r"\bCAR\s+WINDOW", r"\bCAR\s+TRUNK", r"\bCAR\s+HOOD",
        r"\bTRAIN\s+TRACK", r"\bTRAIN\s+STATION", r"\bBUS\s+STOP", r"\bBUS\s+STATION",
        r"\bBIKE\s+RACK", r"\bBIKE\s+LOCK", r"\bTOY\s+CAR",
    )
]

LEADING_POSSESSIVE_RE = re.compile(r"^[A-Z0-9'\-]+'S\s+")

VEHICLE_TERM_RE = re.compile(
    r"\b(car|truck|van|bus|suv|sedan|pickup|motorcycle|bike|bicycle|taxi|cab|limo|"
    r"limousine|convertible|coupe|tesla|miata|corvette|mustang|ferrari|porsche|"
    r"mercedes|bmw|audi|toyota|honda|nissan|ford|chevy|chevrolet|jeep)\b",
    re.IGNORECASE,
)
LOCATION_CONTEXT_RE = re.compile(
    r"\b(room|hall|hallway|corridor|office|lot|parking|street|road|highway|restaurant|"
    r"bar|beach|bank|casino|home|house|hospital|university|school|lab|laboratory|"
    r"orphanage|facility|station|apartment|kitchen|bedroom|bathroom|deck|lobby|"
    r"entrance|exit|staircase|side door)\b",
    re.IGNORECASE,
)
VEHICLE_HEAD_RE = re.compile(
    r"^(?:[A-Z0-9'\-]+\s+){0,2}(?:CAR|TRUCK|VAN|SUV|SEDAN|MOTORCYCLE|TESLA|MIATA|CORVETTE)\b"
)

NON_PROP_NOUNS = {
    # weather and light
    "rain", "snow", "fog", "mist", "wind", "storm", "thunder", "lightning",
    "sunlight", "moonlight", "sunset", "sunrise", "sky", "cloud", "weather",
    # architecture
    "door", "doorway", "window", "wall", "ceiling", "floor", "stair", "staircase",
    "roof", "hallway", "corridor", "building", "room",
}


def is_vehicle_entity(name: str) -> bool:
    """
    True when an item names a vehicle ("Howard's Corvette", "cop car").

    Items that merely mention a vehicle part ("car keys", "bus stop") are
    not vehicles.
    """
    upper = normalize_apostrophes(name).upper()
    if not upper:
        return False
    if any(pattern.search(upper) for pattern in VEHICLE_EXCLUSIONS):
        return False
    stripped = LEADING_POSSESSIVE_RE.sub("", upper).strip()
    return any(word in VEHICLE_KEYWORDS for word in re.split(r"[\s\-/]+", stripped))


def is_likely_vehicle_location(value: str) -> bool:
    """
    True when a location string is really a vehicle interior ("Rachel's Car").

    A short vehicle phrase is a vehicle unless it also names a place
    ("Bus Station"), except when a car-like word sits within its first
    three words ("Police Car Hallway" is still a car).
    """
    upper = normalize_apostrophes(value).upper()
    stripped = LEADING_POSSESSIVE_RE.sub("", upper).strip()
    word_count = len(stripped.split())

    if VEHICLE_TERM_RE.search(stripped) and word_count <= 4:
        if not LOCATION_CONTEXT_RE.search(stripped):
            return True
        if VEHICLE_HEAD_RE.match(stripped):
            return True
    return False


def is_non_prop(item: str) -> bool:
    """True for weather/architecture nouns that are set dressing, not props."""
    key = normalize_key(item)
    if not key:
        return False
    head = singularize(key).split()[-1]
    return head in NON_PROP_NOUNS
