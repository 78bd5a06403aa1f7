"""
Co-occurrence ownership attribution.

Assigns an unowned item to a character or location when the scene evidence
clearly favours one candidate. Anything less than a clear winner leaves the
item ungrouped.
"""
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import ResolverConfig
from .ownership_index import NounEvidence, OwnershipIndex

logger = logging.getLogger(__name__)

SOURCE_EXPLICIT = "explicit"
SOURCE_CHARACTER = "character"
SOURCE_LOCATION = "location"


@dataclass(frozen=True)
class Attribution:
    owner: str
    owner_key: str
    source: str
    count: int = 0
    share: float = 0.0


def top_candidate(counts: Counter) -> Optional[Tuple[str, int]]:
    """The single highest-count key, or None when empty or tied at the top."""
    if not counts:
        return None
    ranked = counts.most_common(2)
    if len(ranked) == 2 and ranked[0][1] == ranked[1][1]:
        return None
    return ranked[0]


class CooccurrenceAttributor:
    """
    Ownership attribution policy.

    Checked in order:
    1. an explicit owner written on the noun elsewhere in the scenes
    2. the top co-occurring character
    3. the top co-occurring location
    A candidate is accepted when its count reaches min_owner_cooccurrence or
    its share of the noun's scenes reaches min_owner_share.
    """

    def __init__(self, config: Optional[ResolverConfig] = None):
        self.config = config or ResolverConfig()

    def accepts(self, count: int, scene_count: int) -> bool:
        if count >= self.config.min_owner_cooccurrence:
            return True
        return scene_count > 0 and count / scene_count >= self.config.min_owner_share

    def _statistical(self, evidence: NounEvidence, counts: Counter, source: str) -> Optional[Attribution]:
        top = top_candidate(counts)
        if top is None:
            return None
        key, count = top
        share = count / evidence.scene_count if evidence.scene_count else 0.0
        if not self.accepts(count, evidence.scene_count):
            return None
        return Attribution(
            owner=evidence.names.get(key, key),
            owner_key=key,
            source=source,
            count=count,
            share=share,
        )

    def attribute(self, noun: str, index: OwnershipIndex) -> Optional[Attribution]:
        """
        Decide the owner of a noun.

        :param noun: Normalized noun (see normalize_key)
        :param index: Ownership index for this pass
        :return: Attribution, or None to leave the item ungrouped
        """
        evidence = index.get(noun)
        if evidence is None:
            return None

        if evidence.explicit_owners:
            if len(evidence.explicit_owners) > 1:
                logger.debug(f"'{noun}': {len(evidence.explicit_owners)} explicit owners; left ungrouped")
                return None
            key, count = next(iter(evidence.explicit_owners.items()))
            return Attribution(
                owner=evidence.names.get(key, key),
                owner_key=key,
                source=SOURCE_EXPLICIT,
                count=count,
                share=1.0,
            )

        for counts, source in (
            (evidence.character_counts, SOURCE_CHARACTER),
            (evidence.location_counts, SOURCE_LOCATION),
        ):
            attribution = self._statistical(evidence, counts, source)
            if attribution is not None:
                logger.debug(
                    f"'{noun}' -> {attribution.owner} ({source}, "
                    f"{attribution.count}/{evidence.scene_count})"
                )
                return attribution

        logger.debug(f"'{noun}': no owner clears the threshold")
        return None
