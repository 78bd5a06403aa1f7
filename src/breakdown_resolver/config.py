from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class ResolverConfig:
    # Co-occurrence attribution
    min_owner_cooccurrence: int = 2
    min_owner_share: float = 0.34

    # Synonym families
    strict_family_tables: bool = True

    # Presentation
    title_case_categories: Tuple[str, ...] = field(
        default_factory=lambda: ("props", "vehicles", "wardrobe")
    )

    # Orchestration
    fanout_batch_size: int = 5

    # Group ids ("uuid" or "sequential")
    id_strategy: str = "uuid"
