"""
Configuration loader with validation.

Builds a ResolverConfig from environment variables (and a local .env file).
"""
from typing import Tuple

from dotenv import load_dotenv

from .config import ResolverConfig
from .config_validator import get_optional_env, parse_bool, parse_int, parse_share
from .exceptions import ConfigurationError

ID_STRATEGIES = ("uuid", "sequential")


def load_config_from_env() -> ResolverConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        resolver = EntityResolver(config)

    :return: Validated ResolverConfig instance
    :raises: ConfigurationError if a value is malformed or out of range
    """
    # Load .env file if it exists (for local development)
    load_dotenv()

    defaults = ResolverConfig()

    id_strategy = get_optional_env("RESOLVER_ID_STRATEGY", default=defaults.id_strategy)
    id_strategy = id_strategy.strip().lower()
    if id_strategy not in ID_STRATEGIES:
        raise ConfigurationError(
            f"RESOLVER_ID_STRATEGY must be one of {list(ID_STRATEGIES)}, "
            f"got '{id_strategy}'."
        )

    return ResolverConfig(
        min_owner_cooccurrence=parse_int(
            "RESOLVER_MIN_OWNER_COOCCURRENCE",
            get_optional_env(
                "RESOLVER_MIN_OWNER_COOCCURRENCE",
                default=str(defaults.min_owner_cooccurrence),
            ),
        ),
        min_owner_share=parse_share(
            "RESOLVER_MIN_OWNER_SHARE",
            get_optional_env("RESOLVER_MIN_OWNER_SHARE", default=str(defaults.min_owner_share)),
        ),
        strict_family_tables=parse_bool(
            "RESOLVER_STRICT_FAMILY_TABLES",
            get_optional_env("RESOLVER_STRICT_FAMILY_TABLES", default="true"),
        ),
        title_case_categories=_parse_categories(
            get_optional_env(
                "RESOLVER_TITLE_CASE_CATEGORIES",
                default=",".join(defaults.title_case_categories),
            )
        ),
        fanout_batch_size=parse_int(
            "RESOLVER_FANOUT_BATCH_SIZE",
            get_optional_env("RESOLVER_FANOUT_BATCH_SIZE", default=str(defaults.fanout_batch_size)),
        ),
        id_strategy=id_strategy,
    )


def _parse_categories(value: str) -> Tuple[str, ...]:
    return tuple(part.strip().lower() for part in (value or "").split(",") if part.strip())
