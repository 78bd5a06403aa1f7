"""
Group id generators.

Each resolution pass owns its generator, so independent runs never share
id state.
"""
import itertools
import uuid
from abc import ABC, abstractmethod

from .exceptions import ConfigurationError


class IdGenerator(ABC):
    """Mints group ids for one resolution pass."""

    @abstractmethod
    def next_id(self) -> str:
        pass


class SequentialIdGenerator(IdGenerator):
    """Monotonic ids (grp_1, grp_2, ...); deterministic, useful in tests."""

    def __init__(self, prefix: str = "grp"):
        self._prefix = prefix
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._prefix}_{next(self._counter)}"


class UuidIdGenerator(IdGenerator):
    """Random ids that are never reused across rebuilds."""

    def __init__(self, prefix: str = "grp"):
        self._prefix = prefix

    def next_id(self) -> str:
        return f"{self._prefix}_{uuid.uuid4().hex}"


def create_id_generator(strategy: str = "uuid", prefix: str = "grp") -> IdGenerator:
    """
    Factory for id generators.

    :param strategy: "uuid" or "sequential"
    :param prefix: Prefix prepended to every id
    :raises: ConfigurationError for an unknown strategy
    """
    if strategy == "uuid":
        return UuidIdGenerator(prefix)
    if strategy == "sequential":
        return SequentialIdGenerator(prefix)
    raise ConfigurationError(f"Unknown id strategy '{strategy}'. Use 'uuid' or 'sequential'.")
