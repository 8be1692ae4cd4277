"""Address grade resolver - cached crime grade lookup with simulated fallback"""

import logging
from typing import Callable, Optional, Protocol

from loan_gateway.domain.crime_grades import (
    FALLBACK_GRADE,
    normalize_address,
    simulate_crime_grade,
    validate_grade,
)
from loan_gateway.domain.grade_cache import GradeCache

logger = logging.getLogger(__name__)


def _ignore(*args) -> None:
    return None


class GradeSource(Protocol):
    """Anything that can produce a raw crime grade for a normalized address"""

    async def get_grade(self, normalized_address: str) -> str: ...


class SimulatedGradeSource:
    """Deterministic keyword/hash classifier, no network involved"""

    async def get_grade(self, normalized_address: str) -> str:
        return simulate_crime_grade(normalized_address)


class CrimeGradeResolver:
    """
    Resolve a free-text property address to a crime grade A-F.

    Resolution order:
    1. Fresh cache entry for the normalized address
    2. External source, if one is configured (validated, invalid letters -> C)
    3. Simulated classifier when the external source fails or is absent

    Any failure of the external source falls through to the simulation.
    Never raises: a failure outside the source degrades to FALLBACK_GRADE.

    on_cache_lookup(hit) and on_source_failure() are optional hooks for
    counting lookups; they default to no-ops.
    """

    def __init__(
        self,
        cache: GradeCache,
        source: Optional[GradeSource] = None,
        on_cache_lookup: Callable[[bool], None] = _ignore,
        on_source_failure: Callable[[], None] = _ignore,
    ):
        self.cache = cache
        self.source = source
        self.fallback = SimulatedGradeSource()
        self.on_cache_lookup = on_cache_lookup
        self.on_source_failure = on_source_failure

    async def resolve(self, address: str) -> str:
        try:
            key = normalize_address(address)

            cached = self.cache.get(key)
            self.on_cache_lookup(cached is not None)
            if cached is not None:
                return cached

            grade = await self._compute(key)
            self.cache.set(key, grade)
            return grade

        except Exception:
            logger.exception("Crime grade resolution failed, using fallback grade %s", FALLBACK_GRADE)
            return FALLBACK_GRADE

    async def _compute(self, key: str) -> str:
        if self.source is not None:
            try:
                return validate_grade(await self.source.get_grade(key))
            except Exception as e:
                self.on_source_failure()
                logger.warning("Crime grade API unavailable, simulating grade: %r", e)

        return validate_grade(await self.fallback.get_grade(key))

    def cache_size(self) -> int:
        return self.cache.size()

    def clear_cache(self) -> None:
        self.cache.clear()
