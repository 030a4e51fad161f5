"""Cache key builders. Single place for key format and criteria extraction.

Read (try_serve) and write (store) paths must both go through build_key so
that the same name and criteria always land on the same key.

The default RollingHash32 only compacts keys; it is not collision-free.
Two different (name, criteria) pairs that hash alike share an entry and
one of them will be served the other's response. Configure "sha256" when
that risk is unacceptable.
"""

from __future__ import annotations

import hashlib
import json
from abc import ABC, abstractmethod
from typing import Any

from routecache.core.constants import CACHE_KEY_SEP, DEFAULT_KEY_HASH
from routecache.domain.criteria import CriteriaSpec, ExtractFields, Literal, RequestData


class HashAlgorithm(ABC):
    """Abstract key hash algorithm."""

    name: str

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of input string."""
        ...


class RollingHash32(HashAlgorithm):
    """h = h*31 + code unit over UTF-16 code units, wrapped to signed 32 bits."""

    name = "rolling32"

    def hash(self, data: str) -> str:
        h = 0
        raw = data.encode("utf-16-le")
        for i in range(0, len(raw), 2):
            h = (h * 31 + (raw[i] | (raw[i + 1] << 8))) & 0xFFFFFFFF
        if h & 0x80000000:
            h -= 0x100000000
        return str(h)


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 hex digest; longer keys, negligible collisions."""

    name = "sha256"

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


_ALGORITHMS: dict[str, type[HashAlgorithm]] = {
    RollingHash32.name: RollingHash32,
    SHA256Algorithm.name: SHA256Algorithm,
}


def get_hash_algorithm(name: str = DEFAULT_KEY_HASH) -> HashAlgorithm:
    """Return the hash algorithm registered under name.

    Raises:
        ValueError: If name is not a known algorithm.
    """
    try:
        return _ALGORITHMS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown key hash algorithm {name!r}; expected one of {sorted(_ALGORITHMS)}"
        ) from None


def canonical_json(data: Any) -> str:
    """Canonical JSON for deterministic keys (sorted keys, compact separators)."""
    return json.dumps(
        data, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
    )


def extract_criteria(spec: CriteriaSpec, source: RequestData) -> dict[str, Any]:
    """Resolve a criteria spec against live request data.

    Literals are copied; ExtractFields for field "query" becomes
    {name: source.fields["query"].get(name)} for each name. Missing values
    resolve to None. Neither spec nor source is modified.
    """
    extracted: dict[str, Any] = {}
    for key, criterion in spec.clone().items():
        if isinstance(criterion, Literal):
            extracted[key] = criterion.value
        elif isinstance(criterion, ExtractFields):
            section = source.section(key)
            extracted[key] = {name: section.get(name) for name in criterion.names}
    return extracted


def build_key(
    namespace: str,
    name: str,
    criteria: dict[str, Any] | None = None,
    algorithm: HashAlgorithm | None = None,
) -> str:
    """Cache key for a resource name and its extracted criteria.

    Without criteria the name is used as-is; with criteria the name and
    serialized criteria are hashed together.
    """
    if not criteria:
        return f"{namespace}{CACHE_KEY_SEP}{name}"
    algorithm = algorithm or RollingHash32()
    digest = algorithm.hash(name + canonical_json(criteria))
    return f"{namespace}{CACHE_KEY_SEP}{digest}"


def default_name(base_path: str, path: str) -> str:
    """Fallback resource name: mount prefix plus request path."""
    return f"{base_path}{path}"
