"""Criteria specifications and the request data they are resolved against.

A criteria spec maps a field name to one of two directives:

- Literal(value): value goes into the key verbatim.
- ExtractFields(names): look up each name in the request section of the
  same field name (e.g. "query") and key on the live values.

Specs are immutable once built; use CriteriaSpec.clone() for a structural
copy that shares nothing mutable with the original.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union


def _check_string_keys(value: Any) -> None:
    """Raise ValueError if any mapping nested in value has a non-str key."""
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValueError(f"Literal mapping keys must be strings, got {key!r}")
            _check_string_keys(item)
    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            _check_string_keys(item)


@dataclass(frozen=True)
class Literal:
    """Criterion copied verbatim into the extracted criteria.

    Mapping keys anywhere inside value must be strings so the criteria can
    be serialized with sorted keys.
    """

    value: Any

    def __post_init__(self) -> None:
        _check_string_keys(self.value)

    def clone(self) -> Literal:
        return Literal(copy.deepcopy(self.value))


@dataclass(frozen=True)
class ExtractFields:
    """Criterion that pulls named sub-fields out of a request section."""

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.names, str):
            raise ValueError("ExtractFields names must be a sequence of strings, not a string")
        object.__setattr__(self, "names", tuple(self.names))
        for name in self.names:
            if not isinstance(name, str):
                raise ValueError(f"ExtractFields name must be a string, got {name!r}")

    def clone(self) -> ExtractFields:
        return ExtractFields(self.names)


Criterion = Union[Literal, ExtractFields]


def _is_field_list(value: Any) -> bool:
    return (
        isinstance(value, Sequence)
        and not isinstance(value, (str, bytes))
        and all(isinstance(v, str) for v in value)
    )


class CriteriaSpec(Mapping[str, Criterion]):
    """Immutable mapping of field name to Literal or ExtractFields."""

    __slots__ = ("_criteria",)

    def __init__(self, criteria: Mapping[str, Criterion] | None = None) -> None:
        resolved: dict[str, Criterion] = {}
        for key, criterion in (criteria or {}).items():
            if not isinstance(criterion, (Literal, ExtractFields)):
                raise TypeError(
                    f"Criterion for {key!r} must be Literal or ExtractFields, "
                    f"got {type(criterion).__name__}"
                )
            resolved[key] = criterion
        self._criteria = resolved

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> CriteriaSpec:
        """Build a spec from a plain mapping.

        Lists/tuples of strings become ExtractFields; anything else becomes a
        Literal. Already-tagged values are kept as they are.
        """
        criteria: dict[str, Criterion] = {}
        for key, value in raw.items():
            if isinstance(value, (Literal, ExtractFields)):
                criteria[key] = value.clone()
            elif _is_field_list(value):
                criteria[key] = ExtractFields(tuple(value))
            else:
                criteria[key] = Literal(copy.deepcopy(value))
        return cls(criteria)

    @classmethod
    def coerce(cls, spec: CriteriaSpec | Mapping[str, Any] | None | bool) -> CriteriaSpec | None:
        """Normalize caller input: None/False/empty mean no criteria."""
        if spec is None or spec is False:
            return None
        if isinstance(spec, CriteriaSpec):
            return spec if spec else None
        if isinstance(spec, Mapping):
            return cls.from_mapping(spec) if spec else None
        raise TypeError(f"Unsupported criteria type: {type(spec).__name__}")

    def clone(self) -> CriteriaSpec:
        """Return a structural deep copy."""
        return CriteriaSpec({key: c.clone() for key, c in self._criteria.items()})

    @property
    def needs_request(self) -> bool:
        """True if any criterion reads from request data."""
        return any(isinstance(c, ExtractFields) for c in self._criteria.values())

    def __getitem__(self, key: str) -> Criterion:
        return self._criteria[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._criteria)

    def __len__(self) -> int:
        return len(self._criteria)

    def __repr__(self) -> str:
        return f"CriteriaSpec({self._criteria!r})"


@dataclass(frozen=True)
class RequestData:
    """Framework-neutral view of an inbound request.

    Attributes:
        base_path: Mount prefix of the app (ASGI root_path).
        path: Request path below base_path.
        fields: Named sections (query, headers, cookies, path_params, ...).
    """

    base_path: str = ""
    path: str = ""
    fields: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def section(self, name: str) -> Mapping[str, Any]:
        """Return the named section, or an empty mapping if absent."""
        value = self.fields.get(name)
        return value if isinstance(value, Mapping) else {}
