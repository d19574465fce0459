"""Query shapes and map-mode filtering for ``Registry.where``."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Tuple, Union

from featuresupport.errors import InvalidArgument


AND = "AND"
OR = "OR"
NOT = "NOT"
OPERATORS = (AND, OR, NOT)


@dataclass(frozen=True)
class ByName:
    """Items supporting a single feature."""

    feature: str


@dataclass(frozen=True)
class ByNames:
    """Items matched against several feature names."""

    features: Tuple[str, ...]

    def __post_init__(self) -> None:
        features = self.features
        if isinstance(features, str):
            features = (features,)
        object.__setattr__(self, "features", tuple(features))


@dataclass(frozen=True)
class ByFilter:
    """Items whose stored feature values match the given criteria."""

    criteria: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "criteria", MappingProxyType(dict(self.criteria)))


Query = Union[ByName, ByNames, ByFilter]
Equals = Callable[[Any, Any], bool]


def _describe(value: Any) -> str:
    return type(value).__name__


def as_query(feature: Any) -> Query:
    """Turn a feature name, a list of names or a name->value mapping into a query."""
    if isinstance(feature, (ByName, ByNames, ByFilter)):
        return feature
    if isinstance(feature, str):
        return ByName(feature)
    if isinstance(feature, Mapping):
        return ByFilter(feature)
    if isinstance(feature, Sequence) and not isinstance(feature, (bytes, bytearray)):
        bad = [name for name in feature if not isinstance(name, str)]
        if bad:
            raise InvalidArgument(f"Feature names must be strings, got {_describe(bad[0])}.")
        return ByNames(tuple(feature))
    raise InvalidArgument(f"Invalid argument: cannot query by {_describe(feature)}.")


def normalize_operator(operator: Any) -> str:
    """Uppercase an operator; anything that is not a string is unrecognised."""
    if not isinstance(operator, str):
        return ""
    return operator.upper()


def values_equal(stored: Any, wanted: Any) -> bool:
    """Default equality used when filtering by feature value."""
    if isinstance(wanted, list):
        wanted = tuple(wanted)
    if isinstance(stored, bool) or isinstance(wanted, bool):
        return stored is wanted
    return stored == wanted


def filter_items(
    features: Mapping[str, Mapping[str, Any]],
    criteria: Mapping[str, Any],
    operator: str = AND,
    equals: Equals = values_equal,
) -> List[str]:
    """Return the items whose feature map satisfies ``criteria`` under ``operator``.

    An empty ``criteria`` keeps every item. An operator other than AND, OR or
    NOT keeps nothing.
    """
    if not criteria:
        return list(features)
    operator = normalize_operator(operator)
    if operator not in OPERATORS:
        return []

    out: List[str] = []
    for item, supports in features.items():
        matched = 0
        for name, wanted in criteria.items():
            if name in supports and equals(supports[name], wanted):
                matched += 1
        if operator == AND and matched == len(criteria):
            out.append(item)
        elif operator == OR and matched > 0:
            out.append(item)
        elif operator == NOT and matched == 0:
            out.append(item)
    return out


def union(groups: Sequence[Sequence[str]]) -> List[str]:
    """Concatenate groups, keeping the first occurrence of each item."""
    seen: Dict[str, None] = {}
    for group in groups:
        for item in group:
            seen.setdefault(item, None)
    return list(seen)


def intersection(groups: Sequence[Sequence[str]]) -> List[str]:
    """Items of the first group present in every other group, in first-group order."""
    if not groups:
        return []
    rest = [set(group) for group in groups[1:]]
    return [item for item in groups[0] if all(item in other for other in rest)]


def difference(items: Sequence[str], excluded: Sequence[str]) -> List[str]:
    drop = set(excluded)
    return [item for item in items if item not in drop]
