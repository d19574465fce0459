"""Per-type feature support registry and its query engine."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any, Dict, Iterable, Iterator, List, Optional

from featuresupport.errors import InvalidArgument
from featuresupport.query import (
    AND,
    NOT,
    OR,
    ByFilter,
    ByName,
    Equals,
    as_query,
    difference,
    filter_items,
    intersection,
    normalize_operator,
    union,
    values_equal,
)


logger = logging.getLogger(__name__)

# Handed out by the directory only; anything else constructing a Registry is refused.
_DIRECTORY_TOKEN = object()


class Registry:
    """Records which features each item of one type supports.

    A stored value is either ``True`` (declared without extra data) or the
    tuple of extra arguments given when the support was declared. Instances
    are obtained from :class:`featuresupport.directory.RegistryDirectory`.
    """

    def __init__(self, type_name: str, _token: object = None) -> None:
        if _token is not _DIRECTORY_TOKEN:
            raise TypeError(
                "Registry instances are created by RegistryDirectory.get_instance()."
            )
        self.type_name = type_name
        self._features: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Registry(type_name={self.type_name!r}, items={len(self)})"

    def __copy__(self) -> "Registry":
        raise TypeError("Registry instances cannot be copied.")

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Registry":
        raise TypeError("Registry instances cannot be copied.")

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise TypeError("Registry instances cannot be pickled.")

    def __contains__(self, item: object) -> bool:
        with self._lock:
            return item in self._features

    def __len__(self) -> int:
        with self._lock:
            return len(self._features)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # Storage

    def add(self, item: str, feature: str | Sequence[str], *args: Any) -> None:
        """Declare support for one feature or a list of features.

        Extra positional arguments are stored as one tuple shared by every
        feature named in the call; without them the marker ``True`` is stored.
        Anything other than a list of names is taken as one feature name.
        """
        if isinstance(feature, Sequence) and not isinstance(feature, (str, bytes, bytearray)):
            self.add_many(item, feature, args)
        else:
            self.add_one(item, feature, args)

    def add_one(self, item: str, feature: str, args: Iterable[Any] = ()) -> None:
        self.add_many(item, [feature], args)

    def add_many(self, item: str, features: Sequence[str], args: Iterable[Any] = ()) -> None:
        extra = tuple(args)
        value: Any = extra if extra else True
        with self._lock:
            supports = self._features.setdefault(item, {})
            for feature in features:
                supports[feature] = value
            if not supports:
                del self._features[item]
        logger.debug("%s: %s supports %s", self.type_name, item, list(features))

    def remove(self, item: str, feature: str) -> None:
        """Drop one feature from an item; unknown items or features are ignored."""
        with self._lock:
            supports = self._features.get(item)
            if supports is None or feature not in supports:
                return
            del supports[feature]
            if not supports:
                del self._features[item]
        logger.debug("%s: %s no longer supports %s", self.type_name, item, feature)

    def clear(self) -> None:
        with self._lock:
            self._features.clear()

    # Point lookup

    def has(self, item: str, feature: str) -> bool:
        with self._lock:
            return feature in self._features.get(item, {})

    def get(self, item: str, feature: str) -> Optional[Any]:
        with self._lock:
            return self._features.get(item, {}).get(feature)

    def all(self, item: str) -> Dict[str, Any]:
        """Snapshot of the item's feature map; empty when the item is unknown."""
        with self._lock:
            return dict(self._features.get(item, {}))

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._features)

    # Query engine

    def features_index(self) -> Dict[str, List[str]]:
        """Inverted index of feature name -> supporting items, in registry order."""
        index: Dict[str, List[str]] = {}
        with self._lock:
            for item, supports in self._features.items():
                for name in supports:
                    index.setdefault(name, []).append(item)
        return index

    def where(
        self,
        feature: Any,
        operator: str = AND,
        equals: Equals = values_equal,
    ) -> List[str]:
        """Find the items matching a feature query.

        ``feature`` may be a feature name, a list of names, a mapping of
        name -> expected value, or one of the query objects from
        :mod:`featuresupport.query`. For a single name AND and OR are the same
        query; NOT returns every item lacking the feature. For a list, AND
        intersects, OR unites and NOT excludes the union. A mapping keeps items
        whose stored values match under the operator.
        """
        try:
            query = as_query(feature)
        except InvalidArgument:
            logger.warning("%s: rejected query %r", self.type_name, feature)
            raise
        op = normalize_operator(operator)

        with self._lock:
            if isinstance(query, ByFilter):
                return filter_items(self._features, query.criteria, op, equals=equals)

            index = self.features_index()
            keys = self.keys()

        if isinstance(query, ByName):
            matches = index.get(query.feature, [])
            if op == NOT:
                return difference(keys, matches)
            return list(matches)

        groups: List[List[str]] = [index.get(name, []) for name in query.features]
        if op == OR:
            return union(groups)
        if op == NOT:
            return difference(keys, union(groups))
        if not groups:
            return keys
        return intersection(groups)
