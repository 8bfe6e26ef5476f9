from __future__ import annotations

from dataclasses import dataclass, fields, asdict, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import UnknownFilterKeyError


@dataclass(frozen=True)
class FilterField:
    """One row of the filter panel: which input to show and which key it drives."""
    key: str
    label: str
    input_type: str = "text"


FILTER_FIELDS: Tuple[FilterField, ...] = (
    FilterField("end_year", "End Year", "number"),
    FilterField("topic", "Topic"),
    FilterField("sector", "Sector"),
    FilterField("region", "Region"),
    FilterField("pestle", "PESTLE"),
    FilterField("source", "Source"),
    FilterField("swot", "SWOT"),
    FilterField("country", "Country"),
    FilterField("city", "City"),
)


@dataclass(frozen=True)
class FilterSet:
    """
    Immutable snapshot of every filter value the user has typed.

    The key set is closed: exactly the nine fields below, in the order they
    are sent to the data endpoint. An empty string means "no constraint".
    Values are stored as given; `end_year` may hold a number coming from a
    numeric input, and nothing here validates or coerces it.
    """

    end_year: Any = ""
    topic: Any = ""
    sector: Any = ""
    region: Any = ""
    pestle: Any = ""
    source: Any = ""
    swot: Any = ""
    country: Any = ""
    city: Any = ""

    @classmethod
    def keys(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def get(self, key: str) -> Any:
        _check_key(key)
        return getattr(self, key)

    def update(self, key: str, value: Any) -> FilterSet:
        """
        Return a new FilterSet equal to this one except `key` -> `value`.

        :raises UnknownFilterKeyError: if key is not one of the fixed filter keys
        """
        _check_key(key)
        return replace(self, **{key: value})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_params(self) -> Dict[str, Any]:
        """
        Query parameters for the data endpoint.

        Every key is included, empty ones too. None (a cleared numeric input)
        is sent as an empty string because requests would otherwise drop it.
        """
        return {
            key: "" if value is None else value
            for key, value in self.to_dict().items()
        }

    def active(self) -> Dict[str, Any]:
        """Only the constrained keys; used for log context."""
        return {k: v for k, v in self.to_dict().items() if v not in ("", None)}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> FilterSet:
        data = data or {}
        unknown = set(data) - set(cls.keys())
        if unknown:
            raise UnknownFilterKeyError(f"Unknown filter keys: {sorted(unknown)}")
        return cls(**dict(data))


def _check_key(key: str) -> None:
    if key not in FILTER_KEYS:
        raise UnknownFilterKeyError(f"Unknown filter key '{key}'")


FILTER_KEYS: Tuple[str, ...] = FilterSet.keys()


class FilterState:
    """
    Mutable holder for the current FilterSet.

    The held FilterSet is never mutated; `update` swaps in a new one, so any
    reference handed out by `get` stays a consistent snapshot.
    """

    def __init__(self, initial: Optional[FilterSet] = None):
        self._current = initial if initial is not None else FilterSet()

    def get(self) -> FilterSet:
        return self._current

    def update(self, key: str, value: Any) -> FilterSet:
        self._current = self._current.update(key, value)
        return self._current
