from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

Number = Union[int, float]

# Numeric record attributes a chart can plot.
METRIC_KEYS: Tuple[str, ...] = ("intensity", "likelihood", "relevance", "start_year", "end_year")

_TEXT_FIELDS = ("title", "topic", "sector", "region", "country", "city", "pestle", "source")
_NUMERIC_FIELDS = ("start_year", "end_year", "intensity", "likelihood", "relevance")


def to_number(value: Any) -> Optional[Number]:
    """
    Lenient numeric parse for record attributes.

    Returns None for anything that should not contribute to a chart:
    missing values, empty strings, booleans, NaN, infinities and unparseable
    text.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and not math.isfinite(value) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() and "." not in text else number
    return None


@dataclass(frozen=True)
class Record:
    """
    One data point returned by the endpoint.

    Numeric fields are None when the endpoint left them empty or sent
    something non-numeric. Unrecognised attributes are kept in `extra` so
    they survive a CSV export.
    """

    title: str = ""
    topic: str = ""
    sector: str = ""
    region: str = ""
    country: str = ""
    city: str = ""
    pestle: str = ""
    source: str = ""
    start_year: Optional[Number] = None
    end_year: Optional[Number] = None
    intensity: Optional[Number] = None
    likelihood: Optional[Number] = None
    relevance: Optional[Number] = None
    published: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def metric(self, key: str) -> Optional[Number]:
        if key not in METRIC_KEYS:
            raise KeyError(f"'{key}' is not a numeric record attribute")
        return getattr(self, key)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Record:
        if not isinstance(raw, Mapping):
            raise TypeError(f"Record must be a JSON object, got {type(raw).__name__}")

        text = {name: _to_text(raw.get(name)) for name in _TEXT_FIELDS}
        numbers = {name: to_number(raw.get(name)) for name in _NUMERIC_FIELDS}
        published = raw.get("published")

        known = set(_TEXT_FIELDS) | set(_NUMERIC_FIELDS) | {"published"}
        extra = {k: v for k, v in raw.items() if k not in known}

        return cls(
            **text,
            **numbers,
            published=None if published in (None, "") else str(published),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra")
        data.update(extra)
        return data


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Dataset:
    """
    Ordered, immutable collection of Records from one fetch.

    Order is the server's response order and is used as-is for the
    categorical axis; nothing here sorts or deduplicates.
    """

    records: Tuple[Record, ...] = ()

    @classmethod
    def empty(cls) -> Dataset:
        return cls(())

    @classmethod
    def from_records(cls, records: Sequence[Record]) -> Dataset:
        return cls(tuple(records))

    @classmethod
    def from_json(cls, payload: Any) -> Dataset:
        """
        Build a Dataset from a decoded JSON response body.

        :raises TypeError: if payload is not a JSON array of objects
        """
        if not isinstance(payload, list):
            raise TypeError(f"Expected a JSON array of records, got {type(payload).__name__}")
        return cls(tuple(Record.from_dict(item) for item in payload))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    @property
    def is_empty(self) -> bool:
        return not self.records

    def titles(self) -> List[str]:
        return [r.title for r in self.records]

    def metric_values(self, key: str) -> List[Optional[Number]]:
        return [r.metric(key) for r in self.records]

    def max_metric(self, key: str) -> Number:
        """Largest value of `key`, ignoring missing values; 0 if there are none."""
        present = [v for v in self.metric_values(key) if v is not None]
        return max(present) if present else 0

    def to_frame(self) -> pd.DataFrame:
        """Tabular view of the dataset, one row per record, used for CSV export."""
        if not self.records:
            return pd.DataFrame(columns=list(_TEXT_FIELDS + _NUMERIC_FIELDS) + ["published"])
        return pd.DataFrame([r.to_dict() for r in self.records])
