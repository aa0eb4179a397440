from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping


@dataclass(frozen=True)
class RateEntry:
    base_per_helper: Decimal
    extra_per_hour_per_helper: Decimal


class RateTable:
    """Per-year helper rates.

    Years outside the table clamp to the nearest defined year; rates are
    never extrapolated.
    """

    def __init__(self, rates: Mapping[int, RateEntry]):
        if not rates:
            raise ValueError("rate table must define at least one year")
        self._rates: Mapping[int, RateEntry] = MappingProxyType(dict(rates))
        self._first_year = min(self._rates)
        self._last_year = max(self._rates)

    def rates_for_year(self, year: int) -> RateEntry:
        entry = self._rates.get(year)
        if entry is not None:
            return entry
        if year < self._first_year:
            return self._rates[self._first_year]
        if year > self._last_year:
            return self._rates[self._last_year]
        # Gap inside the range: use the closest earlier year.
        earlier = max(y for y in self._rates if y < year)
        return self._rates[earlier]

    def years(self) -> List[int]:
        return sorted(self._rates)

    def as_rows(self) -> List[Dict[str, object]]:
        return [
            {
                "year": year,
                "base_per_helper": float(self._rates[year].base_per_helper),
                "extra_per_hour_per_helper": float(self._rates[year].extra_per_hour_per_helper),
            }
            for year in self.years()
        ]


def _entry(base: str, extra: str) -> RateEntry:
    return RateEntry(base_per_helper=Decimal(base), extra_per_hour_per_helper=Decimal(extra))


# Whole dollars: first 4-hour block per helper, then each extra hour per helper.
DEFAULT_RATE_TABLE = RateTable(
    {
        2025: _entry("275", "45"),
        2026: _entry("300", "50"),
        2027: _entry("325", "55"),
        2028: _entry("400", "60"),
        2029: _entry("475", "65"),
        2030: _entry("550", "70"),
    }
)
