from decimal import Decimal

import pytest

from app.service_types.event_staffing import DEFAULT_RATE_TABLE, RateEntry, RateTable


def test_known_year_rates():
    entry = DEFAULT_RATE_TABLE.rates_for_year(2026)
    assert entry.base_per_helper == Decimal("300")
    assert entry.extra_per_hour_per_helper == Decimal("50")


def test_years_outside_table_clamp_to_nearest():
    assert DEFAULT_RATE_TABLE.rates_for_year(1999) == DEFAULT_RATE_TABLE.rates_for_year(2025)
    assert DEFAULT_RATE_TABLE.rates_for_year(2099) == DEFAULT_RATE_TABLE.rates_for_year(2030)


def test_rates_never_decrease_year_over_year():
    years = DEFAULT_RATE_TABLE.years()
    assert years == [2025, 2026, 2027, 2028, 2029, 2030]
    entries = [DEFAULT_RATE_TABLE.rates_for_year(y) for y in years]
    for earlier, later in zip(entries, entries[1:]):
        assert later.base_per_helper >= earlier.base_per_helper
        assert later.extra_per_hour_per_helper >= earlier.extra_per_hour_per_helper


def test_gap_in_table_uses_previous_year():
    table = RateTable(
        {
            2025: RateEntry(Decimal("100"), Decimal("10")),
            2028: RateEntry(Decimal("200"), Decimal("20")),
        }
    )
    assert table.rates_for_year(2027).base_per_helper == Decimal("100")


def test_empty_table_rejected():
    with pytest.raises(ValueError):
        RateTable({})


def test_rows_are_json_friendly():
    rows = DEFAULT_RATE_TABLE.as_rows()
    assert rows[0] == {"year": 2025, "base_per_helper": 275.0, "extra_per_hour_per_helper": 45.0}
