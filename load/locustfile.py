"""
Locust load script for the pricing API.

Simulates the booking form:
- Price a random event date/crew as the user edits the form (/api/v1/estimate)
- Add a venue distance for the full quote (/api/v1/quote)
- Occasionally type a manual deposit (/api/v1/deposit/calculate)
- Rarely load the special-date calendar (/api/v1/estimate/special-dates)

Configure with env vars or Locust UI:
- HOST: pass via `--host http://localhost:8000`
- PRICING_MAX_HELPERS: upper bound on simulated crew size (default 6)
- PRICING_YEARS: CSV of event years to sample (default 2025..2030)

Run:
  locust -f load/locustfile.py --host http://localhost:8000
"""

from __future__ import annotations

import logging
import os
import random
from datetime import date, timedelta
from typing import List

from locust import HttpUser, between, events, task


# --- Config -------------------------------------------------------------------

MAX_HELPERS = int(os.getenv("PRICING_MAX_HELPERS", "6") or 6)


def _load_years() -> List[int]:
    raw = os.getenv("PRICING_YEARS", "").strip()
    years = [int(p) for p in raw.split(",") if p.strip().isdigit()]
    return years or list(range(2025, 2031))


PRICING_YEARS = _load_years()


# --- Helpers ------------------------------------------------------------------

def _random_event() -> dict:
    year = random.choice(PRICING_YEARS)
    event_date = date(year, 1, 1) + timedelta(days=random.randint(0, 364))
    return {
        "eventDate": event_date.isoformat(),
        "durationHours": random.choice([3, 4, 4.5, 5, 6, 8, 10]),
        "numHelpers": random.randint(1, MAX_HELPERS),
    }


# --- The User Model -----------------------------------------------------------

class BookingFormUser(HttpUser):
    wait_time = between(1, 3)

    last_total: float = 0.0

    @task(8)
    def estimate(self):
        r = self.client.post("/api/v1/estimate", json=_random_event(), name="/estimate")
        if r.status_code == 200:
            self.last_total = r.json().get("totalCost", 0.0)

    @task(4)
    def quote(self):
        body = {**_random_event(), "distanceMiles": round(random.uniform(0, 80), 1)}
        self.client.post("/api/v1/quote", json=body, name="/quote")

    @task(2)
    def manual_deposit(self):
        if not self.last_total:
            return
        deposit = round(self.last_total * random.uniform(0.1, 0.4), 2)
        self.client.post(
            "/api/v1/deposit/calculate",
            json={"estimateDollars": self.last_total, "depositDollars": deposit},
            name="/deposit/calculate",
        )

    @task(1)
    def special_dates(self):
        self.client.get(
            "/api/v1/estimate/special-dates",
            params={"years": random.randint(1, 5)},
            name="/estimate/special-dates",
        )


# --- Optional event hooks -----------------------------------------------------

@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    logging.getLogger("locust").info(f"Starting pricing load test for years: {PRICING_YEARS}")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    logging.getLogger("locust").info("Test finished")
