from pathlib import Path
from dotenv import load_dotenv
import pytest

# Load environment variables for tests before the app reads its settings
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test')


# Keep metrics off the network for all tests
@pytest.fixture(autouse=True)
def disable_statsd(monkeypatch):
    """Unset the StatsD sink so counters are no-ops."""
    monkeypatch.delenv("METRICS_STATSD_ADDR", raising=False)
