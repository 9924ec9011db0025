from datetime import date, datetime, timedelta

import pytest


def make_sales_records(count, start=date(2024, 1, 1), reverse=False):
    """Daily sales rows; ``reverse`` lists the newest day first."""
    records = []
    for i in range(count):
        offset = count - 1 - i if reverse else i
        records.append({
            'date': (start + timedelta(days=offset)).isoformat(),
            'region': ['North', 'South', 'East', 'West'][i % 4],
            'revenue': str(100 + i),
        })
    return records


def make_plain_records(count):
    """Rows with no date column."""
    return [
        {'id': str(i), 'region': ['North', 'South'][i % 2], 'units': str(i * 2)}
        for i in range(count)
    ]


class FakeClock:
    """Settable clock for stores."""

    def __init__(self, now=datetime(2024, 5, 1, 9, 30)):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_sales():
    return make_sales_records


@pytest.fixture
def make_plain():
    return make_plain_records


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Unset config overrides; anything a .env file sets is removed afterwards."""
    for name in ('LOG_LEVEL', 'MAX_SAMPLE_SIZE', 'RECENCY_TAIL', 'FORECAST_PERIODS'):
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)
