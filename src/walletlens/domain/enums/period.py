from enum import Enum


class TimePeriod(str, Enum):
    """Lookback window for price history."""

    DAY = "24h"
    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"
    YEAR = "1y"
    ALL = "all"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]


_PERIOD_DAYS: dict[TimePeriod, int] = {
    TimePeriod.DAY: 1,
    TimePeriod.WEEK: 7,
    TimePeriod.MONTH: 30,
    TimePeriod.QUARTER: 90,
    TimePeriod.YEAR: 365,
    TimePeriod.ALL: 365 * 5,
}
