# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""UPS battery lifecycle calculations.

Remaining life is counted in whole calendar months (day of month is
ignored) from the install date to *today*.  All three public functions
derive from :func:`remaining_life_months`, so they always agree.
"""

from __future__ import annotations

from datetime import date, datetime

from rack_inventory.data.models import DEFAULT_BATTERY_LIFESPAN_MONTHS, BatteryStatus
from rack_inventory.errors import InvalidDateError

DEFAULT_WARNING_THRESHOLD_MONTHS = 12

# Status bands (remaining months, inclusive upper bounds).
CRITICAL_MAX_MONTHS = 6
WARNING_MAX_MONTHS = 12

_DATE_FORMATS = ("%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d")


def parse_install_date(value: date | datetime | str | None) -> date:
    """Coerce an install date to a :class:`date`.

    Accepts ``date``/``datetime`` objects, ISO strings and the
    ``DD/MM/YYYY`` form common in Spanish-locale spreadsheets.

    Raises:
        InvalidDateError: If *value* is missing or unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value)

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise InvalidDateError(value)


def _months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def remaining_life_months(
    install_date: date | datetime | str,
    lifespan_months: int = DEFAULT_BATTERY_LIFESPAN_MONTHS,
    today: date | None = None,
) -> int:
    """Whole months of battery life left, clamped to ``[0, lifespan_months]``.

    A future install date counts as brand new rather than yielding more
    life than the lifespan allows.

    Raises:
        ValueError: If *lifespan_months* is not positive.
        InvalidDateError: If *install_date* cannot be parsed.
    """
    if lifespan_months <= 0:
        raise ValueError(f"Battery lifespan must be positive, got {lifespan_months}")
    installed = parse_install_date(install_date)
    now = today or date.today()
    elapsed = _months_between(installed, now)
    return min(lifespan_months, max(0, lifespan_months - elapsed))


def is_due_for_replacement(
    install_date: date | datetime | str,
    lifespan_months: int = DEFAULT_BATTERY_LIFESPAN_MONTHS,
    warning_threshold_months: int = DEFAULT_WARNING_THRESHOLD_MONTHS,
    today: date | None = None,
) -> bool:
    """True when remaining life is at or below the warning threshold."""
    remaining = remaining_life_months(install_date, lifespan_months, today=today)
    return remaining <= warning_threshold_months


def battery_status(
    install_date: date | datetime | str,
    lifespan_months: int = DEFAULT_BATTERY_LIFESPAN_MONTHS,
    today: date | None = None,
) -> BatteryStatus:
    """Map remaining life to a :class:`BatteryStatus` band."""
    remaining = remaining_life_months(install_date, lifespan_months, today=today)
    if remaining <= CRITICAL_MAX_MONTHS:
        return BatteryStatus.critical
    if remaining <= WARNING_MAX_MONTHS:
        return BatteryStatus.warning
    return BatteryStatus.good
