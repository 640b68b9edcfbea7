"""Validators for the date collections stored on inventory rows."""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.availability import to_calendar_day


def validate_calendar_days(value) -> None:
    """Require a list whose every entry is an ISO date or datetime."""
    if not isinstance(value, list):
        raise ValidationError(_("Expected a list of dates."), code="invalid")
    invalid = []
    for entry in value:
        try:
            to_calendar_day(entry)
        except ValueError:
            invalid.append(entry)
    if invalid:
        raise ValidationError(
            _("Not a calendar date (YYYY-MM-DD): %(values)s"),
            code="invalid_date",
            params={"values": ", ".join(repr(entry) for entry in invalid)},
        )
