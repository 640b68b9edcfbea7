"""Bookings app package.

This app holds the booking engine: the reservation record, the lifecycle
handlers (create, confirm payment, cancel, status override) and the
per-type inventory policies that keep flight seats and hotel/car dates
consistent with the bookings that use them.
"""
