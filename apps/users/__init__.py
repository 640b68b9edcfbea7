"""Users app package.

Defines the custom user model used as AUTH_USER_MODEL. Users log in by
email and carry a role (``user`` or ``admin``); the booking engine uses
the role to decide who may see, pay for or cancel a booking.
"""
