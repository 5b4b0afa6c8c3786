"""Bookings app package.

The booking core of the marketplace: the booking entity with its price
breakdown, the per-date booking calendar that is the single source of
truth for availability, and the services that keep both consistent inside
one database transaction.
"""
