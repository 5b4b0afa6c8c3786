"""Properties app package.

Listings offered by hosts: pricing in monthly cents, stay-length
constraints, capacity, amenities and photos. The per-date calendar lives
in the bookings app.
"""
