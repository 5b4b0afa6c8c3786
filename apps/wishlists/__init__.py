"""Wishlists app package: named lists of saved properties."""
