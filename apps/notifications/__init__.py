"""Notifications app package.

Turns domain events (booking lifecycle, new chat messages) into in-app
notifications stored per user. Handlers subscribe to the message bus when
the app is ready.
"""
