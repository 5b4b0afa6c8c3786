"""Settings package for StudentStay.

`base.py` holds the configuration shared by every environment; `dev.py`,
`test.py` and `prod.py` override it. Select one with
``DJANGO_SETTINGS_MODULE``.
"""
