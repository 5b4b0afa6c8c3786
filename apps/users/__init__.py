"""Users app package.

Defines the platform user (email login, guest/host type) used as
``AUTH_USER_MODEL`` and the register/login/profile endpoints built on
SimpleJWT.
"""
