"""Reviews app package.

Guests and hosts review each other once a stay has been completed; hosts
may answer reviews of their listings.
"""
