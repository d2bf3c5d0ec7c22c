"""
Domain Package

Identity and role-profile records plus the request schemas that guard
every write to them.
"""
