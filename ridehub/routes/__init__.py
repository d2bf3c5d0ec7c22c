"""
API Routers

Mounted by the application factory under /api/auth, /api/profile and
/api/admin.
"""
