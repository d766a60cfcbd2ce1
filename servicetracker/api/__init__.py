"""
API routers
"""

from servicetracker.api import customers, dashboard, services, users

__all__ = ["customers", "dashboard", "services", "users"]
