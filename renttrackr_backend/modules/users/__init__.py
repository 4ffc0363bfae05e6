"""User accounts.

Routes live in ``routers`` and are imported by the application directly;
authentication depends on this package, so it exports no router.
"""

from .models import User

__all__ = ["User"]
