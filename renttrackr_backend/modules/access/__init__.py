"""Authorization by ownership chain.

Every module resolves the caller's reach over properties through
``services``; there are no routes here.
"""

from .services import WRITE_ROLES

__all__ = ["WRITE_ROLES"]
