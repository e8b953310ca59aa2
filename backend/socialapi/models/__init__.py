"""Models package."""
from socialapi.models.user import User

__all__ = [
    "User",
]
