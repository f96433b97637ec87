"""API routes package"""

from . import auth, meals, health

__all__ = ["auth", "meals", "health"]
