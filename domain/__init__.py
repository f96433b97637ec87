"""
Domain layer - ORM models, schemas, and mappers.
"""

from domain import models, schemas, mappers

__all__ = ["models", "schemas", "mappers"]
