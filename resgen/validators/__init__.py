"""Validation package for generated symbol trees."""

from .base import CollisionEntry, NamingCollision, StructValidationError
from .structs import INTERNAL_ROOT, find_collisions, split, validate

__all__ = [
    "CollisionEntry",
    "INTERNAL_ROOT",
    "NamingCollision",
    "StructValidationError",
    "find_collisions",
    "split",
    "validate",
]
