"""
Schemas Package

JSON schema definitions and validation utilities for picture definitions.
"""

from .validator import validate_definition, ValidationError

__all__ = [
    "validate_definition",
    "ValidationError",
]
