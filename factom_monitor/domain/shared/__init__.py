"""Shared Kernel - base classes for the whole domain layer.

- ValueObject: immutable object compared by value
- DomainException: base of the error hierarchy
"""

from .exceptions import DomainException
from .value_object import ValueObject, validate_value_object

__all__ = [
    # Base classes
    "ValueObject",
    # Utilities
    "validate_value_object",
    # Exceptions
    "DomainException",
]
