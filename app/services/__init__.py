"""Services module"""
from app.services.errors import CoreError, ValidationError, FormatError, StateError

__all__ = ["CoreError", "ValidationError", "FormatError", "StateError"]
