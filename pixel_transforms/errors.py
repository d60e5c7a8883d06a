from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when an operation is called with a value outside its documented range."""
