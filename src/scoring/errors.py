"""Error types for the fit scoring engine."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when match criteria or a recommendation config is malformed.

    Always raised before any job is scored, so callers never receive a
    partially computed result.
    """
