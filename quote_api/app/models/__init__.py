"""
Domain models.

These are plain Python objects with no framework dependencies.  API
payloads live in ``schemas`` and are converted to and from these
models by the endpoints.
"""

from .quote import Quote, QuoteStatus, normalize_tag, normalize_tags  # noqa: F401
