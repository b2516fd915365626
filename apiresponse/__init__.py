"""Standard JSON API response envelopes, pagination, HTTP status helpers and request helpers."""

__version__ = "1.1.0"
__all__ = ["context", "handlers", "logged", "response", "status"]