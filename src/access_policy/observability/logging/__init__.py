"""Observability – structured logging helpers."""
from access_policy.observability.logging.filters import SensitiveFieldsFilter
from access_policy.observability.logging.factory import JsonLoggerFactory
from access_policy.observability.logging.processors import RedactionProcessor, get_logger

__all__ = [
    "JsonLoggerFactory",
    "RedactionProcessor",
    "SensitiveFieldsFilter",
    "get_logger",
]
