"""Observability – structured logging for policy decisions."""
from access_policy.observability.logging import (
    JsonLoggerFactory,
    RedactionProcessor,
    SensitiveFieldsFilter,
    get_logger,
)

__all__ = ["JsonLoggerFactory", "RedactionProcessor", "SensitiveFieldsFilter", "get_logger"]
