"""Logging configuration module for record-anonymizer."""

from record_anonymizer.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
