"""API module for the record anonymization service."""

from record_anonymizer.api.anonymization_api import router
from record_anonymizer.api.routes import app

__all__ = ["router", "app"]
