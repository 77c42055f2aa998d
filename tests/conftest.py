"""Pytest fixtures and configuration."""

import pytest

from record_anonymizer.config.settings import Settings
from record_anonymizer.core.anonymizer import RecordAnonymizer
from record_anonymizer.core.strategies import get_pseudonymizer
from record_anonymizer.files.service import FileAnonymizationService


@pytest.fixture(autouse=True)
def clear_pseudonym_cache():
    """Start every test with an empty shared pseudonym cache."""
    get_pseudonymizer().cache.clear()
    yield
    get_pseudonymizer().cache.clear()


@pytest.fixture
def anonymizer():
    return RecordAnonymizer()


@pytest.fixture
def settings(tmp_path):
    """Settings writing anonymized files into a temporary directory."""
    return Settings(output_dir=str(tmp_path / "anonymized-files"))


@pytest.fixture
def file_service(anonymizer, settings):
    return FileAnonymizationService(anonymizer=anonymizer, settings=settings)


@pytest.fixture
def customer_record():
    """A typical customer record covering the common field kinds."""
    return {
        "firstName": "John",
        "lastName": "doe",
        "email": "john.doe@example.com",
        "phone": "555-123-4567",
        "ssn": "123-45-6789",
        "creditCard": "4111-1111-1111-1111",
        "customerId": "CUST001",
        "active": True,
        "age": 34,
    }
