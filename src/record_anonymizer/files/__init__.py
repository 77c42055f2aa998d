"""File-based anonymization."""

from record_anonymizer.files.service import (
    FileAnonymizationResult,
    FileAnonymizationService,
    generate_anonymized_file_name,
    get_file_extension,
)

__all__ = [
    "FileAnonymizationResult",
    "FileAnonymizationService",
    "generate_anonymized_file_name",
    "get_file_extension",
]
