"""
File anonymization service.

Parses an uploaded CSV or JSON file into records, anonymizes every record
and writes the result into the output directory as
"<name><suffix>.<ext>" (e.g. customers.csv -> customers_anon.csv).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from record_anonymizer.codecs.registry import CodecRegistry, get_codec_registry
from record_anonymizer.config.settings import Settings, get_settings
from record_anonymizer.core.anonymizer import (
    AnonymizationRequest,
    RecordAnonymizer,
    get_anonymizer,
)
from record_anonymizer.core.exceptions import CodecError
from record_anonymizer.logging.setup import get_logger
from record_anonymizer.metrics.collectors import FILES_PROCESSED

logger = get_logger(__name__)

DOWNLOAD_URL_PREFIX = "/api/v1/anonymization/download/"


@dataclass
class FileAnonymizationResult:
    """Outcome of anonymizing a file.

    Attributes:
        success: Whether the file was anonymized and written.
        message: Human-readable outcome.
        original_file_name: Name of the uploaded file.
        anonymized_file_name: Name of the written file.
        file_path: Where the output was written.
        strategy: Requested strategy name.
        records_processed: Number of records written.
        fields_processed: Sum of top-level fields over all records.
        file_size: Output size in bytes.
        download_url: Relative URL for downloading the output.
    """

    success: bool
    message: str
    original_file_name: Optional[str] = None
    anonymized_file_name: Optional[str] = None
    file_path: Optional[str] = None
    strategy: Optional[str] = None
    records_processed: int = 0
    fields_processed: int = 0
    file_size: int = 0
    download_url: Optional[str] = None


def get_file_extension(file_name: str) -> str:
    """Return the lower-cased extension without the dot, or ""."""
    return Path(file_name).suffix.lstrip(".").lower()


def generate_anonymized_file_name(original_file_name: str, suffix: str) -> str:
    """Insert suffix before the extension: data.csv -> data_anon.csv."""
    path = Path(original_file_name)
    if not path.suffix:
        return f"{path.name}{suffix}"
    return f"{path.stem}{suffix}{path.suffix}"


class FileAnonymizationService:
    """Anonymizes whole files through the codec registry.

    Attributes:
        output_dir: Directory receiving anonymized files.
    """

    def __init__(
        self,
        anonymizer: Optional[RecordAnonymizer] = None,
        registry: Optional[CodecRegistry] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.anonymizer = anonymizer or get_anonymizer()
        self.registry = registry or get_codec_registry()
        self.settings = settings or get_settings()
        self.output_dir = Path(self.settings.output_dir)

    def anonymize_file(
        self,
        file_name: Optional[str],
        content: Optional[bytes],
        strategy: str,
        preserve_format: bool = True,
        seed: Optional[int] = None,
        output_file_name: Optional[str] = None,
    ) -> FileAnonymizationResult:
        """Anonymize a file payload and write the result to the output dir.

        Args:
            file_name: Original file name; its extension selects the codec.
            content: Raw file bytes.
            strategy: Strategy name applied to every record.
            preserve_format: Keep the surface format of values.
            seed: Optional seed for reproducible output.
            output_file_name: Custom output name (base name only is used).

        Returns:
            FileAnonymizationResult describing the outcome.

        Raises:
            OSError: If the output file cannot be written.
        """
        logger.info(
            "Starting file anonymization",
            extra={
                "event": "file_anonymization_started",
                "file_name": file_name,
                "strategy": strategy,
                "preserve_format": preserve_format,
            },
        )

        if not file_name:
            return self._fail("File name is missing", file_name, strategy)
        if not content:
            return self._fail("File is empty", file_name, strategy)

        extension = get_file_extension(file_name)
        if not self.registry.is_supported(extension):
            return self._fail(
                f"File extension '{extension}' is not supported. "
                f"Supported extensions: {', '.join(self.registry.supported_extensions)}",
                file_name,
                strategy,
            )
        codec = self.registry.get_codec(extension)

        try:
            records = codec.parse(content)
        except CodecError as e:
            logger.warning(
                "Failed to parse file",
                extra={"event": "file_parse_failed", "file_name": file_name, "error": str(e)},
            )
            return self._fail(f"Failed to parse file: {e}", file_name, strategy, extension)

        if not records:
            return self._fail("No data found in file", file_name, strategy, extension)

        anonymized_records = []
        total_fields = 0
        for index, record in enumerate(records, start=1):
            result = self.anonymizer.anonymize_data(
                AnonymizationRequest(
                    data=record,
                    strategy=strategy,
                    preserve_format=preserve_format,
                    seed=seed,
                )
            )
            if not result.success:
                return self._fail(
                    f"Failed to anonymize record {index}: {result.message}",
                    file_name,
                    strategy,
                    extension,
                )
            anonymized_records.append(result.anonymized_data)
            total_fields += result.fields_processed

        target_name = Path(output_file_name or "").name or generate_anonymized_file_name(
            Path(file_name).name, self.settings.anonymized_suffix
        )
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / target_name
        output_path.write_bytes(codec.serialize(anonymized_records))

        FILES_PROCESSED.labels(format=extension, outcome="success").inc()
        logger.info(
            "File anonymized",
            extra={
                "event": "file_anonymized",
                "file_name": file_name,
                "output_file": target_name,
                "records_processed": len(anonymized_records),
                "fields_processed": total_fields,
            },
        )

        return FileAnonymizationResult(
            success=True,
            message=f"File anonymized successfully: {len(anonymized_records)} records processed",
            original_file_name=file_name,
            anonymized_file_name=target_name,
            file_path=str(output_path),
            strategy=strategy,
            records_processed=len(anonymized_records),
            fields_processed=total_fields,
            file_size=output_path.stat().st_size,
            download_url=self.get_download_url(target_name),
        )

    def get_output_path(self, file_name: str) -> Path:
        """Resolve a file name inside the output directory.

        Only the base name is used, so "../x" cannot escape the directory.
        """
        return self.output_dir / Path(file_name).name

    def output_exists(self, file_name: str) -> bool:
        if not Path(file_name).name:
            return False
        return self.get_output_path(file_name).is_file()

    def list_output_files(self) -> list[str]:
        """Names of the files in the output directory."""
        if not self.output_dir.is_dir():
            return []
        return sorted(path.name for path in self.output_dir.iterdir() if path.is_file())

    def get_download_url(self, file_name: str) -> str:
        return f"{DOWNLOAD_URL_PREFIX}{file_name}"

    def _fail(
        self,
        message: str,
        file_name: Optional[str],
        strategy: Optional[str],
        extension: str = "unknown",
    ) -> FileAnonymizationResult:
        FILES_PROCESSED.labels(format=extension or "unknown", outcome="failed").inc()
        logger.warning(
            "File anonymization failed",
            extra={"event": "file_anonymization_failed", "file_name": file_name, "reason": message},
        )
        return FileAnonymizationResult(
            success=False,
            message=message,
            original_file_name=file_name,
            strategy=strategy,
        )
