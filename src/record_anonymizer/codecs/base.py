"""Codec interface for turning file payloads into records and back."""

from abc import ABC, abstractmethod
from typing import Any


class RecordCodec(ABC):
    """Converts between a file format and lists of records."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension handled by this codec (lower case, no dot)."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of serialized output."""

    @abstractmethod
    def parse(self, data: bytes) -> list[dict[str, Any]]:
        """Parse a payload into records.

        Raises:
            CodecError: If the payload is malformed.
        """

    @abstractmethod
    def serialize(self, records: list[dict[str, Any]]) -> bytes:
        """Serialize records into a payload."""
