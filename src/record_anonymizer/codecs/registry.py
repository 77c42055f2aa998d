"""Codec registry keyed by file extension."""

from typing import Optional

from record_anonymizer.codecs.base import RecordCodec
from record_anonymizer.codecs.csv_codec import CsvCodec
from record_anonymizer.codecs.json_codec import JsonCodec
from record_anonymizer.core.exceptions import UnsupportedFormatError


def _normalize(extension: Optional[str]) -> str:
    return (extension or "").strip().lower().lstrip(".")


class CodecRegistry:
    """Maps file extensions to codecs.

    Example:
        >>> registry = CodecRegistry([CsvCodec(), JsonCodec()])
        >>> registry.get_codec(".JSON").extension
        'json'
    """

    def __init__(self, codecs: Optional[list[RecordCodec]] = None) -> None:
        self._codecs: dict[str, RecordCodec] = {}
        for codec in codecs or []:
            self.register(codec)

    def register(self, codec: RecordCodec) -> None:
        self._codecs[_normalize(codec.extension)] = codec

    def get_codec(self, extension: Optional[str]) -> RecordCodec:
        """Get the codec for an extension.

        Raises:
            UnsupportedFormatError: If no codec handles the extension.
        """
        codec = self._codecs.get(_normalize(extension))
        if codec is None:
            raise UnsupportedFormatError(extension or "", self.supported_extensions)
        return codec

    def is_supported(self, extension: Optional[str]) -> bool:
        normalized = _normalize(extension)
        return bool(normalized) and normalized in self._codecs

    @property
    def supported_extensions(self) -> list[str]:
        return sorted(self._codecs)


_registry: Optional[CodecRegistry] = None


def get_codec_registry() -> CodecRegistry:
    """Get the default registry (CSV and JSON)."""
    global _registry
    if _registry is None:
        _registry = CodecRegistry([CsvCodec(), JsonCodec()])
    return _registry
