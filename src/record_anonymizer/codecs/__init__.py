"""File codecs (CSV, JSON) for record anonymization."""

from record_anonymizer.codecs.base import RecordCodec
from record_anonymizer.codecs.csv_codec import CsvCodec
from record_anonymizer.codecs.json_codec import JsonCodec
from record_anonymizer.codecs.registry import CodecRegistry, get_codec_registry

__all__ = [
    "RecordCodec",
    "CsvCodec",
    "JsonCodec",
    "CodecRegistry",
    "get_codec_registry",
]
