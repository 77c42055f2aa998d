"""JSON codec.

Accepts either an array of objects or a single object. A single record is
written back as an object, several as an array.
"""

import json
from datetime import date
from typing import Any

from record_anonymizer.codecs.base import RecordCodec
from record_anonymizer.core.exceptions import CodecError


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonCodec(RecordCodec):
    """JSON documents holding one record or an array of records."""

    @property
    def extension(self) -> str:
        return "json"

    @property
    def media_type(self) -> str:
        return "application/json"

    def parse(self, data: bytes) -> list[dict[str, Any]]:
        try:
            document = json.loads(data.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CodecError(f"Failed to parse JSON file: {e}") from e

        if isinstance(document, dict):
            return [document]
        if isinstance(document, list):
            for index, item in enumerate(document):
                if not isinstance(item, dict):
                    raise CodecError(
                        f"Failed to parse JSON file: element {index} is not an object"
                    )
            return document

        raise CodecError("Failed to parse JSON file: expected an object or an array of objects")

    def serialize(self, records: list[dict[str, Any]]) -> bytes:
        document: Any = records[0] if len(records) == 1 else records
        return json.dumps(
            document, ensure_ascii=False, indent=2, default=_json_default
        ).encode("utf-8")
