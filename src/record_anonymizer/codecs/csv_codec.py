"""CSV codec.

The header row names the fields; each following row becomes a flat record
of stripped string values. Rows shorter than the header only fill the
columns they have.
"""

import csv
import io
import json
from typing import Any

from record_anonymizer.codecs.base import RecordCodec
from record_anonymizer.core.exceptions import CodecError


class CsvCodec(RecordCodec):
    """Flat CSV records with a header row."""

    @property
    def extension(self) -> str:
        return "csv"

    @property
    def media_type(self) -> str:
        return "text/csv"

    def parse(self, data: bytes) -> list[dict[str, Any]]:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CodecError(f"Failed to decode CSV file: {e}") from e

        reader = csv.reader(io.StringIO(text))
        try:
            header = next(reader, None)
            if header is None:
                return []
            headers = [name.strip() for name in header]

            records = []
            for row in reader:
                if not row:
                    continue
                records.append(
                    {name: value.strip() for name, value in zip(headers, row)}
                )
        except csv.Error as e:
            raise CodecError(f"Failed to parse CSV file: {e}") from e

        return records

    def serialize(self, records: list[dict[str, Any]]) -> bytes:
        if not records:
            return b""

        # Union of keys, in first-seen order
        fieldnames: dict[str, None] = {}
        for record in records:
            fieldnames.update(dict.fromkeys(record))

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=list(fieldnames), lineterminator="\n")
        writer.writeheader()
        for record in records:
            writer.writerow(
                {key: _cell(record.get(key)) for key in fieldnames}
            )

        return output.getvalue().encode("utf-8")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)
