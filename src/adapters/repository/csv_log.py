"""
CSV log repository adapter - Implements RegistrationStore protocol.

This module provides the append-only CSV implementation of the domain's
store port. The file is the durable source of truth for who is registered.

On-disk contract:
-----------------
- One header row, then one row per registration, in fixed column order:
  ID, Timestamp, Name, Student Email, Parent Email, School, Grade, Age,
  Country, Experience, Motivation
- String fields are quoted, numeric fields (grade, age) unquoted
- Timestamps use ``YYYY-MM-DD HH:MM:SS``

Older files were written with camelCase field-name headers (``studentEmail``)
instead of the title-cased ones. The read path maps every known header
spelling onto the same logical field, so both remain readable.

Rows are only ever appended. Nothing in this module rewrites or deletes them.
"""

import csv
import io
import logging
import os
import re
import threading
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from src.domain.exceptions import StorageError
from src.domain.ports import RegistrationRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# (record attribute, header title) in on-disk column order
COLUMNS = (
    ("id", "ID"),
    ("created_at", "Timestamp"),
    ("name", "Name"),
    ("student_email", "Student Email"),
    ("parent_email", "Parent Email"),
    ("school", "School"),
    ("grade", "Grade"),
    ("age", "Age"),
    ("country", "Country"),
    ("experience", "Experience"),
    ("motivation", "Motivation"),
)

HEADER = [title for _, title in COLUMNS]

# Header spellings seen across file versions, keyed by their squashed form
# (lowercase, no spaces or underscores).
_HEADER_ALIASES = {
    "id": "id",
    "timestamp": "created_at",
    "createdat": "created_at",
    "name": "name",
    "fullname": "name",
    "studentemail": "student_email",
    "email": "student_email",
    "parentemail": "parent_email",
    "school": "school",
    "grade": "grade",
    "age": "age",
    "country": "country",
    "experience": "experience",
    "previousexperience": "experience",
    "motivation": "motivation",
}

_REQUIRED = ("id", "student_email")


def canonical_field(header: str) -> str | None:
    """Map a header cell onto its logical field name, or None if unknown."""
    squashed = re.sub(r"[\s_]+", "", header).lower()
    return _HEADER_ALIASES.get(squashed)


def _parse_timestamp(value: str) -> datetime:
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.fromisoformat(value)


def _to_row(record: RegistrationRecord) -> list[object]:
    return [
        record.id,
        record.created_at.strftime(TIMESTAMP_FORMAT),
        record.name,
        record.student_email,
        record.parent_email,
        record.school,
        record.grade,
        record.age,
        record.country,
        record.experience,
        record.motivation,
    ]


class CsvRegistrationStore:
    """
    Implements RegistrationStore protocol via an append-only CSV file.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Appends and reads are serialized behind one lock per store instance.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize store for a CSV file path.

        The file itself is created lazily by the first append.

        Args:
            path: Location of the registrations CSV file
        """
        self._path = Path(path)
        self._lock = threading.RLock()

    @classmethod
    def open(cls, path: str | Path) -> "CsvRegistrationStore":
        """
        Create a store, making sure the file's parent directory exists.

        Args:
            path: Location of the registrations CSV file

        Raises:
            StorageError: If the parent directory cannot be created
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create directory for {path.name}") from e
        logger.info(f"Registration store ready: {path}")
        return cls(path)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, record: RegistrationRecord) -> None:
        """
        Append one record, writing the header first if the file is new.

        The row is flushed and fsynced before returning.

        Args:
            record: Registration to persist

        Raises:
            StorageError: If the file cannot be written
        """
        with self._lock:
            try:
                is_new = not self._path.exists() or self._path.stat().st_size == 0
                with self._path.open("a", newline="", encoding="utf-8") as f:
                    writer = csv.writer(f, quoting=csv.QUOTE_NONNUMERIC)
                    if is_new:
                        writer.writerow(HEADER)
                    writer.writerow(_to_row(record))
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                logger.error(f"Failed to append registration {record.id} to {self._path}: {e}")
                raise StorageError("Failed to store registration") from e

    def scan_all(self) -> Iterator[RegistrationRecord]:
        """
        Yield every stored record, starting from the beginning of the file.

        Each call re-reads the file. A missing file yields nothing.

        Raises:
            StorageError: If the file cannot be read or a row is malformed
        """
        with self._lock:
            try:
                # newline="" keeps \r inside quoted fields intact
                with self._path.open(newline="", encoding="utf-8") as f:
                    content = f.read()
            except FileNotFoundError:
                return
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read registrations from {self._path}: {e}")
                raise StorageError("Failed to read registrations") from e

        yield from self._parse(content)

    def _parse(self, content: str) -> Iterator[RegistrationRecord]:
        reader = csv.reader(io.StringIO(content, newline=""))
        try:
            header = next(reader, None)
            if header is None:
                return
            fields = [canonical_field(cell) for cell in header]
            missing = [name for name in _REQUIRED if name not in fields]
            if missing:
                raise StorageError(f"Unrecognized header, missing columns: {', '.join(missing)}")

            for row in reader:
                if not any(cell.strip() for cell in row):
                    continue
                values = {
                    name: cell for name, cell in zip(fields, row, strict=False) if name is not None
                }
                yield self._to_record(values, reader.line_num)
        except csv.Error as e:
            raise StorageError(f"Malformed CSV near line {reader.line_num}") from e

    def _to_record(self, values: dict[str, str], line: int) -> RegistrationRecord:
        try:
            return RegistrationRecord(
                id=values["id"],
                created_at=_parse_timestamp(values.get("created_at", "")),
                name=values.get("name", ""),
                student_email=values["student_email"],
                parent_email=values.get("parent_email", ""),
                school=values.get("school", ""),
                grade=int(values.get("grade", "")),
                age=int(values.get("age", "")),
                country=values.get("country", ""),
                experience=values.get("experience", ""),
                motivation=values.get("motivation", ""),
            )
        except (KeyError, ValueError) as e:
            raise StorageError(f"Malformed registration at line {line}") from e
