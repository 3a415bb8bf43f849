"""Writing parsed file records to the output directory."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from promptfiles.components.types import FileRecord, FileWriteOutcome, MaterializeResult
from promptfiles.constants import DIR_MODE, FILE_MODE
from promptfiles.parsers import FileRecordsParser, ParseError

logger = logging.getLogger(__name__)


class MaterializeError(Exception):
    """Raised when the output directory itself cannot be prepared."""

    pass


class UnsafePathError(ValueError):
    """Raised when a record name resolves outside the output directory."""

    pass


class FileMaterializer:
    """Projects generated file records onto a directory tree."""

    def __init__(self, output_dir: Union[str, Path], parser: Optional[FileRecordsParser] = None):
        self.output_dir = Path(output_dir)
        self.parser = parser or FileRecordsParser()

    def materialize(self, response_text: str) -> MaterializeResult:
        """Parse a raw response and write every record it contains.

        A response that fails to parse writes nothing and is reported through
        ``parse_error`` on the result.

        Raises:
            MaterializeError: If the output directory cannot be created
        """
        try:
            records = self.parser.parse(response_text)
        except ParseError as e:
            logger.error("Failed to parse response: %s", e)
            return MaterializeResult(output_dir=self.output_dir, parse_error=e)

        return self.write_records(records)

    def write_records(self, records: list[FileRecord]) -> MaterializeResult:
        """Write records in order, continuing past per-record failures."""
        try:
            self.output_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise MaterializeError(f"Error creating output directory {self.output_dir}: {e}") from e

        result = MaterializeResult(output_dir=self.output_dir)
        for index, record in enumerate(records, start=1):
            result.outcomes.append(self._write_record(index, record))

        logger.info("Wrote %d of %d file(s) to %s", len(result.written), result.attempted, self.output_dir)
        return result

    def resolve_target(self, name: str) -> Path:
        """Return the absolute target path for a record name.

        Raises:
            UnsafePathError: If the name does not point to a file inside the output directory
        """
        root = self.output_dir.resolve()
        try:
            target = (root / name).resolve()
        except (OSError, RuntimeError, ValueError) as e:
            raise UnsafePathError(f"path {name!r} cannot be resolved: {e}") from e
        if target == root or root not in target.parents:
            raise UnsafePathError(f"path {name!r} is outside the output directory")
        return target

    def _write_record(self, index: int, record: FileRecord) -> FileWriteOutcome:
        outcome = FileWriteOutcome(index=index, name=record.name)

        try:
            outcome.path = self.resolve_target(record.name)
        except UnsafePathError as e:
            logger.warning("Skipping %s: %s", record.name, e)
            outcome.error = str(e)
            return outcome

        try:
            outcome.path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Error creating directory for %s: %s", record.name, e)
            outcome.error = f"cannot create directory: {e}"
            return outcome

        try:
            self._write_file(outcome.path, record.code)
        except (OSError, UnicodeError) as e:
            logger.warning("Error writing file %s: %s", record.name, e)
            outcome.error = f"cannot write file: {e}"
            return outcome

        logger.debug("Wrote %s", outcome.path)
        return outcome

    def _write_file(self, path: Path, content: str) -> None:
        # Encode before opening so an unencodable record leaves existing files untouched
        data = content.encode("utf-8")

        # Mode applies on creation only; existing files are truncated in place
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
