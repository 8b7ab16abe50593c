import os
import secrets
import tempfile
from pathlib import Path

from originality.formats import require_supported, split_extension
from originality.logging.logger import Log
from originality.storage.exceptions import ArtifactNotFoundError, StorageIOError
from originality.storage.models import StoredArtifact
from originality.storage.sanitizer import sanitize_component

REPORT_SUFFIX = "-report.txt"
TOKEN_BYTES = 16


def assignment_dir(course_name: str, assignment_title: str) -> str:
    """Relative directory for an assignment: {course}/{assignment}"""
    return f"{sanitize_component(course_name)}/{sanitize_component(assignment_title)}"


def report_filename(original_filename: str) -> str:
    """Report name derived from the original upload: {stem}-report.txt"""
    stem, _ext = split_extension(original_filename)
    return f"{sanitize_component(stem or 'submission')}{REPORT_SUFFIX}"


class ArtifactStore:
    """Persists uploaded originals and generated reports on local disk.

    Layout under base_dir:
        {course}/{assignment}/{random hex}{ext}   original uploads
        {course}/{assignment}/{stem}-report.txt   analysis reports
    """

    BASE_DIR = Path("uploads")

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir if base_dir is not None else self.BASE_DIR

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def store_original(
        self,
        course_name: str,
        assignment_title: str,
        original_filename: str,
        content: bytes,
    ) -> StoredArtifact:
        """Write an uploaded file under a random, collision-free name.

        Raises:
            UnsupportedFormatError: if the extension is not supported (no I/O done).
            StorageIOError: if the directory or file cannot be written.
        """
        require_supported(original_filename)
        _stem, ext = split_extension(original_filename)
        relative_dir = assignment_dir(course_name, assignment_title)
        relative_path = f"{relative_dir}/{secrets.token_hex(TOKEN_BYTES)}{ext}"

        self._write_atomic(relative_path, content)
        Log.info(
            f"Stored original upload ({len(content)} bytes)",
            relative_path=relative_path,
        )
        return StoredArtifact(relative_path=relative_path, base_dir=self._base_dir)

    def store_report(
        self,
        course_name: str,
        assignment_title: str,
        original_filename: str,
        report_text: str,
    ) -> StoredArtifact:
        """Write a report next to the upload; an existing report is replaced.

        Raises:
            StorageIOError: if the directory or file cannot be written.
        """
        relative_dir = assignment_dir(course_name, assignment_title)
        relative_path = f"{relative_dir}/{report_filename(original_filename)}"

        self._write_atomic(relative_path, report_text.encode("utf-8"))
        Log.info("Stored report", relative_path=relative_path)
        return StoredArtifact(relative_path=relative_path, base_dir=self._base_dir)

    def resolve(self, relative_path: str) -> Path:
        """Join a previously returned relative path onto the base directory."""
        return self._base_dir / relative_path

    def retrieve(self, path: Path) -> bytes:
        """Read a stored artifact.

        Raises:
            ArtifactNotFoundError: if nothing exists at path.
            StorageIOError: if the file exists but cannot be read.
        """
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise ArtifactNotFoundError(f"Artifact not found: {path}") from exc
        except OSError as exc:
            raise StorageIOError(f"Failed to read {path}: {exc}") from exc

    def _write_atomic(self, relative_path: str, content: bytes) -> None:
        target = self.resolve(relative_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(content)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageIOError(f"Failed to write {target}: {exc}") from exc
