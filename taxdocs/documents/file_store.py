import uuid
from pathlib import Path

from taxdocs.documents.exceptions import FileReadError


def stored_file_name(original_name: str) -> str:
    """Build a collision-free name: {uuid4}{original suffix}."""
    suffix = Path(original_name or "").suffix.lower()
    return f"{uuid.uuid4()}{suffix}"


class FileStore:
    """Writes uploaded bytes under a root directory and reads them back."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def save(self, payload: bytes, original_name: str) -> Path:
        """Write payload to a new uniquely named file and return its path."""
        self._root.mkdir(parents=True, exist_ok=True)
        path = self._root / stored_file_name(original_name)
        path.write_bytes(payload)
        return path

    def load(self, storage_path: str) -> bytes:
        """Read stored bytes.

        Raises:
            FileReadError: if the file is missing or unreadable.
        """
        path = Path(storage_path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read stored file {path}: {exc}") from exc

    def delete(self, storage_path: str | Path) -> None:
        Path(storage_path).unlink(missing_ok=True)
