import os
import time
import uuid
from pathlib import Path

from cvchat.processor.exceptions import UploadFileMissingError


def stored_file_path(files_root: Path, ref: str) -> Path:
    """Resolve a stored-file reference under files_root, refusing escapes."""
    root = files_root.resolve()
    path = (root / ref).resolve()
    if root not in path.parents:
        raise ValueError(f"File reference escapes the files root: {ref!r}")
    return path


class LocalFileStore:
    """Transient byte store on local disk: {files_root}/{owner_id}/{uuid}{suffix}."""

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root
        self._files_root.mkdir(parents=True, exist_ok=True)

    def store(self, content: bytes, owner_id: str, filename: str) -> str:
        """Write bytes under a fresh reference and return it."""
        if not owner_id or "/" in owner_id or "\\" in owner_id or owner_id in {".", ".."}:
            raise ValueError(f"Invalid owner id for storage: {owner_id!r}")
        suffix = Path(filename).suffix.lower() or ".pdf"
        ref = f"{owner_id}/{uuid.uuid4()}{suffix}"
        path = stored_file_path(self._files_root, ref)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f".{path.name}.part")
        tmp_path.write_bytes(content)
        os.replace(tmp_path, path)
        return ref

    def exists(self, ref: str) -> bool:
        return stored_file_path(self._files_root, ref).is_file()

    def read(self, ref: str) -> bytes:
        """Read stored bytes.

        Raises:
            UploadFileMissingError: if nothing is stored under ref.
        """
        path = stored_file_path(self._files_root, ref)
        if not path.is_file():
            raise UploadFileMissingError(f"File not found: {ref}")
        return path.read_bytes()

    def delete(self, ref: str) -> None:
        stored_file_path(self._files_root, ref).unlink(missing_ok=True)

    def list_refs(self, older_than_seconds: int = 0) -> list[str]:
        """References of stored files last modified more than older_than_seconds ago."""
        cutoff = time.time() - older_than_seconds
        refs = []
        for path in sorted(self._files_root.glob("*/*")):
            if not path.is_file() or path.name.startswith("."):
                continue
            if path.stat().st_mtime <= cutoff:
                refs.append(path.relative_to(self._files_root).as_posix())
        return refs
