"""
PreMerge Local File Source

Feeds files and directories on disk to the scan orchestrator, for running
the same checks before pushing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, Sequence

from premerge.core.orchestrator import ChangedFile, FetchError, ScanInput

# Binary file extensions to skip
BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".webp",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    ".zip", ".tar", ".gz", ".rar", ".7z",
    ".exe", ".dll", ".so", ".dylib",
    ".woff", ".woff2", ".ttf", ".eot",
    ".mp3", ".mp4", ".avi", ".mov", ".wav",
    ".pyc", ".pyo", ".class", ".o",
}


class LocalFileSource:
    """
    File source over paths on disk. Directories are walked recursively,
    skipping any path with a component listed in ``exclude_dirs``.
    """

    def __init__(
        self,
        paths: Sequence[Path],
        exclude_dirs: Optional[Sequence[str]] = None,
        base_path: Optional[Path] = None,
    ) -> None:
        self.paths = [Path(p) for p in paths]
        self.exclude_dirs = set(exclude_dirs or [])
        self.base_path = base_path

    def list_files(self) -> Iterator[ChangedFile]:
        for path in self.paths:
            for file_path in self._iter_files(path):
                yield ChangedFile(filename=self._display_path(file_path), status="added")

    def fetch(self, changed: ChangedFile) -> ScanInput:
        file_path = self._resolve(changed.filename)

        if file_path.suffix.lower() in BINARY_EXTENSIONS:
            raise FetchError("binary file")

        try:
            raw = file_path.read_bytes()
        except OSError as exc:
            raise FetchError(str(exc)) from exc

        if b"\x00" in raw[:1024]:
            raise FetchError("binary file")

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError(f"could not decode content: {exc}") from exc

        return ScanInput(filename=changed.filename, content=content)

    def _iter_files(self, path: Path) -> Iterator[Path]:
        """Iterate over all files under ``path``, in a stable order."""
        if path.is_file():
            yield path
            return

        for file_path in sorted(path.rglob("*")):
            if not file_path.is_file():
                continue
            if self.exclude_dirs.intersection(file_path.relative_to(path).parts[:-1]):
                continue
            yield file_path

    def _display_path(self, file_path: Path) -> str:
        if self.base_path:
            try:
                return file_path.relative_to(self.base_path).as_posix()
            except ValueError:
                pass
        return file_path.as_posix()

    def _resolve(self, filename: str) -> Path:
        path = Path(filename)
        if self.base_path and not path.is_absolute():
            return self.base_path / path
        return path
