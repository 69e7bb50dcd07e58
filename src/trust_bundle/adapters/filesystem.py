"""
Filesystem adapter — read install inputs and write rendered manifests.

Adapter layer — implements the FileFetcher and FileWriter ports on top of a
base directory (the installer's asset directory). File names are relative
to that directory, e.g. "install-config.yaml" or
"manifests/user-ca-bundle-config.yaml".
"""

from __future__ import annotations

from pathlib import Path

import structlog
from railway import ErrorCode
from railway.result import Result

from trust_bundle.domain.models import ManifestFile

log = structlog.get_logger()


class DiskFileFetcher:
    """
    Read files below a base directory.

    Implements the FileFetcher port. A missing file is NOT_FOUND;
    any other OS error is IO_ERROR.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    def fetch_by_name(self, name: str) -> Result[ManifestFile]:
        path = self._directory / name
        if not path.is_file():
            return Result.failure(ErrorCode.NOT_FOUND, f"{name} not found in {self._directory}")
        return Result.from_computation(
            lambda: ManifestFile(filename=name, data=path.read_bytes()),
            ErrorCode.IO_ERROR,
            f"Failed to read {path}",
        ).peek(lambda f: log.debug("files.fetched", filename=f.filename, size=len(f.data)))


class DiskFileWriter:
    """
    Write files below a base directory, creating parent directories as needed.

    Implements the FileWriter port. Existing files are overwritten.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    def write(self, files: list[ManifestFile]) -> Result[int]:
        """Returns Result[int] with the number of files written."""
        return Result.from_computation(
            lambda: self._write_all(files),
            ErrorCode.IO_ERROR,
            f"Failed to write files to {self._directory}",
        )

    def _write_all(self, files: list[ManifestFile]) -> int:
        for manifest_file in files:
            path = self._directory / manifest_file.filename
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(manifest_file.data)
            log.info("files.written", path=str(path), size=len(manifest_file.data))
        return len(files)
