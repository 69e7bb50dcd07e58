"""Unit tests for the disk FileFetcher / FileWriter adapters."""

from __future__ import annotations

from pathlib import Path

from railway import ErrorCode, ResultAssertions

from trust_bundle.adapters.filesystem import DiskFileFetcher, DiskFileWriter
from trust_bundle.domain.models import ManifestFile
from trust_bundle.domain.ports import FileFetcher, FileWriter


class TestDiskFileFetcher:
    def test_satisfies_port(self, tmp_path: Path) -> None:
        assert isinstance(DiskFileFetcher(tmp_path), FileFetcher)

    def test_reads_existing_file(self, tmp_path: Path) -> None:
        (tmp_path / "install-config.yaml").write_bytes(b"baseDomain: example.com\n")
        fetched = ResultAssertions.assert_success(
            DiskFileFetcher(tmp_path).fetch_by_name("install-config.yaml")
        )
        assert fetched == ManifestFile(filename="install-config.yaml", data=b"baseDomain: example.com\n")

    def test_missing_file_is_not_found(self, tmp_path: Path) -> None:
        result = DiskFileFetcher(tmp_path).fetch_by_name("install-config.yaml")
        ResultAssertions.assert_failure(result, ErrorCode.NOT_FOUND)

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        (tmp_path / "manifests").mkdir()
        result = DiskFileFetcher(tmp_path).fetch_by_name("manifests")
        ResultAssertions.assert_failure(result, ErrorCode.NOT_FOUND)


class TestDiskFileWriter:
    def test_satisfies_port(self, tmp_path: Path) -> None:
        assert isinstance(DiskFileWriter(tmp_path), FileWriter)

    def test_writes_nested_files(self, tmp_path: Path) -> None:
        """
        GIVEN a file under a directory that does not exist yet
        WHEN written
        THEN the directory is created and the count is returned.
        """
        files = [
            ManifestFile(filename="manifests/user-ca-bundle-config.yaml", data=b"kind: ConfigMap\n"),
            ManifestFile(filename="manifests/other.yaml", data=b"kind: Secret\n"),
        ]
        written = ResultAssertions.assert_success(DiskFileWriter(tmp_path).write(files))
        assert written == 2
        assert (tmp_path / "manifests" / "user-ca-bundle-config.yaml").read_bytes() == b"kind: ConfigMap\n"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "manifests" / "a.yaml"
        target.parent.mkdir()
        target.write_bytes(b"old")
        DiskFileWriter(tmp_path).write([ManifestFile(filename="manifests/a.yaml", data=b"new")])
        assert target.read_bytes() == b"new"

    def test_nothing_to_write(self, tmp_path: Path) -> None:
        assert ResultAssertions.assert_success(DiskFileWriter(tmp_path).write([])) == 0
        assert list(tmp_path.iterdir()) == []

    def test_os_error_is_io_error(self, tmp_path: Path) -> None:
        """
        GIVEN a regular file where a directory is needed
        WHEN writing below it
        THEN IO_ERROR is returned instead of raising.
        """
        (tmp_path / "manifests").write_bytes(b"not a directory")
        result = DiskFileWriter(tmp_path).write([ManifestFile(filename="manifests/a.yaml", data=b"x")])
        error = ResultAssertions.assert_failure(result, ErrorCode.IO_ERROR)
        assert isinstance(error.exception, OSError)
