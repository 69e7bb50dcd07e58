"""
Ports — Protocol-based interfaces between assets and infrastructure.

Assets form a dependency graph. Each asset names its dependencies, generates
itself from their resolved instances, and (when writable) exposes the files it
produced and knows how to reconstruct itself from files already on disk:

  AssetStore → Asset.dependencies() → load() or generate(parents) → files()
                                                                      ↓
                                                                 FileWriter

Each port is a Protocol (structural typing) so implementations satisfy the
contract simply by implementing the methods — no inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from railway.result import Result

from trust_bundle.domain.models import ManifestFile

if TYPE_CHECKING:
    from trust_bundle.assets.parents import Parents


@runtime_checkable
class FileFetcher(Protocol):
    """
    Port: read previously rendered or user-supplied files.

    Returns Result.failure(NOT_FOUND) when the file does not exist so callers
    can tell "absent" apart from "unreadable".
    """

    def fetch_by_name(self, name: str) -> Result[ManifestFile]: ...


@runtime_checkable
class FileWriter(Protocol):
    """Port: persist generated files. Returns the number of files written."""

    def write(self, files: list[ManifestFile]) -> Result[int]: ...


@runtime_checkable
class Asset(Protocol):
    """
    Port: a node of the asset graph.

    `generate` receives the already-resolved dependencies and returns the
    asset itself on success, so generation chains with flat_map.
    """

    def name(self) -> str: ...

    def dependencies(self) -> list[Asset]: ...

    def generate(self, parents: Parents) -> Result[Asset]: ...


@runtime_checkable
class WritableAsset(Asset, Protocol):
    """
    Port: an asset that produces files.

    `load` returns Success(True) when the asset was reconstructed from disk
    and generation can be skipped, Success(False) when it must be generated.
    """

    def files(self) -> list[ManifestFile]: ...

    def load(self, fetcher: FileFetcher) -> Result[bool]: ...
