"""
Pipeline — resolve the asset graph and write the produced files.

The store walks dependencies depth-first. Every asset is first offered the
chance to load itself from disk; only when that reports nothing loaded is it
generated from its resolved parents:

  fetch(target)
    → fetch(dependency) for each dependency   (memoised per asset type)
      → Parents
        → load(fetcher) ? loaded asset : generate(parents)
  run_pipeline
    → files() of every target
      → writer.write(files)

Each stage returns Result[T]. The first failure short-circuits the rest, so
nothing is written unless every target resolved.
"""

from __future__ import annotations

import structlog
from railway.result import Result

from trust_bundle.assets.parents import Parents
from trust_bundle.domain.models import ManifestFile
from trust_bundle.domain.ports import Asset, FileFetcher, FileWriter, WritableAsset

log = structlog.get_logger()


class AssetStore:
    """Resolves assets and caches each resolved instance by its type."""

    def __init__(self, fetcher: FileFetcher) -> None:
        self._fetcher = fetcher
        self._resolved: dict[type, Asset] = {}

    def fetch(self, asset: Asset) -> Result[Asset]:
        """
        Return the resolved instance of `asset`, generating it if needed.

        A type already resolved by an earlier fetch is returned from the
        cache, so shared dependencies are loaded once.
        """
        cached = self._resolved.get(type(asset))
        if cached is not None:
            return Result.success(cached)

        return (
            self._fetch_parents(asset)
            .flat_map(lambda parents: self._load_or_generate(asset, parents))
            .peek(self._remember)
        )

    def _fetch_parents(self, asset: Asset) -> Result[Parents]:
        parents = Parents()
        for dependency in asset.dependencies():
            resolved = self.fetch(dependency)
            if resolved.is_failure():
                return Result.failure_from(resolved.error())
            parents.add(resolved.value())
        return Result.success(parents)

    def _load_or_generate(self, asset: Asset, parents: Parents) -> Result[Asset]:
        if not isinstance(asset, WritableAsset):
            return asset.generate(parents)
        return asset.load(self._fetcher).flat_map(
            lambda loaded: Result.success(asset) if loaded else asset.generate(parents)
        )

    def _remember(self, asset: Asset) -> None:
        self._resolved[type(asset)] = asset
        log.debug("asset.resolved", asset=asset.name())


def _collect_files(assets: list[Asset]) -> list[ManifestFile]:
    files: list[ManifestFile] = []
    for asset in assets:
        if isinstance(asset, WritableAsset):
            files.extend(asset.files())
    return files


def run_pipeline(
    store: AssetStore,
    targets: list[Asset],
    writer: FileWriter,
) -> Result[int]:
    """
    Resolve every target asset and write the files they produced.

    Returns Result[int] with the number of files written (0 when every
    target is disabled), or the failure of the first target that failed.
    """
    return (
        Result.all_of([store.fetch(target) for target in targets])
        .map(_collect_files)
        .peek(lambda files: log.info("pipeline.files_collected", count=len(files)))
        .flat_map(writer.write)
    )
