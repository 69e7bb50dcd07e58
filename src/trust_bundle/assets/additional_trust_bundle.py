"""
Additional Trust Bundle Config asset — manifests/user-ca-bundle-config.yaml.

Renders the CA certificates from install-config's additionalTrustBundle into
the openshift-config/user-ca-bundle ConfigMap:

  InstallConfig.additional_trust_bundle
    → parse_certificates()   (CA-only PEM bundle)
    → ConfigMap              (data: {"ca-bundle.crt": ...})
    → serialize_manifest()   (YAML bytes)
    → ManifestFile

An empty additionalTrustBundle disables the asset: generation succeeds
without producing a ConfigMap or a file.
"""

from __future__ import annotations

from pathlib import PurePosixPath

import structlog
from railway.result import Result

from trust_bundle.adapters.pem_bundle import parse_certificates
from trust_bundle.adapters.yaml_manifest import serialize_manifest
from trust_bundle.assets.install_config import InstallConfigAsset
from trust_bundle.assets.parents import Parents
from trust_bundle.domain.models import ConfigMap, ManifestFile, ObjectMeta
from trust_bundle.domain.ports import Asset, FileFetcher

log = structlog.get_logger()

MANIFEST_DIR = "manifests"
ADDITIONAL_TRUST_BUNDLE_CONFIG_FILENAME = str(PurePosixPath(MANIFEST_DIR) / "user-ca-bundle-config.yaml")
ADDITIONAL_TRUST_BUNDLE_CONFIG_MAP_NAME = "user-ca-bundle"
ADDITIONAL_TRUST_BUNDLE_CONFIG_MAP_NAMESPACE = "openshift-config"


def build_config_map(data: dict[str, str]) -> ConfigMap:
    return ConfigMap(
        metadata=ObjectMeta(
            name=ADDITIONAL_TRUST_BUNDLE_CONFIG_MAP_NAME,
            namespace=ADDITIONAL_TRUST_BUNDLE_CONFIG_MAP_NAMESPACE,
        ),
        data=data,
    )


class AdditionalTrustBundleConfig:
    """
    Generates the user-ca-bundle ConfigMap manifest.

    After a successful generate(), `config_map` and `file` are both set, or
    both None when the install config carries no trust bundle.
    """

    def __init__(self) -> None:
        self.config_map: ConfigMap | None = None
        self.file: ManifestFile | None = None

    def name(self) -> str:
        return "Additional Trust Bundle Config"

    def dependencies(self) -> list[Asset]:
        return [InstallConfigAsset()]

    def generate(self, parents: Parents) -> Result[Asset]:
        install_config = parents.get(InstallConfigAsset).config
        if install_config is None or not install_config.additional_trust_bundle:
            log.info("asset.skipped", asset=self.name(), reason="additionalTrustBundle is empty")
            return Result.success(self)

        return (
            parse_certificates(install_config.additional_trust_bundle)
            .map(build_config_map)
            .flat_map(self._render)
            .map(lambda _: self)
        )

    def _render(self, config_map: ConfigMap) -> Result[ManifestFile]:
        return (
            serialize_manifest(config_map.to_manifest())
            .map_failure(
                lambda err: err.with_message(f"failed to create {self.name()} manifest: {err.exception}")
            )
            .map(lambda data: ManifestFile(filename=ADDITIONAL_TRUST_BUNDLE_CONFIG_FILENAME, data=data))
            .peek(lambda manifest_file: self._store(config_map, manifest_file))
        )

    def _store(self, config_map: ConfigMap, manifest_file: ManifestFile) -> None:
        self.config_map = config_map
        self.file = manifest_file
        log.info("asset.generated", asset=self.name(), filename=manifest_file.filename)

    def files(self) -> list[ManifestFile]:
        if self.file is not None:
            return [self.file]
        return []

    def load(self, fetcher: FileFetcher) -> Result[bool]:
        """Never reconstructed from disk; the asset is always regenerated."""
        return Result.success(False)
