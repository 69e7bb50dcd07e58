"""Concrete assets of the manifest graph."""

from trust_bundle.assets.additional_trust_bundle import AdditionalTrustBundleConfig
from trust_bundle.assets.install_config import InstallConfigAsset
from trust_bundle.assets.parents import Parents

__all__ = [
    "AdditionalTrustBundleConfig",
    "InstallConfigAsset",
    "Parents",
]
