"""
Domain models — immutable value objects for install configuration and manifests.

All models are frozen dataclasses. Serialization to YAML lives in the
adapters; models only know how to present themselves as plain mappings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class PemBlock:
    """
    A decoded PEM block.

    `type` is the label from the BEGIN line (e.g. "CERTIFICATE"), `der` the
    base64-decoded payload. Optional RFC 1421 headers are kept so the block
    can be re-encoded faithfully.
    """

    type: str
    der: bytes = field(repr=False)
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class InstallConfig:
    """The part of install-config.yaml consumed by the manifest assets."""

    additional_trust_bundle: str = ""


@dataclass(frozen=True, slots=True)
class ObjectMeta:
    name: str
    namespace: str


@dataclass(frozen=True, slots=True)
class ConfigMap:
    """
    A core/v1 ConfigMap.

    `data` is copied into the manifest verbatim, so keys with empty values
    are kept.
    """

    metadata: ObjectMeta
    data: dict[str, str] = field(default_factory=dict)
    api_version: str = "v1"
    kind: str = "ConfigMap"

    def to_manifest(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": {
                "name": self.metadata.name,
                "namespace": self.metadata.namespace,
            },
            "data": dict(self.data),
        }


@dataclass(frozen=True, slots=True)
class ManifestFile:
    """A file produced by an asset or read back from disk; `filename` is relative."""

    filename: str
    data: bytes = field(repr=False)
