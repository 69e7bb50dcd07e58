"""
YAML manifest adapter — render and read Kubernetes manifests with PyYAML.

Output matches the installer's JSON-to-YAML marshalling: keys sorted,
block style throughout, and multi-line strings (PEM bundles) written as
literal block scalars so certificates stay readable in the manifest.
"""

from __future__ import annotations

from typing import Any

import yaml
from railway import ErrorCode
from railway.result import Result


class _ManifestDumper(yaml.SafeDumper):
    """SafeDumper that emits multi-line strings in literal (|) style."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_ManifestDumper.add_representer(str, _represent_str)


def serialize_manifest(manifest: dict[str, Any]) -> Result[bytes]:
    """
    Serialize a manifest mapping to UTF-8 YAML.

    Returns Result.failure(SERIALIZATION_ERROR) if PyYAML rejects any value.
    """
    return Result.from_computation(
        lambda: yaml.dump(
            manifest,
            Dumper=_ManifestDumper,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
        ).encode("utf-8"),
        ErrorCode.SERIALIZATION_ERROR,
        "Failed to serialize manifest to YAML",
    )


def _safe_load(data: bytes) -> Any:
    document = yaml.safe_load(data)
    return {} if document is None else document


def load_manifest(data: bytes) -> Result[dict[str, Any]]:
    """
    Parse a single YAML document that must be a mapping.

    An empty document is treated as an empty mapping.
    """
    return (
        Result.from_computation(
            lambda: _safe_load(data),
            ErrorCode.PARSE_ERROR,
            "Failed to parse YAML document",
        )
        .ensure(
            lambda document: isinstance(document, dict),
            ErrorCode.PARSE_ERROR,
            "YAML document must be a mapping",
        )
    )
