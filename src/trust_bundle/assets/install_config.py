"""
Install Config asset — the user-supplied install-config.yaml.

Only the fields the manifest assets consume are modelled; every other key of
the document is ignored. The document is validated with pydantic so a wrong
type surfaces as a VALIDATION_ERROR naming the offending field.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from railway import ErrorCode
from railway.result import Result

from trust_bundle.adapters.yaml_manifest import load_manifest
from trust_bundle.assets.parents import Parents
from trust_bundle.domain.models import InstallConfig, ManifestFile
from trust_bundle.domain.ports import Asset, FileFetcher

log = structlog.get_logger()

INSTALL_CONFIG_FILENAME = "install-config.yaml"


class _InstallConfigDocument(BaseModel):
    """Schema for the subset of install-config.yaml read by this package."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    additional_trust_bundle: str = Field(default="", alias="additionalTrustBundle")

    @field_validator("additional_trust_bundle", mode="before")
    @classmethod
    def null_means_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_domain(self) -> InstallConfig:
        return InstallConfig(additional_trust_bundle=self.additional_trust_bundle)


def _validate(document: dict[str, Any]) -> Result[InstallConfig]:
    return (
        Result.from_computation(
            lambda: _InstallConfigDocument.model_validate(document).to_domain(),
            ErrorCode.VALIDATION_ERROR,
            f"invalid {INSTALL_CONFIG_FILENAME}",
        )
        .map_failure(lambda err: err.with_message(f"{err.message}: {err.exception}"))
    )


class InstallConfigAsset:
    """
    Provides the parsed InstallConfig to dependent assets.

    The config is read from disk by load(); generate() only succeeds when a
    config is already present, since there is nothing to generate it from.
    """

    def __init__(self, config: InstallConfig | None = None) -> None:
        self.config = config

    def name(self) -> str:
        return "Install Config"

    def dependencies(self) -> list[Asset]:
        return []

    def generate(self, parents: Parents) -> Result[Asset]:
        if self.config is None:
            return Result.failure(
                ErrorCode.CONFIGURATION_ERROR,
                f"{INSTALL_CONFIG_FILENAME} is required but was not found in the asset directory",
            )
        return Result.success(self)

    def files(self) -> list[ManifestFile]:
        return []

    def load(self, fetcher: FileFetcher) -> Result[bool]:
        """
        Read and validate install-config.yaml.

        Returns Success(False) when the file does not exist; malformed YAML is
        a PARSE_ERROR and a schema violation a VALIDATION_ERROR.
        """
        if self.config is not None:
            return Result.success(True)
        return (
            fetcher.fetch_by_name(INSTALL_CONFIG_FILENAME)
            .flat_map(lambda f: load_manifest(f.data))
            .map_failure(
                lambda err: err
                if err.code is ErrorCode.NOT_FOUND
                else err.with_message(f"{INSTALL_CONFIG_FILENAME}: {err.message}")
            )
            .flat_map(_validate)
            .peek(self._set_config)
            .map(lambda _: True)
            .recover(lambda _: False, only=ErrorCode.NOT_FOUND)
        )

    def _set_config(self, config: InstallConfig) -> None:
        self.config = config
        log.info(
            "asset.loaded",
            asset=self.name(),
            additional_trust_bundle=bool(config.additional_trust_bundle),
        )
