"""
Unit tests for the Additional Trust Bundle Config asset.

Test categories:
  - Disabled: empty additionalTrustBundle → no ConfigMap, no file
  - Generated: ConfigMap identity, filtered data, rendered file
  - Failure: parse/decode/serialization errors leave no file behind
  - load() never reconstructs from disk
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import yaml
from railway import ErrorCode, Result, ResultAssertions

from trust_bundle.assets import AdditionalTrustBundleConfig, InstallConfigAsset, Parents
from trust_bundle.domain.models import InstallConfig
from trust_bundle.domain.ports import WritableAsset


def _parents(bundle: str) -> Parents:
    return Parents([InstallConfigAsset(InstallConfig(additional_trust_bundle=bundle))])


class TestDisabled:
    def test_empty_bundle_generates_nothing(self) -> None:
        """
        GIVEN an install config without additionalTrustBundle
        WHEN generate is called
        THEN it succeeds with no ConfigMap and no files.
        """
        asset = AdditionalTrustBundleConfig()
        assert ResultAssertions.assert_success(asset.generate(_parents(""))) is asset
        assert asset.config_map is None
        assert asset.files() == []


class TestGenerated:
    def test_config_map_identity(self, pki) -> None:
        asset = AdditionalTrustBundleConfig()
        ResultAssertions.assert_success(asset.generate(_parents(pki.root_ca)))
        assert asset.config_map is not None
        assert asset.config_map.api_version == "v1"
        assert asset.config_map.kind == "ConfigMap"
        assert asset.config_map.metadata.name == "user-ca-bundle"
        assert asset.config_map.metadata.namespace == "openshift-config"

    def test_only_ca_certificates_are_kept(self, pki) -> None:
        """
        GIVEN a CA certificate followed by a leaf certificate
        WHEN generate is called
        THEN the ConfigMap data holds only the CA.
        """
        asset = AdditionalTrustBundleConfig()
        ResultAssertions.assert_success(asset.generate(_parents(pki.root_ca + pki.leaf)))
        assert asset.config_map is not None
        assert asset.config_map.data == {"ca-bundle.crt": pki.root_ca}

    def test_renders_single_file(self, pki) -> None:
        asset = AdditionalTrustBundleConfig()
        ResultAssertions.assert_success(asset.generate(_parents(pki.intermediate_ca + pki.root_ca)))
        [manifest_file] = asset.files()
        assert manifest_file.filename == "manifests/user-ca-bundle-config.yaml"
        assert yaml.safe_load(manifest_file.data) == {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": {"name": "user-ca-bundle", "namespace": "openshift-config"},
            "data": {"ca-bundle.crt": pki.intermediate_ca + pki.root_ca},
        }

    def test_no_ca_still_renders_empty_key(self, pki) -> None:
        """
        GIVEN only a leaf certificate
        WHEN generate is called
        THEN the manifest is written with an empty ca-bundle.crt.
        """
        asset = AdditionalTrustBundleConfig()
        ResultAssertions.assert_success(asset.generate(_parents(pki.leaf)))
        [manifest_file] = asset.files()
        assert yaml.safe_load(manifest_file.data)["data"] == {"ca-bundle.crt": ""}


class TestFailures:
    def test_unparseable_bundle(self) -> None:
        asset = AdditionalTrustBundleConfig()
        result = asset.generate(_parents("not a certificate"))
        ResultAssertions.assert_failure(result, ErrorCode.PARSE_ERROR)
        ResultAssertions.assert_failure_message_contains(result, "additionalTrustBundle")
        assert asset.files() == []
        assert asset.config_map is None

    def test_corrupt_certificate(self, pki, corrupt_certificate_pem) -> None:
        asset = AdditionalTrustBundleConfig()
        result = asset.generate(_parents(pki.root_ca + corrupt_certificate_pem))
        ResultAssertions.assert_failure(result, ErrorCode.CERTIFICATE_DECODE_ERROR)
        assert asset.files() == []

    def test_serialization_failure_names_the_asset(self, pki) -> None:
        """
        GIVEN the YAML serializer fails
        WHEN generate is called
        THEN SERIALIZATION_ERROR mentioning the asset, cause preserved.
        """
        cause = RuntimeError("representer exploded")
        failing = Result.failure(ErrorCode.SERIALIZATION_ERROR, "Failed to serialize manifest to YAML", cause)
        with patch(
            "trust_bundle.assets.additional_trust_bundle.serialize_manifest",
            return_value=failing,
        ):
            asset = AdditionalTrustBundleConfig()
            result = asset.generate(_parents(pki.root_ca))

        error = ResultAssertions.assert_failure(result, ErrorCode.SERIALIZATION_ERROR)
        assert error.message == "failed to create Additional Trust Bundle Config manifest: representer exploded"
        assert error.exception is cause
        assert asset.files() == []


class TestAssetContract:
    def test_name(self) -> None:
        assert AdditionalTrustBundleConfig().name() == "Additional Trust Bundle Config"

    def test_depends_on_install_config(self) -> None:
        [dependency] = AdditionalTrustBundleConfig().dependencies()
        assert isinstance(dependency, InstallConfigAsset)

    def test_load_never_reconstructs(self) -> None:
        fetcher = MagicMock()
        result = AdditionalTrustBundleConfig().load(fetcher)
        assert ResultAssertions.assert_success(result) is False
        fetcher.fetch_by_name.assert_not_called()

    def test_is_writable_asset(self) -> None:
        assert isinstance(AdditionalTrustBundleConfig(), WritableAsset)
