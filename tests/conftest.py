"""
Shared test fixtures for the trust-bundle test suite.

Certificates are minted at test time with cryptography's CertificateBuilder
so every scenario (root CA, intermediate CA, leaf, certificate without
BasicConstraints) is explicit and nothing depends on expiring fixture files.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import structlog
import yaml
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID


@dataclass(frozen=True)
class Pki:
    """PEM texts of a small certificate hierarchy."""

    root_ca: str
    intermediate_ca: str
    leaf: str
    unconstrained: str
    private_key: str


def _name(common_name: str) -> x509.Name:
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


def _issue(
    common_name: str,
    *,
    ca: bool | None,
    issuer: tuple[x509.Name, ec.EllipticCurvePrivateKey] | None = None,
) -> tuple[x509.Certificate, ec.EllipticCurvePrivateKey]:
    """Issue a certificate; ca=None omits the BasicConstraints extension entirely."""
    key = ec.generate_private_key(ec.SECP256R1())
    subject = _name(common_name)
    issuer_name, issuer_key = issuer if issuer is not None else (subject, key)
    now = datetime.now(UTC)
    builder = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer_name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
    )
    if ca is not None:
        builder = builder.add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
    return builder.sign(issuer_key, hashes.SHA256()), key


def _pem(certificate: x509.Certificate) -> str:
    return certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture(scope="session")
def pki() -> Pki:
    """Root CA → intermediate CA → leaf, plus a self-signed cert without BasicConstraints."""
    root, root_key = _issue("Test Root CA", ca=True)
    intermediate, intermediate_key = _issue("Test Intermediate CA", ca=True, issuer=(root.subject, root_key))
    leaf, _ = _issue("api.cluster.example.com", ca=False, issuer=(intermediate.subject, intermediate_key))
    unconstrained, _ = _issue("Legacy Self-Signed", ca=None)
    private_key = root_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("ascii")
    return Pki(
        root_ca=_pem(root),
        intermediate_ca=_pem(intermediate),
        leaf=_pem(leaf),
        unconstrained=_pem(unconstrained),
        private_key=private_key,
    )


@pytest.fixture()
def corrupt_certificate_pem() -> str:
    """Valid PEM framing around a payload that is not DER X.509."""
    return "-----BEGIN CERTIFICATE-----\nAAAAAAAA\n-----END CERTIFICATE-----\n"


@pytest.fixture()
def write_install_config(tmp_path: Path):
    """Write an install-config.yaml into tmp_path; returns the directory."""

    def _write(additional_trust_bundle: str | None = None, **extra: object) -> Path:
        document: dict[str, object] = {
            "apiVersion": "v1",
            "baseDomain": "example.com",
            "metadata": {"name": "test-cluster"},
            **extra,
        }
        if additional_trust_bundle is not None:
            document["additionalTrustBundle"] = additional_trust_bundle
        (tmp_path / "install-config.yaml").write_text(yaml.safe_dump(document))
        return tmp_path

    return _write


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
