"""
PEM bundle adapter — split a PEM bundle and keep only CA certificates.

Adapter layer — implements the certificate filter behind the
Additional Trust Bundle Config asset using:
  - asn1crypto.pem: PEM unarmoring and re-armoring of individual blocks
  - cryptography (PyCA): X.509 parsing and BasicConstraints inspection

Pipeline:
  bundle text
    → decode_block(): next PEM block + unconsumed remainder
    → cryptography: x509.load_der_x509_certificate()
    → BasicConstraints.ca ? keep re-armored block : drop it
    → {"ca-bundle.crt": <kept blocks, in input order>}

The whole bundle fails on the first block that cannot be decoded; there is
no partial result.
"""

from __future__ import annotations

import re

import structlog
from asn1crypto import pem
from cryptography import x509
from railway import ErrorCode
from railway.result import Result

from trust_bundle.domain.models import PemBlock

log = structlog.get_logger()

TRUST_BUNDLE_DATA_KEY = "ca-bundle.crt"

PARSE_ERROR_MESSAGE = (
    "unable to parse certificate, please check the additionalTrustBundle "
    "section of install-config.yaml"
)

# A BEGIN line must open the input or follow a newline. The label is whatever
# sits between "-----BEGIN " and the last "-----" of the line.
_BEGIN_RE = re.compile(rb"^-----BEGIN ([^\r\n]*)-----[ \t]*\r?$", re.MULTILINE)


# Body lines may only carry base64 and whitespace; header lines hold a colon.
_BASE64_LINE_RE = re.compile(rb"[A-Za-z0-9+/=\s]*")


def _body_is_base64(body: bytes) -> bool:
    lines = body.strip().splitlines()
    while lines and b":" in lines[0]:
        lines.pop(0)
    return all(_BASE64_LINE_RE.fullmatch(line) for line in lines)


def _end_re(type_label: bytes) -> re.Pattern[bytes]:
    """END line for a given label, including its line terminator if any."""
    return re.compile(
        rb"^-----END " + re.escape(type_label) + rb"-----[ \t]*(?:\r?\n|\Z)",
        re.MULTILINE,
    )


# ─────────────────────── PEM Framing ───────────────────────


def decode_block(data: bytes) -> tuple[PemBlock | None, bytes]:
    """
    Decode the first PEM block found in `data`.

    Returns the block and the bytes following its END line (line terminator
    consumed). Returns (None, data) when no well-formed block exists. Text
    before a BEGIN line is ignored; a BEGIN line whose block is malformed
    (no END line, or a body character outside base64 and whitespace) is
    skipped and the search resumes after it.
    """
    position = 0
    while True:
        begin = _BEGIN_RE.search(data, position)
        if begin is None:
            return None, data

        end = _end_re(begin.group(1)).search(data, begin.end())
        if end is None:
            position = begin.end()
            continue

        if not _body_is_base64(data[begin.end():end.start()]):
            position = begin.end()
            continue

        try:
            object_type, headers, der_bytes = pem.unarmor(data[begin.start():end.end()])
        except ValueError:
            position = begin.end()
            continue

        return PemBlock(type=object_type, der=der_bytes, headers=dict(headers)), data[end.end():]


def encode_block(block: PemBlock) -> str:
    """Armor a block back into PEM text: 64-column base64, LF line endings."""
    armored: bytes = pem.armor(block.type, block.der, headers=block.headers or None)
    return armored.decode("ascii")


# ─────────────────────── X.509 Classification ───────────────────────


def is_certificate_authority(certificate: x509.Certificate) -> bool:
    """True when the BasicConstraints extension marks the certificate as a CA."""
    try:
        constraints = certificate.extensions.get_extension_for_class(x509.BasicConstraints)
    except x509.ExtensionNotFound:
        return False
    return constraints.value.ca


def _classify(block: PemBlock) -> Result[bool]:
    """Parse the block payload as X.509 and report whether it is a CA certificate."""
    return Result.from_computation(
        lambda: is_certificate_authority(x509.load_der_x509_certificate(block.der)),
        ErrorCode.CERTIFICATE_DECODE_ERROR,
        f"unable to decode {block.type} block in additionalTrustBundle",
    ).map_failure(lambda err: err.with_message(f"{err.message}: {err.exception}"))


# ─────────────────────── Public Filter ───────────────────────


def parse_certificates(bundle: str) -> Result[dict[str, str]]:
    """
    Filter a concatenation of PEM certificates down to the CA certificates.

    Returns Result[{"ca-bundle.crt": bundle}] where the value holds the kept
    blocks re-armored in their original order. The key is always present;
    the value is empty when no block is a CA.

    Returns Result.failure(PARSE_ERROR) when no PEM block can be decoded at
    the cursor, including empty input and trailing bytes after the last block.
    Returns Result.failure(CERTIFICATE_DECODE_ERROR) when a block payload is
    not a valid X.509 certificate.
    """
    rest = bundle.encode("utf-8")
    kept: list[str] = []
    dropped = 0

    while True:
        block, rest = decode_block(rest)
        if block is None:
            return Result.failure(ErrorCode.PARSE_ERROR, PARSE_ERROR_MESSAGE)

        classified = _classify(block)
        if classified.is_failure():
            return Result.failure_from(classified.error())

        if classified.value():
            kept.append(encode_block(block))
        else:
            dropped += 1

        if not rest:
            break

    log.info("trust_bundle.filtered", kept=len(kept), dropped=dropped)
    return Result.success({TRUST_BUNDLE_DATA_KEY: "".join(kept)})
