"""
trust_bundle — user CA trust bundle manifest generator.

Reads the additionalTrustBundle field of an install-config.yaml, keeps only
the CA certificates it contains, and renders them into the
openshift-config/user-ca-bundle ConfigMap manifest.

Errors flow through the Railway-Oriented Programming (ROP) framework
instead of exceptions.
"""

__version__ = "0.1.0"
