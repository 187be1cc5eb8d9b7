"""
Unit tests for TLS backend selection.
"""

import ssl

import certifi
import pytest

from geocoding.tls import createSslContext, resolveVerify


def test_certifi_backend():
    context = createSslContext("certifi")
    assert isinstance(context, ssl.SSLContext)
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert context.check_hostname


def test_system_backend():
    context = createSslContext("system")
    assert context.verify_mode == ssl.CERT_REQUIRED


def test_custom_ca_bundle():
    """Test CA bundle path overrides backend name, dood!"""
    context = createSslContext("system", caBundle=certifi.where())
    assert context.verify_mode == ssl.CERT_REQUIRED


def test_missing_ca_bundle(tmp_path):
    with pytest.raises(ValueError):
        createSslContext(caBundle=str(tmp_path / "missing.pem"))


def test_unknown_backend():
    with pytest.raises(ValueError):
        createSslContext("openssl-3")


def test_resolve_verify():
    """Test ready SSLContext is passed through and None means certifi."""
    context = ssl.create_default_context()
    assert resolveVerify(context) is context
    assert isinstance(resolveVerify(None), ssl.SSLContext)
