"""Pytest fixtures for ActionKit MCP bridge tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from actionkit_mcp.credentials import Credential
from tests.fixtures.actionkit_responses import make_response


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset settings before each test."""
    from actionkit_mcp.config import reload_settings
    os.environ["PARAGON_PROJECT_ID"] = "test-project"
    os.environ.setdefault("MCP_LOG_LEVEL", "DEBUG")
    reload_settings()
    yield


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> str:
    """PEM-encoded RSA private key."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key) -> str:
    """PEM-encoded public half of private_key_pem."""
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture
def credential() -> Credential:
    """A pre-signed credential; the token content is irrelevant to mocked HTTP."""
    return Credential(
        subject="user-123",
        issued_at=1_700_000_000,
        expires_at=1_700_000_000 + 604800,
        token="test-token",
    )


@pytest.fixture
def mock_http():
    """Mock httpx.AsyncClient whose request() is awaitable."""
    http = MagicMock()
    http.request = AsyncMock(return_value=make_response(200, {}))
    http.aclose = AsyncMock()
    return http
