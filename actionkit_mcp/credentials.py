"""Signed user credentials for the ActionKit API.

ActionKit authenticates requests with a short-lived JWT signed by the
project's RSA private key. The token identifies one subject (user) and is
used as a bearer token for both catalog retrieval and action execution.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import jwt

from .errors import FatalConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

# 1 week
DEFAULT_VALIDITY_SECONDS = 60 * 60 * 24 * 7


@dataclass(frozen=True)
class Credential:
    """Signed, time-bounded token for one subject."""
    subject: str
    issued_at: int
    expires_at: int
    token: str = field(repr=False)

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Whether the credential is past its expiry."""
        if now is None:
            now = time.time()
        return now >= self.expires_at

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.token}"


def normalize_signing_key(raw_key: Optional[str]) -> str:
    """Turn an environment-supplied PEM key into a usable one.

    Keys stored in a single env var usually carry literal "\\n" sequences
    instead of line breaks.

    Raises:
        FatalConfigError: If the key is missing or empty
    """
    if raw_key is None or not raw_key.strip():
        raise FatalConfigError("SIGNING_KEY is not configured")
    return raw_key.replace("\\n", "\n").strip()


def mask_subject(subject: str) -> str:
    """Shorten a subject for logs: "user@example.com" -> "u***@example.com"."""
    local, at, domain = subject.partition("@")
    return f"{local[:1]}***{at}{domain}"


class CredentialIssuer:
    """Issues signed credentials from a configured private key.

    Usage:
        issuer = CredentialIssuer(settings.signing_key)
        credential = issuer.issue(settings.actionkit_user_id)
    """

    def __init__(
        self,
        signing_key: Optional[str],
        algorithm: str = "RS256",
        validity_seconds: int = DEFAULT_VALIDITY_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the issuer.

        Args:
            signing_key: PEM-encoded private key
            algorithm: JWT signing algorithm
            validity_seconds: Lifetime of issued credentials
            clock: Source of the current UNIX time

        Raises:
            FatalConfigError: If the key is missing
        """
        self._signing_key = normalize_signing_key(signing_key)
        self.algorithm = algorithm
        self.validity_seconds = validity_seconds
        self._clock = clock

    def issue(self, subject_id: str) -> Credential:
        """Sign a credential for the given subject.

        Args:
            subject_id: Subject identifier placed in the "sub" claim

        Returns:
            Immutable signed credential

        Raises:
            FatalConfigError: If the subject is empty or the key cannot sign
        """
        if not subject_id:
            raise FatalConfigError("Credential subject (ACTIONKIT_USER_ID) is not configured")

        issued_at = int(self._clock())
        expires_at = issued_at + self.validity_seconds
        payload = {
            "sub": subject_id,
            "iat": issued_at,
            "exp": expires_at,
        }

        try:
            token = jwt.encode(payload, self._signing_key, algorithm=self.algorithm)
        except (jwt.PyJWTError, ValueError, TypeError, AttributeError) as e:
            raise FatalConfigError(f"SIGNING_KEY is malformed: {type(e).__name__}") from e

        logger.info(
            "Issued ActionKit credential",
            extra={"subject": mask_subject(subject_id), "expires_at": expires_at}
        )
        return Credential(
            subject=subject_id,
            issued_at=issued_at,
            expires_at=expires_at,
            token=token,
        )
