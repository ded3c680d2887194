"""
PKCE (Proof Key for Code Exchange) generation, RFC 7636
"""
import base64
import hashlib
import secrets
import string
from dataclasses import dataclass

CODE_CHALLENGE_METHOD = "S256"

# RFC 7636 Section 4.1 unreserved characters
_VERIFIER_ALPHABET = string.ascii_letters + string.digits + "-._~"
_VERIFIER_LENGTH = 128


@dataclass(frozen=True)
class PKCEPair:
    code_verifier: str
    code_challenge: str


def generate_code_verifier() -> str:
    return "".join(secrets.choice(_VERIFIER_ALPHABET) for _ in range(_VERIFIER_LENGTH))


def generate_code_challenge(code_verifier: str) -> str:
    """BASE64URL-ENCODE(SHA256(ASCII(code_verifier))), unpadded"""
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def generate_pkce() -> PKCEPair:
    """Generate a fresh verifier/challenge pair for one authorization attempt"""
    code_verifier = generate_code_verifier()
    return PKCEPair(
        code_verifier=code_verifier,
        code_challenge=generate_code_challenge(code_verifier),
    )
