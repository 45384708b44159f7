# =============================================================================
# 🔐 utils/passwords.py
# -----------------------------------------------------------------------------
# Password hashes for dashboard accounts.
#
# Current format:  $scrypt$ln=14,r=8,p=1$<salt>$<digest>   (passlib, random salt)
# Legacy format:   <digest-hex>                            (application-wide salt)
# =============================================================================

from __future__ import annotations

import hashlib
import hmac
import logging
import re
from typing import Optional

from passlib.context import CryptContext

import config

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["scrypt"],
    deprecated="auto",
    scrypt__default_rounds=14,
    scrypt__min_rounds=14,
)

LEGACY_HASH_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def legacy_hash(password: str, salt: str | None = None) -> str:
    """Fixed-salt hash as produced by the first deployment."""
    salt = config.LEGACY_PASSWORD_SALT if salt is None else salt
    digest = hashlib.scrypt(password.encode("utf-8"), salt=salt.encode("utf-8"), n=16384, r=8, p=1, dklen=32)
    return digest.hex()


def is_legacy_hash(stored_hash: str | None) -> bool:
    return bool(stored_hash) and LEGACY_HASH_RE.match(stored_hash) is not None


def verify_and_update(password: str, stored_hash: str | None) -> tuple[bool, Optional[str]]:
    """
    Checks ``password`` against ``stored_hash``.

    Returns ``(ok, new_hash)``; ``new_hash`` is set when the stored hash is a
    legacy digest or uses outdated parameters and should be replaced.
    Malformed hashes never verify.
    """
    if not stored_hash or password is None:
        return False, None
    if is_legacy_hash(stored_hash):
        if hmac.compare_digest(stored_hash.lower(), legacy_hash(password)):
            return True, hash_password(password)
        return False, None
    try:
        return pwd_context.verify_and_update(password, stored_hash)
    except (ValueError, TypeError) as e:
        logger.info("Password check failed on an unreadable hash: %s", e)
        return False, None


def verify_password(password: str, stored_hash: str | None) -> bool:
    return verify_and_update(password, stored_hash)[0]


def dummy_verify() -> None:
    """Spends the time of a real check, for unknown usernames."""
    pwd_context.dummy_verify()
