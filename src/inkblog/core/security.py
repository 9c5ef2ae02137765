"""Admin password hashing.

New hashes are salted scrypt hashes produced by Werkzeug. Databases created by
earlier versions of the blog store a bare SHA-256 hex digest; those are still
accepted so existing installs keep working, and callers can detect them with
``needs_rehash`` to upgrade the stored hash after a successful login.
"""

import hashlib
import hmac
import re

from werkzeug.security import check_password_hash, generate_password_hash

PASSWORD_HASH_METHOD = "scrypt"

_LEGACY_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")


def get_password_hash(password: str) -> str:
    return generate_password_hash(password, method=PASSWORD_HASH_METHOD)


def is_legacy_hash(hashed_password: str) -> bool:
    return bool(_LEGACY_SHA256_RE.fullmatch(hashed_password or ""))


def verify_password(password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    if is_legacy_hash(hashed_password):
        digest = hashlib.sha256(password.encode("utf-8")).hexdigest()
        return hmac.compare_digest(digest, hashed_password)
    try:
        return check_password_hash(hashed_password, password)
    except ValueError:
        # Unknown hash method in the stored value
        return False


def needs_rehash(hashed_password: str) -> bool:
    return is_legacy_hash(hashed_password)
