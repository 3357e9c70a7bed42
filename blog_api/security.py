"""
Password hashing with bcrypt.

Hashes are produced with the cost configured in ``settings.BCRYPT_SALT_ROUNDS``
(log2 rounds).  bcrypt only reads the first 72 bytes of a password, so both
functions truncate the UTF-8 encoding there before hashing or checking.
``verify_password`` never raises on a malformed hash; it simply reports a
mismatch so a corrupt row cannot be logged into.
"""
import bcrypt

from blog_api.config import settings

BCRYPT_MAX_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_SALT_ROUNDS)
    return bcrypt.hashpw(_encode(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(plain_password), password_hash.encode("utf-8"))
    except (ValueError, AttributeError):
        # Not a bcrypt hash
        return False
