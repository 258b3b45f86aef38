"""Password hashing helpers."""

import bcrypt

# bcrypt ignores input past 72 bytes; truncate explicitly so hashing never errors.
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, *, rounds: int = 12) -> str:
    password_bytes = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    password_bytes = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))
    except ValueError:
        return False
