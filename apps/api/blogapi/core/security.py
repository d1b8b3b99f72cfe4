"""Password hashing helpers."""

from functools import lru_cache

import bcrypt

# bcrypt only looks at the first 72 bytes; longer secrets are rejected at the schema layer.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: int = 12) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"unknown-account", bcrypt.gensalt(rounds=rounds))


def verify_password(password: str, hashed: str | None, *, rounds: int = 12) -> bool:
    """Check ``password`` against a stored bcrypt hash.

    A missing hash (unknown account) is still compared against a dummy hash of the
    same cost so both outcomes take comparable time. Malformed hashes never match.
    """
    candidate = password.encode("utf-8")
    try:
        if hashed is None:
            bcrypt.checkpw(candidate, _dummy_hash(rounds))
            return False
        return bcrypt.checkpw(candidate, hashed.encode("utf-8"))
    except ValueError:
        # Over-long passwords and malformed hashes.
        return False
