# marketplace/utils/security.py
from functools import lru_cache

import bcrypt

from marketplace.utils.settings import BCRYPT_ROUNDS

# bcrypt only looks at the first 72 bytes
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        # malformed hash in storage
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("not-a-real-password")


def burn_password_check(password: str) -> None:
    """
    Runs a comparison against a throwaway hash so that a lookup miss
    costs the same as a wrong password.
    """
    verify_password(password, _dummy_hash())
