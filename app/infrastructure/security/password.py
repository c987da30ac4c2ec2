"""Account password hashing: bcrypt over a SHA-256 pre-hash.

bcrypt only looks at the first 72 bytes of its input; the base64 SHA-256
digest is 44 bytes, so long passphrases keep all of their entropy.
"""

import base64
import hashlib

import bcrypt

# bcrypt work factor for new hashes.
BCRYPT_ROUNDS = 12


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class BcryptPasswordHasher:
    """IPasswordHasher backed by bcrypt. Blocking; call through asyncio.to_thread."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        """Return a salted bcrypt hash of password."""
        hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """True if plain_password matches hashed_password; malformed hashes never match."""
        try:
            return bool(
                bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
            )
        except (ValueError, TypeError):
            return False
