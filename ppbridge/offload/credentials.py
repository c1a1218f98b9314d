"""Password hashing work items and their async front-end."""

from __future__ import annotations

from typing import Dict, Tuple

import nacl.exceptions
import nacl.pwhash
from nacl.pwhash import argon2id

from ppbridge.offload.bridge import OffloadBridge

# (opslimit, memlimit) per cost profile
HASH_PROFILES: Dict[str, Tuple[int, int]] = {
    "min": (argon2id.OPSLIMIT_MIN, argon2id.MEMLIMIT_MIN),
    "interactive": (argon2id.OPSLIMIT_INTERACTIVE, argon2id.MEMLIMIT_INTERACTIVE),
    "moderate": (argon2id.OPSLIMIT_MODERATE, argon2id.MEMLIMIT_MODERATE),
    "sensitive": (argon2id.OPSLIMIT_SENSITIVE, argon2id.MEMLIMIT_SENSITIVE),
}
DEFAULT_PROFILE = "interactive"


def hash_password(
    password: str,
    opslimit: int = argon2id.OPSLIMIT_INTERACTIVE,
    memlimit: int = argon2id.MEMLIMIT_INTERACTIVE,
) -> str:
    """Return an argon2id modular-crypt hash of ``password``."""
    hashed = argon2id.str(password.encode("utf-8"), opslimit=opslimit, memlimit=memlimit)
    return hashed.decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """
    Check ``password`` against a stored hash.

    Any hash produced by ``nacl.pwhash`` is accepted; a mismatch or an
    unrecognised hash returns False.
    """
    try:
        return nacl.pwhash.verify(hashed.encode("ascii"), password.encode("utf-8"))
    except nacl.exceptions.InvalidkeyError:
        return False


class CredentialHasher:
    """Hash and verify passwords on the worker pool."""

    def __init__(self, bridge: OffloadBridge, profile: str = DEFAULT_PROFILE) -> None:
        if profile not in HASH_PROFILES:
            raise ValueError(
                f"unknown hash profile {profile!r}; expected one of {sorted(HASH_PROFILES)}"
            )
        self.bridge = bridge
        self.profile = profile
        self.opslimit, self.memlimit = HASH_PROFILES[profile]

    async def hash(self, password: str) -> str:
        return await self.bridge.run(hash_password, password, self.opslimit, self.memlimit)

    async def verify(self, password: str, hashed: str) -> bool:
        return await self.bridge.run(verify_password, password, hashed)
