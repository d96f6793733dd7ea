# provably_fair/seeds.py
from __future__ import annotations

import logging
import re
import secrets
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError, EntropyError
from .hashing import hash_server_seed

logger = logging.getLogger(__name__)

SERVER_SEED_BYTES = 32
CLIENT_SEED_BYTES = 16
CLIENT_SEED_MAX_LENGTH = 128

_SERVER_SEED_RE = re.compile(r"[0-9a-f]{64}")


def _secure_hex(nbytes: int) -> str:
    try:
        return secrets.token_bytes(nbytes).hex()
    except (OSError, NotImplementedError) as exc:
        logger.critical(f"Secure random source unavailable: {exc}")
        raise EntropyError("Secure random source unavailable") from exc


def generate_server_seed() -> str:
    return _secure_hex(SERVER_SEED_BYTES)


def generate_client_seed(custom: Optional[str] = None) -> str:
    """
    Players may pick their own client seed; otherwise one is generated.
    """
    if custom is not None:
        return validate_client_seed(custom)
    return _secure_hex(CLIENT_SEED_BYTES)


def validate_server_seed(server_seed) -> str:
    if not isinstance(server_seed, str) or not _SERVER_SEED_RE.fullmatch(server_seed):
        raise ConfigurationError("Server seed must be 64 lowercase hex characters")
    return server_seed


def validate_client_seed(client_seed) -> str:
    if not isinstance(client_seed, str) or not client_seed:
        raise ConfigurationError("Client seed is required")
    if client_seed != client_seed.strip():
        raise ConfigurationError("Client seed must not start or end with whitespace")
    if len(client_seed) > CLIENT_SEED_MAX_LENGTH:
        raise ConfigurationError(
            f"Client seed must be at most {CLIENT_SEED_MAX_LENGTH} characters"
        )
    return client_seed


def validate_nonce(nonce) -> int:
    if isinstance(nonce, bool) or not isinstance(nonce, int):
        raise ConfigurationError("Nonce must be an integer")
    if nonce < 0:
        raise ConfigurationError("Nonce must be non-negative")
    return nonce


@dataclass(frozen=True)
class SeedPair:
    server_seed: str
    client_seed: str

    def __post_init__(self):
        validate_server_seed(self.server_seed)
        validate_client_seed(self.client_seed)

    @classmethod
    def generate(cls, client_seed: Optional[str] = None) -> "SeedPair":
        return cls(
            server_seed=generate_server_seed(),
            client_seed=generate_client_seed(client_seed),
        )

    @property
    def server_seed_hash(self) -> str:
        return hash_server_seed(self.server_seed)

    def public_dict(self) -> dict:
        return {
            "server_seed_hash": self.server_seed_hash,
            "client_seed": self.client_seed,
        }

    def revealed_dict(self) -> dict:
        return {
            "server_seed": self.server_seed,
            "server_seed_hash": self.server_seed_hash,
            "client_seed": self.client_seed,
        }
