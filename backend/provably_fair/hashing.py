# provably_fair/hashing.py
"""
Commitment hashing.

Two strings are part of the protocol and must be reproduced bit-for-bit by
any independent verifier:

* the round message ``"{server_seed}:{client_seed}:{nonce}"`` (nonce in
  base 10, no padding), hashed with SHA-256 over its UTF-8 bytes;
* result payloads, serialized as JSON with keys sorted, no whitespace
  (``","`` and ``":"`` separators) and non-ASCII characters written as-is.
  Payloads hold only strings, integers, lists and objects of those.
"""
from __future__ import annotations

import hashlib
import json


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def hash_server_seed(server_seed: str) -> str:
    return sha256_hex(server_seed)


def combine(server_seed: str, client_seed: str, nonce: int) -> str:
    return f"{server_seed}:{client_seed}:{nonce}"


def canonical_json(data) -> str:
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def result_hash(data) -> str:
    return sha256_hex(canonical_json(data))


def dice_result_payload(server_seed_hash: str, client_seed: str, nonce: int, draw: int) -> dict:
    return {
        "game": "dice",
        "serverSeedHash": server_seed_hash,
        "clientSeed": client_seed,
        "nonce": nonce,
        "draw": draw,
    }


def minesweeper_result_payload(
    server_seed_hash: str,
    client_seed: str,
    nonce: int,
    board_width: int,
    board_height: int,
    mine_count: int,
    positions,
) -> dict:
    """
    ``positions`` is an iterable of ``(x, y)`` pairs in any order; they are
    written sorted by row, then column.
    """
    ordered = sorted(((int(x), int(y)) for x, y in positions), key=lambda p: (p[1], p[0]))
    return {
        "game": "minesweeper",
        "serverSeedHash": server_seed_hash,
        "clientSeed": client_seed,
        "nonce": nonce,
        "boardWidth": board_width,
        "boardHeight": board_height,
        "mineCount": mine_count,
        "minePositions": [{"x": x, "y": y} for x, y in ordered],
    }
