# provably_fair/verification.py
"""
Independent re-computation of past rounds.

Only the supplied inputs are used: no database, no session state. A
mismatch is reported through ``VerificationResult.match``; exceptions are
reserved for malformed input (``ConfigurationError``).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from .defaults import GAME_DICE, GAME_MINESWEEPER
from .exceptions import ConfigurationError
from .hashing import hash_server_seed
from .outcomes import BoardConfig, MinePosition, roll_dice, sorted_positions
from .payouts import to_decimal
from .rounds import deal_minesweeper, dice_result_hash

_HASH_RE = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True)
class VerificationResult:
    game: str
    match: bool
    recomputed_outcome: Any
    recomputed_hash: str
    claimed_outcome: Any = None
    claimed_hash: Optional[str] = None
    server_seed_hash: str = ""
    commitment_match: Optional[bool] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "game": self.game,
            "match": self.match,
            "recomputed_outcome": self.recomputed_outcome,
            "recomputed_hash": self.recomputed_hash,
            "claimed_outcome": self.claimed_outcome,
            "claimed_hash": self.claimed_hash,
            "server_seed_hash": self.server_seed_hash,
            "commitment_match": self.commitment_match,
            "error": self.error,
        }

    def describe(self) -> str:
        if self.error:
            return f"{self.game}: could not verify ({self.error})"
        verdict = "MATCH" if self.match else "MISMATCH"
        lines = [f"{self.game}: {verdict}"]
        if self.claimed_outcome is not None:
            lines.append(f"  outcome     recomputed={self.recomputed_outcome} claimed={self.claimed_outcome}")
        if self.claimed_hash is not None:
            lines.append(f"  result hash recomputed={self.recomputed_hash} claimed={self.claimed_hash}")
        if self.commitment_match is not None:
            lines.append(f"  commitment  sha256(server_seed)={self.server_seed_hash} ok={self.commitment_match}")
        return "\n".join(lines)


def is_result_hash(value) -> bool:
    return isinstance(value, str) and bool(_HASH_RE.fullmatch(value.lower()))


def _normalize_hash(value, name: str) -> str:
    if not is_result_hash(value):
        raise ConfigurationError(f"{name} must be a 64 character hex digest")
    return value.lower()


def _commitment(server_seed: str, server_seed_hash: Optional[str]) -> Optional[bool]:
    if server_seed_hash is None:
        return None
    return _normalize_hash(server_seed_hash, "server_seed_hash") == hash_server_seed(server_seed)


def _normalize_positions(claimed) -> List[tuple]:
    positions = []
    try:
        for item in claimed:
            if isinstance(item, MinePosition):
                positions.append((item.x, item.y))
            elif isinstance(item, dict):
                positions.append((int(item["x"]), int(item["y"])))
            else:
                x, y = item
                positions.append((int(x), int(y)))
    except (KeyError, TypeError, ValueError):
        raise ConfigurationError("Mine positions must be (x, y) pairs") from None
    return sorted(positions, key=lambda p: (p[1], p[0]))


def board_from_config(game_config) -> BoardConfig:
    if isinstance(game_config, BoardConfig):
        return game_config
    if not isinstance(game_config, dict):
        raise ConfigurationError("Minesweeper verification needs a board config")
    try:
        return BoardConfig(
            width=game_config["width"],
            height=game_config["height"],
            mine_count=game_config["mine_count"],
        )
    except KeyError as exc:
        raise ConfigurationError(f"Board config is missing {exc.args[0]}") from None


def verify_dice(
    server_seed: str,
    client_seed: str,
    nonce: int,
    claimed_roll=None,
    *,
    claimed_hash: Optional[str] = None,
    server_seed_hash: Optional[str] = None,
    tolerance: float = 0.0,
) -> VerificationResult:
    if claimed_roll is None and claimed_hash is None:
        raise ConfigurationError("Provide a claimed roll or a claimed result hash")
    if tolerance < 0:
        raise ConfigurationError("Tolerance must be non-negative")

    outcome = roll_dice(server_seed, client_seed, nonce)
    recomputed_hash = dice_result_hash(server_seed, client_seed, nonce, outcome)
    checks = []

    claimed = None
    if claimed_roll is not None:
        claimed = float(to_decimal(claimed_roll, "claimed_roll"))
        checks.append(abs(outcome.roll - claimed) <= tolerance)

    if claimed_hash is not None:
        claimed_hash = _normalize_hash(claimed_hash, "claimed_hash")
        checks.append(claimed_hash == recomputed_hash)

    commitment = _commitment(server_seed, server_seed_hash)
    return VerificationResult(
        game=GAME_DICE,
        match=all(checks) and commitment is not False,
        recomputed_outcome=outcome.roll,
        recomputed_hash=recomputed_hash,
        claimed_outcome=claimed,
        claimed_hash=claimed_hash,
        server_seed_hash=hash_server_seed(server_seed),
        commitment_match=commitment,
    )


def verify_minesweeper(
    server_seed: str,
    client_seed: str,
    nonce: int,
    board: BoardConfig,
    claimed_positions=None,
    *,
    claimed_hash: Optional[str] = None,
    server_seed_hash: Optional[str] = None,
) -> VerificationResult:
    if claimed_positions is None and claimed_hash is None:
        raise ConfigurationError("Provide claimed mine positions or a claimed result hash")

    round_ = deal_minesweeper(server_seed, client_seed, nonce, board)
    recomputed = [(p.x, p.y) for p in sorted_positions(round_.mine_positions)]
    checks = []

    claimed = None
    if claimed_positions is not None:
        claimed = _normalize_positions(claimed_positions)
        checks.append(claimed == recomputed)

    if claimed_hash is not None:
        claimed_hash = _normalize_hash(claimed_hash, "claimed_hash")
        checks.append(claimed_hash == round_.result_hash)

    commitment = _commitment(server_seed, server_seed_hash)
    return VerificationResult(
        game=GAME_MINESWEEPER,
        match=all(checks) and commitment is not False,
        recomputed_outcome=[{"x": x, "y": y} for x, y in recomputed],
        recomputed_hash=round_.result_hash,
        claimed_outcome=[{"x": x, "y": y} for x, y in claimed] if claimed is not None else None,
        claimed_hash=claimed_hash,
        server_seed_hash=round_.server_seed_hash,
        commitment_match=commitment,
    )


def verify(
    game: str,
    server_seed: str,
    client_seed: str,
    nonce: int,
    claim,
    game_config=None,
    server_seed_hash: Optional[str] = None,
    claimed_hash: Optional[str] = None,
) -> VerificationResult:
    """
    A claim that looks like a SHA-256 hex digest is checked against the
    result hash; anything else is treated as the claimed outcome. Pass
    ``claimed_hash`` too to check a stored outcome and its hash together.
    """
    outcome = claim
    if is_result_hash(claim):
        if claimed_hash is not None:
            raise ConfigurationError("Claim and claimed_hash are both result hashes")
        outcome, claimed_hash = None, claim

    if game == GAME_DICE:
        return verify_dice(server_seed, client_seed, nonce, outcome,
                           claimed_hash=claimed_hash, server_seed_hash=server_seed_hash)

    if game == GAME_MINESWEEPER:
        board = board_from_config(game_config)
        return verify_minesweeper(server_seed, client_seed, nonce, board, outcome,
                                  claimed_hash=claimed_hash, server_seed_hash=server_seed_hash)

    raise ConfigurationError(f"Unknown game: {game}")


def verify_many(records: Iterable[Mapping]) -> List[VerificationResult]:
    """
    Batch audit. A malformed record produces a non-matching result with
    ``error`` set so one bad row does not stop the batch.
    """
    results = []
    for record in records:
        if not isinstance(record, Mapping):
            results.append(VerificationResult(
                game="",
                match=False,
                recomputed_outcome=None,
                recomputed_hash="",
                error=f"Record must be a mapping, got {type(record).__name__}",
            ))
            continue

        game = record.get("game", "")
        try:
            results.append(verify(
                game,
                record.get("server_seed"),
                record.get("client_seed"),
                record.get("nonce"),
                record.get("claim"),
                game_config=record.get("game_config"),
                server_seed_hash=record.get("server_seed_hash"),
                claimed_hash=record.get("claimed_hash"),
            ))
        except ConfigurationError as exc:
            results.append(VerificationResult(
                game=game,
                match=False,
                recomputed_outcome=None,
                recomputed_hash="",
                error=str(exc),
            ))
    return results
