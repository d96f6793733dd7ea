# provably_fair/rounds.py
"""
Round-level helpers for the bet settlement caller: derive the outcome,
settle it and produce the disclosure hash in one call.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from .defaults import DEFAULT_HOUSE_EDGE, GAME_DICE, GAME_MINESWEEPER
from .hashing import (
    dice_result_payload,
    hash_server_seed,
    minesweeper_result_payload,
    result_hash,
)
from .outcomes import (
    BoardConfig,
    DiceOutcome,
    MinePosition,
    generate_mine_positions,
    roll_dice,
    sorted_positions,
)
from .payouts import (
    DEFAULT_CURVE,
    MinesweeperPayoutCurve,
    Settlement,
    settle_dice,
    settle_minesweeper,
    validate_bet_amount,
    validate_direction,
    validate_house_edge,
    validate_target,
)


def dice_result_hash(server_seed: str, client_seed: str, nonce: int, outcome: DiceOutcome) -> str:
    return result_hash(
        dice_result_payload(hash_server_seed(server_seed), client_seed, nonce, outcome.draw)
    )


def minesweeper_result_hash(
    server_seed: str, client_seed: str, nonce: int, board: BoardConfig, positions
) -> str:
    return result_hash(
        minesweeper_result_payload(
            hash_server_seed(server_seed),
            client_seed,
            nonce,
            board.width,
            board.height,
            board.mine_count,
            [(p.x, p.y) for p in positions],
        )
    )


@dataclass(frozen=True)
class DiceRound:
    server_seed_hash: str
    client_seed: str
    nonce: int
    target: Decimal
    direction: str
    bet_amount: Decimal
    outcome: DiceOutcome
    settlement: Settlement
    result_hash: str

    def to_dict(self) -> dict:
        return {
            "game": GAME_DICE,
            "server_seed_hash": self.server_seed_hash,
            "client_seed": self.client_seed,
            "nonce": self.nonce,
            "target": self.target,
            "direction": self.direction,
            "bet_amount": self.bet_amount,
            "outcome": self.outcome.roll,
            **self.settlement.to_dict(),
            "result_hash": self.result_hash,
        }


def play_dice(
    server_seed: str,
    client_seed: str,
    nonce: int,
    bet_amount,
    target,
    direction: str,
    house_edge=DEFAULT_HOUSE_EDGE,
) -> DiceRound:
    # bet parameters are checked before anything is hashed
    amount = validate_bet_amount(bet_amount)
    t = validate_target(target)
    validate_direction(direction)
    e = validate_house_edge(house_edge)

    outcome = roll_dice(server_seed, client_seed, nonce)
    return DiceRound(
        server_seed_hash=hash_server_seed(server_seed),
        client_seed=client_seed,
        nonce=nonce,
        target=t,
        direction=direction,
        bet_amount=amount,
        outcome=outcome,
        settlement=settle_dice(outcome.roll, amount, t, direction, e),
        result_hash=dice_result_hash(server_seed, client_seed, nonce, outcome),
    )


@dataclass(frozen=True)
class MinesweeperRound:
    server_seed_hash: str
    client_seed: str
    nonce: int
    board: BoardConfig
    mine_positions: Tuple[MinePosition, ...]  # draw order
    result_hash: str

    def is_mine(self, x: int, y: int) -> bool:
        return MinePosition(x=x, y=y) in self.mine_positions

    def settle(
        self,
        bet_amount,
        cleared_tiles: int,
        hit_mine: bool = False,
        house_edge=DEFAULT_HOUSE_EDGE,
        curve: MinesweeperPayoutCurve = DEFAULT_CURVE,
    ) -> Settlement:
        return settle_minesweeper(bet_amount, cleared_tiles, self.board, hit_mine, house_edge, curve)

    def to_dict(self, reveal: bool = False) -> dict:
        data = {
            "game": GAME_MINESWEEPER,
            "server_seed_hash": self.server_seed_hash,
            "client_seed": self.client_seed,
            "nonce": self.nonce,
            "board": self.board.to_dict(),
            "result_hash": self.result_hash,
        }
        if reveal:
            data["mine_positions"] = [p.to_dict() for p in sorted_positions(self.mine_positions)]
        return data


def deal_minesweeper(
    server_seed: str, client_seed: str, nonce: int, board: BoardConfig
) -> MinesweeperRound:
    positions = generate_mine_positions(server_seed, client_seed, nonce, board)
    return MinesweeperRound(
        server_seed_hash=hash_server_seed(server_seed),
        client_seed=client_seed,
        nonce=nonce,
        board=board,
        mine_positions=tuple(positions),
        result_hash=minesweeper_result_hash(server_seed, client_seed, nonce, board, positions),
    )
