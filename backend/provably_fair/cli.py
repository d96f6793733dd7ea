# provably_fair/cli.py
"""
Standalone audit tool.

    provably-fair seed [--client-seed SEED]
    provably-fair dice --server-seed S --client-seed C --nonce N
    provably-fair mines --server-seed S --client-seed C --nonce N --width W --height H --mines M
    provably-fair verify-dice ... (--roll R | --result-hash H) [--server-seed-hash H]
    provably-fair verify-mines ... (--positions "x,y;x,y" | --result-hash H) [--server-seed-hash H]

Exit status: 0 on success or match, 1 on mismatch, 2 on invalid input.
"""
from __future__ import annotations

import argparse
import json
import sys
from decimal import Decimal

from .exceptions import ConfigurationError, EntropyError
from .outcomes import BoardConfig, roll_dice
from .rounds import deal_minesweeper, dice_result_hash
from .seeds import SeedPair
from .verification import verify_dice, verify_minesweeper

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_INVALID = 2


def _json_default(value):
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def _emit(data, out) -> None:
    out.write(json.dumps(data, indent=2, default=_json_default))
    out.write("\n")


def _parse_positions(raw: str):
    positions = []
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            x, y = chunk.split(",")
            positions.append((int(x), int(y)))
        except ValueError:
            raise ConfigurationError(f"Bad position {chunk!r}, expected 'x,y'") from None
    return positions


def _add_round_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--server-seed", required=True)
    parser.add_argument("--client-seed", required=True)
    parser.add_argument("--nonce", type=int, required=True)


def _add_board_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, required=True)
    parser.add_argument("--height", type=int, required=True)
    parser.add_argument("--mines", type=int, required=True)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="provably-fair",
        description="Derive and verify provably fair dice and minesweeper rounds",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Generate a new seed pair")
    seed.add_argument("--client-seed", default=None)

    dice = sub.add_parser("dice", help="Derive a dice roll")
    _add_round_args(dice)

    mines = sub.add_parser("mines", help="Derive minesweeper mine positions")
    _add_round_args(mines)
    _add_board_args(mines)

    verify_d = sub.add_parser("verify-dice", help="Verify a dice roll")
    _add_round_args(verify_d)
    verify_d.add_argument("--roll", default=None)
    verify_d.add_argument("--result-hash", default=None)
    verify_d.add_argument("--server-seed-hash", default=None)
    verify_d.add_argument("--tolerance", type=float, default=0.0)

    verify_m = sub.add_parser("verify-mines", help="Verify a minesweeper board")
    _add_round_args(verify_m)
    _add_board_args(verify_m)
    verify_m.add_argument("--positions", default=None, help='"x,y;x,y;..."')
    verify_m.add_argument("--result-hash", default=None)
    verify_m.add_argument("--server-seed-hash", default=None)

    return parser


def run(args, out=None) -> int:
    out = out or sys.stdout
    if args.command == "seed":
        _emit(SeedPair.generate(args.client_seed).revealed_dict(), out)
        return EXIT_OK

    if args.command == "dice":
        outcome = roll_dice(args.server_seed, args.client_seed, args.nonce)
        data = outcome.to_dict()
        data["result_hash"] = dice_result_hash(args.server_seed, args.client_seed, args.nonce, outcome)
        _emit(data, out)
        return EXIT_OK

    if args.command == "mines":
        board = BoardConfig(args.width, args.height, args.mines)
        round_ = deal_minesweeper(args.server_seed, args.client_seed, args.nonce, board)
        _emit(round_.to_dict(reveal=True), out)
        return EXIT_OK

    if args.command == "verify-dice":
        result = verify_dice(
            args.server_seed,
            args.client_seed,
            args.nonce,
            args.roll,
            claimed_hash=args.result_hash,
            server_seed_hash=args.server_seed_hash,
            tolerance=args.tolerance,
        )
    else:
        board = BoardConfig(args.width, args.height, args.mines)
        positions = _parse_positions(args.positions) if args.positions is not None else None
        result = verify_minesweeper(
            args.server_seed,
            args.client_seed,
            args.nonce,
            board,
            positions,
            claimed_hash=args.result_hash,
            server_seed_hash=args.server_seed_hash,
        )

    _emit(result.to_dict(), out)
    return EXIT_OK if result.match else EXIT_MISMATCH


def main(argv=None) -> int:
    args = get_parser().parse_args(argv)
    try:
        return run(args)
    except ConfigurationError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_INVALID
    except EntropyError as exc:
        sys.stderr.write(f"fatal: {exc}\n")
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
