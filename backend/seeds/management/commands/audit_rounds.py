# seeds/management/commands/audit_rounds.py
import logging

from django.core.management.base import BaseCommand, CommandError

from dice.models import DiceBet
from minesweeper.models import MinesweeperGame
from provably_fair.defaults import GAME_DICE, GAME_MINESWEEPER
from provably_fair.exceptions import ConfigurationError
from provably_fair.payouts import settle_dice, settle_minesweeper
from provably_fair.verification import verify_many
from seeds.models import SeedPair

logger = logging.getLogger(__name__)


def _differences(fields):
    return [
        f"{name} stored={stored} expected={expected}"
        for name, stored, expected in fields
        if stored != expected
    ]


def _dice_settlement(bet, result):
    expected = settle_dice(
        result.recomputed_outcome, bet.bet_amount, bet.target, bet.direction, bet.house_edge
    )
    return _differences([
        ("won", bet.won, expected.won),
        ("multiplier", bet.multiplier, expected.multiplier),
        ("payout", bet.payout, expected.payout),
    ])


def _minesweeper_settlement(game, result):
    if game.status == MinesweeperGame.STATUS_PLAYING:
        return []

    mines = {(p["x"], p["y"]) for p in result.recomputed_outcome}
    revealed = {(c["x"], c["y"]) for c in game.revealed_cells}
    problems = []
    if revealed & mines:
        problems.append("revealed cells include a mine")

    expected = settle_minesweeper(
        game.bet_amount,
        len(game.revealed_cells),
        game.board,
        hit_mine=game.status == MinesweeperGame.STATUS_LOST,
        house_edge=game.house_edge,
    )
    return problems + _differences([
        ("multiplier", game.multiplier, expected.multiplier),
        ("win_amount", game.win_amount, expected.payout),
    ])


def _dice_rounds(pairs):
    bets = DiceBet.objects.filter(seed_pair__in=pairs).select_related("seed_pair").order_by("id")
    for bet in bets:
        yield f"dice bet {bet.id}", bet, _dice_settlement, {
            "game": GAME_DICE,
            "server_seed": bet.seed_pair.server_seed,
            "client_seed": bet.seed_pair.client_seed,
            "nonce": bet.nonce,
            "claim": bet.roll,
            "claimed_hash": bet.result_hash,
            "server_seed_hash": bet.seed_pair.server_seed_hash,
        }


def _minesweeper_rounds(pairs):
    games = MinesweeperGame.objects.filter(seed_pair__in=pairs).select_related("seed_pair").order_by("id")
    for game in games:
        yield f"minesweeper game {game.id}", game, _minesweeper_settlement, {
            "game": GAME_MINESWEEPER,
            "server_seed": game.seed_pair.server_seed,
            "client_seed": game.seed_pair.client_seed,
            "nonce": game.nonce,
            "claim": game.mine_positions,
            "claimed_hash": game.result_hash,
            "game_config": game.board.to_dict(),
            "server_seed_hash": game.seed_pair.server_seed_hash,
        }


class Command(BaseCommand):
    help = "Re-verify every round played on retired seed pairs"

    def add_arguments(self, parser):
        parser.add_argument(
            "--game",
            choices=[GAME_DICE, GAME_MINESWEEPER],
            help="Audit one game only",
        )
        parser.add_argument(
            "--seed-pair",
            type=int,
            help="Audit a single retired seed pair",
        )

    def handle(self, *args, **options):
        pairs = SeedPair.objects.filter(status=SeedPair.STATUS_RETIRED)
        if options.get("seed_pair"):
            pairs = pairs.filter(id=options["seed_pair"])

        rounds = []
        if options.get("game") in (None, GAME_DICE):
            rounds.extend(_dice_rounds(pairs))
        if options.get("game") in (None, GAME_MINESWEEPER):
            rounds.extend(_minesweeper_rounds(pairs))

        if not rounds:
            self.stdout.write(self.style.SUCCESS("No rounds to audit."))
            return

        results = verify_many(record for _, _, _, record in rounds)

        failures = 0
        for (label, row, settlement_check, _), result in zip(rounds, results):
            problems = []
            if result.error is None:
                try:
                    problems = settlement_check(row, result)
                except ConfigurationError as e:
                    problems = [f"settlement could not be recomputed: {e}"]

            if result.match and not problems:
                continue

            failures += 1
            logger.error(f"Audit mismatch on {label}: {result.error or problems or result.recomputed_hash}")
            self.stdout.write(self.style.ERROR(f"MISMATCH {label}"))
            self.stdout.write(result.describe())
            for problem in problems:
                self.stdout.write(f"  settlement  {problem}")

        self.stdout.write(f"Audited {len(results)} round(s), {failures} mismatch(es)")

        if failures:
            raise CommandError(f"{failures} round(s) failed verification")
        self.stdout.write(self.style.SUCCESS("All rounds verified."))
