# seeds/services.py
from __future__ import annotations

import logging
from decimal import Decimal
from datetime import timedelta
from typing import Optional, Tuple

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from provably_fair.hashing import hash_server_seed
from provably_fair.seeds import generate_client_seed, generate_server_seed
from .models import AuditLog, HouseEdgeConfig, SeedPair

logger = logging.getLogger(__name__)


class SeedStateError(Exception):
    pass


def record_audit(action: str, user=None, **details) -> AuditLog:
    return AuditLog.objects.create(user=user, action=action, details=details)


def house_edge_for(game: str) -> Decimal:
    return HouseEdgeConfig.get(game).house_edge


def _create_pair(user, client_seed: Optional[str] = None) -> SeedPair:
    server_seed = generate_server_seed()
    pair = SeedPair.objects.create(
        user=user,
        server_seed=server_seed,
        server_seed_hash=hash_server_seed(server_seed),
        client_seed=generate_client_seed(client_seed),
    )
    record_audit("SEED_CREATED", user=user, seed_pair_id=pair.id, hash=pair.server_seed_hash)
    logger.info(f"Seed pair {pair.id} created for user {user.pk} (hash {pair.server_seed_hash})")
    return pair


@transaction.atomic
def get_active_pair(user) -> SeedPair:
    pair = (
        SeedPair.objects.select_for_update()
        .filter(user=user, status=SeedPair.STATUS_ACTIVE)
        .first()
    )
    if pair is None:
        pair = _create_pair(user)
    return pair


@transaction.atomic
def issue_nonce(pair_id: int, span: int = 1) -> Tuple[SeedPair, int]:
    """
    Reserve ``span`` consecutive nonces on an active pair and return the
    first one. The row lock serializes concurrent rounds on the same pair.
    """
    if span < 1:
        raise ValueError("span must be at least 1")

    pair = SeedPair.objects.select_for_update().get(id=pair_id)
    if not pair.is_active:
        raise SeedStateError("Seed pair is retired")

    nonce = pair.next_nonce
    pair.next_nonce = F("next_nonce") + span
    pair.save(update_fields=["next_nonce"])
    pair.refresh_from_db(fields=["next_nonce"])
    return pair, nonce


@transaction.atomic
def rotate_seed_pair(user, client_seed: Optional[str] = None) -> Tuple[Optional[SeedPair], SeedPair]:
    """
    Retire (and reveal) the user's active pair and open a new one. Changing
    the client seed always goes through here so a committed server seed is
    never paired with a different client seed.
    """
    retired = (
        SeedPair.objects.select_for_update()
        .filter(user=user, status=SeedPair.STATUS_ACTIVE)
        .first()
    )
    if retired is not None:
        if retired.minesweeper_games.filter(status="playing").exists():
            raise SeedStateError("Finish open games before rotating the seed pair")
        retired.status = SeedPair.STATUS_RETIRED
        retired.retired_at = timezone.now()
        retired.save(update_fields=["status", "retired_at"])
        record_audit(
            "SEED_REVEALED",
            user=user,
            seed_pair_id=retired.id,
            hash=retired.server_seed_hash,
            server_seed=retired.server_seed,
            nonces_used=retired.next_nonce,
        )
        logger.info(f"Seed pair {retired.id} retired after {retired.next_nonce} nonces")

    new_pair = _create_pair(user, client_seed)
    return retired, new_pair


def retire_stale_pairs(max_age_hours: int) -> int:
    cutoff = timezone.now() - timedelta(hours=max_age_hours)
    count = 0
    stale = SeedPair.objects.filter(status=SeedPair.STATUS_ACTIVE, created_at__lt=cutoff)
    for pair in stale.select_related("user"):
        try:
            rotate_seed_pair(pair.user)
        except SeedStateError:
            logger.info(f"Seed pair {pair.id} has open games, rotation postponed")
            continue
        count += 1
    return count
