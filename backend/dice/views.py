# dice/views.py
import logging

from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from provably_fair.defaults import GAME_DICE
from provably_fair.exceptions import ConfigurationError
from provably_fair.payouts import dice_lookup_table
from provably_fair.rounds import play_dice
from provably_fair.verification import verify_dice
from seeds.services import SeedStateError, get_active_pair, house_edge_for, issue_nonce, record_audit
from .models import DiceBet
from .serializers import DiceBetSerializer, LookupTableIn, RollIn, VerifyIn

logger = logging.getLogger(__name__)


# ======================================================
# ROLL
# ======================================================

@api_view(["POST"])
@permission_classes([IsAuthenticated])
def roll(request):
    serializer = RollIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    house_edge = house_edge_for(GAME_DICE)

    try:
        with transaction.atomic():
            pair = get_active_pair(request.user)
            pair, nonce = issue_nonce(pair.id)

            result = play_dice(
                pair.server_seed,
                pair.client_seed,
                nonce,
                data["bet_amount"],
                data["target"],
                data["direction"],
                house_edge,
            )
            settlement = result.settlement

            bet = DiceBet.objects.create(
                user=request.user,
                seed_pair=pair,
                nonce=nonce,
                bet_amount=result.bet_amount,
                target=result.target,
                direction=result.direction,
                house_edge=house_edge,
                roll=result.outcome.roll,
                multiplier=settlement.multiplier,
                payout=settlement.payout,
                won=settlement.won,
                result_hash=result.result_hash,
            )

            record_audit(
                "DICE_ROLLED",
                user=request.user,
                bet_id=bet.id,
                seed_pair_id=pair.id,
                nonce=nonce,
                result_hash=result.result_hash,
            )
    except ConfigurationError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except SeedStateError as e:
        return Response({"error": str(e)}, status=status.HTTP_409_CONFLICT)

    logger.info(
        f"Dice bet {bet.id} | user {request.user.pk} | nonce {nonce} | "
        f"roll {bet.roll:.4f} {bet.direction} {bet.target} | won {bet.won} | payout {bet.payout}"
    )

    return Response(DiceBetSerializer(bet).data, status=status.HTTP_201_CREATED)


# ======================================================
# PUBLIC VERIFICATION
# ======================================================

@api_view(["POST"])
@permission_classes([AllowAny])
def verify(request):
    serializer = VerifyIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        result = verify_dice(
            data["server_seed"],
            data["client_seed"],
            data["nonce"],
            data.get("roll"),
            claimed_hash=data.get("result_hash"),
            server_seed_hash=data.get("server_seed_hash"),
            tolerance=data["tolerance"],
        )
    except ConfigurationError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if not result.match:
        logger.warning(f"Dice verification mismatch\n{result.describe()}")

    return Response(result.to_dict())


@api_view(["GET"])
@permission_classes([AllowAny])
def lookup_table(request):
    serializer = LookupTableIn(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    house_edge = house_edge_for(GAME_DICE)
    table = dice_lookup_table(data["direction"], data["bet_amount"], house_edge)

    return Response({
        "direction": data["direction"],
        "bet_amount": str(data["bet_amount"]),
        "house_edge": str(house_edge),
        "rows": [
            {
                "target": str(row["target"]),
                "probability": str(row["probability"]),
                "multiplier": str(row["multiplier"]),
                "payout": str(row["payout"]),
            }
            for row in table
        ],
    })


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def history(request):
    try:
        limit = max(1, min(int(request.GET.get("limit", 50)), 100))
    except ValueError:
        return Response({"error": "Invalid limit"}, status=status.HTTP_400_BAD_REQUEST)

    bets = DiceBet.objects.filter(user=request.user).select_related("seed_pair")[:limit]
    return Response({
        "history": DiceBetSerializer(bets, many=True).data,
        "count": len(bets),
    })
