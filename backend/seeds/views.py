# seeds/views.py
from __future__ import annotations

from django.utils.dateparse import parse_datetime
from rest_framework import generics, permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from provably_fair.defaults import GAMES
from provably_fair.exceptions import ConfigurationError
from .models import AuditLog, HouseEdgeConfig, SeedPair
from .serializers import AuditLogSerializer, HouseEdgeSerializer, RotateIn, SeedPairSerializer
from .services import SeedStateError, get_active_pair, rotate_seed_pair


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def active_seed(request):
    pair = get_active_pair(request.user)
    return Response(SeedPairSerializer(pair).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def rotate_seed(request):
    """
    Reveal the current server seed and commit to a new one.
    """
    serializer = RotateIn(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        retired, pair = rotate_seed_pair(
            request.user, serializer.validated_data.get("client_seed")
        )
    except ConfigurationError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except SeedStateError as e:
        return Response({"error": str(e)}, status=status.HTTP_409_CONFLICT)

    return Response({
        "revealed": SeedPairSerializer(retired).data if retired else None,
        "active": SeedPairSerializer(pair).data,
    })


class SeedPairDetailView(generics.RetrieveAPIView):
    """Public: the server seed is only included once the pair is retired."""
    queryset = SeedPair.objects.all()
    serializer_class = SeedPairSerializer
    permission_classes = [permissions.AllowAny]


@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def house_edges(request):
    configs = [HouseEdgeConfig.get(game) for game in GAMES]
    return Response(HouseEdgeSerializer(configs, many=True).data)


@api_view(["GET"])
@permission_classes([IsAdminUser])
def audit_export(request):
    logs = AuditLog.objects.all()

    start = request.GET.get("start")
    end = request.GET.get("end")
    try:
        if start:
            logs = logs.filter(created_at__gte=_parse_bound(start))
        if end:
            logs = logs.filter(created_at__lte=_parse_bound(end))
    except ValueError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

    data = AuditLogSerializer(logs, many=True).data
    return Response({
        "audit_logs": data,
        "total_count": len(data),
    })


def _parse_bound(raw: str):
    value = parse_datetime(raw)
    if value is None:
        raise ValueError(f"Invalid datetime: {raw}")
    return value
