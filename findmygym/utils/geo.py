"""Geospatial helpers used by the gym listing."""

from __future__ import annotations

import math

LatLng = tuple[float, float]

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(
    point_a: LatLng, point_b: LatLng, *, radius_km: float = EARTH_RADIUS_KM
) -> float:
    """Compute the great-circle distance between two points in kilometres.

    The intermediate value is clamped to avoid floating point drift near the poles.
    """

    lat1, lng1 = point_a
    lat2, lng2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lng2 - lng1)

    sin_dphi = math.sin(dphi / 2.0)
    sin_dlambda = math.sin(dlambda / 2.0)

    a = sin_dphi**2 + math.cos(phi1) * math.cos(phi2) * sin_dlambda**2
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.asin(math.sqrt(a))
    return radius_km * c


def get_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance rounded to one decimal kilometre."""
    return round(haversine_distance_km((lat1, lng1), (lat2, lng2)), 1)


__all__ = ["EARTH_RADIUS_KM", "LatLng", "get_distance_km", "haversine_distance_km"]
