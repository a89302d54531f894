# route.py
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import math
from shapely.geometry import Point, Polygon

EARTH_RADIUS_M = 6371000

@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float
    elevation: Optional[float] = None

    def distance_to(self, point: "GeoPoint") -> float:
        """Great-circle distance in meters, elevation ignored."""
        lat1_rad = math.radians(self.lat)
        lon1_rad = math.radians(self.lon)
        lat2_rad = math.radians(point.lat)
        lon2_rad = math.radians(point.lon)

        dlat = lat2_rad - lat1_rad
        dlon = lon2_rad - lon1_rad

        a = math.sin(dlat / 2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2)**2
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_M * c

def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return GeoPoint(lat1, lon1).distance_to(GeoPoint(lat2, lon2)) / 1000

@dataclass(frozen=True)
class Route:
    """Static, immutable sequence of samples ordered along the direction of travel"""
    name: str
    points: Tuple[GeoPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def elevations(self) -> List[Optional[float]]:
        return [p.elevation for p in self.points]

    def reversed(self) -> "Route":
        return Route(name=self.name, points=tuple(reversed(self.points)))

    @classmethod
    def from_catalog_coordinates(cls, name: str, coordinates: Sequence[Sequence[float]]) -> "Route":
        """Catalog coordinates come as [lon, lat, ele?]; ele may be missing or null."""
        points = []
        for coord in coordinates:
            ele = coord[2] if len(coord) > 2 else None
            points.append(GeoPoint(lat=float(coord[1]),
                                   lon=float(coord[0]),
                                   elevation=float(ele) if ele is not None else None))
        return cls(name=name, points=tuple(points))

    def starts_within(self, polygon: Polygon) -> bool:
        """Boundary inclusive; an empty route starts nowhere"""
        if not self.points:
            return False
        start = self.points[0]
        return polygon.covers(Point(start.lon, start.lat))
