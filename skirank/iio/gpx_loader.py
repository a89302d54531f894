import gpxpy
import gpxpy.gpx
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from datetime import datetime, timezone

from skirank.routes.route import Route, GeoPoint
from skirank.ui.log_helpers import print_step

# Get the package root directory
package_root = Path(__file__).parent.parent.parent
GPX_DIR      = package_root / "tracks"

class TrackSourceError(OSError):
    """The local track directory is missing or unreadable"""

@dataclass(frozen=True)
class LoadedTrack:
    route: Route
    filename: str
    date: Optional[str] = None

class LocalGPXLoader:

    def __init__(self, gpx_dir: Path = GPX_DIR):
        self.gpx_dir = Path(gpx_dir)

    def load_all(self) -> List[LoadedTrack]:
        if not self.gpx_dir.is_dir():
            raise TrackSourceError(f"Track directory not found: {self.gpx_dir}")
        try:
            gpx_files = sorted(self.gpx_dir.glob("*.gpx"))
        except OSError as e:
            raise TrackSourceError(f"Cannot read track directory {self.gpx_dir}: {e}") from e

        print_step("GPXLoader", f"Analyzing {len(gpx_files)} GPX tracks...")
        data = []
        for gpx_file in gpx_files:
            print_step("GPXLoader", f"Processing {gpx_file}...", level="DEBUG")
            try:
                track = LocalGPXLoader.load_track(gpx_file)
            except (gpxpy.gpx.GPXException, OSError, ValueError) as e:
                print_step("GPXLoader", f"Skipping {gpx_file.name}: {e}", level="WARNING")
                continue
            if track is None:
                print_step("GPXLoader", f"Skipping {gpx_file.name}: no trackpoints", level="WARNING")
                continue
            data.append(track)
        return data

    @staticmethod
    def _extract_name(gpx, gpx_path: Path) -> str:
        if gpx.tracks and gpx.tracks[0].name:
            return gpx.tracks[0].name
        if gpx.name:
            return gpx.name
        return gpx_path.stem

    @staticmethod
    def _extract_date(gpx) -> Optional[str]:
        """Metadata time first, then the time of the first timestamped point"""
        if gpx.time:
            return LocalGPXLoader.ensure_utc(gpx.time).isoformat()
        for track in gpx.tracks:
            for segment in track.segments:
                for pt in segment.points:
                    if pt.time:
                        return LocalGPXLoader.ensure_utc(pt.time).isoformat()
        return None

    @staticmethod
    def load_track(gpx_path: Path) -> Optional[LoadedTrack]:
        """All track segments of one file, concatenated in file order, form one route"""
        with open(gpx_path, 'r', encoding='utf-8') as gpx_file:
            gpx = gpxpy.parse(gpx_file)

        gpx_points = [pt for track in gpx.tracks for segment in track.segments for pt in segment.points]
        if not gpx_points:
            gpx_points = [pt for gpx_route in gpx.routes for pt in gpx_route.points]
        if not gpx_points:
            return None

        route = Route(
            name=LocalGPXLoader._extract_name(gpx, gpx_path),
            points=tuple(GeoPoint(pt.latitude, pt.longitude, pt.elevation) for pt in gpx_points)
        )
        print_step("GPXLoader", f"Route {route.name} loaded with {len(route)} points.", level="DEBUG")

        return LoadedTrack(route=route,
                           filename=gpx_path.name,
                           date=LocalGPXLoader._extract_date(gpx))

    @staticmethod
    def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
        if dt and dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt
