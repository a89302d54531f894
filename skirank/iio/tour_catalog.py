# tour_catalog.py
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from shapely.geometry import box

from skirank.routes.rating_system import RatingSystem
from skirank.routes.route import Route, haversine_km
from skirank.routes.route_helpers import round_to
from skirank.ui.log_helpers import print_step

TOPPTUR_URL = "https://topptur.guide"
USER_AGENT = "randonee-overlay/1.0"

_INDEX_RE = re.compile(r'src="/assets/index\.([A-Za-z0-9_-]+)\.js"')
_TOURS_RE = re.compile(r'tours\.([A-Za-z0-9_-]+)\.js')
_JSON_PARSE_RE = re.compile(r'JSON\.parse\(\s*([`\'"])(.*)\1\s*\)', re.DOTALL)
_ARRAY_RE = re.compile(r'=\s*(\[.*\])\s*;?\s*export', re.DOTALL)
_JS_ESCAPES = {'n': '\n', 'r': '\r', 't': '\t', 'b': '\b', 'f': '\f'}

class CatalogError(RuntimeError):
    """The tour catalog could not be fetched or decoded"""

@dataclass(frozen=True)
class SearchArea:
    """Which catalog tours count as local: start inside the box and within driving range"""
    min_lat: float = 69.3
    max_lat: float = 70.0
    min_lon: float = 18.0
    max_lon: float = 20.5
    ref_lat: float = 69.6492
    ref_lon: float = 18.9553
    max_drive_km: float = 65

    @property
    def polygon(self):
        return box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def distance_km(self, lat: float, lon: float) -> float:
        return haversine_km(self.ref_lat, self.ref_lon, lat, lon)

@dataclass(frozen=True)
class CatalogTour:
    route: Route
    tour_id: Any = None
    place: Optional[str] = None
    ates: Any = None
    dist_from_reference_km: Optional[float] = None

def _unescape_js(literal: str) -> str:
    def replace(m):
        escaped = m.group(1)
        if len(escaped) == 5:
            return chr(int(escaped[1:], 16))
        return _JS_ESCAPES.get(escaped, escaped)
    return re.sub(r'\\(u[0-9a-fA-F]{4}|.)', replace, literal, flags=re.DOTALL)

def parse_tours_module(js_text: str) -> List[Dict[str, Any]]:
    """
    Decodes the tours bundle, shaped like
    ``const e=JSON.parse(`[...]`);export{e as default}``.
    A bare array literal assigned before the export is accepted as well.
    """
    match = _JSON_PARSE_RE.search(js_text)
    if match:
        payload = _unescape_js(match.group(2))
    else:
        match = _ARRAY_RE.search(js_text)
        if not match:
            raise CatalogError("Could not locate tour data in tours module")
        payload = match.group(1)

    try:
        tours = json.loads(payload)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Could not decode tour data: {e}") from e
    if not isinstance(tours, list):
        raise CatalogError("Tour data is not a list")
    return tours

class ToppturCatalog:
    def __init__(self,
                 base_url: str = TOPPTUR_URL,
                 session: Optional[requests.Session] = None,
                 timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        # At most one redirect per request
        self.session.max_redirects = 1
        self.timeout = timeout

    def _get(self, url: str) -> str:
        try:
            response = self.session.get(url, headers={'User-Agent': USER_AGENT}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise CatalogError(f"Request failed for {url}: {e}") from e
        return response.text

    def fetch_raw_tours(self) -> List[Dict[str, Any]]:
        """Follows index page -> index bundle -> tours bundle, whose names carry build hashes"""
        print_step("Catalog", "Fetching topptur.guide tour data...")
        page_html = self._get(f"{self.base_url}/")
        index_match = _INDEX_RE.search(page_html)
        if not index_match:
            raise CatalogError("Could not find index.js reference")

        index_js = self._get(f"{self.base_url}/assets/index.{index_match.group(1)}.js")
        tours_match = _TOURS_RE.search(index_js)
        if not tours_match:
            raise CatalogError("Could not find tours.js reference")

        tours_js = self._get(f"{self.base_url}/assets/tours.{tours_match.group(1)}.js")
        tours = parse_tours_module(tours_js)
        print_step("Catalog", f"Parsed {len(tours)} tours")
        return tours

def select_tours(raw_tours: List[Dict[str, Any]],
                 area: SearchArea,
                 system: RatingSystem) -> List[CatalogTour]:
    polygon = area.polygon
    selected = []
    for t in raw_tours:
        if not isinstance(t, dict):
            print_step("Catalog", f"Unexpected catalog entry {t!r}, skipped", level="WARNING")
            continue

        coordinates = t.get('coordinates') or []
        if not isinstance(coordinates, list):
            print_step("Catalog", f"Malformed coordinates for tour {t.get('id')}, skipped", level="WARNING")
            continue
        if len(coordinates) < system.min_catalog_points:
            continue
        try:
            route = Route.from_catalog_coordinates(t.get('name') or str(t.get('id')), coordinates)
        except (TypeError, ValueError, IndexError, KeyError):
            print_step("Catalog", f"Malformed coordinates for tour {t.get('id')}, skipped", level="WARNING")
            continue
        if not route.starts_within(polygon):
            continue

        start = route.points[0]
        dist_km = area.distance_km(start.lat, start.lon)
        if dist_km > area.max_drive_km:
            continue

        selected.append(CatalogTour(route=route,
                                    tour_id=t.get('id'),
                                    place=t.get('place'),
                                    ates=t.get('ates'),
                                    dist_from_reference_km=round_to(dist_km, 1)))

    print_step("Catalog", f"{len(selected)} tours in search area")
    return selected
