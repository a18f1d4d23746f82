"""
Best-effort reverse geocoding: coordinates -> "Ward, City".

Google Maps is tried first when ``GOOGLE_MAPS_KEY`` is configured, then
Nominatim. Failures never propagate; callers get ``None`` and keep going.
"""
import logging
import re
import threading
from typing import Optional

import httpx
from cachetools import TTLCache

import config

logger = logging.getLogger(__name__)

geocode_cache = TTLCache(maxsize=512, ttl=config.GEOCODE_CACHE_TTL)
# Handlers run in a threadpool and TTLCache is not thread-safe
_cache_lock = threading.Lock()

_LEADING_DIGITS = re.compile(r"^\d+")


def _first_parts(text: str, limit: int = 2) -> Optional[str]:
    parts = [p.strip() for p in (text or "").split(",")]
    parts = [p for p in parts if p and not _LEADING_DIGITS.match(p)][:limit]
    return ", ".join(parts) if parts else None


def _join(area: Optional[str], city: Optional[str]) -> Optional[str]:
    if not city:
        return None
    return f"{area}, {city}" if area else city


def name_from_google(data: dict) -> Optional[str]:
    if data.get("status") != "OK" or not data.get("results"):
        return None
    first = data["results"][0]
    components = first.get("address_components") or []

    def get(kind: str) -> Optional[str]:
        for c in components:
            if kind in (c.get("types") or []):
                return c.get("long_name")
        return None

    city = get("locality") or get("administrative_area_level_2") or get("administrative_area_level_1")
    area = get("sublocality_level_1") or get("sublocality") or get("neighborhood")
    name = _join(area, city)
    if not name:
        name = get("administrative_area_level_2") or get("administrative_area_level_1")
    if not name:
        name = _first_parts(first.get("formatted_address", ""))
    return name


def name_from_nominatim(data: dict) -> Optional[str]:
    addr = data.get("address") or {}
    city = addr.get("city") or addr.get("town") or addr.get("village")
    ward = addr.get("neighbourhood") or addr.get("suburb") or addr.get("city_district") or addr.get("quarter")
    name = _join(ward, city)
    if not name:
        name = addr.get("city_district") or addr.get("state_district") or addr.get("county") or addr.get("state")
    if not name:
        name = _first_parts(str(data.get("display_name") or ""))
    return name


def _lookup_google(client: httpx.Client, lat: float, lng: float) -> Optional[str]:
    response = client.get(
        config.GOOGLE_GEOCODE_URL,
        params={"latlng": f"{lat},{lng}", "key": config.GOOGLE_MAPS_KEY},
    )
    response.raise_for_status()
    return name_from_google(response.json())


def _lookup_nominatim(client: httpx.Client, lat: float, lng: float) -> Optional[str]:
    response = client.get(
        config.NOMINATIM_URL,
        params={"format": "jsonv2", "lat": lat, "lon": lng},
        headers={"User-Agent": config.GEOCODE_USER_AGENT},
    )
    response.raise_for_status()
    return name_from_nominatim(response.json())


def reverse_geocode(lat: float, lng: float, client: Optional[httpx.Client] = None) -> Optional[str]:
    key = (round(lat, 5), round(lng, 5))
    with _cache_lock:
        cached = geocode_cache.get(key)
    if cached:
        return cached

    owns_client = client is None
    client = client or httpx.Client(timeout=config.GEOCODE_TIMEOUT)
    name = None
    try:
        if config.GOOGLE_MAPS_KEY:
            try:
                name = _lookup_google(client, lat, lng)
            except (httpx.HTTPError, ValueError) as e:
                # Fall through to Nominatim
                logger.warning("Google reverse geocoding failed for %s,%s: %s", lat, lng, e)
        if not name:
            try:
                name = _lookup_nominatim(client, lat, lng)
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("Nominatim reverse geocoding failed for %s,%s: %s", lat, lng, e)
    finally:
        if owns_client:
            client.close()

    if name:
        with _cache_lock:
            geocode_cache[key] = name
    return name
