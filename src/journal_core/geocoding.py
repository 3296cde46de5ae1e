"""
Geocoding and Weather Collaborators.

Best-effort HTTP lookups used by the calling layer when it builds
entries and journey summaries. Every lookup returns None on failure
instead of raising; callers chain fallbacks.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class AddressResolver(Protocol):
    """Anything that can turn coordinates into a display address."""

    async def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        ...


def format_nominatim_address(data: Dict[str, Any]) -> Optional[str]:
    """
    Build "ROAD, CITY, STATE" from a Nominatim reverse response.

    Returns:
        Upper-cased address, or None when no usable part is present
    """
    address = data.get("address") if isinstance(data, dict) else None
    if not address:
        return None

    parts = [
        address.get("road") or address.get("pedestrian"),
        address.get("city") or address.get("town") or address.get("village") or address.get("county"),
        address.get("state"),
    ]
    parts = [p for p in parts if p]
    if not parts:
        return None
    return ", ".join(parts).upper()


class NominatimGeocoder:
    """Reverse geocoding through OpenStreetMap Nominatim."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    async def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.http_timeout),
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.settings.nominatim_url,
                    params={"format": "json", "lat": latitude, "lon": longitude},
                    headers={"User-Agent": self.settings.user_agent},
                )
                response.raise_for_status()
                return format_nominatim_address(response.json())
        except httpx.HTTPError as e:
            logger.error(f"[GEOCODE] Nominatim lookup failed for {latitude},{longitude}: {e}")
        except ValueError as e:
            logger.error(f"[GEOCODE] Unreadable Nominatim response: {e}")
        return None


class OpenMeteoWeather:
    """Current temperature lookup through Open-Meteo."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    async def current_temperature(self, latitude: float, longitude: float) -> Optional[str]:
        """
        Current temperature formatted as "24°C".

        Returns:
            The formatted temperature, or None if the lookup failed
        """
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.http_timeout),
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.settings.weather_url,
                    params={"latitude": latitude, "longitude": longitude, "current_weather": "true"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"[WEATHER] Lookup failed for {latitude},{longitude}: {e}")
            return None
        except ValueError as e:
            logger.error(f"[WEATHER] Unreadable response: {e}")
            return None

        current = data.get("current_weather") if isinstance(data, dict) else None
        if not current or current.get("temperature") is None:
            return None
        return f"{round(current['temperature'])}°C"
