from typing import Any, Dict, Optional


class LocationResolver:
    """
    Derives display text and coordinates from a user's location fields.

    Display text resolution order is fixed:
    1. the user's own location_display override, verbatim
    2. city, state, country names joined with ", " (unset parts skipped)
    3. None when nothing resolves
    """

    @staticmethod
    def full_location(location_display: Optional[str], city=None, state=None, country=None) -> Optional[str]:
        """Resolve the human-readable location string"""
        if location_display:
            return location_display

        parts = [
            place.name
            for place in (city, state, country)
            if place is not None and place.name
        ]
        return ", ".join(parts) if parts else None

    @staticmethod
    def coordinates(latitude, longitude) -> Optional[Dict[str, float]]:
        """
        Return {"latitude", "longitude"} only when both values are present.

        Presence is checked against None, so 0.0 (equator, prime meridian)
        counts as a real coordinate. A half-filled pair returns None.
        """
        if latitude is None or longitude is None:
            return None
        return {
            "latitude": float(latitude),
            "longitude": float(longitude),
        }

    @staticmethod
    def has_location_data(location_display: Optional[str], location_data: Optional[Dict[str, Any]]) -> bool:
        """True if the user set a display override or any structured location data"""
        return bool(location_display) or bool(location_data)


location_resolver = LocationResolver()
