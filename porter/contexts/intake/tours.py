"""Partner tour listings reshaped for per-port display."""

from typing import Any, Dict, List

from porter.utils.text_processing import title_case_slug

DESCRIPTION_KEY = "description"


def tours_by_port(tours: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Turn a {port-slug: [tour, ...]} map into an ordered list of port groups.

    Non-list values (including the sibling "description") are skipped.

    Examples:
        >>> tours_by_port({"port-louis": [{"name": "Catamaran"}], "description": "..."})
        [{'portKey': 'port-louis', 'portLabel': 'Port Louis', 'tours': [{'name': 'Catamaran'}]}]
    """
    return [
        {"portKey": key, "portLabel": title_case_slug(key), "tours": value}
        for key, value in tours.items()
        if key != DESCRIPTION_KEY and isinstance(value, list)
    ]


def reshape_tours(trip: Dict[str, Any]) -> None:
    """Add viatorToursByPort and viatorToursDescription from trip["viatorTours"]."""
    tours = trip.get("viatorTours")
    if not isinstance(tours, dict):
        return
    trip["viatorToursByPort"] = tours_by_port(tours)
    trip["viatorToursDescription"] = tours.get(DESCRIPTION_KEY) or ""
