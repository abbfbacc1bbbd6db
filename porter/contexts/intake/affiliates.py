"""
Affiliate tracking for tour partner links.

Partner URLs in the trip get the advisor's partner id, campaign id and medium
appended as query parameters. A URL that already carries the partner id
parameter is left alone, so running the injection any number of times yields
the same document.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from porter.contexts.intake.profile import AffiliateCodes
from porter.utils.settings import RenderSettings

# Keys of trip["viatorTours"] entries that hold links
TOUR_URL_FIELDS = ("url", "bookingUrl")


def is_partner_url(url: Any, settings: RenderSettings) -> bool:
    """Check whether a URL points at the partner domain (or a subdomain of it)."""
    if not isinstance(url, str) or not url:
        return False
    host = urlsplit(url).hostname or ""
    domain = settings.partner_domain.lower()
    return host == domain or host.endswith(f".{domain}")


def add_tracking(url: Any, codes: AffiliateCodes, settings: RenderSettings) -> Any:
    """
    Append partner tracking parameters to a partner URL.

    Non-partner URLs, URLs already carrying the partner id, and calls without
    a partner id return the URL unchanged.

    Examples:
        add_tracking("https://www.viator.com/tours/d1-123", AffiliateCodes("P1", "C9"), settings)
        # "https://www.viator.com/tours/d1-123?pid=P1&mcid=C9&medium=link"
    """
    if not codes.partner_id or not isinstance(url, str) or not url:
        return url
    if not is_partner_url(url, settings):
        return url

    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    if any(name == settings.partner_id_param for name, _ in query):
        return url

    query.append((settings.partner_id_param, codes.partner_id))
    if codes.campaign_id:
        query.append((settings.campaign_id_param, codes.campaign_id))
    query.append((settings.medium_param, settings.medium_value))
    return urlunsplit(parts._replace(query=urlencode(query)))


def _each_dict(records: Any) -> List[Dict[str, Any]]:
    if not isinstance(records, list):
        return []
    return [record for record in records if isinstance(record, dict)]


def _is_partner_excursion(excursion: Dict[str, Any], settings: RenderSettings) -> bool:
    provider = excursion.get("provider")
    if isinstance(provider, str) and provider.lower() == settings.partner_name:
        return True
    return excursion.get("providerType") == settings.partner_name


class _LinkTagger:
    """Rewrites link fields in place and counts what changed."""

    def __init__(self, codes: AffiliateCodes, settings: RenderSettings):
        self.codes = codes
        self.settings = settings
        self.rewritten = 0

    def tag(self, record: Dict[str, Any], field_name: str = "url") -> None:
        if field_name not in record:
            return
        original = record[field_name]
        updated = add_tracking(original, self.codes, self.settings)
        if updated != original:
            record[field_name] = updated
            self.rewritten += 1

    def tag_excursions(self, excursions: Any) -> None:
        # A provider tag selects the excursion; its link must still be on the partner domain
        for excursion in _each_dict(excursions):
            if _is_partner_excursion(excursion, self.settings) or is_partner_url(
                excursion.get("url"), self.settings
            ):
                self.tag(excursion)


def inject_affiliate_tracking(
    trip: Dict[str, Any], codes: Optional[AffiliateCodes], settings: RenderSettings
) -> int:
    """
    Tag every partner link in the trip with affiliate tracking.

    Walks viatorTours (url and bookingUrl), excursions, recommendedExtras and,
    per itinerary day, activities and excursions.

    Returns:
        Number of links rewritten
    """
    if codes is None or not codes.partner_id:
        return 0

    tagger = _LinkTagger(codes, settings)

    tours = trip.get("viatorTours")
    if isinstance(tours, dict):
        for port_key, port_tours in tours.items():
            if port_key == "description":
                continue
            for tour in _each_dict(port_tours):
                for field_name in TOUR_URL_FIELDS:
                    tagger.tag(tour, field_name)

    tagger.tag_excursions(trip.get("excursions"))

    for extra in _each_dict(trip.get("recommendedExtras")):
        tagger.tag(extra)

    for day in _each_dict(trip.get("itinerary")):
        for activity in _each_dict(day.get("activities")):
            tagger.tag(activity)
        tagger.tag_excursions(day.get("excursions"))

    return tagger.rewritten
