"""
Integration tests for trip normalization - full pass over a fixture trip.
"""

from pathlib import Path

import pytest
from omegaconf import OmegaConf

from porter.contexts.intake import KeywordNoticeMatcher, normalize_trip
from porter.utils.settings import NoticePair, RenderSettings

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"

SETTINGS = RenderSettings(
    google_maps_api_key="maps-key",
    api_endpoint="https://api.example.com",
    notice_keywords=[
        "book independently",
        "not included in your package",
        "not part of your package",
    ],
    notice_pairs=[NoticePair(first="viatorToursDescription", second="meta.selfBookingNote")],
)
AFFILIATE_QUERY = "pid=P00012345&mcid=42&medium=link"


def load_fixture(name: str):
    return OmegaConf.to_container(OmegaConf.load(FIXTURES_PATH / name), resolve=True)


def normalize_fixture(**kwargs):
    return normalize_trip(
        load_fixture("mauritius_cruise.yaml"),
        load_fixture("agent_profile.yaml"),
        trip_key="agent42/mauritius-2026",
        settings=SETTINGS,
        **kwargs,
    )


@pytest.mark.integration
def test_repair_warnings():
    """Every repair made to the fixture trip is reported, in step order."""
    result = normalize_fixture()

    assert result.warnings == [
        "Day 1: Removed 1 emoji-only activity name(s)",
        "Day 3: Removed 1 emoji-only schedule item(s)",
        "Day 4: Removed lodging with emoji-only name",
        "Booking #1: Cleared JSON in notes - use readable text instead",
        "Moved images.cabin to cruiseInfo.cabin.images (canonical location)",
        "Blanked viatorToursDescription: repeats the self-booking notice in meta.selfBookingNote",
    ]
    assert result.time_s >= 0


@pytest.mark.integration
def test_normalized_sections():
    """Bookings, extras, tours, insurance and images come out display-ready."""
    data = normalize_fixture().data

    cruise, insurance = data["bookings"]
    assert cruise["statusBadge"] == "✓ Confirmed"
    assert cruise["travelersText"] == "Ada Okafor, Ben Okafor"
    assert cruise["notes"] == ""
    assert cruise["showBalance"] is True
    assert insurance["statusBadge"] == "📋 Options Provided"
    assert insurance["confirmationDisplay"] == ""
    assert insurance["showBalance"] is False
    assert [plan["name"] for plan in insurance["insurancePlans"]] == ["Basic", "Standard", "Premium"]

    assert [extra["name"] for extra in data["recommendedExtras"]] == [
        "Private transfer",
        "Dolphin swim",
        "Catamaran day",
        "Seaplane tour",
    ]
    assert data["recommendedExtras"][1]["url"].endswith(AFFILIATE_QUERY)

    assert [group["portLabel"] for group in data["viatorToursByPort"]] == ["Port Louis", "Saint Denis"]
    assert data["viatorToursByPort"][1]["tours"][0]["url"].endswith("?lang=en&" + AFFILIATE_QUERY)
    assert data["viatorToursDescription"] == ""
    assert data["meta"]["selfBookingNote"].startswith("Shore excursions")

    options = data["travelInsurance"]["options"]
    assert [option.get("recommended", False) for option in options] == [False, True, False]

    assert "images" not in data
    assert [image["url"] for image in data["cruiseInfo"]["cabin"]["images"]] == [
        "https://img.example.com/cabin-1.jpg",
        "https://img.example.com/cabin-2.jpg",
    ]
    assert data["itinerary"][0]["activities"] == [{"name": "Waterfront dinner"}]
    assert data["itinerary"][3]["activities"][0]["url"].endswith(AFFILIATE_QUERY)


@pytest.mark.integration
def test_config_and_timeline():
    """_config and unifiedTimeline are attached to the render context."""
    data = normalize_fixture(comment_summary={"commentCount": 2}).data

    config = data["_config"]
    assert config["tripId"] == "mauritius-2026"
    assert config["commentThreadUrl"] == "https://api.example.com/trips/mauritius-2026/comments"
    assert config["commentCountLabel"] == "2 comments"
    assert config["showTiers"] is True
    assert config["reserveUrl"] == "https://bluelagoon.example.com/book"
    assert config["agent"]["agency"] == "Blue Lagoon Travel"

    timeline = data["unifiedTimeline"]
    assert [day["dayType"] for day in timeline] == ["pre-cruise", "embarkation", "sea-day", "port-day"]
    assert "lodging" not in timeline[3]


@pytest.mark.integration
def test_input_not_mutated_by_default():
    """The caller's document is left untouched unless in_place is set."""
    trip = load_fixture("mauritius_cruise.yaml")
    normalize_trip(trip, settings=SETTINGS)
    assert trip == load_fixture("mauritius_cruise.yaml")


@pytest.mark.integration
def test_in_place():
    """in_place=True applies the repairs to the caller's document."""
    trip = load_fixture("mauritius_cruise.yaml")
    result = normalize_trip(trip, settings=SETTINGS, in_place=True)

    assert trip["bookings"][0]["typeLabel"] == "Cruise"
    assert "images" not in trip
    assert "_config" not in trip
    assert result.data["bookings"] is trip["bookings"]


@pytest.mark.integration
def test_without_profile():
    """No profile: generic agent identity and no affiliate tracking."""
    data = normalize_trip(load_fixture("mauritius_cruise.yaml"), settings=SETTINGS).data

    assert data["_config"]["agent"] == {"name": "Travel Agent", "agency": "Travel Agency"}
    assert data["_config"]["reserveUrl"] == ""
    assert "pid=" not in data["recommendedExtras"][1]["url"]


@pytest.mark.integration
def test_custom_notice_matcher():
    """A supplied matcher replaces keyword matching."""

    class NeverMatches:
        def match(self, text):
            return frozenset()

    data = normalize_trip(
        load_fixture("mauritius_cruise.yaml"), settings=SETTINGS, notice_matcher=NeverMatches()
    ).data
    assert data["viatorToursDescription"].startswith("Tours are not included")
    assert isinstance(KeywordNoticeMatcher(SETTINGS.notice_keywords).match(""), frozenset)


@pytest.mark.integration
def test_empty_trip():
    """A bare document normalizes without repairs."""
    result = normalize_trip({}, settings=SETTINGS)
    assert result.warnings == []
    assert result.data["unifiedTimeline"] == []
    assert result.data["_config"]["tripId"] == ""
