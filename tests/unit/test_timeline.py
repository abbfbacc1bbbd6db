"""Unit tests for the unified timeline builder."""

from pathlib import Path

import pytest
from omegaconf import OmegaConf

from porter.contexts.intake.timeline import (
    CRUISE,
    DEBARKATION,
    EMBARKATION,
    PORT_DAY,
    POST_CRUISE,
    PRE_CRUISE,
    SEA_DAY,
    build_unified_timeline,
    classify_day,
    normalize_date,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"
TRIP_PATH = FIXTURES_PATH / "mauritius_cruise.yaml"


def load_trip():
    return OmegaConf.to_container(OmegaConf.load(TRIP_PATH), resolve=True)


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ("2026-05-29", "2026-05-29"),
        ("May 29, 2026", "2026-05-29"),
        ("may 29 2026", "2026-05-29"),
        ("Sept 3", "2027-09-03"),
        ("29 May 2026", "2026-05-29"),
        ("29 May", "2027-05-29"),
        ("Smarch 3", None),
        ("May 32", None),
        ("next Tuesday", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_date(text, expected):
    """Free-text dates normalize to ISO; year-less ones take the fallback year."""
    assert normalize_date(text, fallback_year=2027) == expected


class TestClassifyDay:
    """Day type precedence."""

    @pytest.mark.unit
    def test_pre_and_post_only_without_port(self):
        """A matched port outranks the pre/post-cruise flags."""
        assert classify_day(None, "", True, False) == PRE_CRUISE
        assert classify_day(None, "", False, True) == POST_CRUISE
        assert classify_day({"name": "Nassau"}, "nassau", True, False) == PORT_DAY

    @pytest.mark.unit
    def test_port_flags_and_keywords(self):
        """Port type, port flags and text keywords all classify."""
        assert classify_day({"isEmbarkation": True, "name": "Miami"}, "", False, False) == EMBARKATION
        assert classify_day({"type": "debarkation"}, "", False, False) == DEBARKATION
        assert classify_day(None, "final disembark", False, False) == DEBARKATION
        assert classify_day({"name": "At Sea"}, "", False, False) == SEA_DAY
        assert classify_day(None, "scenic cruising", False, False) == SEA_DAY

    @pytest.mark.unit
    def test_fallback_is_cruise(self):
        """A day with nothing to go on is a cruise day."""
        assert classify_day(None, "", False, False) == CRUISE


class TestBuildUnifiedTimeline:
    """Timeline built from the Mauritius fixture trip."""

    @pytest.mark.unit
    def test_day_types(self):
        """Ports attach by calendar date and each day is classified."""
        timeline = build_unified_timeline(load_trip())
        assert [entry["dayType"] for entry in timeline] == [PRE_CRUISE, EMBARKATION, SEA_DAY, PORT_DAY]
        assert [entry["dayNumber"] for entry in timeline] == [1, 2, 3, 4]

    @pytest.mark.unit
    def test_pre_cruise_day_gets_flight_and_hotel(self):
        """The arrival day folds in the outbound flight and pre-cruise hotel."""
        day_one = build_unified_timeline(load_trip())[0]
        assert day_one["isPreCruise"] is True
        assert day_one["flight"] == {"type": "arrival", "airline": "Air Mauritius", "flightNumber": "MK015"}
        assert day_one["hotel"]["name"] == "Le Suffren Hotel"
        assert "port" not in day_one

    @pytest.mark.unit
    def test_port_day_title_and_highlights(self):
        """Untitled days take the port name; highlights merge without duplicates."""
        day_four = build_unified_timeline(load_trip())[3]
        assert day_four["title"] == "Saint-Denis"
        assert day_four["port"] == {
            "name": "Saint-Denis",
            "country": "Réunion",
            "arrival": "08:00",
            "departure": "18:00",
            "highlights": ["Cirque de Mafate"],
        }
        assert day_four["highlights"] == ["Cirque de Mafate", "Creole market"]

    @pytest.mark.unit
    def test_post_cruise_day(self):
        """Post-cruise lodging matched by date adds the return flight."""
        trip = {
            "dates": {"start": "2026-06-01"},
            "itinerary": [{"day": 9, "date": "June 9", "title": "Home"}],
            "lodging": [{"name": "Airport Inn", "timing": "post-cruise", "checkIn": "2026-06-09"}],
            "flights": {"return": {"airline": "Air Mauritius"}},
        }
        entry = build_unified_timeline(trip)[0]
        assert entry["dayType"] == POST_CRUISE
        assert entry["flight"] == {"type": "departure", "airline": "Air Mauritius"}
        assert entry["hotel"]["name"] == "Airport Inn"

    @pytest.mark.unit
    def test_undated_day_does_not_match_undated_lodging(self):
        """Missing dates on both sides are not a match."""
        trip = {
            "itinerary": [{"title": "Free day"}],
            "lodging": [{"name": "Hotel", "type": "pre-cruise"}],
        }
        entry = build_unified_timeline(trip)[0]
        assert entry["dayType"] == CRUISE
        assert entry["dayNumber"] == 1

    @pytest.mark.unit
    def test_cruise_info_ports_and_embarkation(self):
        """Ports may live under cruiseInfo, with embarkation details."""
        trip = {
            "dates": {"start": "2026-03-01"},
            "cruiseInfo": {
                "ports": [{"date": "2026-03-02", "name": "Miami", "isEmbarkation": True}],
                "embarkation": {"port": "Miami", "time": "14:00"},
            },
            "itinerary": [{"day": 1, "date": "March 2"}],
        }
        entry = build_unified_timeline(trip)[0]
        assert entry["dayType"] == EMBARKATION
        assert entry["embarkation"] == {"port": "Miami", "time": "14:00"}
        assert entry["title"] == "Miami"

    @pytest.mark.unit
    def test_empty_itinerary(self):
        """No itinerary, no timeline."""
        assert build_unified_timeline({}) == []
        assert build_unified_timeline({"itinerary": "n/a"}) == []
