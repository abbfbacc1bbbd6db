"""
Travel advisor profile and display identity.

A profile is supplied by the caller (usually loaded from account storage) and
feeds three things during rendering: the agent identity shown on the proposal,
affiliate tracking codes for partner links, and the trial watermark decision.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional

DEFAULT_AGENT_NAME = "Travel Agent"
DEFAULT_AGENCY_NAME = "Travel Agency"

TRIAL_TIER = "trial"


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


@dataclass
class AgencyInfo:
    """Agency the advisor works for."""

    name: str = ""
    franchise: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    booking_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AgencyInfo":
        return cls(
            name=data.get("name") or "",
            franchise=data.get("franchise"),
            logo=data.get("logo"),
            website=data.get("website"),
            booking_url=data.get("bookingUrl"),
        )


@dataclass
class Branding:
    """Colour overrides for the proposal theme."""

    primary_color: Optional[str] = None
    accent_color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Branding":
        return cls(primary_color=data.get("primaryColor"), accent_color=data.get("accentColor"))


@dataclass
class AffiliateCodes:
    """Tour partner tracking codes (pid and mcid query parameters)."""

    partner_id: Optional[str] = None
    campaign_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AffiliateCodes":
        # Stored per partner: {"viator": {"partnerId": ..., "campaignId": ...}}
        partner = _section(data, "viator") or data
        return cls(partner_id=partner.get("partnerId"), campaign_id=partner.get("campaignId"))


@dataclass
class Subscription:
    """Billing tier, which decides whether the trial watermark is shown."""

    tier: str = "none"
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Subscription":
        return cls(tier=data.get("tier") or "none", status=data.get("status"))


@dataclass
class UserProfile:
    """
    Travel advisor account profile.

    Attributes:
        name: Advisor display name
        email: Contact email
        phone: Contact phone
        agency: Agency identity and links
        branding: Theme colours
        affiliates: Partner tracking codes
        template: Advisor's preferred template name
        subscription: Billing tier
    """

    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    agency: AgencyInfo = field(default_factory=AgencyInfo)
    branding: Branding = field(default_factory=Branding)
    affiliates: AffiliateCodes = field(default_factory=AffiliateCodes)
    template: Optional[str] = None
    subscription: Subscription = field(default_factory=Subscription)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        """
        Build a profile from its stored (camelCase) mapping.

        Missing sections become empty defaults.
        """
        return cls(
            name=data.get("name") or "",
            email=data.get("email"),
            phone=data.get("phone"),
            agency=AgencyInfo.from_dict(_section(data, "agency")),
            branding=Branding.from_dict(_section(data, "branding")),
            affiliates=AffiliateCodes.from_dict(_section(data, "affiliates")),
            template=data.get("template"),
            subscription=Subscription.from_dict(_section(data, "subscription")),
        )

    @property
    def is_trial(self) -> bool:
        return self.subscription.tier == TRIAL_TIER


def coerce_profile(profile: Any) -> Optional[UserProfile]:
    """Accept a UserProfile, a stored mapping, or None."""
    if profile is None or isinstance(profile, UserProfile):
        return profile
    if isinstance(profile, Mapping):
        return UserProfile.from_dict(profile)
    raise TypeError(f"Unsupported profile type: {type(profile).__name__}")


@dataclass
class AgentInfo:
    """Agent identity as templates see it under _config.agent."""

    name: str = DEFAULT_AGENT_NAME
    agency: str = DEFAULT_AGENCY_NAME
    email: Optional[str] = None
    phone: Optional[str] = None
    franchise: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    booking_url: Optional[str] = None
    primary_color: Optional[str] = None
    accent_color: Optional[str] = None

    def to_template_dict(self) -> Dict[str, Any]:
        """Camel-cased mapping, without unset fields."""
        keys = {
            "name": "name",
            "agency": "agency",
            "email": "email",
            "phone": "phone",
            "franchise": "franchise",
            "logo": "logo",
            "website": "website",
            "booking_url": "bookingUrl",
            "primary_color": "primaryColor",
            "accent_color": "accentColor",
        }
        return {keys[k]: v for k, v in asdict(self).items() if v is not None}


def build_agent_info(profile: Optional[UserProfile]) -> AgentInfo:
    """
    Derive the displayed agent identity from a profile.

    Without a profile the generic "Travel Agent" / "Travel Agency" identity is used.
    """
    if profile is None:
        return AgentInfo()
    return AgentInfo(
        name=profile.name,
        agency=profile.agency.name,
        email=profile.email,
        phone=profile.phone,
        franchise=profile.agency.franchise,
        logo=profile.agency.logo,
        website=profile.agency.website,
        booking_url=profile.agency.booking_url,
        primary_color=profile.branding.primary_color,
        accent_color=profile.branding.accent_color,
    )
