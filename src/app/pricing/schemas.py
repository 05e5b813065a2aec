"""Pydantic data models for the pricing engine.

Defines the closed enums for every intake field that has a fixed option set,
the PricingInput intake record, the LineItem breakdown entry, the computed
PricingOutput, and the QuoteTexts bundle produced by the formatters.

Wire format: every model serializes with camelCase aliases (``companyName``,
``lineItems``, ``oneTimeCost``) so stored quotes and API payloads keep the
field names the admin dashboard already reads. snake_case names are accepted
on input as well.

Industry is intentionally a free string: unknown industries are priced as
"Other" instead of being rejected.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# -- Enums --------------------------------------------------------------------


class Tier(str, Enum):
    STARTER = "Starter"
    GROWTH = "Growth"
    ENTERPRISE = "Enterprise"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Channel(str, Enum):
    VOICE = "voice"
    CHAT = "chat"
    SMS = "sms"
    EMAIL = "email"


class Integration(str, Enum):
    CRM = "crm"
    CALENDAR = "calendar"
    PAYMENT = "payment"
    CUSTOM_API = "custom_api"


class Industry(str, Enum):
    """Industries with a defined price modifier. Anything else prices as OTHER."""

    REAL_ESTATE = "Real Estate"
    INSURANCE = "Insurance"
    HOME_SERVICES = "Home Services"
    HEALTHCARE = "Healthcare"
    LEGAL = "Legal"
    CHILDCARE = "Childcare"
    FINANCIAL_SERVICES = "Financial Services"
    TECHNOLOGY = "Technology"
    OTHER = "Other"


class EmployeeCount(str, Enum):
    XS = "1-5"
    SMALL = "6-20"
    MEDIUM = "21-50"
    LARGE = "51-200"
    XL = "200+"


class MonthlyLeads(str, Enum):
    UNDER_50 = "<50"
    FROM_50_TO_200 = "50-200"
    FROM_200_TO_500 = "200-500"
    OVER_500 = "500+"


class CallDuration(str, Enum):
    UNDER_2_MIN = "<2min"
    FROM_2_TO_5_MIN = "2-5min"
    FROM_5_TO_10_MIN = "5-10min"
    OVER_10_MIN = "10min+"


class LineItemCategory(str, Enum):
    SETUP = "Setup"
    BASE = "Base"
    CHANNELS = "Channels"
    INTEGRATIONS = "Integrations"
    WORKFLOWS = "Workflows"
    CUSTOMIZATION = "Customization"
    VOLUME = "Volume"
    ADDONS = "Add-ons"


# -- Base ---------------------------------------------------------------------


class _WireModel(BaseModel):
    """Immutable model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# -- Intake -------------------------------------------------------------------


class PricingInput(_WireModel):
    """Business intake form driving one quote calculation.

    Attributes:
        company_name: Prospect's company name. May be empty.
        industry: Industry vertical; unknown values price as "Other".
        employee_count: Team size bucket.
        channels: Selected contact channels, input order preserved,
            duplicates dropped.
        integrations: Selected integrations, input order preserved,
            duplicates dropped.
        custom_workflows: Number of custom workflows. Negative values are
            clamped to zero.
        ai_personality: Custom AI tone/script requested.
        multi_language: Multi-language support requested.
        monthly_leads: Expected monthly lead volume bucket.
        avg_call_duration: Average call length. Informational only, never
            priced.
        dedicated_support: Dedicated support add-on.
        analytics_package: Analytics add-on.
        white_label: White label add-on.
        sla_guarantee: SLA add-on.
    """

    company_name: str = ""
    industry: str = ""
    employee_count: EmployeeCount = EmployeeCount.XS
    channels: tuple[Channel, ...] = ()
    integrations: tuple[Integration, ...] = ()
    custom_workflows: int = 0
    ai_personality: bool = False
    multi_language: bool = False
    monthly_leads: MonthlyLeads = MonthlyLeads.UNDER_50
    avg_call_duration: CallDuration = CallDuration.UNDER_2_MIN
    dedicated_support: bool = False
    analytics_package: bool = False
    white_label: bool = False
    sla_guarantee: bool = False

    @field_validator("channels", "integrations")
    @classmethod
    def _drop_duplicates(cls, value: tuple) -> tuple:
        return tuple(dict.fromkeys(value))

    @field_validator("custom_workflows")
    @classmethod
    def _clamp_workflows(cls, value: int) -> int:
        return max(0, value)


# -- Output -------------------------------------------------------------------


class LineItem(_WireModel):
    """One priced component of a quote."""

    category: LineItemCategory
    item: str
    monthly_cost: int = Field(ge=0, default=0)
    one_time_cost: int = Field(ge=0, default=0)


class PricingOutput(_WireModel):
    """Result of one pricing calculation.

    Attributes:
        recommended_tier: Tier chosen from the complexity score.
        tier_reason: Human-readable reason including the numeric score.
        complexity_score: Raw additive complexity score.
        base_monthly_cost: Tier base monthly price.
        channel_cost: Sum of channel monthly prices.
        integration_cost: Sum of integration monthly prices.
        workflow_cost: Custom workflow monthly price.
        volume_cost: Monthly volume adjustment (0 for <50 leads).
        addon_cost: Sum of add-on monthly prices.
        monthly_total: Final monthly price after industry modifier and floor.
        setup_fee: Tier setup plus every line item's one-time cost.
        annual_total: Twelve months less the annual discount.
        annual_discount: 10% of twelve months, rounded.
        line_items: Priced components in display order.
        confidence: How reliable the quote is.
        notes: Guardrail warnings, possibly empty.
    """

    recommended_tier: Tier
    tier_reason: str
    complexity_score: int
    base_monthly_cost: int
    channel_cost: int
    integration_cost: int
    workflow_cost: int
    volume_cost: int
    addon_cost: int
    monthly_total: int
    setup_fee: int
    annual_total: int
    annual_discount: int
    line_items: list[LineItem] = Field(default_factory=list)
    confidence: Confidence
    notes: list[str] = Field(default_factory=list)


class QuoteTexts(_WireModel):
    """All four copy-ready renderings of a quote."""

    sms: str
    email: str
    proposal: str
    internal_notes: str


__all__ = [
    "CallDuration",
    "Channel",
    "Confidence",
    "EmployeeCount",
    "Industry",
    "Integration",
    "LineItem",
    "LineItemCategory",
    "MonthlyLeads",
    "PricingInput",
    "PricingOutput",
    "QuoteTexts",
    "Tier",
]
