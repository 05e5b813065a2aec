"""Static price tables and display labels for the pricing engine.

All amounts are flat USD. Tables are read-only mappings built once at import;
there is no runtime configuration or hot reload of prices.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from src.app.pricing.schemas import Channel, Industry, Integration, MonthlyLeads, Tier

MINIMUM_MONTHLY: int = 497
HIGH_VALUE_MONTHLY: int = 10_000
ANNUAL_DISCOUNT_RATE: float = 0.10

TIER_MONTHLY: Mapping[Tier, int] = MappingProxyType({
    Tier.STARTER: 497,
    Tier.GROWTH: 1497,
    Tier.ENTERPRISE: 2997,
})

TIER_SETUP: Mapping[Tier, int] = MappingProxyType({
    Tier.STARTER: 500,
    Tier.GROWTH: 1500,
    Tier.ENTERPRISE: 3500,
})

CHANNEL_MONTHLY: Mapping[Channel, int] = MappingProxyType({
    Channel.VOICE: 200,
    Channel.CHAT: 100,
    Channel.SMS: 150,
    Channel.EMAIL: 75,
})

INTEGRATION_MONTHLY: Mapping[Integration, int] = MappingProxyType({
    Integration.CRM: 100,
    Integration.CALENDAR: 50,
    Integration.PAYMENT: 150,
    Integration.CUSTOM_API: 300,
})

INTEGRATION_SETUP: Mapping[Integration, int] = MappingProxyType({
    Integration.CUSTOM_API: 500,
})

WORKFLOW_MONTHLY: int = 75

AI_PERSONALITY_MONTHLY: int = 100
AI_PERSONALITY_SETUP: int = 250
MULTI_LANGUAGE_MONTHLY: int = 200

# Add-ons in display order: (input field, label, monthly, one-time)
ADDONS: tuple[tuple[str, str, int, int], ...] = (
    ("dedicated_support", "Dedicated Support", 300, 0),
    ("analytics_package", "Analytics Package", 200, 0),
    ("white_label", "White Label", 500, 1000),
    ("sla_guarantee", "SLA Guarantee", 250, 0),
)

VOLUME_MULTIPLIERS: Mapping[MonthlyLeads, float] = MappingProxyType({
    MonthlyLeads.UNDER_50: 1.0,
    MonthlyLeads.FROM_50_TO_200: 1.15,
    MonthlyLeads.FROM_200_TO_500: 1.35,
    MonthlyLeads.OVER_500: 1.6,
})

INDUSTRY_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    Industry.REAL_ESTATE.value: 1.0,
    Industry.INSURANCE.value: 1.1,
    Industry.HOME_SERVICES.value: 0.95,
    Industry.HEALTHCARE.value: 1.15,
    Industry.LEGAL.value: 1.2,
    Industry.CHILDCARE.value: 0.9,
    Industry.FINANCIAL_SERVICES.value: 1.15,
    Industry.TECHNOLOGY.value: 1.05,
    Industry.OTHER.value: 1.0,
})

CHANNEL_LABELS: Mapping[Channel, str] = MappingProxyType({
    Channel.VOICE: "Voice (AI Phone)",
    Channel.CHAT: "Web Chat",
    Channel.SMS: "SMS / Text",
    Channel.EMAIL: "Email",
})

INTEGRATION_LABELS: Mapping[Integration, str] = MappingProxyType({
    Integration.CRM: "CRM Integration",
    Integration.CALENDAR: "Calendar Sync",
    Integration.PAYMENT: "Payment Processing",
    Integration.CUSTOM_API: "Custom API Integration",
})

TIER_REASONS: Mapping[Tier, str] = MappingProxyType({
    Tier.ENTERPRISE: "multi-channel, high-volume, or advanced integrations detected",
    Tier.GROWTH: "moderate channel/integration needs",
    Tier.STARTER: "straightforward setup with limited channels",
})


__all__ = [
    "ADDONS",
    "AI_PERSONALITY_MONTHLY",
    "AI_PERSONALITY_SETUP",
    "ANNUAL_DISCOUNT_RATE",
    "CHANNEL_LABELS",
    "CHANNEL_MONTHLY",
    "HIGH_VALUE_MONTHLY",
    "INDUSTRY_MULTIPLIERS",
    "INTEGRATION_LABELS",
    "INTEGRATION_MONTHLY",
    "INTEGRATION_SETUP",
    "MINIMUM_MONTHLY",
    "MULTI_LANGUAGE_MONTHLY",
    "TIER_MONTHLY",
    "TIER_REASONS",
    "TIER_SETUP",
    "VOLUME_MULTIPLIERS",
    "WORKFLOW_MONTHLY",
]
