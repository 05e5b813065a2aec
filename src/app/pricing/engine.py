"""Deterministic quote calculation for the admin pricing calculator.

Maps a PricingInput intake form to a PricingOutput: recommended tier from an
additive complexity score, monthly cost accumulated by category, volume and
industry adjustments, setup and annual totals, a confidence rating, and
guardrail notes.

IMPORTANT: The calculation is a pure function. No I/O, no randomness, no
shared mutable state. Identical input always yields an identical output, so
callers may invoke it from any thread without locking.

Rounding is half-up at each intermediate step (volume adjustment, industry
adjusted total, annual discount). Changing the order of those steps changes
quoted prices.

Exports:
    calculate_quote: Full calculation from intake to PricingOutput.
    complexity_score: Additive complexity heuristic used for tier selection.
    determine_tier: Tier, score, and reason for an intake.
    determine_confidence: Confidence rating for an intake.
    industry_multiplier: Price modifier for an industry name.
"""

from __future__ import annotations

import math

from src.app.pricing import catalog
from src.app.pricing.schemas import (
    Confidence,
    EmployeeCount,
    Integration,
    LineItem,
    LineItemCategory,
    MonthlyLeads,
    PricingInput,
    PricingOutput,
    Tier,
)

ENTERPRISE_THRESHOLD = 10
GROWTH_THRESHOLD = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def industry_multiplier(industry: str) -> float:
    """Return the industry price modifier, 1.0 for unknown industries."""
    return catalog.INDUSTRY_MULTIPLIERS.get(industry, 1.0)


# -- Tier & Complexity ---------------------------------------------------------


def _count_points(count: int) -> int:
    """Points for a channel or integration count: 3+ -> 3, exactly 2 -> 1."""
    if count >= 3:
        return 3
    if count == 2:
        return 1
    return 0


def _workflow_points(workflows: int) -> int:
    if workflows >= 5:
        return 3
    if workflows >= 2:
        return 1
    return 0


_LEAD_POINTS: dict[MonthlyLeads, int] = {
    MonthlyLeads.OVER_500: 3,
    MonthlyLeads.FROM_200_TO_500: 2,
    MonthlyLeads.FROM_50_TO_200: 1,
}

_EMPLOYEE_POINTS: dict[EmployeeCount, int] = {
    EmployeeCount.XL: 2,
    EmployeeCount.LARGE: 1,
}


def complexity_score(data: PricingInput) -> int:
    """Compute the additive complexity score for an intake.

    Every applicable rule fires:
        channels:      3+ -> +3, exactly 2 -> +1
        integrations:  3+ -> +3, exactly 2 -> +1, custom_api -> +2 (stacks)
        workflows:     5+ -> +3, 2-4 -> +1
        monthly leads: 500+ -> +3, 200-500 -> +2, 50-200 -> +1
        customization: ai_personality +1, multi_language +1
        team size:     200+ -> +2, 51-200 -> +1
        add-ons:       white_label +2, sla_guarantee +1

    Reasons print the score out of 20, but every rule firing sums to 21.
    Nothing clamps the total.
    """
    score = _count_points(len(data.channels))
    score += _count_points(len(data.integrations))
    if Integration.CUSTOM_API in data.integrations:
        score += 2
    score += _workflow_points(data.custom_workflows)
    score += _LEAD_POINTS.get(data.monthly_leads, 0)
    score += int(data.ai_personality) + int(data.multi_language)
    score += _EMPLOYEE_POINTS.get(data.employee_count, 0)
    if data.white_label:
        score += 2
    if data.sla_guarantee:
        score += 1
    return score


def determine_tier(data: PricingInput) -> tuple[Tier, int, str]:
    """Pick the service tier from the complexity score.

    Thresholds (inclusive):
        score >= 10 -> Enterprise
        score >= 5  -> Growth
        otherwise   -> Starter

    Returns:
        Tuple of (tier, score, tier_reason).
    """
    score = complexity_score(data)
    if score >= ENTERPRISE_THRESHOLD:
        tier = Tier.ENTERPRISE
    elif score >= GROWTH_THRESHOLD:
        tier = Tier.GROWTH
    else:
        tier = Tier.STARTER
    reason = f"Complexity score {score}/20 — {catalog.TIER_REASONS[tier]}"
    return tier, score, reason


def determine_confidence(data: PricingInput) -> Confidence:
    """Rate quote reliability. First matching rule wins.

    low:    custom_api selected or more than 5 custom workflows
    medium: 3+ channels or 500+ monthly leads
    high:   everything else
    """
    if Integration.CUSTOM_API in data.integrations or data.custom_workflows > 5:
        return Confidence.LOW
    if len(data.channels) >= 3 or data.monthly_leads == MonthlyLeads.OVER_500:
        return Confidence.MEDIUM
    return Confidence.HIGH


# -- Notes --------------------------------------------------------------------


def _guardrail_notes(industry: str, modifier: float, adjusted_monthly: int) -> list[str]:
    notes: list[str] = []
    if modifier != 1.0:
        pct = round_half_up((modifier - 1) * 100)
        sign = "+" if pct > 0 else ""
        notes.append(f"{industry} industry modifier: {sign}{pct}% applied")
    if adjusted_monthly < catalog.MINIMUM_MONTHLY:
        notes.append(f"Floor price: ${catalog.MINIMUM_MONTHLY}/mo minimum applies")
    if adjusted_monthly > catalog.HIGH_VALUE_MONTHLY:
        notes.append("High-value quote — recommend custom enterprise proposal")
    return notes


# -- Main Calculation ---------------------------------------------------------


def calculate_quote(data: PricingInput) -> PricingOutput:
    """Compute the full quote for an intake form.

    Steps:
    1. Pick the tier and add its setup fee and base plan line items.
    2. Accumulate channel, integration, workflow and customization costs.
    3. Apply the volume multiplier to that subtotal; record the delta.
    4. Add add-ons, which are never volume adjusted.
    5. Apply the industry multiplier to the whole monthly amount, then the
       floor price.
    6. Derive setup fee, annual discount and annual total.
    7. Rate confidence and collect guardrail notes.

    Never raises for a valid PricingInput.
    """
    tier, score, tier_reason = determine_tier(data)
    base_setup = catalog.TIER_SETUP[tier]
    base_monthly_cost = catalog.TIER_MONTHLY[tier]

    line_items: list[LineItem] = [
        LineItem(
            category=LineItemCategory.SETUP,
            item=f"{tier.value} Setup Fee",
            one_time_cost=base_setup,
        ),
        LineItem(
            category=LineItemCategory.BASE,
            item=f"{tier.value} Plan",
            monthly_cost=base_monthly_cost,
        ),
    ]

    channel_cost = 0
    for channel in data.channels:
        cost = catalog.CHANNEL_MONTHLY.get(channel, 0)
        channel_cost += cost
        if cost > 0:
            line_items.append(LineItem(
                category=LineItemCategory.CHANNELS,
                item=catalog.CHANNEL_LABELS[channel],
                monthly_cost=cost,
            ))

    integration_cost = 0
    for integration in data.integrations:
        cost = catalog.INTEGRATION_MONTHLY.get(integration, 0)
        integration_cost += cost
        if cost > 0:
            line_items.append(LineItem(
                category=LineItemCategory.INTEGRATIONS,
                item=catalog.INTEGRATION_LABELS[integration],
                monthly_cost=cost,
                one_time_cost=catalog.INTEGRATION_SETUP.get(integration, 0),
            ))

    workflows = data.custom_workflows
    workflow_cost = workflows * catalog.WORKFLOW_MONTHLY
    if workflows > 0:
        plural = "s" if workflows > 1 else ""
        line_items.append(LineItem(
            category=LineItemCategory.WORKFLOWS,
            item=f"{workflows} Custom Workflow{plural}",
            monthly_cost=workflow_cost,
        ))

    customization_cost = 0
    if data.ai_personality:
        customization_cost += catalog.AI_PERSONALITY_MONTHLY
        line_items.append(LineItem(
            category=LineItemCategory.CUSTOMIZATION,
            item="Custom AI Personality / Script",
            monthly_cost=catalog.AI_PERSONALITY_MONTHLY,
            one_time_cost=catalog.AI_PERSONALITY_SETUP,
        ))
    if data.multi_language:
        customization_cost += catalog.MULTI_LANGUAGE_MONTHLY
        line_items.append(LineItem(
            category=LineItemCategory.CUSTOMIZATION,
            item="Multi-Language Support",
            monthly_cost=catalog.MULTI_LANGUAGE_MONTHLY,
        ))

    subtotal_before_volume = (
        base_monthly_cost + channel_cost + integration_cost + workflow_cost + customization_cost
    )
    volume_mult = catalog.VOLUME_MULTIPLIERS.get(data.monthly_leads, 1.0)
    volume_cost = round_half_up(subtotal_before_volume * volume_mult - subtotal_before_volume)
    if volume_cost > 0:
        line_items.append(LineItem(
            category=LineItemCategory.VOLUME,
            item=f"Volume Adjustment ({data.monthly_leads.value} leads/mo)",
            monthly_cost=volume_cost,
        ))

    addon_cost = 0
    for field_name, label, monthly, one_time in catalog.ADDONS:
        if getattr(data, field_name):
            addon_cost += monthly
            line_items.append(LineItem(
                category=LineItemCategory.ADDONS,
                item=label,
                monthly_cost=monthly,
                one_time_cost=one_time,
            ))

    modifier = industry_multiplier(data.industry)
    raw_monthly = subtotal_before_volume + volume_cost + addon_cost
    adjusted_monthly = round_half_up(raw_monthly * modifier)
    monthly_total = max(adjusted_monthly, catalog.MINIMUM_MONTHLY)

    # The tier setup line item already carries base_setup
    setup_fee = sum(li.one_time_cost for li in line_items)

    annual_raw = monthly_total * 12
    annual_discount = round_half_up(annual_raw * catalog.ANNUAL_DISCOUNT_RATE)
    annual_total = annual_raw - annual_discount

    return PricingOutput(
        recommended_tier=tier,
        tier_reason=tier_reason,
        complexity_score=score,
        base_monthly_cost=base_monthly_cost,
        channel_cost=channel_cost,
        integration_cost=integration_cost,
        workflow_cost=workflow_cost,
        volume_cost=volume_cost,
        addon_cost=addon_cost,
        monthly_total=monthly_total,
        setup_fee=setup_fee,
        annual_total=annual_total,
        annual_discount=annual_discount,
        line_items=line_items,
        confidence=determine_confidence(data),
        notes=_guardrail_notes(data.industry, modifier, adjusted_monthly),
    )


__all__ = [
    "calculate_quote",
    "complexity_score",
    "determine_confidence",
    "determine_tier",
    "industry_multiplier",
    "round_half_up",
]
