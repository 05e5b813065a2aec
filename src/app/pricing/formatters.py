"""Copy-ready text renderings of a computed quote.

Four pure functions, one per outbound channel. Each takes the intake and the
computed output and returns a plain string ready to paste into an SMS, an
email, a proposal document, or the internal CRM notes field. None of them
perform I/O.

The brand name defaults to DEFAULT_BRAND and can be overridden per call.
"""

from __future__ import annotations

from src.app.pricing import catalog
from src.app.pricing.engine import industry_multiplier
from src.app.pricing.schemas import PricingInput, PricingOutput, QuoteTexts

DEFAULT_BRAND = "Tessara Systems"

_RULE = "=" * 40


def _money(amount: int) -> str:
    return f"${amount:,}"


def _short_brand(brand: str) -> str:
    return brand.split()[0] if brand.strip() else brand


def _channel_list(data: PricingInput) -> str:
    return ", ".join(catalog.CHANNEL_LABELS[c] for c in data.channels) or "None selected"


def _integration_list(data: PricingInput) -> str:
    return ", ".join(catalog.INTEGRATION_LABELS[i] for i in data.integrations) or "None selected"


def generate_sms_quote(
    data: PricingInput, output: PricingOutput, *, brand: str = DEFAULT_BRAND
) -> str:
    return (
        f"Hi {data.company_name} — here's your {_short_brand(brand)} quote:\n\n"
        f"Plan: {output.recommended_tier.value}\n"
        f"Monthly: {_money(output.monthly_total)}/mo\n"
        f"Setup: {_money(output.setup_fee)} one-time\n"
        f"Annual (10% off): {_money(output.annual_total)}/yr\n\n"
        "Ready to move forward? Reply YES or call us."
    )


def generate_email_quote(
    data: PricingInput, output: PricingOutput, *, brand: str = DEFAULT_BRAND
) -> str:
    """Render the quote as an email with subject line and itemized sections.

    The monthly breakdown lists only items with a monthly cost. The one-time
    setup section is omitted entirely when no item carries a one-time cost.
    """
    monthly_lines = "\n".join(
        f"  • {li.item}: {_money(li.monthly_cost)}/mo"
        for li in output.line_items
        if li.monthly_cost > 0
    )
    setup_lines = "\n".join(
        f"  • {li.item}: {_money(li.one_time_cost)}"
        for li in output.line_items
        if li.one_time_cost > 0
    )
    tier = output.recommended_tier.value

    parts = [
        f"Subject: Your {brand} Quote — {tier} Plan\n\n",
        f"Hi {data.company_name},\n\n",
        f"Thank you for your interest in {_short_brand(brand)}. "
        "Based on our discovery call, here's what we recommend:\n\n",
        f"RECOMMENDED PLAN: {tier}\n",
        f"{output.tier_reason}\n\n",
        f"MONTHLY BREAKDOWN:\n{monthly_lines}\n\n",
        f"MONTHLY TOTAL: {_money(output.monthly_total)}/mo\n\n",
    ]
    if setup_lines:
        parts.append(
            f"ONE-TIME SETUP:\n{setup_lines}\n"
            f"SETUP TOTAL: {_money(output.setup_fee)}\n\n"
        )
    parts.extend([
        "ANNUAL OPTION (10% discount):\n",
        f"  {_money(output.annual_total)}/yr (save {_money(output.annual_discount)})\n\n",
        "Next step: Schedule your onboarding call and we'll have your system "
        "live within 2 weeks.\n\n",
        f"— The {brand} Team",
    ])
    return "".join(parts)


def generate_proposal_summary(
    data: PricingInput, output: PricingOutput, *, brand: str = DEFAULT_BRAND
) -> str:
    """Render a labeled proposal summary. The NOTES block is omitted when empty."""
    notes_block = ""
    if output.notes:
        notes_block = "NOTES:\n" + "\n".join(f"  • {n}" for n in output.notes) + "\n\n"

    return (
        f"{brand.upper()} — PROPOSAL SUMMARY\n"
        f"{_RULE}\n\n"
        f"Client: {data.company_name}\n"
        f"Industry: {data.industry}\n"
        f"Team Size: {data.employee_count.value}\n"
        f"Monthly Lead Volume: {data.monthly_leads.value}\n\n"
        f"RECOMMENDED: {output.recommended_tier.value} Plan\n"
        f"{output.tier_reason}\n\n"
        "PRICING:\n"
        f"  Monthly: {_money(output.monthly_total)}\n"
        f"  Setup: {_money(output.setup_fee)}\n"
        f"  Annual: {_money(output.annual_total)} (save {_money(output.annual_discount)})\n\n"
        f"CHANNELS: {_channel_list(data)}\n"
        f"INTEGRATIONS: {_integration_list(data)}\n"
        f"WORKFLOWS: {data.custom_workflows}\n\n"
        f"{notes_block}"
        f"Confidence: {output.confidence.value.upper()}"
    )


def generate_internal_notes(data: PricingInput, output: PricingOutput) -> str:
    """Render internal notes with the raw modifier and a per-item cost breakdown.

    Each line item shows its monthly and one-time amounts inline, e.g.
    ``[Integrations] Custom API Integration: $300/mo + $500 setup``. The FLAGS
    section lists every note, or reads "No flags." when there are none.
    """
    item_lines = []
    for li in output.line_items:
        amounts = []
        if li.monthly_cost > 0:
            amounts.append(f"{_money(li.monthly_cost)}/mo")
        if li.one_time_cost > 0:
            amounts.append(f"{_money(li.one_time_cost)} setup")
        item_lines.append(f"  [{li.category.value}] {li.item}: {' + '.join(amounts)}")

    if output.notes:
        flags = "FLAGS:\n" + "\n".join(f"  ⚠ {n}" for n in output.notes)
    else:
        flags = "No flags."

    return (
        "INTERNAL QUOTE NOTES\n"
        f"{_RULE}\n\n"
        f"Company: {data.company_name}\n"
        f"Industry: {data.industry} (modifier: {industry_multiplier(data.industry):g}x)\n"
        f"Size: {data.employee_count.value} employees\n"
        f"Volume: {data.monthly_leads.value} leads/mo\n"
        f"Avg Call: {data.avg_call_duration.value}\n\n"
        f"Tier: {output.recommended_tier.value} ({output.tier_reason})\n"
        f"Confidence: {output.confidence.value}\n\n"
        f"Monthly: {_money(output.monthly_total)}\n"
        f"Setup: {_money(output.setup_fee)}\n"
        f"Annual: {_money(output.annual_total)}\n\n"
        "LINE ITEMS:\n"
        + "\n".join(item_lines)
        + "\n\n"
        + flags
    )


def render_all(
    data: PricingInput, output: PricingOutput, *, brand: str = DEFAULT_BRAND
) -> QuoteTexts:
    """Render every text format for one quote."""
    return QuoteTexts(
        sms=generate_sms_quote(data, output, brand=brand),
        email=generate_email_quote(data, output, brand=brand),
        proposal=generate_proposal_summary(data, output, brand=brand),
        internal_notes=generate_internal_notes(data, output),
    )


__all__ = [
    "DEFAULT_BRAND",
    "generate_email_quote",
    "generate_internal_notes",
    "generate_proposal_summary",
    "generate_sms_quote",
    "render_all",
]
