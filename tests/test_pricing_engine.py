"""Unit tests for the deterministic pricing engine.

Covers tier selection from the complexity score, per-category cost
accumulation, volume and industry adjustments, setup fee composition,
confidence rating, guardrail notes, and the arithmetic invariants every
quote must satisfy.
"""

from __future__ import annotations

import pytest

from src.app.pricing import catalog
from src.app.pricing.engine import (
    calculate_quote,
    complexity_score,
    determine_confidence,
    determine_tier,
    industry_multiplier,
    round_half_up,
)
from src.app.pricing.schemas import (
    Confidence,
    LineItemCategory,
    PricingInput,
    Tier,
)


def _intake(**overrides) -> PricingInput:
    """Build a PricingInput with sensible defaults, overridden by kwargs."""
    defaults = {
        "company_name": "Acme Realty",
        "industry": "Real Estate",
        "employee_count": "1-5",
        "channels": [],
        "integrations": [],
        "custom_workflows": 0,
        "monthly_leads": "<50",
    }
    defaults.update(overrides)
    return PricingInput(**defaults)


def _items(output, category: LineItemCategory) -> list:
    return [li for li in output.line_items if li.category == category]


# ── Rounding ─────────────────────────────────────────────────────────────────


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(89.55) == 90

    def test_below_half_rounds_down(self):
        assert round_half_up(537.3) == 537

    def test_negative_halves_round_toward_positive(self):
        assert round_half_up(-2.5) == -2
        assert round_half_up(-9.999999999999998) == -10


# ── Complexity Score & Tier ──────────────────────────────────────────────────


class TestComplexityScore:
    def test_empty_intake_scores_zero(self):
        assert complexity_score(PricingInput()) == 0

    def test_channel_points(self):
        assert complexity_score(_intake(channels=["chat"])) == 0
        assert complexity_score(_intake(channels=["chat", "sms"])) == 1
        assert complexity_score(_intake(channels=["chat", "sms", "voice"])) == 3
        assert complexity_score(_intake(channels=["chat", "sms", "voice", "email"])) == 3

    def test_custom_api_stacks_with_integration_count(self):
        # 3 integrations (+3) plus custom_api (+2)
        data = _intake(integrations=["crm", "calendar", "custom_api"])
        assert complexity_score(data) == 5

    def test_workflow_points(self):
        assert complexity_score(_intake(custom_workflows=1)) == 0
        assert complexity_score(_intake(custom_workflows=2)) == 1
        assert complexity_score(_intake(custom_workflows=4)) == 1
        assert complexity_score(_intake(custom_workflows=5)) == 3

    @pytest.mark.parametrize(
        "leads,points",
        [("<50", 0), ("50-200", 1), ("200-500", 2), ("500+", 3)],
    )
    def test_lead_points(self, leads, points):
        assert complexity_score(_intake(monthly_leads=leads)) == points

    @pytest.mark.parametrize(
        "employees,points",
        [("1-5", 0), ("6-20", 0), ("21-50", 0), ("51-200", 1), ("200+", 2)],
    )
    def test_employee_points(self, employees, points):
        assert complexity_score(_intake(employee_count=employees)) == points

    def test_customization_and_addon_points(self):
        data = _intake(
            ai_personality=True,
            multi_language=True,
            white_label=True,
            sla_guarantee=True,
            dedicated_support=True,
            analytics_package=True,
        )
        # ai +1, multi-language +1, white label +2, SLA +1; the rest score nothing
        assert complexity_score(data) == 5

    def test_score_is_not_clamped(self):
        data = _intake(
            channels=["voice", "chat", "sms", "email"],
            integrations=["crm", "calendar", "payment", "custom_api"],
            custom_workflows=9,
            monthly_leads="500+",
            employee_count="200+",
            ai_personality=True,
            multi_language=True,
            white_label=True,
            sla_guarantee=True,
        )
        assert complexity_score(data) == 21


class TestDetermineTier:
    def test_boundaries_are_inclusive(self):
        growth = _intake(channels=["voice", "chat", "sms"], monthly_leads="200-500")
        assert determine_tier(growth)[:2] == (Tier.GROWTH, 5)

        just_below = _intake(channels=["voice", "chat", "sms"], monthly_leads="50-200")
        assert determine_tier(just_below)[:2] == (Tier.STARTER, 4)

        enterprise = _intake(
            channels=["voice", "chat", "sms"],
            integrations=["crm", "calendar", "payment"],
            monthly_leads="200-500",
            multi_language=True,
            employee_count="51-200",
        )
        assert determine_tier(enterprise)[:2] == (Tier.ENTERPRISE, 10)

        nine = _intake(
            channels=["voice", "chat", "sms"],
            integrations=["crm", "calendar", "payment"],
            monthly_leads="200-500",
            multi_language=True,
        )
        assert determine_tier(nine)[:2] == (Tier.GROWTH, 9)

    def test_reason_reports_score_and_factor(self):
        _, _, reason = determine_tier(_intake(channels=["chat"]))
        assert reason == (
            "Complexity score 0/20 — straightforward setup with limited channels"
        )

        _, _, reason = determine_tier(
            _intake(
                channels=["voice", "chat", "sms"],
                integrations=["crm", "calendar", "custom_api"],
                monthly_leads="500+",
            )
        )
        assert reason.startswith("Complexity score 11/20")
        assert "advanced integrations" in reason


# ── Cost Accumulation ────────────────────────────────────────────────────────


class TestCosts:
    def test_tier_base_and_setup_line_items_come_first(self):
        output = calculate_quote(_intake())
        first, second = output.line_items[:2]
        assert first.category == LineItemCategory.SETUP
        assert first.item == "Starter Setup Fee"
        assert first.one_time_cost == 500
        assert first.monthly_cost == 0
        assert second.category == LineItemCategory.BASE
        assert second.item == "Starter Plan"
        assert second.monthly_cost == 497

    def test_channel_costs_in_input_order(self):
        output = calculate_quote(_intake(channels=["email", "voice"]))
        assert output.channel_cost == 275
        assert [li.item for li in _items(output, LineItemCategory.CHANNELS)] == [
            "Email",
            "Voice (AI Phone)",
        ]

    def test_integration_costs(self):
        output = calculate_quote(_intake(integrations=["crm", "payment"]))
        assert output.integration_cost == 250
        items = _items(output, LineItemCategory.INTEGRATIONS)
        assert [li.one_time_cost for li in items] == [0, 0]

    def test_workflow_line_item_pluralization(self):
        one = calculate_quote(_intake(custom_workflows=1))
        assert _items(one, LineItemCategory.WORKFLOWS)[0].item == "1 Custom Workflow"
        assert one.workflow_cost == 75

        three = calculate_quote(_intake(custom_workflows=3))
        item = _items(three, LineItemCategory.WORKFLOWS)[0]
        assert item.item == "3 Custom Workflows"
        assert item.monthly_cost == 225

    def test_no_workflow_line_item_when_zero(self):
        output = calculate_quote(_intake(custom_workflows=0))
        assert _items(output, LineItemCategory.WORKFLOWS) == []
        assert output.workflow_cost == 0

    def test_customization_line_items(self):
        output = calculate_quote(_intake(ai_personality=True, multi_language=True))
        items = _items(output, LineItemCategory.CUSTOMIZATION)
        assert [(li.item, li.monthly_cost, li.one_time_cost) for li in items] == [
            ("Custom AI Personality / Script", 100, 250),
            ("Multi-Language Support", 200, 0),
        ]

    def test_addons_in_fixed_order_regardless_of_flags(self):
        output = calculate_quote(
            _intake(sla_guarantee=True, white_label=True, dedicated_support=True, analytics_package=True)
        )
        items = _items(output, LineItemCategory.ADDONS)
        assert [li.item for li in items] == [
            "Dedicated Support",
            "Analytics Package",
            "White Label",
            "SLA Guarantee",
        ]
        assert output.addon_cost == 1250
        assert items[2].one_time_cost == 1000

    def test_volume_adjustment(self):
        output = calculate_quote(_intake(channels=["chat"], monthly_leads="50-200"))
        # (497 + 100) * 0.15 = 89.55 -> 90
        assert output.volume_cost == 90
        volume = _items(output, LineItemCategory.VOLUME)
        assert volume[0].item == "Volume Adjustment (50-200 leads/mo)"
        assert volume[0].monthly_cost == 90
        assert output.monthly_total == 687

    def test_no_volume_line_item_under_fifty_leads(self):
        output = calculate_quote(_intake(channels=["chat"]))
        assert output.volume_cost == 0
        assert _items(output, LineItemCategory.VOLUME) == []

    def test_addons_are_not_volume_adjusted(self):
        plain = calculate_quote(_intake(monthly_leads="50-200"))
        with_addon = calculate_quote(_intake(monthly_leads="50-200", dedicated_support=True))
        assert with_addon.volume_cost == plain.volume_cost
        assert with_addon.monthly_total - plain.monthly_total == 300

    def test_avg_call_duration_is_not_priced(self):
        short = calculate_quote(_intake(avg_call_duration="<2min"))
        long = calculate_quote(_intake(avg_call_duration="10min+"))
        assert short == long


# ── Industry Modifier & Floor ────────────────────────────────────────────────


class TestIndustry:
    @pytest.mark.parametrize(
        "industry,expected",
        [
            ("Real Estate", 1.0),
            ("Insurance", 1.1),
            ("Home Services", 0.95),
            ("Healthcare", 1.15),
            ("Legal", 1.2),
            ("Childcare", 0.9),
            ("Financial Services", 1.15),
            ("Technology", 1.05),
            ("Other", 1.0),
            ("Aerospace", 1.0),
            ("", 1.0),
        ],
    )
    def test_multiplier(self, industry, expected):
        assert industry_multiplier(industry) == expected

    def test_premium_industry_note(self):
        output = calculate_quote(_intake(industry="Legal", channels=["chat"]))
        # 597 * 1.2 = 716.4 -> 716
        assert output.monthly_total == 716
        assert "Legal industry modifier: +20% applied" in output.notes

    def test_unknown_industry_priced_as_other_without_note(self):
        output = calculate_quote(_intake(industry="Aerospace", channels=["chat"]))
        assert output.monthly_total == 597
        assert output.notes == []

    def test_floor_applies_after_discount(self):
        output = calculate_quote(_intake(industry="Childcare"))
        # 497 * 0.9 = 447.3 -> 447, lifted to the floor
        assert output.monthly_total == catalog.MINIMUM_MONTHLY
        assert output.notes == [
            "Childcare industry modifier: -10% applied",
            "Floor price: $497/mo minimum applies",
        ]

    def test_no_floor_note_at_exactly_the_floor(self):
        output = calculate_quote(_intake())
        assert output.monthly_total == 497
        assert output.notes == []

    def test_high_value_note(self):
        output = calculate_quote(
            _intake(
                industry="Legal",
                channels=["voice", "chat", "sms", "email"],
                integrations=["crm", "calendar", "payment", "custom_api"],
                custom_workflows=20,
                ai_personality=True,
                multi_language=True,
                monthly_leads="500+",
                dedicated_support=True,
                analytics_package=True,
                white_label=True,
                sla_guarantee=True,
            )
        )
        assert output.recommended_tier == Tier.ENTERPRISE
        assert output.monthly_total > catalog.HIGH_VALUE_MONTHLY
        assert output.notes[-1] == "High-value quote — recommend custom enterprise proposal"


# ── Setup Fee & Annual ───────────────────────────────────────────────────────


class TestSetupAndAnnual:
    def test_setup_fee_composition(self):
        output = calculate_quote(_intake(integrations=["custom_api"], ai_personality=True))
        assert output.recommended_tier == Tier.STARTER
        assert output.setup_fee == 500 + 500 + 250

    def test_white_label_adds_one_time_fee(self):
        output = calculate_quote(_intake(white_label=True))
        assert output.setup_fee == 500 + 1000

    def test_annual_discount(self):
        output = calculate_quote(_intake(integrations=["custom_api"], ai_personality=True))
        assert output.monthly_total == 897
        # 897 * 12 = 10764, 10% = 1076.4 -> 1076
        assert output.annual_discount == 1076
        assert output.annual_total == 9688


# ── Confidence ───────────────────────────────────────────────────────────────


class TestConfidence:
    def test_high_by_default(self):
        assert determine_confidence(_intake(channels=["chat"])) == Confidence.HIGH

    def test_low_for_custom_api(self):
        assert determine_confidence(_intake(integrations=["custom_api"])) == Confidence.LOW

    def test_low_for_more_than_five_workflows(self):
        assert determine_confidence(_intake(custom_workflows=5)) == Confidence.HIGH
        assert determine_confidence(_intake(custom_workflows=6)) == Confidence.LOW

    def test_medium_for_many_channels_or_high_volume(self):
        assert determine_confidence(_intake(channels=["voice", "chat", "sms"])) == Confidence.MEDIUM
        assert determine_confidence(_intake(monthly_leads="500+")) == Confidence.MEDIUM

    def test_low_wins_over_medium(self):
        data = _intake(channels=["voice", "chat", "sms"], integrations=["custom_api"])
        assert determine_confidence(data) == Confidence.LOW


# ── Scenarios ────────────────────────────────────────────────────────────────


class TestScenarios:
    def test_starter(self):
        output = calculate_quote(_intake(channels=["chat"]))
        assert output.recommended_tier == Tier.STARTER
        assert output.base_monthly_cost == 497
        assert output.monthly_total == 597
        assert output.setup_fee == 500
        assert output.confidence == Confidence.HIGH

    def test_growth(self):
        output = calculate_quote(
            _intake(
                channels=["voice", "chat", "sms"],
                integrations=["crm", "calendar"],
                custom_workflows=3,
                monthly_leads="200-500",
            )
        )
        assert output.recommended_tier == Tier.GROWTH
        assert output.complexity_score == 7
        assert output.base_monthly_cost == 1497
        # 1497 + 450 + 150 + 225 = 2322; * 0.35 = 812.7 -> 813
        assert output.volume_cost == 813
        assert output.monthly_total == 3135
        assert output.setup_fee == 1500
        assert output.confidence == Confidence.MEDIUM

    def test_custom_api_with_many_workflows(self):
        output = calculate_quote(_intake(integrations=["custom_api"], custom_workflows=7))
        assert output.confidence == Confidence.LOW
        custom = [li for li in output.line_items if "Custom API" in li.item]
        assert len(custom) == 1
        assert custom[0].one_time_cost == 500
        assert custom[0].monthly_cost == 300

    def test_industry_discount_lowers_price(self):
        childcare = calculate_quote(_intake(industry="Childcare", channels=["chat"]))
        real_estate = calculate_quote(_intake(industry="Real Estate", channels=["chat"]))
        assert childcare.monthly_total < real_estate.monthly_total
        assert childcare.monthly_total == 537
        assert any("Childcare" in n and "-10%" in n for n in childcare.notes)


# ── Invariants ───────────────────────────────────────────────────────────────


_SAMPLE_INTAKES = [
    PricingInput(),
    _intake(channels=["chat"]),
    _intake(industry="Childcare", employee_count="200+"),
    _intake(industry="Home Services", channels=["voice", "sms"], monthly_leads="50-200"),
    _intake(
        industry="Healthcare",
        channels=["voice", "chat", "sms", "email"],
        integrations=["crm", "calendar", "payment", "custom_api"],
        custom_workflows=6,
        monthly_leads="500+",
        ai_personality=True,
        white_label=True,
    ),
    _intake(industry="Technology", integrations=["payment"], monthly_leads="200-500", sla_guarantee=True),
]


@pytest.mark.parametrize("data", _SAMPLE_INTAKES)
def test_quote_invariants(data):
    """Floor, annual arithmetic, setup sum and monthly additivity hold."""
    output = calculate_quote(data)

    assert output.monthly_total >= catalog.MINIMUM_MONTHLY
    assert output.annual_total + output.annual_discount == output.monthly_total * 12
    assert output.setup_fee == sum(li.one_time_cost for li in output.line_items)

    raw_monthly = sum(li.monthly_cost for li in output.line_items)
    expected = max(
        round_half_up(raw_monthly * industry_multiplier(data.industry)),
        catalog.MINIMUM_MONTHLY,
    )
    assert output.monthly_total == expected

    assert all(li.monthly_cost >= 0 and li.one_time_cost >= 0 for li in output.line_items)
    assert output.line_items[0].category == LineItemCategory.SETUP
    assert output.line_items[1].category == LineItemCategory.BASE


@pytest.mark.parametrize("data", _SAMPLE_INTAKES)
def test_calculation_is_deterministic(data):
    assert calculate_quote(data) == calculate_quote(data)
    assert calculate_quote(data).model_dump_json() == calculate_quote(data).model_dump_json()


def test_adding_a_channel_never_lowers_the_price():
    previous = calculate_quote(_intake()).monthly_total
    channels: list[str] = []
    for channel in ["voice", "chat", "sms", "email"]:
        channels.append(channel)
        current = calculate_quote(_intake(channels=channels)).monthly_total
        assert current >= previous
        previous = current


_LEAD_BUCKETS = ["<50", "50-200", "200-500", "500+"]


@pytest.mark.parametrize("industry", ["Real Estate", "Childcare", "Legal", "Healthcare", "Other"])
@pytest.mark.parametrize(
    "extras",
    [
        {},
        {"channels": ["chat"]},
        {"channels": ["voice", "chat", "sms"], "integrations": ["crm", "calendar"]},
        {"integrations": ["custom_api"], "custom_workflows": 7, "ai_personality": True},
        {
            "channels": ["voice", "email"],
            "white_label": True,
            "sla_guarantee": True,
            "employee_count": "200+",
        },
    ],
)
def test_more_leads_never_lowers_the_price(industry, extras):
    previous = None
    for leads in _LEAD_BUCKETS:
        current = calculate_quote(
            _intake(industry=industry, monthly_leads=leads, **extras)
        ).monthly_total
        if previous is not None:
            assert current >= previous, f"{leads} priced below the previous bucket"
        previous = current
