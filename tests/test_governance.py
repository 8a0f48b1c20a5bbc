"""Tests for governance selection and impact classification."""

import pytest

from agent_sizer.defaults import default_governance_rules
from agent_sizer.governance import (
    build_governance_pack,
    calculate_impact_level,
    oversight_for,
    select_governance,
)
from agent_sizer.schema import (
    GovernancePriority,
    GovernanceRule,
    ImpactLevel,
    RiskLevel,
    RiskProfile,
)

LOW_RISK = RiskProfile(level=RiskLevel.LOW)
MEDIUM_RISK = RiskProfile(level=RiskLevel.MEDIUM, reasons=["x"])


def rule_ids(requirements) -> list[str]:
    return [r.rule_id for r in requirements]


class TestSelectGovernance:
    """Tests for the rule-driven requirement list."""

    def test_baseline_rules_always_apply(self):
        requirements = select_governance({}, default_governance_rules(), LOW_RISK)
        assert rule_ids(requirements) == ["logging", "monitoring"]

    def test_high_sensitivity_adds_dpia(self):
        requirements = select_governance({"dataSensitivity": 3}, default_governance_rules(), LOW_RISK)
        assert "dpia" in rule_ids(requirements)

    def test_risk_level_rule_uses_profile(self):
        rules = default_governance_rules()
        assert "content-safety" not in rule_ids(select_governance({}, rules, LOW_RISK))
        assert "content-safety" in rule_ids(select_governance({}, rules, MEDIUM_RISK))

    def test_rule_order_preserved(self):
        scores = {"dataSensitivity": 3, "workflowComplexity": 2, "userReach": 3}
        requirements = select_governance(scores, default_governance_rules(), MEDIUM_RISK)
        assert rule_ids(requirements) == [
            "dpia", "human-loop", "logging", "monitoring", "jailbreak", "content-safety",
        ]

    def test_no_deduplication(self):
        rule = dict(title="Same", description="Same", category="Safety", priority="Mandatory")
        rules = [GovernanceRule(id="one", **rule), GovernanceRule(id="two", **rule)]
        requirements = select_governance({}, rules, LOW_RISK)
        assert len(requirements) == 2
        assert [r.title for r in requirements] == ["Same", "Same"]

    def test_requirement_copies_rule_text(self):
        requirements = select_governance({}, default_governance_rules(), LOW_RISK)
        logging_req = requirements[0]
        assert logging_req.title == "Conversation Logging"
        assert logging_req.category == "Traceability"
        assert logging_req.priority == GovernancePriority.MANDATORY


class TestImpactLevel:
    """Fixed decision table over three raw scores."""

    @pytest.mark.parametrize("scores,expected", [
        ({"dataSensitivity": 3, "userReach": 3}, ImpactLevel.HIGH),
        ({"dataSensitivity": 3, "workflowComplexity": 3}, ImpactLevel.HIGH),
        ({"dataSensitivity": 3}, ImpactLevel.MODERATE),
        ({"userReach": 3}, ImpactLevel.MODERATE),
        ({"dataSensitivity": 2, "userReach": 2}, ImpactLevel.MODERATE),
        ({"workflowComplexity": 3}, ImpactLevel.LOW),
        ({"dataSensitivity": 2, "userReach": 1}, ImpactLevel.LOW),
        ({}, ImpactLevel.LOW),
    ])
    def test_decision_table(self, scores, expected):
        assert calculate_impact_level(scores) == expected

    @pytest.mark.parametrize("impact", list(ImpactLevel))
    def test_oversight_for_every_level(self, impact):
        points, cadence = oversight_for(impact)
        assert points
        assert cadence


class TestGovernancePack:
    """Tests for build_governance_pack."""

    def test_high_impact_pack(self):
        scores = {"dataSensitivity": 3, "userReach": 3}
        pack = build_governance_pack(scores, default_governance_rules(), MEDIUM_RISK)
        assert pack.impact_level == ImpactLevel.HIGH
        assert pack.risk_profile == MEDIUM_RISK
        assert pack.oversight_points == [
            "Approval of high-value transactions",
            "Review of flagged toxic/unsafe conversations",
        ]
        assert pack.monitoring_cadence.startswith("Continuous real-time monitoring")

    def test_low_impact_pack(self):
        pack = build_governance_pack({}, default_governance_rules(), LOW_RISK)
        assert pack.impact_level == ImpactLevel.LOW
        assert pack.monitoring_cadence == "Quarterly review of performance and safety metrics."
