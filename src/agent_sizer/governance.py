"""Governance selector.

Requirements come from the configured governance rules: every matching
rule contributes its own requirement, in order, with no deduplication.

Oversight points and monitoring cadence do not come from rules. They
follow the impact level, a fixed classification of regulatory exposure
(an EU AI Act "high risk" proxy).
"""

from typing import Optional

from .conditions import matches
from .config import RiskThresholds
from .dimensions import get_score
from .schema import (
    DimensionId,
    GovernancePack,
    GovernanceRequirement,
    GovernanceRule,
    ImpactLevel,
    RiskProfile,
    ScoreSet,
)


def select_governance(
    scores: ScoreSet,
    rules: list[GovernanceRule],
    risk_profile: RiskProfile,
    thresholds: Optional[RiskThresholds] = None,
) -> list[GovernanceRequirement]:
    """Collect the requirement of every matching governance rule."""
    return [
        GovernanceRequirement(
            rule_id=rule.id,
            title=rule.title,
            description=rule.description,
            category=rule.category,
            priority=rule.priority,
        )
        for rule in rules
        if matches(rule, scores, risk_profile, thresholds)
    ]


def calculate_impact_level(scores: ScoreSet) -> ImpactLevel:
    """Classify regulatory exposure from three raw dimension scores."""
    sensitivity = get_score(scores, DimensionId.DATA_SENSITIVITY)
    reach = get_score(scores, DimensionId.USER_REACH)
    complexity = get_score(scores, DimensionId.WORKFLOW_COMPLEXITY)

    # Sensitive data AND (broad reach OR complex logic)
    if sensitivity == 3 and (reach == 3 or complexity == 3):
        return ImpactLevel.HIGH

    if sensitivity == 3 or reach == 3 or (sensitivity == 2 and reach == 2):
        return ImpactLevel.MODERATE

    return ImpactLevel.LOW


def oversight_for(impact_level: ImpactLevel) -> tuple[list[str], str]:
    """Return (oversight_points, monitoring_cadence) for an impact level."""
    if impact_level == ImpactLevel.HIGH:
        return (
            [
                "Approval of high-value transactions",
                "Review of flagged toxic/unsafe conversations",
            ],
            "Continuous real-time monitoring with Daily stand-ups on safety incidents.",
        )
    if impact_level == ImpactLevel.MODERATE:
        return (
            ["Weekly review of low-confidence responses"],
            "Weekly review of safety dashboards and user feedback.",
        )
    return (
        ["Ad-hoc review of user feedback"],
        "Quarterly review of performance and safety metrics.",
    )


def build_governance_pack(
    scores: ScoreSet,
    rules: list[GovernanceRule],
    risk_profile: RiskProfile,
    thresholds: Optional[RiskThresholds] = None,
) -> GovernancePack:
    """Assemble requirements and impact-driven oversight into one pack."""
    impact_level = calculate_impact_level(scores)
    oversight_points, monitoring_cadence = oversight_for(impact_level)

    return GovernancePack(
        impact_level=impact_level,
        risk_profile=risk_profile,
        requirements=select_governance(scores, rules, risk_profile, thresholds),
        oversight_points=oversight_points,
        monitoring_cadence=monitoring_cadence,
    )
