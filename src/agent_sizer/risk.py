"""Risk classifier.

Two sequential passes:

1. ``apply_risk_rules`` runs the configured rules in order, collecting
   reasons and keeping the most severe level seen (HIGH pins, MEDIUM only
   promotes LOW).
2. ``escalate_risk`` looks at the finished profile: MEDIUM with three or
   more reasons becomes HIGH.

The second pass depends on the final reason count, so it must never be
folded into the rule loop.
"""

import logging
from typing import Optional

from .conditions import matches
from .config import RiskThresholds
from .schema import RiskLevel, RiskProfile, RiskRule, ScoreSet

logger = logging.getLogger(__name__)

ESCALATION_MIN_REASONS = 3
ESCALATION_REASON = "Multiple medium risk factors combined elevate overall risk."


def apply_risk_rules(
    scores: ScoreSet,
    rules: list[RiskRule],
    thresholds: Optional[RiskThresholds] = None,
) -> RiskProfile:
    """Phase 1: evaluate risk rules in configured order."""
    level = RiskLevel.LOW
    reasons: list[str] = []

    for rule in rules:
        if not matches(rule, scores, thresholds=thresholds):
            continue
        reasons.append(rule.reason)
        level = RiskLevel.highest(level, rule.level)

    return RiskProfile(level=level, reasons=reasons)


def escalate_risk(profile: RiskProfile) -> RiskProfile:
    """Phase 2: combine several medium factors into a high rating."""
    if profile.level == RiskLevel.MEDIUM and len(profile.reasons) >= ESCALATION_MIN_REASONS:
        logger.debug("Escalating MEDIUM risk with %d reasons to HIGH", len(profile.reasons))
        return RiskProfile(
            level=RiskLevel.HIGH,
            reasons=[*profile.reasons, ESCALATION_REASON],
        )
    return profile


def classify_risk(
    scores: ScoreSet,
    rules: list[RiskRule],
    thresholds: Optional[RiskThresholds] = None,
) -> RiskProfile:
    """Rate the risk of a score set.

    An empty rule list yields LOW with no reasons.
    """
    return escalate_risk(apply_risk_rules(scores, rules, thresholds))
