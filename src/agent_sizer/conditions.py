"""Condition evaluation and rule matching.

Every selector (risk, governance, archetype triggers) decides whether a
rule applies through ``matches``. The convention shared by all of them:

    A rule matches when ALL of its conditions are true.
    A rule with NO conditions always matches (vacuous truth).

Baseline requirements such as conversation logging rely on the empty-list
case, so do not turn it into "never matches".
"""

import logging
import operator
from typing import Callable, Optional

from .config import RiskThresholds
from .dimensions import get_score
from .schema import (
    Condition,
    DimensionSubject,
    Operator,
    RiskLevel,
    RiskLevelSubject,
    RiskProfile,
    Rule,
    ScoreSet,
)

logger = logging.getLogger(__name__)


COMPARATORS: dict[Operator, Callable[[int, int], bool]] = {
    Operator.GE: operator.ge,
    Operator.GT: operator.gt,
    Operator.LE: operator.le,
    Operator.LT: operator.lt,
    Operator.EQ: operator.eq,
    Operator.NE: operator.ne,
}


def resolve_threshold(condition: Condition, thresholds: Optional[RiskThresholds] = None) -> int:
    """Return the integer threshold of a condition.

    Named thresholds (``LOW``/``MEDIUM``/``HIGH``) on a dimension are looked
    up in ``thresholds``, or in the built-in defaults when none are given.
    On ``RISK_LEVEL`` a name always means its fixed ordinal (1, 2, 3).
    """
    if isinstance(condition.threshold, RiskLevel):
        if isinstance(condition.subject, RiskLevelSubject):
            return condition.threshold.ordinal
        return (thresholds or RiskThresholds()).value_of(condition.threshold)
    return condition.threshold


def evaluate_condition(
    condition: Condition,
    scores: ScoreSet,
    risk_profile: Optional[RiskProfile] = None,
    thresholds: Optional[RiskThresholds] = None,
) -> bool:
    """Evaluate a single condition against a score set.

    Args:
        condition: The comparison to evaluate.
        scores: Dimension scores. A missing dimension reads as 0.
        risk_profile: Precomputed risk profile, needed by ``RISK_LEVEL``
            conditions. Without it such a condition is False.
        thresholds: Risk thresholds for named threshold values.

    Returns:
        Whether the condition holds.
    """
    if isinstance(condition.subject, DimensionSubject):
        actual = get_score(scores, condition.subject.dimension)
    else:
        if risk_profile is None:
            return False
        actual = risk_profile.level.ordinal

    compare = COMPARATORS[condition.operator]
    return compare(actual, resolve_threshold(condition, thresholds))


def matches(
    rule: Rule,
    scores: ScoreSet,
    risk_profile: Optional[RiskProfile] = None,
    thresholds: Optional[RiskThresholds] = None,
) -> bool:
    """Check whether every condition of a rule holds.

    An empty condition list matches every score set.
    """
    result = all(
        evaluate_condition(condition, scores, risk_profile, thresholds)
        for condition in rule.conditions
    )
    if result:
        logger.debug("Rule %s matched", rule.id)
    return result
