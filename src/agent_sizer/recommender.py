"""Archetype recommender.

Runs archetype triggers in configured order and merges matches per
archetype id:

- The first matching trigger for an archetype creates its recommendation
  and fixes its position in the output.
- A later match raises the necessity to ``max(existing, new)``. When that
  actually changes the necessity, the trigger's reason is appended as
  ``" Also: <reason>"``. An equal or weaker match changes nothing and its
  reason is dropped.

So necessity only ever moves up (Optional -> Recommended -> Definitely
needed), and the result holds at most one entry per archetype id.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .archetypes import map_archetype_to_role_type
from .conditions import matches
from .config import RiskThresholds
from .schema import (
    AgentRecommendation,
    ArchetypeTriggerRule,
    Necessity,
    RiskProfile,
    ScoreSet,
)

logger = logging.getLogger(__name__)

REASON_JOINER = " Also: "


@dataclass
class _Accumulated:
    """Mutable working copy of a recommendation while triggers are merged."""
    archetype_id: str
    necessity: Necessity
    reason: str

    def merge(self, trigger: ArchetypeTriggerRule) -> bool:
        """Fold a later matching trigger in. Returns True if it upgraded."""
        upgraded = Necessity.highest(self.necessity, trigger.necessity)
        if upgraded == self.necessity:
            return False
        self.necessity = upgraded
        self.reason = f"{self.reason}{REASON_JOINER}{trigger.reason}"
        return True

    def freeze(self) -> AgentRecommendation:
        return AgentRecommendation(
            role_type=map_archetype_to_role_type(self.archetype_id),
            archetype_id=self.archetype_id,
            necessity=self.necessity,
            reason=self.reason,
        )


def recommend_archetypes(
    scores: ScoreSet,
    triggers: list[ArchetypeTriggerRule],
    risk_profile: Optional[RiskProfile] = None,
    thresholds: Optional[RiskThresholds] = None,
) -> list[AgentRecommendation]:
    """Recommend agent archetypes for a score set.

    Args:
        scores: Dimension scores.
        triggers: Archetype triggers, evaluated in order.
        risk_profile: Needed only by triggers that reference RISK_LEVEL.
        thresholds: Risk thresholds for named threshold values.

    Returns:
        One recommendation per archetype, in first-trigger order.
    """
    accumulated: dict[str, _Accumulated] = {}

    for trigger in triggers:
        if not matches(trigger, scores, risk_profile, thresholds):
            continue

        existing = accumulated.get(trigger.archetype_id)
        if existing is None:
            accumulated[trigger.archetype_id] = _Accumulated(
                archetype_id=trigger.archetype_id,
                necessity=trigger.necessity,
                reason=trigger.reason,
            )
        elif existing.merge(trigger):
            logger.debug(
                "Upgraded %s to %s via %s",
                trigger.archetype_id, existing.necessity.value, trigger.id,
            )

    return [entry.freeze() for entry in accumulated.values()]
