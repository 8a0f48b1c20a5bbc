"""Sizing engine - aggregate pipeline.

Runs every classifier against one rules configuration snapshot:

1. Risk classification (first, so rules on RISK_LEVEL can see it)
2. Sizing and archetype recommendations
3. Governance selection
4. Architecture tiers and advisory text

The engine holds no mutable state of its own. Each call works on a copy
of the caller's scores.
"""

import logging
from typing import Optional

from .advisory import get_recommendations
from .config import RulesConfig, get_config
from .dimensions import normalize_scores
from .governance import build_governance_pack
from .recommender import recommend_archetypes
from .risk import classify_risk
from .schema import (
    AgentRecommendation,
    ArchetypeTestCase,
    AssessmentResult,
    GovernancePack,
    Necessity,
    RiskProfile,
    ScoreSet,
    SizingResult,
)
from .sizing import classify_size, recommended_patterns, sizing_notes
from .tiers import map_architecture_tiers

logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"


class SizingEngine:
    """Sizes, risk-rates and governs an agent solution from dimension scores.

    Usage:
        engine = SizingEngine()
        result = engine.assess({"businessScope": 2, "userReach": 3, ...})

    Without an explicit config the engine reads the current global
    snapshot at call time, so ``update_config`` takes effect on the next
    call.
    """

    def __init__(self, config: Optional[RulesConfig] = None):
        self._config = config

    @property
    def config(self) -> RulesConfig:
        return self._config if self._config is not None else get_config()

    def risk(self, scores: ScoreSet) -> RiskProfile:
        """Rate the risk of a score set."""
        return self._risk(dict(scores), self.config)

    def recommend(
        self,
        scores: ScoreSet,
        risk_profile: Optional[RiskProfile] = None,
    ) -> list[AgentRecommendation]:
        """Recommend agent archetypes for a score set."""
        config = self.config
        scores = dict(scores)
        if risk_profile is None:
            risk_profile = self._risk(scores, config)
        return self._recommend(scores, risk_profile, config)

    def governance(
        self,
        scores: ScoreSet,
        risk_profile: Optional[RiskProfile] = None,
    ) -> GovernancePack:
        """Select governance requirements and oversight for a score set.

        Args:
            scores: Dimension scores.
            risk_profile: A previously computed risk profile. Computed from
                the scores when omitted.
        """
        config = self.config
        scores = dict(scores)
        if risk_profile is None:
            risk_profile = self._risk(scores, config)
        return self._governance(scores, risk_profile, config)

    def classify(
        self,
        scores: ScoreSet,
        risk_profile: Optional[RiskProfile] = None,
    ) -> SizingResult:
        """Size a score set and recommend the agents it needs."""
        config = self.config
        scores = dict(scores)
        if risk_profile is None:
            risk_profile = self._risk(scores, config)
        return self._classify(scores, risk_profile, config)

    def assess(self, scores: ScoreSet) -> AssessmentResult:
        """Run the full pipeline for a score set.

        The configuration is read once; every section and the fingerprint
        come from that same snapshot.

        Returns:
            AssessmentResult with sizing, risk, governance and advisory
            sections, stamped with the configuration fingerprint.
        """
        scores = dict(scores)
        config = self.config

        risk_profile = self._risk(scores, config)
        sizing = self._classify(scores, risk_profile, config)
        governance = self._governance(scores, risk_profile, config)

        logger.debug(
            "Assessed total=%s tier=%s risk=%s impact=%s",
            sizing.total_score, sizing.tier.value, risk_profile.level.value,
            governance.impact_level.value,
        )

        return AssessmentResult(
            engine_version=ENGINE_VERSION,
            config_fingerprint=config.fingerprint(),
            scores=normalize_scores(scores),
            sizing=sizing,
            risk_profile=risk_profile,
            governance=governance,
            advisory=get_recommendations(scores),
        )

    @staticmethod
    def _risk(scores: ScoreSet, config: RulesConfig) -> RiskProfile:
        return classify_risk(scores, config.risk_rules, config.risk_thresholds)

    @staticmethod
    def _recommend(
        scores: ScoreSet,
        risk_profile: RiskProfile,
        config: RulesConfig,
    ) -> list[AgentRecommendation]:
        return recommend_archetypes(
            scores, config.archetype_triggers, risk_profile, config.risk_thresholds,
        )

    @staticmethod
    def _governance(
        scores: ScoreSet,
        risk_profile: RiskProfile,
        config: RulesConfig,
    ) -> GovernancePack:
        return build_governance_pack(
            scores, config.governance_rules, risk_profile, config.risk_thresholds,
        )

    def _classify(
        self,
        scores: ScoreSet,
        risk_profile: RiskProfile,
        config: RulesConfig,
    ) -> SizingResult:
        size = classify_size(scores, config.sizing_thresholds)
        recommendations = self._recommend(scores, risk_profile, config)

        return SizingResult(
            total_score=size.total_score,
            tier=size.tier,
            notes=sizing_notes(scores),
            recommended_patterns=recommended_patterns(scores, size.tier),
            agent_recommendations=recommendations,
            architecture_tiers=map_architecture_tiers(scores),
            test_cases=self._test_cases_for(recommendations, config),
        )

    @staticmethod
    def _test_cases_for(
        recommendations: list[AgentRecommendation],
        config: RulesConfig,
    ) -> list[ArchetypeTestCase]:
        """Collect test case templates for every non-optional recommendation."""
        plans = {plan.archetype_id: plan for plan in config.test_plan_templates}
        cases = []
        for rec in recommendations:
            if rec.necessity == Necessity.OPTIONAL:
                continue
            plan = plans.get(rec.archetype_id)
            if plan is not None:
                cases.extend(plan.cases)
        return cases
