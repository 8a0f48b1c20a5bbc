"""Tests for the archetype recommender and the archetype catalog."""

import pytest

from agent_sizer.archetypes import (
    ARCHETYPE_IDS,
    DEFAULT_ROLE_TYPE,
    get_archetype,
    get_archetypes,
    get_archetypes_by_tier,
    map_archetype_to_role_type,
)
from agent_sizer.config import RiskThresholds
from agent_sizer.defaults import default_archetype_triggers
from agent_sizer.recommender import REASON_JOINER, recommend_archetypes
from agent_sizer.schema import (
    AgentType,
    ArchetypeTier,
    ArchetypeTriggerRule,
    Condition,
    Necessity,
    RiskLevel,
    RiskProfile,
)


def trigger(rule_id: str, archetype_id: str, necessity: Necessity, reason: str, *conditions) -> ArchetypeTriggerRule:
    return ArchetypeTriggerRule(
        id=rule_id,
        archetype_id=archetype_id,
        necessity=necessity,
        reason=reason,
        conditions=list(conditions),
    )


def by_id(recommendations) -> dict:
    return {r.archetype_id: r for r in recommendations}


class TestMerge:
    """Necessity only moves up; reasons append only on an upgrade."""

    def test_upgrade_then_weaker(self):
        triggers = [
            trigger("t1", "orchestrator", Necessity.RECOMMENDED, "orig"),
            trigger("t2", "orchestrator", Necessity.DEFINITELY_NEEDED, "second"),
            trigger("t3", "orchestrator", Necessity.RECOMMENDED, "third"),
        ]
        [rec] = recommend_archetypes({}, triggers)
        assert rec.necessity == Necessity.DEFINITELY_NEEDED
        assert rec.reason == "orig" + REASON_JOINER + "second"
        assert rec.reason == "orig Also: second"

    def test_equal_necessity_drops_reason(self):
        triggers = [
            trigger("t1", "orchestrator", Necessity.RECOMMENDED, "first"),
            trigger("t2", "orchestrator", Necessity.RECOMMENDED, "again"),
        ]
        [rec] = recommend_archetypes({}, triggers)
        assert rec.reason == "first"

    def test_two_step_upgrade(self):
        triggers = [
            trigger("t1", "memory-context", Necessity.OPTIONAL, "a"),
            trigger("t2", "memory-context", Necessity.RECOMMENDED, "b"),
            trigger("t3", "memory-context", Necessity.DEFINITELY_NEEDED, "c"),
        ]
        [rec] = recommend_archetypes({}, triggers)
        assert rec.necessity == Necessity.DEFINITELY_NEEDED
        assert rec.reason == "a Also: b Also: c"

    def test_non_matching_trigger_ignored(self):
        triggers = [
            trigger("t1", "orchestrator", Necessity.OPTIONAL, "base"),
            trigger(
                "t2", "orchestrator", Necessity.DEFINITELY_NEEDED, "never",
                Condition(subject="userReach", operator=">=", threshold=3),
            ),
        ]
        [rec] = recommend_archetypes({"userReach": 1}, triggers)
        assert rec.necessity == Necessity.OPTIONAL

    def test_first_trigger_fixes_position(self):
        triggers = [
            trigger("t1", "orchestrator", Necessity.OPTIONAL, "a"),
            trigger("t2", "toolsmith-action", Necessity.RECOMMENDED, "b"),
            trigger("t3", "orchestrator", Necessity.DEFINITELY_NEEDED, "c"),
        ]
        recs = recommend_archetypes({}, triggers)
        assert [r.archetype_id for r in recs] == ["orchestrator", "toolsmith-action"]

    def test_necessity_is_max_of_matching(self):
        necessities = [Necessity.RECOMMENDED, Necessity.OPTIONAL, Necessity.DEFINITELY_NEEDED, Necessity.OPTIONAL]
        triggers = [trigger(f"t{i}", "orchestrator", n, str(i)) for i, n in enumerate(necessities)]
        [rec] = recommend_archetypes({}, triggers)
        assert rec.necessity == max(necessities, key=lambda n: n.rank)

    def test_risk_level_trigger(self):
        triggers = [
            trigger(
                "risky", "governance-guardrail", Necessity.DEFINITELY_NEEDED, "risk",
                Condition(subject="RISK_LEVEL", operator=">=", threshold=3),
            ),
        ]
        assert recommend_archetypes({}, triggers) == []
        recs = recommend_archetypes({}, triggers, RiskProfile(level=RiskLevel.HIGH))
        assert [r.archetype_id for r in recs] == ["governance-guardrail"]

    def test_role_type_mapped(self):
        [rec] = recommend_archetypes({}, [trigger("t", "user-facing-copilot", Necessity.OPTIONAL, "x")])
        assert rec.role_type == AgentType.EXPERIENCE


class TestDefaultTriggers:
    """Default trigger table."""

    def test_minimal_scores(self):
        recs = by_id(recommend_archetypes({}, default_archetype_triggers()))
        assert set(recs) == {"orchestrator", "user-facing-copilot"}
        assert recs["orchestrator"].necessity == Necessity.RECOMMENDED

    def test_complex_scores(self, baseline_scores):
        recs = by_id(recommend_archetypes(baseline_scores, default_archetype_triggers()))
        assert recs["orchestrator"].necessity == Necessity.DEFINITELY_NEEDED
        # The default fallback is weaker, so its reason is not appended.
        assert recs["orchestrator"].reason == "Critical for complex workflows."
        assert recs["governance-guardrail"].necessity == Necessity.DEFINITELY_NEEDED
        assert recs["logical-reasoning"].necessity == Necessity.RECOMMENDED
        assert recs["toolsmith-action"].necessity == Necessity.RECOMMENDED
        assert recs["memory-context"].necessity == Necessity.OPTIONAL
        assert "connector-integration" not in recs

    def test_no_duplicate_ids(self):
        scores = {d: 3 for d in [
            "businessScope", "agentCountAndTypes", "systemsToIntegrate", "workflowComplexity",
            "dataSensitivity", "userReach", "changeAndAdoption", "platformMix",
        ]}
        ids = [r.archetype_id for r in recommend_archetypes(scores, default_archetype_triggers())]
        assert len(ids) == len(set(ids))
        assert set(ids) == ARCHETYPE_IDS

    def test_named_thresholds_follow_config(self):
        lowered = RiskThresholds(LOW=1, MEDIUM=1, HIGH=3)
        recs = by_id(recommend_archetypes({"userReach": 1}, default_archetype_triggers(), thresholds=lowered))
        assert recs["user-facing-copilot"].necessity == Necessity.DEFINITELY_NEEDED


class TestArchetypeCatalog:
    """Tests for the archetype catalog."""

    def test_ten_archetypes(self):
        archetypes = get_archetypes()
        assert len(archetypes) == 10
        assert {a.id for a in archetypes} == ARCHETYPE_IDS

    def test_every_archetype_has_role_type(self):
        for archetype_id in ARCHETYPE_IDS:
            assert map_archetype_to_role_type(archetype_id) in AgentType

    def test_unknown_archetype_falls_back(self):
        assert map_archetype_to_role_type("does-not-exist") == DEFAULT_ROLE_TYPE

    def test_get_archetype(self):
        assert get_archetype("orchestrator").tier == ArchetypeTier.CORE
        assert get_archetype("nope") is None

    @pytest.mark.parametrize("tier,count", [
        (ArchetypeTier.CORE, 7),
        (ArchetypeTier.EXTENDED, 3),
        (ArchetypeTier.EMERGING, 0),
    ])
    def test_by_tier(self, tier, count):
        assert len(get_archetypes_by_tier(tier)) == count
