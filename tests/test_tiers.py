"""Tests for architecture tier mapping and advisory text."""

import pytest

from agent_sizer.advisory import (
    architecture_recommendations,
    delivery_estimate,
    get_recommendations,
    risk_controls,
    team_composition,
)
from agent_sizer.tiers import map_architecture_tiers


class TestArchitectureTiers:
    """Each category is an independent three-way lookup."""

    def test_minimal_scores(self):
        tiers = map_architecture_tiers({})
        assert tiers.experience_agents == "None (Direct Channel)"
        assert tiers.value_stream_agents == "Optional"
        assert tiers.function_agents == "0-1"
        assert tiers.process_agents == "0"
        assert tiers.task_agents == "1-5"
        assert tiers.control_agents == "Not Required"
        assert tiers.platform_requirement == "Standard Copilot Studio"

    def test_maximal_scores(self):
        tiers = map_architecture_tiers({
            "userReach": 3,
            "businessScope": 3,
            "systemsToIntegrate": 3,
            "workflowComplexity": 3,
            "dataSensitivity": 3,
            "platformMix": 3,
        })
        assert tiers.experience_agents == "2+ (Multi-channel)"
        assert tiers.value_stream_agents == "Required (Domain Separation)"
        assert tiers.function_agents == "3-5+ (Complex Backend)"
        assert tiers.process_agents == "3+ (Stateful Flows)"
        assert tiers.task_agents == "10+"
        assert tiers.control_agents == "Required (Governance/Routing)"
        assert tiers.platform_requirement == "Required (Azure AI Foundry + Custom)"

    @pytest.mark.parametrize("scores,expected", [
        ({"workflowComplexity": 3, "systemsToIntegrate": 2}, "5-10+"),
        ({"workflowComplexity": 1, "systemsToIntegrate": 2}, "5-10+"),
        ({"workflowComplexity": 2}, "5-10+"),
        ({"workflowComplexity": 1, "systemsToIntegrate": 1}, "1-5"),
    ])
    def test_task_agents(self, scores, expected):
        assert map_architecture_tiers(scores).task_agents == expected

    @pytest.mark.parametrize("scores,expected", [
        ({"workflowComplexity": 3}, "Required (Governance/Routing)"),
        ({"dataSensitivity": 2}, "Recommended"),
        ({"dataSensitivity": 1, "workflowComplexity": 2}, "Not Required"),
    ])
    def test_control_agents(self, scores, expected):
        assert map_architecture_tiers(scores).control_agents == expected

    def test_medium_values(self):
        tiers = map_architecture_tiers({"userReach": 2, "businessScope": 2, "platformMix": 2})
        assert tiers.experience_agents == "1 (Unified Front-end)"
        assert tiers.value_stream_agents == "Recommended"
        assert tiers.platform_requirement == "Recommended (Azure AI Search)"


class TestAdvisory:
    """Tests for the fixed advisory text."""

    def test_default_architecture(self):
        assert architecture_recommendations({}) == [
            "Standard Copilot Studio architecture is sufficient.",
            "Focus on prompt engineering and topic design.",
        ]

    def test_architecture_accumulates(self):
        recs = architecture_recommendations({"workflowComplexity": 3, "systemsToIntegrate": 2})
        assert len(recs) == 4
        assert recs[0].startswith("Implement a Router-Solver pattern")

    @pytest.mark.parametrize("value,timeline", [
        (3, "Timeline: 4-6 months for MVP."),
        (2, "Timeline: 2-3 months for MVP."),
        (1, "Timeline: 4-6 weeks for MVP."),
    ])
    def test_delivery_estimate(self, value, timeline):
        scores = {d: value for d in [
            "businessScope", "agentCountAndTypes", "systemsToIntegrate", "workflowComplexity",
            "dataSensitivity", "userReach", "changeAndAdoption", "platformMix",
        ]}
        assert delivery_estimate(scores)[0] == timeline

    def test_small_team(self):
        assert team_composition({}) == ["Product Owner (100%)", "Power Platform Maker (100%)"]

    def test_large_team(self):
        team = team_composition({
            "workflowComplexity": 3, "dataSensitivity": 2, "changeAndAdoption": 2, "platformMix": 3,
        })
        assert "Solution Architect (50-100%)" in team
        assert "Security/Compliance Officer (Part-time)" in team
        assert "Change Manager (50%)" in team
        assert team[-1] == "Azure Developer / Pro-Code Dev (100%)"

    def test_default_risk_controls(self):
        assert risk_controls({})[0] == "Standard operational risks apply."

    def test_bundle(self):
        advice = get_recommendations({"dataSensitivity": 3})
        assert advice.risks[0].startswith("Data Leakage")
        assert advice.delivery
        assert advice.team
        assert advice.architecture
