"""Advisory recommendations.

Fixed guidance keyed off individual dimension scores: architecture
patterns, a delivery timeline, team composition and risk controls.
"""

from .dimensions import get_score
from .sizing import calculate_total_score
from .schema import AdvisoryRecommendations, DimensionId, ScoreSet


def architecture_recommendations(scores: ScoreSet) -> list[str]:
    recs = []
    complexity = get_score(scores, DimensionId.WORKFLOW_COMPLEXITY)
    systems = get_score(scores, DimensionId.SYSTEMS_TO_INTEGRATE)
    reach = get_score(scores, DimensionId.USER_REACH)
    platform = get_score(scores, DimensionId.PLATFORM_MIX)

    if complexity == 3:
        recs.append("Implement a Router-Solver pattern to manage non-deterministic flows.")
        recs.append("Use a dedicated State Management layer for long-running conversations.")

    if systems >= 2:
        recs.append("Adopt an API Gateway pattern to abstract backend complexity.")
        recs.append("Implement Circuit Breakers for resilience against legacy system failures.")

    if reach == 3:
        recs.append("Deploy a global CDN for static assets and edge caching.")
        recs.append("Implement multi-channel support (Teams, Web, Mobile) via Experience Agents.")

    if platform == 3:
        recs.append("Hybrid architecture: Copilot Studio for orchestration, Azure Functions for complex logic.")
        recs.append("Use Azure AI Search for RAG (Retrieval Augmented Generation) over unstructured data.")

    if not recs:
        recs.append("Standard Copilot Studio architecture is sufficient.")
        recs.append("Focus on prompt engineering and topic design.")

    return recs


def delivery_estimate(scores: ScoreSet) -> list[str]:
    # These cut-offs are delivery bands, not the configurable sizing tiers.
    total = calculate_total_score(scores)

    if total >= 20:
        return [
            "Timeline: 4-6 months for MVP.",
            "Phase 1: Foundation & Core Integrations (8 weeks).",
            "Phase 2: Agent Development & Testing (12 weeks).",
            "Phase 3: Pilot & Tuning (4-6 weeks).",
        ]
    if total >= 12:
        return [
            "Timeline: 2-3 months for MVP.",
            "Phase 1: Design & Setup (4 weeks).",
            "Phase 2: Build & Integrate (6 weeks).",
            "Phase 3: UAT & Launch (2-3 weeks).",
        ]
    return [
        "Timeline: 4-6 weeks for MVP.",
        "Sprint 1-2: Configuration & Content.",
        "Sprint 3: Testing & Deployment.",
    ]


def team_composition(scores: ScoreSet) -> list[str]:
    complexity = get_score(scores, DimensionId.WORKFLOW_COMPLEXITY)
    sensitivity = get_score(scores, DimensionId.DATA_SENSITIVITY)
    adoption = get_score(scores, DimensionId.CHANGE_AND_ADOPTION)
    platform = get_score(scores, DimensionId.PLATFORM_MIX)

    team = ["Product Owner (100%)"]

    if complexity >= 2 or platform >= 2:
        team.append("Solution Architect (50-100%)")
        team.append("Senior Power Platform Developer (100%)")
    else:
        team.append("Power Platform Maker (100%)")

    if sensitivity >= 2:
        team.append("Security/Compliance Officer (Part-time)")

    if adoption >= 2:
        team.append("Change Manager (50%)")

    if platform == 3:
        team.append("Azure Developer / Pro-Code Dev (100%)")

    return team


def risk_controls(scores: ScoreSet) -> list[str]:
    controls = []
    sensitivity = get_score(scores, DimensionId.DATA_SENSITIVITY)
    complexity = get_score(scores, DimensionId.WORKFLOW_COMPLEXITY)
    reach = get_score(scores, DimensionId.USER_REACH)

    if sensitivity == 3:
        controls.append("Data Leakage: Implement DLP policies and PII masking.")
        controls.append("Compliance: Mandatory legal review of all prompts and outputs.")

    if complexity == 3:
        controls.append("Hallucinations: Implement strict grounding checks and citation requirements.")
        controls.append("Looping: Add conversation turn limits and exit conditions.")

    if reach == 3:
        controls.append("Reputational Risk: Red-teaming required before public launch.")
        controls.append("Cost Overrun: Implement token usage monitoring and budget alerts.")

    if not controls:
        controls.append("Standard operational risks apply.")
        controls.append("Monitor conversation quality regularly.")

    return controls


def get_recommendations(scores: ScoreSet) -> AdvisoryRecommendations:
    """Bundle all advisory text for a score set."""
    return AdvisoryRecommendations(
        architecture=architecture_recommendations(scores),
        delivery=delivery_estimate(scores),
        team=team_composition(scores),
        risks=risk_controls(scores),
    )
