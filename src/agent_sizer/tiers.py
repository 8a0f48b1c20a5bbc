"""Architecture tier mapper.

Independent lookups from raw dimension scores to descriptive capacity
tiers per agent-role category. Unlike the archetype recommender there
is no rule table and no interaction between categories.
"""

from .dimensions import get_score
from .schema import ArchitectureTierSpec, DimensionId, ScoreSet


def _experience_agents(reach: int) -> str:
    if reach == 3:
        return "2+ (Multi-channel)"
    if reach == 2:
        return "1 (Unified Front-end)"
    return "None (Direct Channel)"


def _value_stream_agents(business: int) -> str:
    if business == 3:
        return "Required (Domain Separation)"
    if business == 2:
        return "Recommended"
    return "Optional"


def _function_agents(systems: int) -> str:
    if systems == 3:
        return "3-5+ (Complex Backend)"
    if systems == 2:
        return "2-3"
    return "0-1"


def _process_agents(complexity: int) -> str:
    if complexity == 3:
        return "3+ (Stateful Flows)"
    if complexity == 2:
        return "1-2"
    return "0"


def _task_agents(complexity: int, systems: int) -> str:
    if complexity == 3 and systems == 3:
        return "10+"
    if complexity >= 2 or systems >= 2:
        return "5-10+"
    return "1-5"


def _control_agents(sensitivity: int, complexity: int) -> str:
    if sensitivity == 3 or complexity == 3:
        return "Required (Governance/Routing)"
    if sensitivity == 2:
        return "Recommended"
    return "Not Required"


def _platform_requirement(platform: int) -> str:
    if platform == 3:
        return "Required (Azure AI Foundry + Custom)"
    if platform == 2:
        return "Recommended (Azure AI Search)"
    return "Standard Copilot Studio"


def map_architecture_tiers(scores: ScoreSet) -> ArchitectureTierSpec:
    """Map dimension scores to agent capacity and platform tiers."""
    reach = get_score(scores, DimensionId.USER_REACH)
    business = get_score(scores, DimensionId.BUSINESS_SCOPE)
    systems = get_score(scores, DimensionId.SYSTEMS_TO_INTEGRATE)
    complexity = get_score(scores, DimensionId.WORKFLOW_COMPLEXITY)
    sensitivity = get_score(scores, DimensionId.DATA_SENSITIVITY)
    platform = get_score(scores, DimensionId.PLATFORM_MIX)

    return ArchitectureTierSpec(
        experience_agents=_experience_agents(reach),
        value_stream_agents=_value_stream_agents(business),
        function_agents=_function_agents(systems),
        process_agents=_process_agents(complexity),
        task_agents=_task_agents(complexity, systems),
        control_agents=_control_agents(sensitivity, complexity),
        platform_requirement=_platform_requirement(platform),
    )
