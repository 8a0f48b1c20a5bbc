"""Dimension catalog.

The eight qualitative axes an assessment scores, each with three graded
options. Pure data, built once at import time.
"""

from typing import Optional, Union

from .schema import Dimension, DimensionId, DimensionOption


def _options(*graded: tuple[str, str]) -> dict[int, DimensionOption]:
    return {
        score: DimensionOption(title=title, description=description)
        for score, (title, description) in enumerate(graded, 1)
    }


DIMENSIONS: tuple[Dimension, ...] = (
    Dimension(
        id=DimensionId.BUSINESS_SCOPE,
        label="Business Scope",
        description="Breadth of business processes covered.",
        options=_options(
            ("Single Task", "Personal productivity or single-turn tasks."),
            ("Department Process", "Workflow confined to a single department."),
            ("Enterprise Wide", "Cross-functional or enterprise-wide processes."),
        ),
    ),
    Dimension(
        id=DimensionId.AGENT_COUNT_AND_TYPES,
        label="Number & Types of Agents",
        description="Quantity and variety of agents involved.",
        options=_options(
            ("Single Agent", "One agent handling all topics."),
            ("Multiple Agents", "Several specialized agents."),
            ("Complex Ecosystem", "Many agents with complex orchestration."),
        ),
    ),
    Dimension(
        id=DimensionId.SYSTEMS_TO_INTEGRATE,
        label="Systems to Integrate",
        description="Number and complexity of backend systems.",
        options=_options(
            ("None / Simple", "No integration or simple standard APIs."),
            ("Multiple APIs", "Several standard connectors or APIs."),
            ("Legacy / Complex", "Legacy systems, custom connectors, or on-prem."),
        ),
    ),
    Dimension(
        id=DimensionId.WORKFLOW_COMPLEXITY,
        label="Workflow Complexity",
        description="Logic complexity of the conversations.",
        options=_options(
            ("Linear Q&A", "Simple questions and answers."),
            ("Multi-step", "Conditional logic and branching flows."),
            ("Dynamic", "Non-deterministic or highly complex logic."),
        ),
    ),
    Dimension(
        id=DimensionId.DATA_SENSITIVITY,
        label="Data Sensitivity & Governance",
        description="Data privacy and compliance requirements.",
        options=_options(
            ("Public Data", "No sensitive data involved."),
            ("Internal Data", "Internal but non-sensitive business data."),
            ("Highly Regulated", "PII, PHI, or highly regulated data."),
        ),
    ),
    Dimension(
        id=DimensionId.USER_REACH,
        label="User Reach",
        description="Target audience size and distribution.",
        options=_options(
            ("Small Team", "Pilot group or single team."),
            ("Department", "Entire department or division."),
            ("Global / External", "All employees or external customers."),
        ),
    ),
    Dimension(
        id=DimensionId.CHANGE_AND_ADOPTION,
        label="Change & Adoption Needs",
        description="Impact on user behavior and training needs.",
        options=_options(
            ("Low Impact", "Minimal training required."),
            ("Moderate", "Some training and change management needed."),
            ("Transformational", "Significant changes to ways of working."),
        ),
    ),
    Dimension(
        id=DimensionId.PLATFORM_MIX,
        label="Platform Mix",
        description="Technology stack involvement.",
        options=_options(
            ("Copilot Studio", "Standard Copilot Studio features only."),
            ("+ Azure AI", "Includes Azure AI Search or OpenAI services."),
            ("Full Stack", "Custom code, Azure functions, or complex architecture."),
        ),
    ),
)

MIN_OPTION_SCORE = 1
MAX_OPTION_SCORE = 3
MAX_TOTAL_SCORE = MAX_OPTION_SCORE * len(DIMENSIONS)


def get_dimension(dimension_id: Union[str, DimensionId]) -> Optional[Dimension]:
    """Look up a dimension by id. Returns None for unknown ids."""
    for dimension in DIMENSIONS:
        if dimension.id.value == dimension_id:
            return dimension
    return None


def get_score(scores: dict[str, int], dimension_id: DimensionId) -> int:
    """Read a dimension score.

    A missing entry, or anything that is not an integer, reads as 0.
    """
    value = scores.get(dimension_id.value)
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def normalize_scores(scores: dict) -> dict[str, int]:
    """Keep the known dimensions of a score set, as ``get_score`` reads them."""
    return {
        dimension.id.value: get_score(scores, dimension.id)
        for dimension in DIMENSIONS
        if dimension.id.value in scores
    }
