"""Sizing classifier.

Sums the dimension scores and buckets the total into SMALL / MEDIUM /
LARGE using two inclusive lower bounds.
"""

from .config import SizingThresholds
from .dimensions import DIMENSIONS, get_score
from .schema import DimensionId, ScoreSet, SizeClassification, TShirtSize


def calculate_total_score(scores: ScoreSet) -> int:
    """Sum scores over the known dimensions. Missing ones count as 0."""
    return sum(get_score(scores, dimension.id) for dimension in DIMENSIONS)


def tier_for_total(total_score: int, thresholds: SizingThresholds) -> TShirtSize:
    """Map a total score to a tier. Thresholds are inclusive lower bounds."""
    if total_score >= thresholds.LARGE:
        return TShirtSize.LARGE
    if total_score >= thresholds.MEDIUM:
        return TShirtSize.MEDIUM
    return TShirtSize.SMALL


def classify_size(scores: ScoreSet, thresholds: SizingThresholds) -> SizeClassification:
    """Classify a score set into a T-shirt size."""
    total = calculate_total_score(scores)
    return SizeClassification(total_score=total, tier=tier_for_total(total, thresholds))


def sizing_notes(scores: ScoreSet) -> list[str]:
    notes = []
    systems = get_score(scores, DimensionId.SYSTEMS_TO_INTEGRATE)
    platform = get_score(scores, DimensionId.PLATFORM_MIX)

    if systems >= 2 and platform >= 2:
        notes.append(
            "High integration complexity suggests Azure / Azure AI Foundry involvement is likely required."
        )
    return notes


FALLBACK_PATTERNS = {
    TShirtSize.SMALL: "Standard Copilot Studio implementation.",
    TShirtSize.MEDIUM: "Orchestrator pattern with specialized sub-agents.",
    TShirtSize.LARGE: "Enterprise-grade multi-agent ecosystem.",
}


def recommended_patterns(scores: ScoreSet, tier: TShirtSize) -> list[str]:
    """Headline agent patterns, falling back to a size-based pattern."""
    patterns = []
    complexity = get_score(scores, DimensionId.WORKFLOW_COMPLEXITY)
    sensitivity = get_score(scores, DimensionId.DATA_SENSITIVITY)
    reach = get_score(scores, DimensionId.USER_REACH)

    if complexity == 3 or sensitivity == 3:
        patterns.append("Strong need for Control Agents to manage complex logic and governance.")

    if reach >= 2:
        patterns.append("Emphasis on Experience Agents and multi-channel support for broad user reach.")

    if not patterns:
        patterns.append(FALLBACK_PATTERNS[tier])

    return patterns
