"""Scenarios and what-if simulation.

A scenario is a named score set. Edits never touch the original: every
operation returns a new ``Scenario``. A simulation is a detached copy of
a baseline that remembers where it came from, so the two can be assessed
side by side with ``compare_assessments``.
"""

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dimensions import DIMENSIONS, MAX_OPTION_SCORE, MIN_OPTION_SCORE, get_dimension, get_score
from .schema import AssessmentResult, Necessity, RiskLevel, ScoreSet, TShirtSize

logger = logging.getLogger(__name__)


def validate_score(dimension_id: str, value: int) -> None:
    """Check one dimension score.

    Raises:
        ValueError: If the dimension is unknown or the score is outside 1-3.
    """
    if get_dimension(dimension_id) is None:
        raise ValueError(f"Unknown dimension: {dimension_id}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Score for {dimension_id} must be an integer, got {value!r}")
    if not MIN_OPTION_SCORE <= value <= MAX_OPTION_SCORE:
        raise ValueError(
            f"Score for {dimension_id} must be between {MIN_OPTION_SCORE} and {MAX_OPTION_SCORE}, got {value}"
        )


class Scenario(BaseModel):
    """A named set of dimension scores."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    scores: ScoreSet = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_updated: datetime = Field(default_factory=datetime.utcnow)
    is_simulation: bool = False
    original_scenario_id: Optional[str] = None

    @field_validator("scores")
    @classmethod
    def _check_scores(cls, scores: ScoreSet) -> ScoreSet:
        for dimension_id, value in scores.items():
            validate_score(dimension_id, value)
        return scores

    @property
    def missing_dimensions(self) -> list[str]:
        """Dimension ids that have not been scored yet."""
        return [d.id.value for d in DIMENSIONS if d.id.value not in self.scores]


def create_scenario(name: str, scores: Optional[ScoreSet] = None) -> Scenario:
    return Scenario(name=name, scores=dict(scores or {}))


def with_score(scenario: Scenario, dimension_id: str, value: int) -> Scenario:
    """Return a copy of the scenario with one score changed.

    Raises:
        ValueError: If the dimension or score is invalid.
    """
    validate_score(dimension_id, value)
    return scenario.model_copy(update={
        "scores": {**scenario.scores, dimension_id: value},
        "last_updated": datetime.utcnow(),
    })


def with_scores(scenario: Scenario, changes: ScoreSet) -> Scenario:
    """Apply several score changes at once."""
    for dimension_id, value in changes.items():
        scenario = with_score(scenario, dimension_id, value)
    return scenario


def duplicate_scenario(scenario: Scenario) -> Scenario:
    now = datetime.utcnow()
    return scenario.model_copy(
        update={
            "id": str(uuid.uuid4()),
            "name": f"{scenario.name} (Copy)",
            "created_at": now,
            "last_updated": now,
        },
        deep=True,
    )


def create_simulation(baseline: Scenario) -> Scenario:
    """Create a what-if copy of a baseline scenario.

    The copy shares nothing with the baseline, so editing one never
    changes the other.
    """
    now = datetime.utcnow()
    return baseline.model_copy(
        update={
            "id": str(uuid.uuid4()),
            "name": f"{baseline.name} (Simulation)",
            "created_at": now,
            "last_updated": now,
            "is_simulation": True,
            "original_scenario_id": baseline.id,
        },
        deep=True,
    )


class NecessityChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    archetype_id: str
    before: Necessity
    after: Necessity


class ScenarioComparison(BaseModel):
    """Differences between a baseline assessment and a simulated one."""
    model_config = ConfigDict(frozen=True)

    tier_before: TShirtSize
    tier_after: TShirtSize
    risk_before: RiskLevel
    risk_after: RiskLevel
    total_score_delta: int
    # Only dimensions whose score changed; positive means the simulation scored higher.
    score_deltas: dict[str, int] = Field(default_factory=dict)
    archetypes_added: list[str] = Field(default_factory=list)
    archetypes_removed: list[str] = Field(default_factory=list)
    necessity_changes: list[NecessityChange] = Field(default_factory=list)

    @property
    def tier_changed(self) -> bool:
        return self.tier_before != self.tier_after

    @property
    def risk_changed(self) -> bool:
        return self.risk_before != self.risk_after

    @property
    def has_changes(self) -> bool:
        return bool(
            self.tier_changed or self.risk_changed or self.score_deltas
            or self.archetypes_added or self.archetypes_removed or self.necessity_changes
        )


def compare_assessments(baseline: AssessmentResult, simulated: AssessmentResult) -> ScenarioComparison:
    """Compare two assessments, typically a baseline and its simulation."""
    score_deltas = {}
    for dimension in DIMENSIONS:
        delta = get_score(simulated.scores, dimension.id) - get_score(baseline.scores, dimension.id)
        if delta:
            score_deltas[dimension.id.value] = delta

    before = {r.archetype_id: r.necessity for r in baseline.sizing.agent_recommendations}
    after = {r.archetype_id: r.necessity for r in simulated.sizing.agent_recommendations}

    return ScenarioComparison(
        tier_before=baseline.sizing.tier,
        tier_after=simulated.sizing.tier,
        risk_before=baseline.risk_profile.level,
        risk_after=simulated.risk_profile.level,
        total_score_delta=simulated.sizing.total_score - baseline.sizing.total_score,
        score_deltas=score_deltas,
        archetypes_added=[a for a in after if a not in before],
        archetypes_removed=[a for a in before if a not in after],
        necessity_changes=[
            NecessityChange(archetype_id=a, before=before[a], after=after[a])
            for a in after
            if a in before and before[a] != after[a]
        ],
    )


def parse_score_assignments(assignments: Union[list[str], tuple[str, ...]]) -> ScoreSet:
    """Parse ``dimension=value`` strings into a score set.

    Raises:
        ValueError: On a malformed assignment or an invalid score.
    """
    scores = {}
    for assignment in assignments:
        if "=" not in assignment:
            raise ValueError(f"Expected dimension=value, got '{assignment}'")
        key, raw = assignment.split("=", 1)
        key = key.strip()
        try:
            value = int(raw.strip())
        except ValueError:
            raise ValueError(f"Score for {key} must be an integer, got '{raw.strip()}'") from None
        validate_score(key, value)
        scores[key] = value
    return scores


def load_scenario(path: Union[str, Path]) -> Scenario:
    """Load a scenario from a JSON file.

    The file holds either a full scenario document or a bare mapping of
    dimension ids to scores, which becomes a scenario named after the file.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")

    if "scores" in data:
        scenario = Scenario.model_validate(data)
    else:
        scenario = create_scenario(path.stem, data)

    logger.info("Loaded scenario '%s' from %s", scenario.name, path)
    return scenario


def save_scenario(scenario: Scenario, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(scenario.model_dump_json(indent=2))
    logger.info("Saved scenario '%s' to %s", scenario.name, path)
