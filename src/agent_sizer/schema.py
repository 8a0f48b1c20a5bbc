"""Pydantic models for the Agent Sizing Engine.

Input schemas (dimensions, score sets, rules) and output schemas
(sizing, risk, governance and agent-role recommendations).
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# A score set maps a dimension id to 1, 2 or 3. Missing dimensions read as 0.
ScoreSet = dict[str, int]

RISK_LEVEL_SUBJECT = "RISK_LEVEL"


# =============================================================================
# Enums
# =============================================================================


class DimensionId(str, Enum):
    """The scorable assessment dimensions."""
    BUSINESS_SCOPE = "businessScope"
    AGENT_COUNT_AND_TYPES = "agentCountAndTypes"
    SYSTEMS_TO_INTEGRATE = "systemsToIntegrate"
    WORKFLOW_COMPLEXITY = "workflowComplexity"
    DATA_SENSITIVITY = "dataSensitivity"
    USER_REACH = "userReach"
    CHANGE_AND_ADOPTION = "changeAndAdoption"
    PLATFORM_MIX = "platformMix"


class TShirtSize(str, Enum):
    """Sizing tier derived from the total score."""
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class RiskLevel(str, Enum):
    """Overall risk rating."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def ordinal(self) -> int:
        """Numeric value used when a condition compares against RISK_LEVEL."""
        return list(RiskLevel).index(self) + 1

    @classmethod
    def highest(cls, current: "RiskLevel", candidate: "RiskLevel") -> "RiskLevel":
        """Return the more severe of two levels."""
        return candidate if candidate.ordinal > current.ordinal else current


class Necessity(str, Enum):
    """How strongly an agent archetype is recommended.

    Members are declared weakest first; ``rank`` follows declaration order.
    """
    OPTIONAL = "Optional"
    RECOMMENDED = "Recommended"
    DEFINITELY_NEEDED = "Definitely needed"

    @property
    def rank(self) -> int:
        return list(Necessity).index(self)

    @classmethod
    def highest(cls, current: "Necessity", candidate: "Necessity") -> "Necessity":
        """Return the stronger necessity. Ties keep ``current``."""
        return candidate if candidate.rank > current.rank else current


class Operator(str, Enum):
    """Comparison operators allowed in rule conditions."""
    GE = ">="
    GT = ">"
    LE = "<="
    LT = "<"
    EQ = "=="
    NE = "!="


class ImpactLevel(str, Enum):
    """Regulatory / oversight exposure used to pick governance boilerplate."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


class GovernancePriority(str, Enum):
    MANDATORY = "Mandatory"
    RECOMMENDED = "Recommended"


class AgentType(str, Enum):
    """Role-type labels used to group archetypes for display."""
    EXPERIENCE = "Experience Agents"
    VALUE_STREAM = "Value Stream Agents"
    FUNCTION = "Function Agents"
    PROCESS = "Process Agents"
    TASK = "Task Agents"
    CONTROL = "Control Agents"


class ArchetypeTier(str, Enum):
    """Catalog tier of an agent archetype."""
    CORE = "core"
    EXTENDED = "extended"
    EMERGING = "emerging"


# =============================================================================
# Catalog Models
# =============================================================================


class DimensionOption(BaseModel):
    """One graded answer for a dimension."""
    model_config = ConfigDict(frozen=True)

    title: str
    description: str


class Dimension(BaseModel):
    """A scorable dimension with its three graded options."""
    model_config = ConfigDict(frozen=True)

    id: DimensionId
    label: str
    description: str
    options: dict[int, DimensionOption]


class AgentArchetype(BaseModel):
    """A reusable agent-role pattern referenced by archetype triggers."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    tier: ArchetypeTier
    short_description: str
    long_description: str
    trigger_condition: Optional[str] = None
    example_microsoft_fit: str


# =============================================================================
# Rule Models
# =============================================================================


class DimensionSubject(BaseModel):
    """Condition subject reading a raw dimension score."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["dimension"] = "dimension"
    dimension: DimensionId

    @property
    def token(self) -> str:
        return self.dimension.value


class RiskLevelSubject(BaseModel):
    """Condition subject reading the precomputed risk level.

    The risk profile has to be computed before any rule using this
    subject is evaluated.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["risk_level"] = "risk_level"

    @property
    def token(self) -> str:
        return RISK_LEVEL_SUBJECT


ConditionSubject = Annotated[
    Union[DimensionSubject, RiskLevelSubject],
    Field(discriminator="kind"),
]


class Condition(BaseModel):
    """A single ``subject operator threshold`` comparison.

    In YAML/JSON the subject is written as a bare string: a dimension id
    or ``RISK_LEVEL``. The threshold is either an integer or the name of a
    risk threshold (``LOW``, ``MEDIUM``, ``HIGH``) resolved at evaluation
    time.
    """
    model_config = ConfigDict(frozen=True)

    subject: ConditionSubject
    operator: Operator
    threshold: Union[int, RiskLevel]

    @field_validator("subject", mode="before")
    @classmethod
    def _parse_subject(cls, value):
        if isinstance(value, str):
            if value == RISK_LEVEL_SUBJECT:
                return {"kind": "risk_level"}
            return {"kind": "dimension", "dimension": value}
        return value

    @field_serializer("subject")
    def _dump_subject(self, subject) -> str:
        return subject.token

    def describe(self) -> str:
        """Human-readable form, e.g. ``dataSensitivity >= HIGH``."""
        threshold = self.threshold.value if isinstance(self.threshold, RiskLevel) else self.threshold
        return f"{self.subject.token} {self.operator.value} {threshold}"


class Rule(BaseModel):
    """A named conjunction of conditions.

    An empty condition list means the rule always applies.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    conditions: list[Condition] = Field(default_factory=list)


class GovernanceRule(Rule):
    """Rule that adds a governance requirement when it matches."""
    title: str
    description: str
    category: str
    priority: GovernancePriority
    trigger_description: Optional[str] = None


class RiskRule(Rule):
    """Rule that contributes a reason and a level to the risk profile."""
    level: RiskLevel
    reason: str
    condition_description: Optional[str] = None


class ArchetypeTriggerRule(Rule):
    """Rule that recommends an agent archetype when it matches."""
    archetype_id: str
    necessity: Necessity
    reason: str


class ArchetypeTestCase(BaseModel):
    """A starter test case attached to an archetype."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    agent_type: str
    description: str
    input: str
    expected_output: str
    edge_cases: list[str] = Field(default_factory=list)


class ArchetypeTestPlan(BaseModel):
    """Test cases to include when an archetype is recommended."""
    model_config = ConfigDict(frozen=True)

    archetype_id: str
    cases: list[ArchetypeTestCase] = Field(default_factory=list)


# =============================================================================
# Result Models
# =============================================================================


class SizeClassification(BaseModel):
    """Total score and the tier it falls into."""
    model_config = ConfigDict(frozen=True)

    total_score: int
    tier: TShirtSize


class RiskProfile(BaseModel):
    """Risk level with the reasons that produced it."""
    model_config = ConfigDict(frozen=True)

    level: RiskLevel = RiskLevel.LOW
    reasons: list[str] = Field(default_factory=list)


class AgentRecommendation(BaseModel):
    """A recommended archetype, at most one per archetype id."""
    model_config = ConfigDict(frozen=True)

    role_type: AgentType
    archetype_id: str
    necessity: Necessity
    reason: str


class ArchitectureTierSpec(BaseModel):
    """Descriptive capacity tiers per agent-role category."""
    model_config = ConfigDict(frozen=True)

    experience_agents: str
    value_stream_agents: str
    function_agents: str
    process_agents: str
    task_agents: str
    control_agents: str
    platform_requirement: str


class SizingResult(BaseModel):
    """Complete sizing output, recomputed from scratch on every call."""
    model_config = ConfigDict(frozen=True)

    total_score: int
    tier: TShirtSize
    notes: list[str] = Field(default_factory=list)
    recommended_patterns: list[str] = Field(default_factory=list)
    agent_recommendations: list[AgentRecommendation] = Field(default_factory=list)
    architecture_tiers: ArchitectureTierSpec
    test_cases: list[ArchetypeTestCase] = Field(default_factory=list)


class GovernanceRequirement(BaseModel):
    """A governance control contributed by a matching rule."""
    model_config = ConfigDict(frozen=True)

    rule_id: str
    title: str
    description: str
    category: str
    priority: GovernancePriority


class GovernancePack(BaseModel):
    """Governance requirements plus impact-driven oversight guidance."""
    model_config = ConfigDict(frozen=True)

    impact_level: ImpactLevel
    risk_profile: RiskProfile
    requirements: list[GovernanceRequirement] = Field(default_factory=list)
    oversight_points: list[str] = Field(default_factory=list)
    monitoring_cadence: str


class AdvisoryRecommendations(BaseModel):
    """Fixed advisory text for architecture, delivery, team and risk controls."""
    model_config = ConfigDict(frozen=True)

    architecture: list[str] = Field(default_factory=list)
    delivery: list[str] = Field(default_factory=list)
    team: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)


class AssessmentResult(BaseModel):
    """Aggregate output consumed by views, exporters and cost models.

    Assessing the same scores under the same config gives structurally
    identical results except for ``assessed_at``, which stamps each call.
    """
    model_config = ConfigDict(frozen=True)

    # Metadata
    engine_version: str = Field(default="1.0.0")
    assessed_at: datetime = Field(default_factory=datetime.utcnow)
    config_fingerprint: str

    # Inputs (snapshot)
    scores: ScoreSet = Field(default_factory=dict)

    # Results
    sizing: SizingResult
    risk_profile: RiskProfile
    governance: GovernancePack
    advisory: AdvisoryRecommendations
