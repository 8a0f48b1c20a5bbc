"""Agent archetype catalog.

To add an archetype, append an entry in ``get_archetypes`` with a unique
kebab-case id and give it a role type in ``ROLE_TYPE_BY_ARCHETYPE``.
Trigger-condition text is rendered from the live risk thresholds so the
catalog reads the same numbers the archetype triggers evaluate against.
"""

from typing import Optional, TYPE_CHECKING

from .schema import AgentArchetype, AgentType, ArchetypeTier

if TYPE_CHECKING:
    from .config import RiskThresholds


# Display grouping only. Has no effect on classification.
ROLE_TYPE_BY_ARCHETYPE: dict[str, AgentType] = {
    "user-facing-copilot": AgentType.EXPERIENCE,
    "orchestrator": AgentType.VALUE_STREAM,
    "simulation-planning": AgentType.VALUE_STREAM,
    "specialist-domain": AgentType.FUNCTION,
    "connector-integration": AgentType.FUNCTION,
    "logical-reasoning": AgentType.PROCESS,
    "memory-context": AgentType.PROCESS,
    "toolsmith-action": AgentType.TASK,
    "governance-guardrail": AgentType.CONTROL,
    "meta-self-improving": AgentType.CONTROL,
}

DEFAULT_ROLE_TYPE = AgentType.TASK


def map_archetype_to_role_type(archetype_id: str) -> AgentType:
    """Map an archetype id to its role-type label.

    Unknown ids fall back to Task Agents.
    """
    return ROLE_TYPE_BY_ARCHETYPE.get(archetype_id, DEFAULT_ROLE_TYPE)


def get_archetypes(risk_thresholds: Optional["RiskThresholds"] = None) -> list[AgentArchetype]:
    """Build the archetype catalog.

    Args:
        risk_thresholds: Thresholds quoted in the trigger-condition text.
            Defaults to the built-in risk thresholds.
    """
    if risk_thresholds is None:
        from .config import RiskThresholds
        risk_thresholds = RiskThresholds()

    low = risk_thresholds.LOW
    medium = risk_thresholds.MEDIUM
    high = risk_thresholds.HIGH

    return [
        # --- Core ---
        AgentArchetype(
            id="orchestrator",
            name="Orchestrator",
            tier=ArchetypeTier.CORE,
            short_description="Coordinates multiple agents and workflows to achieve a complex goal.",
            long_description=(
                "Acts as the central brain, breaking down user requests into sub-tasks and "
                "delegating them to specialized agents. It manages state, handles errors, and "
                "synthesizes the final response."
            ),
            trigger_condition=(
                f"Always recommended. Critical when Workflow Complexity >= Medium ({medium}) "
                f"or Business Scope >= Medium ({medium})."
            ),
            example_microsoft_fit="Azure AI Agent Service, Semantic Kernel (Planner)",
        ),
        AgentArchetype(
            id="logical-reasoning",
            name="Logical / Reasoning",
            tier=ArchetypeTier.CORE,
            short_description="Handles complex problem-solving and decision-making tasks.",
            long_description=(
                "Focuses on analyzing data, applying business logic, and deriving conclusions "
                "without necessarily taking external actions. It excels at multi-step reasoning chains."
            ),
            trigger_condition=f"Recommended when Workflow Complexity is Large ({high}).",
            example_microsoft_fit="Azure OpenAI (o1/o3 models), Prompt Flow",
        ),
        AgentArchetype(
            id="specialist-domain",
            name="Specialist / Domain",
            tier=ArchetypeTier.CORE,
            short_description="Possesses deep knowledge in a specific vertical or subject matter.",
            long_description=(
                "Trained or prompted with specific domain expertise (e.g., legal, medical, HR) to "
                "provide highly accurate and context-aware responses. It often uses RAG patterns."
            ),
            trigger_condition=(
                f"Recommended when Business Scope >= Medium ({medium}) "
                f"or Agent Count >= Medium ({medium})."
            ),
            example_microsoft_fit="Copilot Studio (Custom Copilots), Azure AI Search (RAG)",
        ),
        AgentArchetype(
            id="connector-integration",
            name="Connector / Integration",
            tier=ArchetypeTier.CORE,
            short_description="Bridges the gap between the AI system and external APIs or databases.",
            long_description=(
                "Responsible for executing actions in external systems, fetching real-time data, "
                "and formatting inputs/outputs for other agents. It abstracts the complexity of API calls."
            ),
            trigger_condition=f"Required when Systems to Integrate >= Medium ({medium}).",
            example_microsoft_fit="Power Automate, Azure Logic Apps, Custom Connectors",
        ),
        AgentArchetype(
            id="user-facing-copilot",
            name="User-Facing / Copilot",
            tier=ArchetypeTier.CORE,
            short_description="Interacts directly with end-users via chat or voice interfaces.",
            long_description=(
                "Manages the conversation flow, maintains persona, and ensures a smooth user "
                "experience. It routes intent to backend agents while keeping the user informed."
            ),
            trigger_condition=f"Always recommended. Critical when User Reach >= Medium ({medium}).",
            example_microsoft_fit="Microsoft Copilot (M365), Copilot Studio",
        ),
        AgentArchetype(
            id="governance-guardrail",
            name="Governance / Guardrail",
            tier=ArchetypeTier.CORE,
            short_description="Ensures safety, compliance, and adherence to policies.",
            long_description=(
                "Monitors inputs and outputs for toxicity, sensitive data leakage, or policy "
                "violations. It acts as a filter or validator for other agents."
            ),
            trigger_condition=(
                f"Required when Data Sensitivity >= Medium ({medium}) "
                f"or Workflow Complexity is Large ({high})."
            ),
            example_microsoft_fit="Azure AI Content Safety, Purview",
        ),
        AgentArchetype(
            id="meta-self-improving",
            name="Meta / Self-Improving",
            tier=ArchetypeTier.CORE,
            short_description="Analyzes system performance and optimizes other agents.",
            long_description=(
                "Observes execution traces to identify bottlenecks or errors and can update "
                "prompts or configurations to improve future performance."
            ),
            trigger_condition=(
                f"Optional. Suggested when both Agent Count and Workflow Complexity are Large ({high})."
            ),
            example_microsoft_fit="Azure AI Foundry (Evaluation), Prompt Flow (Evaluation)",
        ),
        # --- Extended ---
        AgentArchetype(
            id="memory-context",
            name="Memory / Context",
            tier=ArchetypeTier.EXTENDED,
            short_description="Manages long-term state and user context across sessions.",
            long_description=(
                "Stores and retrieves relevant information from past interactions to provide "
                "personalized and continuous experiences. It handles vector databases and knowledge graphs."
            ),
            trigger_condition=(
                f"Optional. Suggested when Workflow Complexity >= Medium ({medium}) "
                f"or User Reach is Large ({high})."
            ),
            example_microsoft_fit="Cosmos DB, Azure AI Search (Vector Store)",
        ),
        AgentArchetype(
            id="toolsmith-action",
            name="Toolsmith / Action",
            tier=ArchetypeTier.EXTENDED,
            short_description="Dynamically selects or constructs tools for specific tasks.",
            long_description=(
                "Identifies the right tool for a job from a library or even generates code to "
                "create a new tool on the fly. It bridges reasoning with execution."
            ),
            trigger_condition=f"Recommended when Systems to Integrate >= Small ({low}).",
            example_microsoft_fit="Semantic Kernel (Plugins), Azure Functions",
        ),
        AgentArchetype(
            id="simulation-planning",
            name="Simulation / Planning",
            tier=ArchetypeTier.EXTENDED,
            short_description="Simulates outcomes or creates detailed plans before execution.",
            long_description=(
                "Runs 'what-if' scenarios to predict results or generates comprehensive project "
                "plans. It helps in risk assessment and strategic decision-making."
            ),
            trigger_condition=(
                f"Optional. Suggested when both Workflow Complexity and Business Scope are Large ({high})."
            ),
            example_microsoft_fit="Azure Digital Twins, Azure OpenAI (Reasoning models)",
        ),
    ]


ARCHETYPE_IDS: frozenset[str] = frozenset(ROLE_TYPE_BY_ARCHETYPE)


def get_archetype(archetype_id: str, risk_thresholds: Optional["RiskThresholds"] = None) -> Optional[AgentArchetype]:
    """Look up an archetype by id. Returns None if not in the catalog."""
    return next((a for a in get_archetypes(risk_thresholds) if a.id == archetype_id), None)


def get_archetypes_by_tier(
    tier: ArchetypeTier,
    risk_thresholds: Optional["RiskThresholds"] = None,
) -> list[AgentArchetype]:
    """Return the archetypes in a catalog tier."""
    return [a for a in get_archetypes(risk_thresholds) if a.tier == tier]
