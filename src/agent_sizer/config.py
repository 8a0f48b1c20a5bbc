"""Centralized rules configuration for the sizing engine.

``RulesConfig`` is an immutable snapshot of every thresholds block and
rule list the engine reads. The engine takes a snapshot as a parameter;
the process-wide holder below (``get_config`` and friends) only exists at
the application boundary. Edits go through ``update_config``, which
builds and validates a new snapshot before swapping it in, so a bad edit
never replaces a good configuration.
"""

import hashlib
import logging
import os
from collections import Counter
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .archetypes import ARCHETYPE_IDS
from .defaults import (
    DEFAULT_LARGE_SIZE_THRESHOLD,
    DEFAULT_MEDIUM_SIZE_THRESHOLD,
    default_archetype_triggers,
    default_governance_rules,
    default_risk_rules,
    default_test_plan_templates,
)
from .dimensions import MAX_OPTION_SCORE, MAX_TOTAL_SCORE
from .schema import (
    ArchetypeTestPlan,
    ArchetypeTriggerRule,
    GovernanceRule,
    RiskLevel,
    RiskLevelSubject,
    RiskRule,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AGENT_SIZER_CONFIG"


class RulesConfigError(ValueError):
    """Raised when a rules configuration is rejected at load or edit time."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__("Invalid rules configuration: " + "; ".join(issues))


class SizingThresholds(BaseModel):
    """Inclusive lower bounds of the MEDIUM and LARGE tiers.

    Totals range from 0 to 3 x number of dimensions (0-24).
    """
    model_config = ConfigDict(frozen=True)

    MEDIUM: int = Field(
        DEFAULT_MEDIUM_SIZE_THRESHOLD,
        description="Minimum total score for a MEDIUM size",
    )
    LARGE: int = Field(
        DEFAULT_LARGE_SIZE_THRESHOLD,
        description="Minimum total score for a LARGE size",
    )


class RiskThresholds(BaseModel):
    """Dimension score behind each named threshold.

    Dimension conditions may use ``LOW``, ``MEDIUM`` or ``HIGH`` instead of
    a literal score; those names resolve here. ``RISK_LEVEL`` conditions
    keep the fixed ordinals.
    """
    model_config = ConfigDict(frozen=True)

    LOW: int = Field(1, description="Score a condition means by LOW")
    MEDIUM: int = Field(2, description="Score a condition means by MEDIUM")
    HIGH: int = Field(3, description="Score a condition means by HIGH")

    def value_of(self, level: RiskLevel) -> int:
        return getattr(self, level.value)


class RulesConfig(BaseModel):
    """Complete, user-editable rules configuration."""
    model_config = ConfigDict(frozen=True)

    sizing_thresholds: SizingThresholds = Field(default_factory=SizingThresholds)
    risk_thresholds: RiskThresholds = Field(default_factory=RiskThresholds)
    governance_rules: list[GovernanceRule] = Field(default_factory=default_governance_rules)
    risk_rules: list[RiskRule] = Field(default_factory=default_risk_rules)
    archetype_triggers: list[ArchetypeTriggerRule] = Field(default_factory=default_archetype_triggers)
    test_plan_templates: list[ArchetypeTestPlan] = Field(default_factory=default_test_plan_templates)

    @model_validator(mode="after")
    def _check_invariants(self) -> "RulesConfig":
        issues = find_config_issues(self)
        if issues:
            raise ValueError("; ".join(issues))
        return self

    def fingerprint(self) -> str:
        """Stable hash of the configuration, usable as a version or cache key."""
        return hashlib.sha256(self.model_dump_json().encode("utf-8")).hexdigest()[:16]


SECTIONS = tuple(RulesConfig.model_fields)


def _duplicate_ids(section: str, rules: list) -> list[str]:
    counts = Counter(rule.id for rule in rules)
    return [f"{section}: duplicate rule id '{rule_id}'" for rule_id, n in counts.items() if n > 1]


def find_config_issues(config: RulesConfig) -> list[str]:
    """Check cross-field invariants the field types cannot express.

    Returns:
        A list of human-readable issues (empty when the config is sane).
    """
    issues = []

    sizing = config.sizing_thresholds
    if sizing.MEDIUM > sizing.LARGE:
        issues.append(
            f"sizing_thresholds: MEDIUM ({sizing.MEDIUM}) must not exceed LARGE ({sizing.LARGE})"
        )
    for name in ("MEDIUM", "LARGE"):
        value = getattr(sizing, name)
        if not 0 <= value <= MAX_TOTAL_SCORE:
            issues.append(f"sizing_thresholds: {name} ({value}) must be within 0-{MAX_TOTAL_SCORE}")

    risk = config.risk_thresholds
    if not risk.LOW <= risk.MEDIUM <= risk.HIGH:
        issues.append(
            f"risk_thresholds: expected LOW <= MEDIUM <= HIGH, got {risk.LOW}, {risk.MEDIUM}, {risk.HIGH}"
        )
    for name in ("LOW", "MEDIUM", "HIGH"):
        value = getattr(risk, name)
        if not 0 <= value <= MAX_OPTION_SCORE:
            issues.append(f"risk_thresholds: {name} ({value}) must be within 0-{MAX_OPTION_SCORE}")

    issues.extend(_duplicate_ids("governance_rules", config.governance_rules))
    issues.extend(_duplicate_ids("risk_rules", config.risk_rules))
    issues.extend(_duplicate_ids("archetype_triggers", config.archetype_triggers))

    # Risk rules run before a risk profile exists, so RISK_LEVEL can never match there.
    for rule in config.risk_rules:
        if any(isinstance(c.subject, RiskLevelSubject) for c in rule.conditions):
            issues.append(f"risk_rules: rule '{rule.id}' cannot reference RISK_LEVEL")

    for trigger in config.archetype_triggers:
        if trigger.archetype_id not in ARCHETYPE_IDS:
            issues.append(
                f"archetype_triggers: rule '{trigger.id}' references unknown archetype '{trigger.archetype_id}'"
            )

    for template in config.test_plan_templates:
        if template.archetype_id not in ARCHETYPE_IDS:
            issues.append(f"test_plan_templates: unknown archetype '{template.archetype_id}'")

    return issues


def _format_validation_error(exc: ValidationError) -> list[str]:
    issues = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        if location:
            issues.append(f"{location}: {message}")
        else:
            # Invariant failures from find_config_issues arrive joined.
            issues.extend(message.split("; "))
    return issues


def build_config(data: dict[str, Any]) -> RulesConfig:
    """Validate raw configuration data into a RulesConfig.

    Raises:
        RulesConfigError: If the data is malformed or breaks an invariant.
    """
    unknown = sorted(set(data) - set(SECTIONS))
    if unknown:
        raise RulesConfigError([f"Unknown configuration section: {name}" for name in unknown])
    try:
        return RulesConfig.model_validate(data)
    except ValidationError as exc:
        raise RulesConfigError(_format_validation_error(exc)) from exc


# Global config instance
_config: Optional[RulesConfig] = None


def get_config() -> RulesConfig:
    """Get the current configuration snapshot.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = RulesConfig()
    return _config


def set_config(config: RulesConfig) -> RulesConfig:
    """Replace the current configuration snapshot."""
    global _config
    _config = config
    return _config


def update_config(**changes: Any) -> RulesConfig:
    """Replace one or more sections of the current configuration.

    The new snapshot is built and validated first; the global config only
    changes when validation succeeds.

    Example:
        update_config(sizing_thresholds={"MEDIUM": 10, "LARGE": 18})

    Raises:
        RulesConfigError: If the edit is rejected.
    """
    current = get_config()
    data = {name: getattr(current, name) for name in SECTIONS}
    data.update(changes)
    updated = build_config(data)
    logger.info("Rules configuration updated: %s", ", ".join(sorted(changes)))
    return set_config(updated)


def update_sizing_threshold(key: str, value: int) -> RulesConfig:
    """Change a single sizing threshold (``MEDIUM`` or ``LARGE``)."""
    if key not in SizingThresholds.model_fields:
        raise RulesConfigError([f"sizing_thresholds: unknown threshold '{key}'"])
    current = get_config().sizing_thresholds.model_dump()
    return update_config(sizing_thresholds={**current, key: value})


def update_risk_threshold(key: str, value: int) -> RulesConfig:
    """Change a single risk threshold (``LOW``, ``MEDIUM`` or ``HIGH``)."""
    if key not in RiskThresholds.model_fields:
        raise RulesConfigError([f"risk_thresholds: unknown threshold '{key}'"])
    current = get_config().risk_thresholds.model_dump()
    return update_config(risk_thresholds={**current, key: value})


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = RulesConfig()
    logger.info("Rules configuration reset to defaults")


def reset_section(section: str) -> RulesConfig:
    """Reset one section to its built-in default, keeping the others."""
    if section not in SECTIONS:
        raise RulesConfigError([f"Unknown configuration section: {section}"])
    default = RulesConfig.model_fields[section].default_factory()
    return update_config(**{section: default})


def load_config(path: Path) -> RulesConfig:
    """Load configuration from a YAML file and make it current.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded RulesConfig.

    Raises:
        RulesConfigError: If the file content is not a valid configuration.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise RulesConfigError([f"{path}: expected a mapping at the top level"])

    config = set_config(build_config(data or {}))
    logger.info("Loaded rules configuration from %s (fingerprint %s)", path, config.fingerprint())
    return config


def validate_config_file(path: Path) -> tuple[bool, list[str]]:
    """Check a configuration file without making it current.

    Returns:
        Tuple of (is_valid, issues).
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        return False, [f"Could not read {path}: {e}"]

    if data is not None and not isinstance(data, dict):
        return False, ["Expected a mapping at the top level"]

    try:
        build_config(data or {})
    except RulesConfigError as e:
        return False, e.issues
    return True, []


def find_config_file() -> Optional[Path]:
    """Find a rules configuration file.

    Looks in (order of priority):
    1. AGENT_SIZER_CONFIG environment variable
    2. ./sizer-config.yaml
    3. ./sizer-config.yml
    4. ~/.config/agent-sizer/config.yaml
    """
    # Environment variable
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    # Current directory
    for name in ["sizer-config.yaml", "sizer-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    # User config directory
    user_config = Path.home() / ".config" / "agent-sizer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


_CONFIG_HEADER = """# Agent Sizer Rules Configuration
# ================================
#
# Thresholds and rule lists used to size an agent solution, rate its
# risk, select governance controls and recommend agent archetypes.
#
# Conditions: subject (dimension id or RISK_LEVEL), operator
# (>=, >, <=, <, ==, !=) and threshold (a number, or LOW/MEDIUM/HIGH
# which resolve through risk_thresholds). An empty condition list
# always applies.
#
# Copy this file to one of these locations:
#   - ./sizer-config.yaml (current directory)
#   - ~/.config/agent-sizer/config.yaml (user config)
#
# Or set the AGENT_SIZER_CONFIG environment variable.

"""


def save_config(config: RulesConfig, path: Path) -> None:
    """Save a configuration to a YAML file.

    Args:
        config: The configuration to write.
        path: Path where to save the configuration.
    """
    data = config.model_dump(mode="json", exclude_none=True)
    yaml_content = _CONFIG_HEADER
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
    logger.info("Saved rules configuration to %s", path)


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file."""
    save_config(RulesConfig(), path)
