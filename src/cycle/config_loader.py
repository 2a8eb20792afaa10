"""Load, validate, and hot-reload the cycle predictor configuration.

The config lives in ``predictor_config.yaml`` alongside this module.  It is
loaded once on first use and cached.  Call ``reload_predictor_config()`` to
re-read it from disk without restarting the API.

Usage::

    from src.cycle.config_loader import get_predictor_config

    config = get_predictor_config()
    config.projection.fertile_window_days   # 6
    config.adjustment_for("bloating")       # 1
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger("abeba.cycle.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "predictor_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SymptomAdjustmentRule:
    """One symptom label and how many days it pulls the next period forward."""

    label: str
    days: int


@dataclass(frozen=True)
class ProjectionConfig:
    """Settings for the cycle projection loop and calendar marking."""

    default_horizon_months: int = 24
    period_span_days: int = 5
    fertile_window_days: int = 6


DEFAULT_SYMPTOM_RULES: tuple[SymptomAdjustmentRule, ...] = (
    SymptomAdjustmentRule(label="tender breasts", days=2),
    SymptomAdjustmentRule(label="bloating", days=1),
)


@dataclass(frozen=True)
class PredictorConfig:
    """Complete, validated predictor configuration.

    Attributes:
        version:              Config schema version string.
        projection:           Projection loop and calendar settings.
        symptom_adjustments:  Ordered rules; the first matching label wins.
    """

    version: str = "1.0"
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    symptom_adjustments: tuple[SymptomAdjustmentRule, ...] = DEFAULT_SYMPTOM_RULES

    def adjustment_for(self, label: str) -> int:
        """Return the day adjustment configured for a single label (0 if none)."""
        key = label.lower()
        for rule in self.symptom_adjustments:
            if rule.label.lower() == key:
                return rule.days
        return 0


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when predictor_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed or not a mapping.
    """
    import yaml  # pyyaml

    if not path.exists():
        raise FileNotFoundError(f"Predictor config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return raw


def _int_at_least(
    value: object, name: str, errors: list[str], minimum: int = 1, maximum: int | None = None
) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        errors.append(f"{name} must be an integer, got {value!r}")
        return minimum
    if number < minimum:
        errors.append(f"{name} = {number} must be >= {minimum}")
    elif maximum is not None and number > maximum:
        errors.append(f"{name} = {number} must be <= {maximum}")
    return number


def _validate_and_build(raw: dict) -> PredictorConfig:
    """Validate the raw YAML dict and construct a PredictorConfig.

    Optional sections fall back to the shipped defaults.  All problems are
    collected and reported together.

    Raises:
        ConfigValidationError: If any field is missing or invalid.
    """
    errors: list[str] = []

    version = str(raw.get("version", "1.0"))

    # ── Projection ──
    proj_raw = raw.get("projection") or {}
    if not isinstance(proj_raw, dict):
        errors.append("'projection' must be a mapping")
        proj_raw = {}
    defaults = ProjectionConfig()
    projection = ProjectionConfig(
        default_horizon_months=_int_at_least(
            proj_raw.get("default_horizon_months", defaults.default_horizon_months),
            "projection.default_horizon_months",
            errors,
            minimum=0,
        ),
        period_span_days=_int_at_least(
            proj_raw.get("period_span_days", defaults.period_span_days),
            "projection.period_span_days",
            errors,
        ),
        fertile_window_days=_int_at_least(
            proj_raw.get("fertile_window_days", defaults.fertile_window_days),
            "projection.fertile_window_days",
            errors,
            minimum=2,
            maximum=31,
        ),
    )

    # ── Symptom adjustments ──
    rules_raw = raw.get("symptom_adjustments")
    rules: list[SymptomAdjustmentRule] = []
    if rules_raw is None:
        rules = list(DEFAULT_SYMPTOM_RULES)
    elif not isinstance(rules_raw, list):
        errors.append("'symptom_adjustments' must be a list of {label, days} items")
    else:
        seen: set[str] = set()
        for i, item in enumerate(rules_raw):
            if not isinstance(item, dict) or "label" not in item:
                errors.append(f"symptom_adjustments[{i}] must be a mapping with a 'label'")
                continue
            label = str(item["label"]).strip().lower()
            if not label:
                errors.append(f"symptom_adjustments[{i}].label must not be empty")
                continue
            if label in seen:
                errors.append(f"symptom_adjustments[{i}].label {label!r} is duplicated")
                continue
            seen.add(label)
            days = _int_at_least(
                item.get("days"), f"symptom_adjustments[{i}].days", errors, minimum=0
            )
            rules.append(SymptomAdjustmentRule(label=label, days=days))

    if errors:
        raise ConfigValidationError(
            f"predictor_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return PredictorConfig(
        version=version,
        projection=projection,
        symptom_adjustments=tuple(rules),
    )


def load_predictor_config(path: Path | None = None) -> PredictorConfig:
    """Load and validate the predictor config from disk.

    Args:
        path: Override path to YAML. Uses the bundled predictor_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded predictor config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: PredictorConfig | None = None
_config_lock = threading.Lock()


def get_predictor_config() -> PredictorConfig:
    """Return the global PredictorConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_predictor_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_predictor_config()
    return _config


def reload_predictor_config(path: Path | None = None) -> PredictorConfig:
    """Reload the predictor config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_predictor_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded predictor config: %s -> %s", old_version, new_config.version)
    return new_config
