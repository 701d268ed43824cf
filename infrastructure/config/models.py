"""Configuration models (Pydantic classes)."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from domain.schemas import ClassSizing, DecisionRule, NonBinaryPolicy, TnrDenominator
from infrastructure.constants import OUTPUT_ROOT


class ParsingConfig(BaseModel):
    """How delimited input is read."""

    has_header: bool = False
    label_col: int | None = Field(
        default=None,
        ge=0,
        description="0-based column held out as labels by the matrix command.",
    )


class StatsConfig(BaseModel):
    """Descriptive statistics settings."""

    mode_precision: int = Field(default=1, ge=1, description="Mode buckets per unit (100 -> 0.01 buckets).")


class ConfusionConfig(BaseModel):
    """Confusion matrix settings."""

    threshold: float | None = Field(default=None, description="Decision threshold; None infers the rule.")
    rule: DecisionRule = DecisionRule.AUTO
    sizing: ClassSizing = ClassSizing.OBSERVED
    tnr_denominator: TnrDenominator = TnrDenominator.FP

    @model_validator(mode="after")
    def _validate(self) -> "ConfusionConfig":
        if self.rule is DecisionRule.THRESHOLD and self.threshold is None:
            raise ValueError("confusion.threshold is required when confusion.rule=threshold")
        return self


class SweepConfig(BaseModel):
    """
    Threshold sweep range.

    Defaults give 0.05, 0.10, ..., 1.00 (20 thresholds).
    """

    start: float = 0.05
    stop: float = 1.0
    step: float = Field(default=0.05, gt=0)
    non_binary: NonBinaryPolicy = NonBinaryPolicy.EXCLUDE

    @model_validator(mode="after")
    def _validate(self) -> "SweepConfig":
        if self.start > self.stop:
            raise ValueError(f"sweep.start ({self.start}) must be <= sweep.stop ({self.stop})")
        return self


class AnalysisConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from configs/analysis.yaml (all keys optional)
    - Overridden by CLI flags in main.py
    - Consumed by the application use cases
    """

    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    confusion: ConfusionConfig = Field(default_factory=ConfusionConfig)
    sweep: SweepConfig = Field(default_factory=SweepConfig)

    output_root: Path = Field(
        default_factory=lambda: OUTPUT_ROOT,
        description="Directory under which each run gets its own output folder.",
    )
    tracing: bool = Field(default=False, description="Send opik traces for each command run.")
