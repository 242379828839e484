"""Configuration models for code-pulse."""

from typing import List

from pydantic import BaseModel, Field

from code_pulse.constants import RefactoringDefaults


class AnalyzerConfig(BaseModel):
    """Tunable analyzer settings loaded from a YAML config file."""

    cognitive_threshold: int = Field(default=RefactoringDefaults.COGNITIVE_THRESHOLD, ge=0)
    nesting_threshold: int = Field(default=RefactoringDefaults.NESTING_THRESHOLD, ge=0)
    long_function_lines: int = Field(default=RefactoringDefaults.LONG_FUNCTION_LINES, ge=1)
    parameter_threshold: int = Field(default=RefactoringDefaults.PARAMETER_THRESHOLD, ge=0)
    duplicate_min_length: int = Field(default=RefactoringDefaults.DUPLICATE_MIN_LENGTH, ge=1)
    disabled_rules: List[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}
