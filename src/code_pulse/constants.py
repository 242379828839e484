"""Shared constants across the code-pulse codebase.

This module centralizes magic numbers and configuration values
used by the analysis engines and the server layer.
"""


class ComplexityLevelBounds:
    """Upper bounds (inclusive) of cyclomatic complexity per level."""

    LOW_MAX = 5
    MODERATE_MAX = 10
    HIGH_MAX = 20


class ComplexityColors:
    """Display colors for each complexity level."""

    LOW = "#4CAF50"
    MODERATE = "#FFC107"
    HIGH = "#FF9800"
    VERY_HIGH = "#F44336"


class StructureWeights:
    """Weights for the whole-file structural complexity estimate."""

    LOOP = 1.0
    CONDITIONAL = 0.5
    FUNCTION = 0.3
    CLASS = 0.7
    COMPONENT = 0.8
    HOOK = 0.5

    MODERATE_THRESHOLD = 5
    HIGH_THRESHOLD = 10
    JSX_MODERATE_THRESHOLD = 6
    JSX_HIGH_THRESHOLD = 12


class ScoringDefaults:
    """Performance score weights and penalties."""

    BASE_SCORE = 100
    MIN_SCORE = 0
    MAX_SCORE = 100

    CRITICAL_WEIGHT = 20
    HIGH_WEIGHT = 10
    MEDIUM_WEIGHT = 5
    LOW_WEIGHT = 2

    CUBIC_PENALTY = 30
    QUADRATIC_PENALTY = 15
    LINEAR_PENALTY = 5

    BEST_PRACTICE_BONUS = 3


class MetricDefaults:
    """Thresholds for text-level performance metrics."""

    LARGE_ARRAY_CHARS = 1000
    EXCESSIVE_PARAMS_CHARS = 50
    NON_MEMOIZED_COMPONENTS = 2


class RefactoringDefaults:
    """Default thresholds for refactoring opportunity detection."""

    COGNITIVE_THRESHOLD = 15
    NESTING_THRESHOLD = 3
    LONG_FUNCTION_LINES = 50
    PARAMETER_THRESHOLD = 5
    DUPLICATE_MIN_LENGTH = 30
    DUPLICATE_MAX_WINDOW = 5
    PATTERN_PREVIEW_LENGTH = 50


class DocumentationDefaults:
    """Settings for undocumented code detection."""

    COMMENT_LOOKBACK_LINES = 3


class CacheDefaults:
    """Default cache configuration."""

    TTL_SECONDS = 300  # 5 minutes
    DEFAULT_CACHE_SIZE = 100  # Number of cached reports
    CACHE_KEY_LENGTH = 16  # Length of truncated SHA256 hash for cache keys


class FileConstants:
    """Text display limits."""

    LINE_PREVIEW_LENGTH = 100  # Maximum characters to show in line preview
    MATCH_PREVIEW_LENGTH = 200
