"""Dead end reports for parser failures.

Group parser failures by position and context, deduplicate what the
parser expected, and render the result with source context and carets
through pluggable output adapters.
"""

from deadends.report.errors import DeadEndError, InvalidPositionError
from deadends.report.problems import (
    Expected,
    Other,
    ProblemClassification,
    classify_problem,
)
from deadends.report.records import (
    ContextDeadEnd,
    ContextFrame,
    DeadEnd,
    FailureRecord,
    from_context_dead_end,
    from_dead_end,
    from_dead_ends,
)
from deadends.report.renderer import (
    DEFAULT_EXTRACT,
    ExtractStrategy,
    RenderConfig,
    render,
)

__all__ = [
    "DEFAULT_EXTRACT",
    "ContextDeadEnd",
    "ContextFrame",
    "DeadEnd",
    "DeadEndError",
    "Expected",
    "ExtractStrategy",
    "FailureRecord",
    "InvalidPositionError",
    "Other",
    "ProblemClassification",
    "RenderConfig",
    "classify_problem",
    "from_context_dead_end",
    "from_dead_end",
    "from_dead_ends",
    "render",
]
