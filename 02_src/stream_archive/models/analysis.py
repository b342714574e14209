"""Analysis result models."""

from dataclasses import dataclass, field


@dataclass
class AnalysisReport:
    """Method distribution of an export document."""

    total_messages: int
    message_types: int
    distribution: list[tuple[str, int]] = field(default_factory=list)
    time_span: int = 0  # ms, 0 when the document has no end_time
