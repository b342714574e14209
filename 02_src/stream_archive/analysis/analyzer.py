"""Method distribution analysis of export documents."""

from collections import Counter

from ..models import AnalysisReport, ArchiveDocument


def analyze(document: ArchiveDocument) -> AnalysisReport:
    """Count messages per method, most frequent first.

    Ties keep the order in which methods first appear.
    """
    counts = Counter(message.method for message in document.messages)
    # Counter keeps first-seen order and sorted() is stable
    distribution = sorted(counts.items(), key=lambda item: -item[1])

    metadata = document.metadata
    time_span = (
        metadata.end_time - metadata.start_time if metadata.end_time is not None else 0
    )

    return AnalysisReport(
        total_messages=len(document.messages),
        message_types=len(distribution),
        distribution=distribution,
        time_span=time_span,
    )


def format_report(report: AnalysisReport, room_num: str = "") -> list[str]:
    """Render a report as text lines."""
    span = f"{round(report.time_span / 1000)} s" if report.time_span else "unknown"
    lines = [
        "Archive analysis",
        f"Room: {room_num}",
        f"Total messages: {report.total_messages}",
        f"Time span: {span}",
        "Distribution:",
    ]
    for rank, (method, count) in enumerate(report.distribution, start=1):
        share = count / report.total_messages * 100
        lines.append(f"{rank}. {method}: {count} ({share:.2f}%)")
    return lines
