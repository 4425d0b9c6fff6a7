"""Terminal summary of a pipeline run."""

from typing import List

from .models import RunOutcome

COMPLETION_LINE = "Command completed successfully."


def render_timing(outcome: RunOutcome) -> str:
    """Elapsed wall-clock time and peak memory of a run."""
    return (
        f"Elapsed time: {outcome.elapsed_ms:.2f} ms / "
        f"Consumed memory: {outcome.peak_memory_bytes / 1024 ** 2:.2f} MB"
    )


def render_statistics(outcome: RunOutcome) -> List[str]:
    """Timing line, plus the average time per image when anything ran."""
    lines = [render_timing(outcome)]
    if outcome.results:
        average_ms = (
            sum(r.processing_time for r in outcome.results)
            / len(outcome.results)
            * 1000
        )
        lines.append(f"Average time per image: {average_ms:.2f} ms")
    return lines


def render_report(outcome: RunOutcome, verbose: bool = False) -> str:
    """
    Format the summary of a run.

    Args:
        outcome: Completed run outcome
        verbose: Add timing, memory and per-image statistics

    Returns:
        The report text, one line per entry
    """
    lines = [f"Success: {outcome.success}, Fail: {outcome.failure}"]

    if verbose:
        lines.extend(render_statistics(outcome))

    return "\n".join(lines)
