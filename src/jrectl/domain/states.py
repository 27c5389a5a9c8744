"""Build pipeline state machine.

One run moves strictly forward:
INIT → VERSION_CHECKED → TARGET_VALIDATED → BINARIES_RESOLVED →
MODULES_DISCOVERED → SKIPPED | IMAGE_BUILT.

Any failure aborts the run; there is no error state in the map because the
error is raised, not recorded.
"""

from __future__ import annotations

from enum import StrEnum


class PipelineState(StrEnum):
    """States a single build run passes through."""

    INIT = "init"
    VERSION_CHECKED = "version_checked"
    TARGET_VALIDATED = "target_validated"
    BINARIES_RESOLVED = "binaries_resolved"
    MODULES_DISCOVERED = "modules_discovered"
    SKIPPED = "skipped"
    IMAGE_BUILT = "image_built"


# --- Transition map ---

PIPELINE_TRANSITIONS: dict[str, list[str]] = {
    "init": ["version_checked"],
    "version_checked": ["target_validated"],
    "target_validated": ["binaries_resolved"],
    "binaries_resolved": ["modules_discovered"],
    "modules_discovered": ["skipped", "image_built"],
    "skipped": [],
    "image_built": [],
}


def is_valid_transition(current: str, target: str) -> bool:
    """Check if moving from *current* to *target* is allowed."""
    return target in PIPELINE_TRANSITIONS.get(current, [])


def is_terminal(state: str) -> bool:
    """Terminal states have no outgoing transitions."""
    return not PIPELINE_TRANSITIONS.get(state, [])
