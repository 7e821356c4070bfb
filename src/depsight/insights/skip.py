"""
Skip-state resolution.

Decides whether a panel shows its items or a "computation skipped" notice.
The live run status of the panel's metric family wins; the static analysis
config is only consulted when no run status was recorded. Missing data of
either kind leaves the panel visible.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_SKIP_REASON, FORCE_FULL_HINT
from ..core.scores import ScoreLookup
from .panels import PANEL_FAMILY, Panel


@dataclass(frozen=True)
class SkipState:
    """Whether a panel is skipped, and the notice to show if it is."""
    skipped: bool
    reason: str = ""
    hint: str = ""


NOT_SKIPPED = SkipState(skipped=False)


def _skipped(reason: str) -> SkipState:
    return SkipState(skipped=True, reason=reason or DEFAULT_SKIP_REASON, hint=FORCE_FULL_HINT)


def resolve_skip_state(panel: Panel, scores: Optional[ScoreLookup]) -> SkipState:
    """
    Resolve the skip state of `panel`.

    Order:
        1. Run status of the owning metric family (skipped or timed out).
        2. Static config flag, only when no run status exists.
        3. Panels without a metric family are never skipped.
    """
    if scores is None:
        return NOT_SKIPPED

    family = PANEL_FAMILY.get(panel)
    if family is None:
        return NOT_SKIPPED

    status = scores.run_status(family)
    if status is not None:
        if status.is_unavailable:
            return _skipped(status.reason)
        return NOT_SKIPPED

    if scores.config is not None:
        reason = scores.config.skip_reason_for(family)
        if reason is not None:
            return _skipped(reason)

    return NOT_SKIPPED
