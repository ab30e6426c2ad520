"""Error types surfaced by the progress store."""
from __future__ import annotations


class FlowSpeakError(Exception):
    """Base class for recoverable core failures."""


class LoadFailure(FlowSpeakError):
    """Reading or parsing the stored progress blob failed."""


class SaveFailure(FlowSpeakError):
    """Persisting a progress snapshot failed; the prior snapshot stays authoritative."""
