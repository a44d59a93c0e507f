"""Wait-time estimation for a queue in arrival order."""
import math
from typing import Any, Sequence

from karaoke.config import settings
from karaoke.models.song_request import RequestStatus


def resolve_song_minutes(raw: Any) -> float:
    """Return the configured minutes-per-song, or the default when unusable.

    Missing, zero, negative, non-numeric and non-finite values all fall back
    to ``settings.DEFAULT_SONG_MINUTES``.
    """
    if raw is None or isinstance(raw, bool):
        return settings.DEFAULT_SONG_MINUTES
    try:
        minutes = float(raw)
    except (TypeError, ValueError):
        return settings.DEFAULT_SONG_MINUTES
    if not math.isfinite(minutes) or minutes <= 0:
        return settings.DEFAULT_SONG_MINUTES
    return minutes


def estimate_wait_minutes(requests: Sequence[Any], index: int, avg_minutes: Any) -> int:
    """Estimated minutes until ``requests[index]`` goes on stage.

    ``requests`` must be in arrival order. Whoever is on stage waits 0; the
    NEXT entry waits about one song regardless of arrival position; a WAITING
    entry waits one song for every earlier entry that is not on stage.
    """
    avg = resolve_song_minutes(avg_minutes)
    status = requests[index].status

    if status == RequestStatus.on_stage:
        return 0
    if status == RequestStatus.next:
        return max(1, math.ceil(avg))

    ahead_count = sum(1 for r in requests[:index] if r.status != RequestStatus.on_stage)
    return max(0, math.ceil(ahead_count * avg))
