"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- SeriesInfo : Instantane normalise des metadonnees d'une source
- CancellationToken : Jeton d'annulation cooperative
- RefreshCancelledError : Annulation observee pendant un rafraichissement
"""

from animeta.core.value_objects.cancellation import (
    CancellationToken,
    RefreshCancelledError,
)
from animeta.core.value_objects.series_info import (
    EMPTY_SERIES_INFO,
    TICKS_PER_MINUTE,
    SeriesInfo,
    minutes_to_ticks,
)

__all__ = [
    "CancellationToken",
    "RefreshCancelledError",
    "EMPTY_SERIES_INFO",
    "TICKS_PER_MINUTE",
    "SeriesInfo",
    "minutes_to_ticks",
]
