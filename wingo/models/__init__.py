from wingo.models.draw import (
    DrawRecord,
    HistorySeries,
    Outcome,
    Vote,
    extract_number_sequence,
    extract_result_sequence,
)
from wingo.models.prediction import (
    AccuracyReport,
    CachedPrediction,
    EnsembleResult,
    NextPrediction,
    SessionResult,
    StatsSnapshot,
    Verdict,
    WinLossResult,
)

__all__ = [
    "AccuracyReport",
    "CachedPrediction",
    "DrawRecord",
    "EnsembleResult",
    "HistorySeries",
    "NextPrediction",
    "Outcome",
    "SessionResult",
    "StatsSnapshot",
    "Verdict",
    "Vote",
    "WinLossResult",
    "extract_number_sequence",
    "extract_result_sequence",
]
