from idnames.indonesian_names import (
    ClassificationResult,
    IndonesianNameConfig,
    IndonesianNameDetector,
    LexiconLoadError,
    NameMatch,
    calculate_confidence,
    deduplicate_matches,
    get_stats,
    is_indonesian_name,
)

__version__ = "0.1.0"
