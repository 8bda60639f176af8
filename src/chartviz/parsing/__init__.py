from .csv_points import (  # noqa: F401
    ParseMode,
    ParseStats,
    parse,
    parse_multi_series,
    parse_single_series,
    parse_with_stats,
)
