"""Named thresholds for the consumption and reorder engine."""

# Trend classification: slope of the moving-average series per interval
TREND_SLOPE_THRESHOLD = 0.05
MIN_TREND_POINTS = 3

# Confidence: data-volume part is capped, consistency part shrinks with variability
DATA_CONFIDENCE_CAP = 0.7
DATA_CONFIDENCE_FULL_AT = 10
CONSISTENCY_CONFIDENCE_CAP = 0.3
LOW_CONFIDENCE_THRESHOLD = 0.3

# Safety stock buffers
VARIABILITY_BUFFER_FACTOR = 2.0
CONFIDENCE_BUFFER_FACTOR = 0.5

# Remaining-days multiplier by trend
TREND_REMAINING_DAYS_MULTIPLIER = {
    "increasing": 0.8,
    "decreasing": 1.2,
    "stable": 1.0,
}

# Daily consumption multiplier by trend, used when projecting stock forward
TREND_PROJECTION_MULTIPLIER = {
    "increasing": 1.1,
    "decreasing": 0.9,
    "stable": 1.0,
}

# Status bands, as multiples of safety stock (checked in this order)
CRITICAL_RATIO = 0.5
LOW_RATIO = 1.0
NORMAL_RATIO = 2.0

STATUS_SEVERITY = {"critical": 0, "low": 1, "normal": 2, "high": 3}

RECOMMENDATIONS = {
    "critical": "urgent reorder needed",
    "low": "consider reordering",
    "normal": "stock level adequate",
    "high": "possible overstock",
}
LOW_CONFIDENCE_CAVEAT = " (low confidence: limited data)"

# Fallback rule used when analysis cannot be trusted
FALLBACK_STOCK_FLOOR = 2
FALLBACK_RECOMMENDATION = "insufficient data — ordered via simple fallback rule"
NO_DATA_RECOMMENDATION = "no stock data recorded"

# Safety-stock lead time when none is configured
DEFAULT_LEAD_TIME_DAYS = 7

# Rounding for values surfaced outside the engine
RATE_DIGITS = 2
SAFETY_STOCK_DIGITS = 1
RISK_DIGITS = 2
