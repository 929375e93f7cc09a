"""
Configuration constants for all components.

Organized by component:
1. Common/Shared Configuration
2. Range Regime Classification Configuration
3. Batch Recalculation Configuration
4. Auto-Calibration Configuration
"""

# ============================================================================
# COMMON / SHARED CONFIGURATION
# ============================================================================

# Price History Settings
DEFAULT_PRICE_COLUMN = "high_price"  # Preferred price column (sell price)
FALLBACK_PRICE_COLUMN = "low_price"  # Used when the preferred price is missing
DEFAULT_TIMESTAMP_COLUMN = "synced_at"  # Timestamp column for raw price rows
DEFAULT_ITEM_COLUMN = "item_id"  # Item identifier column for multi-item CSV files


# ============================================================================
# RANGE REGIME CLASSIFICATION CONFIGURATION
# ============================================================================

# Regime labels (stored values, must match persisted segment data)
REGIME_RANGE_BOUND = "RANGE_BOUND"
REGIME_TRENDING = "TRENDING"

# Default Classification Thresholds
# A window is RANGE_BOUND only when ALL four conditions hold (strict comparisons)
DEFAULT_CHOP_MAX = 0.25  # chop < chop_max (net move small vs. path length)
DEFAULT_RANGE_NORM_MAX = 0.02  # range_norm < range_norm_max (tight band)
DEFAULT_SLOPE_NORM_MAX = 0.0005  # slope_norm < slope_norm_max (flat regression line)
DEFAULT_CROSS_RATE_MIN = 0.08  # cross_rate > cross_rate_min (frequent mean reversion)
DEFAULT_WINDOW_SIZE = 24  # Number of price points per classification window
DEFAULT_STEP_SIZE = 1  # Window stride for batch classification

# Numerical Guards
REGIME_EPSILON = 1e-10  # Added to denominators to avoid 0/0
SLOPE_DIRECTION_DEAD_ZONE = 1e-4  # |raw_slope / median| below this is "flat"

# Confidence score reference thresholds used by the batch segment builder.
# Kept fixed (not the live configuration) so stored confidence scores stay comparable.
CONFIDENCE_REFERENCE_THRESHOLDS = {
    "chop_max": DEFAULT_CHOP_MAX,
    "range_norm_max": DEFAULT_RANGE_NORM_MAX,
    "slope_norm_max": DEFAULT_SLOPE_NORM_MAX,
    "cross_rate_min": DEFAULT_CROSS_RATE_MIN,
}


# ============================================================================
# BATCH RECALCULATION CONFIGURATION
# ============================================================================

RECALC_LOOKBACK_MULTIPLIER = 2  # Fetch window_size * multiplier most recent prices per item
RECALC_MAX_WORKERS = 8  # Thread pool size when parallel recalculation is enabled
RECALC_USE_THREADS = False  # Sequential by default
RECALC_PROGRESS_EVERY = 10  # Progress log interval (items)


# ============================================================================
# AUTO-CALIBRATION CONFIGURATION
# ============================================================================

CALIBRATION_PERCENTILES = [25, 50, 75]  # Percentiles reported per feature
CALIBRATION_MAX_LOOKBACK = 500  # Most recent prices per item fed to the calibrator
CALIBRATION_MAX_ITEMS = None  # None = sample every item with price history
