"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Battery condition → health percentage
# ------------------------------------------------------------------

CONDITION_HEALTH: dict[str, float] = {
    "Normal": 95.0,
    "Replace Soon": 75.0,
    "Replace Now": 50.0,
    "Service Battery": 30.0,
}
DEFAULT_CONDITION_HEALTH = 85.0


def condition_to_health(condition: str) -> float:
    """Map a ``system_profiler`` battery condition to an estimated health %."""
    return CONDITION_HEALTH.get(condition.strip(), DEFAULT_CONDITION_HEALTH)


# ------------------------------------------------------------------
# CPU power fallback estimate (used when powermetrics is unavailable)
# ------------------------------------------------------------------

FALLBACK_FULL_LOAD_WATTS = 15.0
FALLBACK_E_CLUSTER_SHARE = 0.6
FALLBACK_P_CLUSTER_SHARE = 0.4
FALLBACK_ANE_SHARE = 0.05
FALLBACK_CPU_SHARE = 0.6
FALLBACK_GPU_SHARE = 0.2

# ------------------------------------------------------------------
# Thermal
# ------------------------------------------------------------------

THERMAL_LEVEL_SCALE = 10
THROTTLING_PRESSURE = 50

# (upper pressure bound inclusive, dissipation watts)
DISSIPATION_BANDS: tuple[tuple[int, float], ...] = (
    (20, 5.0),
    (40, 10.0),
    (60, 15.0),
    (80, 20.0),
)
MAX_DISSIPATION_WATTS = 25.0

# ------------------------------------------------------------------
# Derived metrics
# ------------------------------------------------------------------

INSTRUCTIONS_PER_USAGE_PERCENT = 1_000_000.0
IDLE_USAGE_PERCENT = 10.0
COMPUTE_USAGE_PERCENT = 70.0
