"""
Sampling policy selection.
"""

from opentelemetry.sdk.trace.sampling import ALWAYS_OFF, ALWAYS_ON, Sampler, TraceIdRatioBased


def select_sampler(ratio: float) -> Sampler:
    """
    Map a sample ratio to a sampler.

    Ratios at or below 0 never sample, ratios at or above 1 always sample and
    anything in between samples by trace id. Out-of-range values clamp to the
    nearest boundary instead of failing startup. NaN never samples.
    """
    if ratio >= 1.0:
        return ALWAYS_ON
    if ratio > 0:
        return TraceIdRatioBased(ratio)
    return ALWAYS_OFF
