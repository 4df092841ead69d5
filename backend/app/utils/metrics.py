"""Prometheus metrics for engine operations."""

from prometheus_client import Counter

itinerary_replacements_total = Counter(
    "itinerary_replacements_total",
    "Total whole-itinerary replacements",
    ["outcome"],
)

trip_clones_total = Counter(
    "trip_clones_total",
    "Total trip clones",
    ["mode", "outcome"],
)

share_links_created_total = Counter(
    "share_links_created_total",
    "Total share links created",
)

share_token_collisions_total = Counter(
    "share_token_collisions_total",
    "Total share token collisions resolved by regeneration",
)

audit_failures_total = Counter(
    "audit_failures_total",
    "Total audit facts that failed to record",
    ["action"],
)
