"""Cost estimator - planned trip cost from catalog data."""

import math
from datetime import datetime, timedelta

from backend.app.db.models import Trip
from backend.app.db.repositories import CatalogReader
from backend.app.errors import NotFoundError
from backend.app.models.budget import CostEstimate

ONE_DAY = timedelta(days=1)


def duration_in_days(start: datetime, end: datetime) -> int:
    """Inclusive day span: ceil(|end - start| / 1 day)."""
    return math.ceil(abs(end - start) / ONE_DAY)


def estimate_cost(trip: Trip, catalog: CatalogReader) -> CostEstimate:
    """Estimate a trip's planned cost.

    living_cost sums, per stop, the stop's day span times its city's cost
    index (looked up now, never cached on the stop); activity_cost sums
    activity costs with missing costs counted as 0. Pure: no writes.

    Args:
        trip: Trip with stops and activities loaded
        catalog: Catalog reader for city cost indexes

    Returns:
        Cost estimate

    Raises:
        NotFoundError: If a stop's city is missing from the catalog
    """
    activity_cost = 0.0
    living_cost = 0.0

    for stop in trip.stops:
        city = catalog.get_city(stop.city_id)
        if city is None:
            raise NotFoundError("city", stop.city_id)

        living_cost += duration_in_days(stop.start_date, stop.end_date) * city.cost_index
        activity_cost += sum(activity.cost or 0.0 for activity in stop.activities)

    return CostEstimate(
        activity_cost=activity_cost,
        living_cost=living_cost,
        total=activity_cost + living_cost,
    )
