"""
Purpose: The batch dispatch "orchestrator" (single entry point).
What it does:

- validates the requested locations, the courier and every order
- runs the route optimizer over the locations
- measures the optimized route
- returns a new BatchOrder (status pending)

Rule: Engine never persists anything. The caller stores the BatchOrder.
"""

# orders/batching/engine.py

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from routing import DistanceMatrixProvider, optimize_route, total_distance

from ..errors import CourierNotFound, InvalidInput, InvalidRole, OrderNotFound
from ..models import BatchOrder, Order, User, UserRole
from .policy import BatchingPolicy, default_batching_policy

logger = logging.getLogger(__name__)

UserLookup = Callable[[str], Optional[User]]
OrderLookup = Callable[[str], Optional[Order]]


def _distinct(order_ids: Iterable[str]) -> List[str]:
    seen = set()
    distinct = []
    for order_id in order_ids:
        if order_id not in seen:
            seen.add(order_id)
            distinct.append(order_id)
    return distinct


def create_batch(
    courier_id: str,
    order_ids: Iterable[str],
    locations: Sequence[str],
    *,
    get_user: UserLookup,
    get_order: OrderLookup,
    policy: Optional[BatchingPolicy] = None,
    distance_matrix_provider: Optional[DistanceMatrixProvider] = None,
) -> BatchOrder:
    """
    Main batch dispatch entry point (pure algorithm).

    Preconditions are checked in order and each fails with its own error:
      1. locations is non-empty (and within policy.max_stops)  -> InvalidInput
      2. courier exists                                        -> CourierNotFound
         courier has the DeliveryPerson role                   -> InvalidRole
      3. every order exists (first missing one is reported)    -> OrderNotFound

    Parameters
    ----------
    courier_id:
        User id of the courier who will carry the batch.
    order_ids:
        Orders in the batch. Duplicates are collapsed, first occurrence wins.
    locations:
        "lat,lon" strings; the first one is the depot.
    get_user / get_order:
        Read-only lookups into the record store.
    distance_matrix_provider:
        Optional road-distance provider; haversine when omitted.

    Returns
    -------
    BatchOrder with the optimized route and its total distance in km.
    Nothing is produced when any precondition fails.
    """
    policy = policy or default_batching_policy()
    policy.validate()

    if not locations:
        raise InvalidInput("locations must be a non-empty list")
    if policy.max_stops is not None and len(locations) > policy.max_stops:
        raise InvalidInput(f"a batch may visit at most {policy.max_stops} locations, got {len(locations)}")

    courier = get_user(courier_id)
    if courier is None:
        raise CourierNotFound(courier_id)
    if courier.role != UserRole.DELIVERY_PERSON:
        raise InvalidRole(courier_id, UserRole.DELIVERY_PERSON)

    distinct_order_ids = _distinct(order_ids)
    for order_id in distinct_order_ids:
        if get_order(order_id) is None:
            raise OrderNotFound(order_id)

    route = optimize_route(locations, distance_matrix_provider=distance_matrix_provider)
    route_km = total_distance(route, distance_matrix_provider=distance_matrix_provider)
    if policy.distance_precision is not None:
        route_km = round(route_km, policy.distance_precision)

    batch = BatchOrder.new(
        courier_id=courier_id,
        order_ids=tuple(distinct_order_ids),
        optimized_route=route,
        total_distance=route_km,
    )
    logger.info(
        "batch %s: courier=%s orders=%d stops=%d distance_km=%.3f",
        batch.id, courier_id, len(distinct_order_ids), len(route), batch.total_distance,
    )
    return batch
