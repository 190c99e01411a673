from dataclasses import replace
from typing import Dict, FrozenSet

from orders.errors import InvalidTransition
from orders.models import BatchOrder, BatchStatus

# Only status ever changes on a computed batch.
ALLOWED_TRANSITIONS: Dict[BatchStatus, FrozenSet[BatchStatus]] = {
    BatchStatus.PENDING: frozenset({BatchStatus.IN_PROGRESS, BatchStatus.CANCELLED}),
    BatchStatus.IN_PROGRESS: frozenset({BatchStatus.COMPLETED, BatchStatus.CANCELLED}),
    BatchStatus.COMPLETED: frozenset(),
    BatchStatus.CANCELLED: frozenset(),
}


def transition_batch(batch: BatchOrder, new_status: BatchStatus) -> BatchOrder:
    """
    Move a batch to new_status or raise InvalidTransition.
    """
    try:
        new_status = BatchStatus(new_status)
    except ValueError:
        raise InvalidTransition(f"Unknown batch status {new_status!r}") from None
    if new_status not in ALLOWED_TRANSITIONS[batch.status]:
        raise InvalidTransition(
            f"Cannot move batch {batch.id} from {batch.status.value} to {new_status.value}"
        )
    return replace(batch, status=new_status)
