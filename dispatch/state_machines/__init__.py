from .batch_state import transition_batch
from .delivery_state import accept_delivery, mark_delivered, sync_order_status

__all__ = ["transition_batch", "accept_delivery", "mark_delivered", "sync_order_status"]
