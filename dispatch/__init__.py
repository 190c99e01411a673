#Expose the high-level pipeline pieces:
#Dispatcher (the "one object" entry point the boundary calls)
#State machines for deliveries and batches

from .dispatcher import Dispatcher
from .state_machines import accept_delivery, mark_delivered, transition_batch

__all__ = [
    "Dispatcher",
    "accept_delivery",
    "mark_delivered",
    "transition_batch",
]
