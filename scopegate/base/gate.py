"""Operation gate public surface.

``wrap(scope, producer)`` filters the settlement of any asyncio awaitable
through a :class:`~scopegate.base.cancellation.CancellationScope`:

- scope already cancelled: reject with ``CancellationError`` without starting
  the producer;
- producer settles first: its value or error reaches the caller unchanged;
- scope cancelled first: the caller gets ``CancellationError`` right away and
  the producer's eventual outcome is dropped.

Cancellation is cooperative; the producer keeps running to completion.
"""

from .gate_parts.gated import gated
from .gate_parts.handle_state import HandleState
from .gate_parts.operation_gate import OperationGate, Producer, wrap
from .gate_parts.operation_handle import OperationHandle

__all__ = ["HandleState", "OperationGate", "OperationHandle", "Producer", "gated", "wrap"]
