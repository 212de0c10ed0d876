"""Owner lifecycle adapters (outer layer).

Connects the cancellation core to whatever manages owners: teardown signals,
an owner base class, and an async context manager scope.
"""

from .scoped_owner import ScopedOwner, owned_scope
from .teardown_signal import OneShotTeardownSignal, TeardownCallback, TeardownSignal, bind_teardown

__all__ = [
    "OneShotTeardownSignal",
    "ScopedOwner",
    "TeardownCallback",
    "TeardownSignal",
    "bind_teardown",
    "owned_scope",
]
