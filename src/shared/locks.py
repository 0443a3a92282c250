"""Per-owner serialization for read-modify-write commands.

Carts and address books are single documents keyed by user. The memory and
SQL providers do not serialize concurrent writers, so two requests for the
same user can both load version N and both write N+1. Every mutating command
for a (user, entity) pair runs under the same lock; different users never
contend.
"""

import threading
from collections import defaultdict
from contextlib import contextmanager

from protean.utils.globals import current_domain

_registry_lock = threading.Lock()
_locks: dict[tuple[str, str], threading.RLock] = defaultdict(threading.RLock)


def lock_for(user_id, entity: str) -> threading.RLock:
    """Return the lock guarding ``entity`` documents owned by ``user_id``."""
    with _registry_lock:
        return _locks[(str(user_id), entity)]


@contextmanager
def serialized(user_id, entity: str):
    """Hold the (user, entity) lock for the duration of the block."""
    lock = lock_for(user_id, entity)
    with lock:
        yield


def dispatch(command, user_id, entity: str):
    """Process ``command`` synchronously while holding the (user, entity) lock.

    The lock spans the whole unit of work, including the commit, so the next
    writer for the same owner always loads the committed state.
    """
    with serialized(user_id, entity):
        return current_domain.process(command, asynchronous=False)
