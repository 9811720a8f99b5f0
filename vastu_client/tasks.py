from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
import logging
from typing import Any, Callable, TypeVar
import weakref

logger = logging.getLogger(__name__)

T = TypeVar("T")

Dispatch = Callable[[Callable[[], None]], None]


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class TaskRunner:
    """Runs blocking client calls on worker threads.

    Callbacks go through ``dispatch`` (e.g. ``lambda cb: window.after(0, cb)``)
    and are dropped if ``owner`` is collected or has ``alive = False`` by the
    time they run. ``owner`` must support weak references; ``weakref.ref``
    raises TypeError for ``__slots__`` classes without ``__weakref__`` and
    for builtins.
    """

    def __init__(self, max_workers: int = 4, dispatch: Dispatch | None = None):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="vastu")
        self._dispatch = dispatch or _call_now

    def submit(
        self,
        call: Callable[..., T],
        *args: Any,
        on_success: Callable[[T], None] | None = None,
        on_error: Callable[[BaseException], None] | None = None,
        owner: Any = None,
        **kwargs: Any,
    ) -> Future:
        owner_ref = weakref.ref(owner) if owner is not None else None
        future = self._executor.submit(call, *args, **kwargs)

        if on_success is None and on_error is None:
            return future

        name = getattr(call, "__name__", call)

        def guarded(callback: Callable[[], None]) -> Callable[[], None]:
            # checked again on the dispatch side; the owner can go away while queued
            def run() -> None:
                if owner_ref is not None and not _owner_alive(owner_ref):
                    logger.debug("Dropping completion of %s; owner is gone", name)
                    return
                callback()

            return run

        def deliver(done: Future) -> None:
            if owner_ref is not None and not _owner_alive(owner_ref):
                logger.debug("Dropping completion of %s; owner is gone", name)
                return

            error = done.exception()
            if error is not None:
                if on_error is not None:
                    self._dispatch(guarded(lambda: on_error(error)))
                else:
                    logger.error("Background call failed: %s", error)
                return

            if on_success is not None:
                result = done.result()
                self._dispatch(guarded(lambda: on_success(result)))

        future.add_done_callback(deliver)
        return future

    def run(self, call: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return self.submit(call, *args, **kwargs).result()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def _owner_alive(owner_ref: weakref.ref) -> bool:
    owner = owner_ref()
    if owner is None:
        return False
    return bool(getattr(owner, "alive", True))
