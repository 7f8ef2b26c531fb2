from __future__ import annotations

from collections import deque
from typing import Any, Callable, TypeVar

from shopify_sync.domain.ports import TaskRunnerPort


T = TypeVar("T")

_PendingTask = tuple[Callable[[], Any], Callable[[Any], None], Callable[[Exception], None]]


class DeferredTaskRunner(TaskRunnerPort):
    """Runner de un solo hilo: encola y ejecuta al llamar ``run_pending``.

    Lo usan el modo CLI y los tests. Como el trabajo nunca corre dentro de
    ``submit``, los callbacks llegan siempre después de que la operación que
    los lanzó haya retornado.
    """

    def __init__(self) -> None:
        self._queue: deque[_PendingTask] = deque()

    def submit(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        self._queue.append((work, on_success, on_error))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_next(self) -> bool:
        if not self._queue:
            return False
        work, on_success, on_error = self._queue.popleft()
        try:
            result = work()
        except Exception as exc:  # noqa: BLE001
            on_error(exc)
        else:
            on_success(result)
        return True

    def run_pending(self) -> int:
        """Vacía la cola, incluidas las tareas que encolen los callbacks."""
        executed = 0
        while self.run_next():
            executed += 1
        return executed
