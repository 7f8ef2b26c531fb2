from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from PySide6.QtCore import QObject, QThread, Signal, Slot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _TaskWorker(QObject):
    finished = Signal(int, object)
    failed = Signal(int, object)

    def __init__(self, task_id: int, work: Callable[[], Any]) -> None:
        super().__init__()
        self._task_id = task_id
        self._work = work

    @Slot()
    def run(self) -> None:
        try:
            result = self._work()
        except Exception as exc:  # noqa: BLE001
            # El orquestador decide cómo registrar cada fallo.
            self.failed.emit(self._task_id, exc)
            return
        self.finished.emit(self._task_id, result)


@dataclass
class _RunningTask:
    thread: QThread
    worker: _TaskWorker
    on_success: Callable[[Any], None]
    on_error: Callable[[Exception], None]


class QtTaskRunner(QObject):
    """Ejecuta cada tarea en un QThread propio.

    Las señales del worker llegan a este objeto, que vive en el hilo de la
    GUI, así que los callbacks siempre se ejecutan en ese hilo.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tasks: dict[int, _RunningTask] = {}
        self._next_task_id = 0

    @property
    def running(self) -> int:
        return len(self._tasks)

    def submit(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        self._next_task_id += 1
        task_id = self._next_task_id
        thread = QThread()
        worker = _TaskWorker(task_id, work)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(self._on_worker_finished)
        worker.failed.connect(self._on_worker_failed)
        self._tasks[task_id] = _RunningTask(thread, worker, on_success, on_error)
        thread.start()

    @Slot(int, object)
    def _on_worker_finished(self, task_id: int, result: object) -> None:
        task = self._release(task_id)
        if task is not None:
            task.on_success(result)

    @Slot(int, object)
    def _on_worker_failed(self, task_id: int, error: object) -> None:
        task = self._release(task_id)
        if task is None:
            return
        if isinstance(error, Exception):
            task.on_error(error)
        else:
            task.on_error(RuntimeError(str(error)))

    def _release(self, task_id: int) -> _RunningTask | None:
        task = self._tasks.pop(task_id, None)
        if task is None:
            logger.warning("Tarea %s desconocida o ya liberada", task_id)
            return None
        task.thread.quit()
        task.thread.wait()
        return task

    def shutdown(self) -> None:
        for task_id, task in list(self._tasks.items()):
            logger.info("Esperando tarea %s antes de cerrar", task_id)
            task.thread.quit()
            task.thread.wait()
        self._tasks.clear()
