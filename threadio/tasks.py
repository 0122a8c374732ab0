"""Reference-counted tasks run on thread-backed task groups."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional


class TaskGroup:
    """Runs callables on worker threads and waits for all of them to finish."""

    def __init__(self, max_workers: Optional[int] = None) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._pending = 0
        self._cond = threading.Condition()
        self._errors: list[BaseException] = []

    def run(self, func: Callable[[], object]) -> None:
        """Schedule ``func`` to run on a worker thread."""
        with self._cond:
            self._pending += 1
        self._executor.submit(self._invoke, func)

    def _invoke(self, func: Callable[[], object]) -> None:
        try:
            func()
        except Exception as exc:
            with self._cond:
                self._errors.append(exc)
        finally:
            with self._cond:
                self._pending -= 1
                if self._pending == 0:
                    self._cond.notify_all()

    def wait(self) -> None:
        """Block until every scheduled callable, including nested ones, is done.

        The first exception raised by a callable is raised again here.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._pending == 0)
            errors, self._errors = self._errors, []
        if errors:
            raise errors[0]

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "TaskGroup":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.wait()
        finally:
            self.close()


class TaskBase(ABC):
    """A unit of work with a thread-safe reference count."""

    def __init__(self) -> None:
        self._ref_count = 0
        self._ref_lock = threading.Lock()

    @abstractmethod
    def execute(self) -> None:
        """Do the task's work."""

    def increment_ref_count(self) -> None:
        with self._ref_lock:
            self._ref_count += 1

    def decrement_ref_count(self) -> bool:
        """Drop one reference; return True when none remain."""
        with self._ref_lock:
            self._ref_count -= 1
            return self._ref_count == 0


class FunctorTask(TaskBase):
    """A task that calls a stored callable."""

    def __init__(self, func: Callable[[], object]) -> None:
        super().__init__()
        self._func = func

    def execute(self) -> None:
        self._func()


def make_functor_task(func: Callable[[], object]) -> FunctorTask:
    return FunctorTask(func)


class TaskHolder:
    """A reference to a task; the task runs once every reference is done."""

    def __init__(self, group: Optional[TaskGroup] = None, task: Optional[TaskBase] = None) -> None:
        if task is not None and group is None:
            raise ValueError("a task needs a task group to run in")
        self._group = group
        self._task = task
        if task is not None:
            task.increment_ref_count()

    @property
    def group(self) -> Optional[TaskGroup]:
        return self._group

    @property
    def holds_task(self) -> bool:
        return self._task is not None

    def copy(self) -> "TaskHolder":
        """Return another holder that shares this holder's task."""
        return TaskHolder(self._group, self._task)

    def done_waiting(self) -> None:
        """Give up this reference; schedule the task if it was the last one."""
        task, self._task = self._task, None
        if task is None:
            raise RuntimeError("task holder does not hold a task")
        if task.decrement_ref_count():
            self._group.run(task.execute)

    def __enter__(self) -> "TaskHolder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._task is not None:
            self.done_waiting()


class OptionalTaskHolder:
    """Holds a task that is either run directly or turned into a TaskHolder."""

    def __init__(self, group: TaskGroup, task: TaskBase) -> None:
        self._group = group
        self._task: Optional[TaskBase] = task

    @property
    def group(self) -> TaskGroup:
        return self._group

    def _take(self) -> TaskBase:
        task, self._task = self._task, None
        if task is None:
            raise RuntimeError("optional task holder is empty")
        return task

    def release_to_task_holder(self) -> TaskHolder:
        return TaskHolder(self._group, self._take())

    def run_now(self) -> None:
        self._take().execute()


class AtomicCounter:
    """An unsigned counter safe to change from many threads."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def decrement(self) -> int:
        with self._lock:
            self._value -= 1
            return self._value


class AtomicRefCounter:
    """Keeps an AtomicCounter raised for as long as it is held."""

    def __init__(self, counter: AtomicCounter) -> None:
        self._counter: Optional[AtomicCounter] = counter
        counter.increment()

    @property
    def active(self) -> bool:
        return self._counter is not None

    def copy(self) -> "AtomicRefCounter":
        if self._counter is None:
            raise RuntimeError("reference counter was already released")
        return AtomicRefCounter(self._counter)

    def release(self) -> None:
        """Lower the counter once; later calls do nothing."""
        counter, self._counter = self._counter, None
        if counter is not None:
            counter.decrement()

    def __enter__(self) -> "AtomicRefCounter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()