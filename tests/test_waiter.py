import time

from threadio.products import DataProductRetriever
from threadio.tasks import TaskGroup, TaskHolder, make_functor_task
from threadio.waiter import Waiter


def retrievers(*sizes):
    result = []
    for index, size in enumerate(sizes):
        retriever = DataProductRetriever(index, None, f"p{index}", None, None)
        retriever.size = size
        result.append(retriever)
    return result


def timed_wait(waiter, products):
    finished = []
    start = time.perf_counter()
    with TaskGroup() as group:
        waiter.wait_async(products, TaskHolder(group, make_functor_task(lambda: finished.append(time.perf_counter()))))
    return finished, start


def test_callback_runs_after_sleep():
    finished, start = timed_wait(Waiter(0, 1.0), retrievers(20000))
    assert len(finished) == 1
    assert finished[0] - start >= 0.015


def test_uses_selected_product():
    finished, start = timed_wait(Waiter(1, 1.0), retrievers(10_000_000, 0))
    assert len(finished) == 1
    assert finished[0] - start < 5.0


def test_negative_scale_does_not_sleep():
    finished, start = timed_wait(Waiter(0, -1.0), retrievers(1000))
    assert len(finished) == 1
    assert finished[0] - start < 5.0