"""Executors for running independent listings side by side.

Every listing keeps its cursor state to itself, so separate listings can run
on separate threads. The executors follow the concurrent.futures.Executor API.
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Iterator, List, Optional, TypeVar, Union

__all__ = [
    "SerialExecutor",
    "ThreadPoolExecutorWrapper",
    "execute_all",
    "get_executor",
]

T = TypeVar("T")


class SerialExecutor(Executor):
    """A custom Executor that runs tasks sequentially, mimicking the
    concurrent.futures.Executor interface. Useful as a default and for debugging.
    """

    def submit(self, fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> Future[T]:
        """Run ``fn`` immediately and return its settled future.

        Parameters
        ----------
        fn
            The callable to execute
        *args
            Positional arguments for the callable
        **kwargs
            Keyword arguments for the callable

        Returns:
        -------
        A Future holding the result or the raised exception
        """
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def map(
        self,
        fn: Callable[..., T],
        *iterables: Iterable[Any],
        timeout: Optional[float] = None,
        chunksize: int = 1,
    ) -> Iterator[T]:
        return map(fn, *iterables)


class ThreadPoolExecutorWrapper(Executor):
    """A ThreadPoolExecutor that is created on first use."""

    def __init__(self, max_workers: Optional[int] = None, **kwargs: Any) -> None:
        self._max_workers = max_workers
        self._executor_kwargs = kwargs
        self._executor: Optional[ThreadPoolExecutor] = None

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, **self._executor_kwargs
            )
        return self._executor

    def submit(self, fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> Future[T]:
        """Submit a task to thread pool."""
        return self._pool().submit(fn, *args, **kwargs)

    def map(
        self,
        fn: Callable[..., T],
        *iterables: Iterable[Any],
        timeout: Optional[float] = None,
        chunksize: int = 1,
    ) -> Iterator[T]:
        """Map a function over iterables using thread pool."""
        return self._pool().map(fn, *iterables, timeout=timeout, chunksize=chunksize)

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        """Shutdown thread pool executor."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)
        self._executor = None


def get_executor(
    parallel: Union[str, Executor, bool, None] = True,
    max_workers: Optional[int] = None,
    **kwargs: Any,
) -> Executor:
    """Get an executor that follows the concurrent.futures.Executor ABC API.

    Parameters
    ----------
    parallel : str, Executor, bool, or None
        - True, None or "threads": Use ThreadPoolExecutor
        - False or "serial": Use SerialExecutor
        - Executor instance: Use the provided executor
    max_workers : int, optional
        Maximum number of worker threads
    **kwargs
        Additional arguments passed to the thread pool

    Returns:
    -------
    Executor

    Examples:
    --------
    >>> executor = get_executor("threads", max_workers=4)
    >>> executor = get_executor(False)
    """
    if parallel is None or parallel is True:
        return ThreadPoolExecutorWrapper(max_workers=max_workers, **kwargs)
    if parallel is False:
        return SerialExecutor()
    if isinstance(parallel, Executor):
        return parallel
    if isinstance(parallel, str):
        name = parallel.lower()
        if name in ("threads", "thread", "threadpool"):
            return ThreadPoolExecutorWrapper(max_workers=max_workers, **kwargs)
        if name in ("serial", "none", "disabled"):
            return SerialExecutor()
        raise ValueError(
            f"Unrecognized parallel backend: {parallel}. "
            "Valid options are: 'threads', 'serial', or an Executor instance."
        )
    raise ValueError(
        f"Invalid parallel argument: {parallel}. "
        "Must be a string, Executor instance, or boolean."
    )


def execute_all(
    executor: Executor, fn: Callable[..., T], argument_sets: Iterable[tuple]
) -> List[T]:
    """Run ``fn`` once per argument tuple and return results in input order.

    The first failure is re-raised after all submitted tasks settle.
    """
    futures = [executor.submit(fn, *args) for args in argument_sets]
    errors = [f.exception() for f in futures]
    for error in errors:
        if error is not None:
            raise error
    return [f.result() for f in futures]
