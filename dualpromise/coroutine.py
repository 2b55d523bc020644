import asyncio
import inspect

from . import config
from .engine import BasePromise
from .exceptions import BackendUnavailable
from .log import logger
from .states import PENDING, REJECTED, as_exception

# Strong references to running executor tasks; the loop only keeps weak ones.
_tasks = set()


def spawn(coro_fn, *args):
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        raise BackendUnavailable(
            'CoPromise must be created while an asyncio event loop is running.') from None
    task = loop.create_task(coro_fn(*args))
    _tasks.add(task)
    task.add_done_callback(_tasks.discard)
    return task


class CoPromise(BasePromise):
    """Promise whose executor runs on its own asyncio task.

    The executor may be a plain function or a coroutine function. ``then``
    callbacks run on a fresh task once this promise settles, so no explicit
    pumping is needed; awaiting a ``CoPromise`` yields its value or raises its
    rejection reason.
    """

    family = 'coroutine'

    def __init__(self, fn):
        super().__init__(fn)
        self._settled = asyncio.Event()
        self._task = spawn(self._execute, fn)

    @classmethod
    def all(cls, promises):
        promises = list(promises)

        mismatch = cls._find_mismatch(promises)
        if mismatch is not None:
            logger.debug('{}.all refused its input: {}', cls.__name__, mismatch)
            return cls.reject(mismatch)

        async def gather(resolve, reject):
            ticks = len(promises)
            channel = asyncio.Queue(maxsize=ticks)
            results = [None] * ticks
            errors = []

            def on_resolve(index):
                def callback(value):
                    results[index] = value
                    channel.put_nowait(True)
                return callback

            def on_reject(reason):
                errors.append(reason)
                channel.put_nowait(False)

            for index, promise in enumerate(promises):
                promise.then(on_resolve(index), on_reject)

            for _ in range(ticks):
                await channel.get()

            logger.debug('{}.all collected {} results', cls.__name__, ticks)
            if errors:
                reject(errors[0])
            else:
                resolve(results)

        return cls(gather)

    def then(self, on_resolve=None, on_reject=None):
        async def react(resolve, reject):
            await self.settled()
            self._react(on_resolve, on_reject, resolve, reject)

        return type(self)(react)

    async def settled(self):
        """Wait until this promise settles, without raising its reason."""
        interval = config.settings.poll_interval
        if interval > 0:
            while self.state == PENDING:
                await asyncio.sleep(interval)
        else:
            await self._settled.wait()
        return self

    def __await__(self):
        return self._outcome().__await__()

    async def _outcome(self):
        await self.settled()
        if self.state == REJECTED:
            raise as_exception(self.value)
        return self.value

    async def _execute(self, fn):
        result = self._run_executor(fn)
        if inspect.isawaitable(result):
            try:
                await result
            except Exception as e:
                logger.debug('executor of {!r} raised {!r}', self, e)
                self._reject(e)

    def _on_settled(self):
        self._settled.set()
