from collections import deque

from .engine import BasePromise
from .log import logger
from .states import PENDING, empty


class WorkQueue:
    """FIFO of pending ``then`` jobs shared by one tree of promises.

    Linking two trees merges their queues: the absorbed queue keeps no entries
    of its own and forwards every push to the surviving one.
    """

    def __init__(self):
        self._jobs = deque()
        self._target = None

    def root(self):
        queue = self
        while queue._target is not None:
            queue = queue._target
        return queue

    def absorb(self, other):
        mine, theirs = self.root(), other.root()
        if mine is theirs:
            return
        mine._jobs.extend(theirs._jobs)
        theirs._jobs.clear()
        theirs._target = mine

    def push(self, job):
        self.root()._jobs.append(job)

    def pop(self):
        jobs = self.root()._jobs
        return jobs.popleft() if jobs else None

    def __len__(self):
        return len(self.root()._jobs)


def execute_job(job):
    promise = job['promise']
    job['source']._react(job['resolve'], job['reject'], promise._resolve, promise._reject)


class Promise(BasePromise):
    """Synchronous promise: executors run immediately, callbacks run on ``drain``."""

    family = 'sync'

    def __init__(self, fn):
        super().__init__(fn)
        self._queue = WorkQueue()
        self._parked = []
        self._run_executor(fn)

    @classmethod
    def all(cls, promises):
        promises = list(promises)
        aggregate = cls(empty)

        mismatch = cls._find_mismatch(promises)
        if mismatch is not None:
            logger.debug('{}.all refused its input: {}', cls.__name__, mismatch)
            aggregate._reject(mismatch)
            return aggregate

        if not promises:
            aggregate._resolve([])
            return aggregate

        results = [None] * len(promises)
        errors = []
        remaining = len(promises)

        def complete():
            nonlocal remaining
            remaining -= 1
            if remaining:
                return
            logger.debug('{}.all collected {} results', cls.__name__, len(results))
            if errors:
                aggregate._reject(errors[0])
            else:
                aggregate._resolve(results)

        def on_resolve(index):
            def callback(value):
                results[index] = value
                complete()
            return callback

        def on_reject(reason):
            errors.append(reason)
            complete()

        for index, promise in enumerate(promises):
            aggregate._queue.absorb(promise._queue)
            promise.then(on_resolve(index), on_reject)
        return aggregate

    def then(self, on_resolve=None, on_reject=None):
        promise = type(self)(empty)
        self._queue.absorb(promise._queue)
        job = {
            'source': self,
            'promise': promise,
            'resolve': on_resolve,
            'reject': on_reject,
        }
        if self.state == PENDING:
            self._parked.append(job)
        else:
            self._queue.push(job)
        return promise

    def drain(self):
        executed = 0
        while True:
            job = self._queue.pop()
            if job is None:
                break
            execute_job(job)
            executed += 1
        if executed:
            logger.debug('drained {} jobs from {!r}', executed, self)
        return self

    wait = drain

    def _follow(self, other):
        self._queue.absorb(other._queue)
        super()._follow(other)

    def _on_settled(self):
        parked, self._parked = self._parked, []
        for job in parked:
            self._queue.push(job)


class IsolatedPromise(Promise):
    """Synchronous promise family that never mixes with :class:`Promise`."""

    family = 'isolated'
