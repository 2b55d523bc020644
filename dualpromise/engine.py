from .exceptions import FamilyMismatch, PromiseException
from .log import logger
from .states import FULFILLED, PENDING, REJECTED, identity, thrower


class BasePromise:
    """State machine shared by every backend family.

    Subclasses decide when executors and ``then`` callbacks run; this class
    only knows how a promise settles, how it adopts another promise's outcome
    and how a settled promise feeds a callback pair.
    """

    family = None

    def __init__(self, executor):
        self.state = PENDING
        self.value = None
        self._forwarding = None

    @classmethod
    def create(cls, executor):
        return cls(executor)

    @classmethod
    def resolve(cls, value):
        return cls(lambda resolve, reject: resolve(value))

    @classmethod
    def reject(cls, reason):
        return cls(lambda resolve, reject: reject(reason))

    @classmethod
    def all(cls, promises):
        raise NotImplementedError

    def then(self, on_resolve=None, on_reject=None):
        raise NotImplementedError

    def catch(self, on_reject):
        return self.then(None, on_reject)

    @property
    def is_pending(self):
        return self.state == PENDING

    @property
    def is_fulfilled(self):
        return self.state == FULFILLED

    @property
    def is_rejected(self):
        return self.state == REJECTED

    @classmethod
    def _check_family(cls, other):
        if other.family != cls.family:
            return FamilyMismatch(cls.family, other.family)
        return None

    @classmethod
    def _find_mismatch(cls, promises):
        for promise in promises:
            if not isinstance(promise, BasePromise):
                return FamilyMismatch(cls.family, type(promise).__name__)
            mismatch = cls._check_family(promise)
            if mismatch is not None:
                return mismatch
        return None

    def _resolve(self, value):
        self._transition(FULFILLED, value)

    def _reject(self, reason):
        self._transition(REJECTED, reason)

    def _transition(self, outcome, payload):
        if self.state != PENDING or self._forwarding is not None:
            return

        if not isinstance(payload, BasePromise):
            self._settle(outcome, payload)
            return

        if payload is self:
            self._settle(REJECTED, TypeError('Cannot resolve promise with itself.'))
            return

        mismatch = self._check_family(payload)
        if mismatch is not None:
            logger.debug('{!r} refused a {} promise', self, payload.family)
            self._settle(REJECTED, mismatch)
            return

        logger.debug('{!r} forwarding to {!r}', self, payload)
        self._forwarding = payload
        self._follow(payload)

    def _follow(self, other):
        other.then(
            lambda value: self._adopt(FULFILLED, value),
            lambda reason: self._adopt(REJECTED, reason))

    def _adopt(self, outcome, payload):
        self._forwarding = None
        self._transition(outcome, payload)

    def _settle(self, state, value):
        self.state = state
        self.value = value
        logger.debug('{!r} settled', self)
        self._on_settled()

    def _on_settled(self):
        pass

    def _run_executor(self, executor):
        try:
            return executor(self._resolve, self._reject)
        except Exception as e:
            logger.debug('executor of {!r} raised {!r}', self, e)
            self._reject(e)
        return None

    def _react(self, on_resolve, on_reject, resolve, reject):
        if self.state == FULFILLED:
            callback = on_resolve if on_resolve is not None else identity
        else:
            callback = on_reject if on_reject is not None else thrower

        try:
            value = callback(self.value)
        except PromiseException as e:
            reject(e.value)
            return
        except Exception as e:
            logger.debug('callback on {!r} raised {!r}', self, e)
            reject(e)
            return

        resolve(value)

    def __repr__(self):
        if self.state == PENDING:
            v = '(forwarding)' if self._forwarding is not None else '(pending)'
        elif self.state == REJECTED:
            v = repr(self.value) + ' (rejected)'
        else:
            v = repr(self.value)
        return '<%s %s>' % (self.__class__.__name__, v)
