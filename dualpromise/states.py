from .exceptions import PromiseException

PENDING = 'pending'
FULFILLED = 'fulfilled'
REJECTED = 'rejected'


def empty(resolve, reject):
    pass


def identity(value):
    return value


def thrower(reason):
    raise PromiseException(reason)


def as_exception(reason):
    if isinstance(reason, BaseException):
        return reason
    return PromiseException(reason)
