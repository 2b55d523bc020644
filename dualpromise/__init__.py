from .coroutine import CoPromise
from .engine import BasePromise
from .exceptions import BackendUnavailable, FamilyMismatch, PromiseError, PromiseException
from .states import FULFILLED, PENDING, REJECTED
from .sync import IsolatedPromise, Promise, WorkQueue

__all__ = [
    'BackendUnavailable',
    'BasePromise',
    'CoPromise',
    'FULFILLED',
    'FamilyMismatch',
    'IsolatedPromise',
    'PENDING',
    'Promise',
    'PromiseError',
    'PromiseException',
    'REJECTED',
    'WorkQueue',
]
