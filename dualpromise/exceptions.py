class PromiseError(Exception):
    pass


class PromiseException(PromiseError):
    """Carries a rejection reason that is not itself an exception.

    Raising it from a ``then`` callback rejects the derived promise with
    ``value`` rather than with the exception object.
    """

    def __init__(self, value):
        super().__init__(value)
        self.value = value

    def __str__(self):
        return repr(self.value)


class FamilyMismatch(PromiseError, TypeError):
    def __init__(self, expected, actual):
        super().__init__(
            'Supported only %s promises, got a %s promise' % (expected, actual))
        self.expected = expected
        self.actual = actual


class BackendUnavailable(PromiseError, RuntimeError):
    pass
