import os
from dataclasses import dataclass, replace

_TRUTHY = ('1', 'true', 'yes')


@dataclass(frozen=True)
class Settings:
    # Seconds between state polls in the coroutine backend; 0 waits on the
    # settlement event instead.
    poll_interval: float = 0.0
    debug: bool = False

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        raw_interval = environ.get('DUALPROMISE_POLL_INTERVAL', '')
        try:
            poll_interval = max(float(raw_interval), 0.0) if raw_interval else 0.0
        except ValueError:
            raise ValueError(
                'DUALPROMISE_POLL_INTERVAL must be a number of seconds, got %r' % raw_interval)
        debug = environ.get('DUALPROMISE_DEBUG', '').lower() in _TRUTHY
        return cls(poll_interval=poll_interval, debug=debug)


settings = Settings.from_env()


def configure(**changes):
    """Replace the active settings, returning the previous ones."""
    global settings
    previous = settings
    settings = replace(settings, **changes)
    return previous
