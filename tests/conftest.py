import pytest
from loguru import logger

from dualpromise import config, log


@pytest.fixture
def settings():
    previous = config.configure()
    yield config
    config.configure(**vars(previous))


@pytest.fixture
def poll_mode(settings):
    """Switch the coroutine backend to the fixed-interval poll loop."""
    settings.configure(poll_interval=0.005)


@pytest.fixture
def log_messages():
    messages = []
    log.enable()
    handler_id = logger.add(messages.append, level='DEBUG', format='{message}')
    yield messages
    logger.remove(handler_id)
    log.disable()
