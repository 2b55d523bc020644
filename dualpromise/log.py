from loguru import logger as _logger

from . import config

logger = _logger.bind(component='dualpromise')


def enable():
    _logger.enable('dualpromise')


def disable():
    _logger.disable('dualpromise')


if config.settings.debug:
    enable()
else:
    disable()
