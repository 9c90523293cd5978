import logging

from gringotts.utils.logging import ROOT_LOGGER_NAME, get_logger


def test_get_logger_nests_under_package_root() -> None:
    assert get_logger('scratch').name == 'gringotts.scratch'
    assert get_logger('gringotts.engine.ledger').name == 'gringotts.engine.ledger'


def test_root_logger_configured_once() -> None:
    get_logger('a')
    get_logger('b')
    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert len(root.handlers) == 1
