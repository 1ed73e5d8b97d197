import logging

from fx_consolidator.utils.logger import get_logger, set_level


def test_get_logger_returns_named_logger() -> None:
    logger = get_logger("fx_consolidator.tests")

    assert logger.name == "fx_consolidator.tests"
    assert get_logger().name == "fx_consolidator"


def test_set_level_updates_package_logger() -> None:
    package_logger = get_logger()
    original = package_logger.level
    try:
        set_level(logging.DEBUG)
        assert package_logger.level == logging.DEBUG
    finally:
        package_logger.setLevel(original)
