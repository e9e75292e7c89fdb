import sys, os; sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))
import logging

from loguru import logger

from leagueodds.log import setup_logging


def test_setup_logging_routes_standard_logging(capsys):
    setup_logging("info")
    try:
        logging.getLogger("joblib").warning("hello from stdlib")
        logger.debug("below the threshold")
        err = capsys.readouterr().err
        assert "hello from stdlib" in err
        assert "below the threshold" not in err
    finally:
        logger.remove()
        logging.getLogger().handlers.clear()
