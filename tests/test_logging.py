import pytest
from structlog.testing import capture_logs

from backend.app.core.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure_logging("INFO")


def test_lowercase_level_is_accepted_and_filters():
    configure_logging("warning")
    logger = get_logger("wyatt.test")
    with capture_logs() as logs:
        logger.info("invoice_generated", invoice_id=1)
        logger.warning("billing_action_rejected", operation="generate_invoice")
    assert [entry["event"] for entry in logs] == ["billing_action_rejected"]
    assert logs[0]["operation"] == "generate_invoice"


def test_configure_logging_accepts_mixed_case():
    configure_logging("Debug")
    logger = get_logger("wyatt.test")
    with capture_logs() as logs:
        logger.debug("time_entry_assigned", time_entry_id=3)
    assert logs[0]["time_entry_id"] == 3
