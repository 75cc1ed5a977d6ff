from pathlib import Path

import pytest


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests(monkeypatch):
    """Reset process-wide singletons and mail configuration around every test."""
    from notifications.channel import reset_transport
    from ordering.order.repository import reset_order_store

    for name in ("SMTP_EMAIL", "SMTP_PASSWORD", "MAIL_TRANSPORT", "OPERATOR_EMAIL", "STORE_NAME", "MAIL_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    reset_transport()
    reset_order_store()

    yield

    reset_transport()
    reset_order_store()
