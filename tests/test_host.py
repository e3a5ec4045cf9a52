import logging

from code_scorer.host import ErrorNotifier, StatusBarItem


def test_status_bar_item_starts_hidden_with_placeholder():
    item = StatusBarItem()
    assert item.text == "Code Score: N/A"
    assert not item.visible
    assert vars(item).keys() == {"text", "visible", "disposed"}


def test_status_bar_item_logs_visible_text(caplog):
    caplog.set_level(logging.INFO, logger="code_scorer.host")
    item = StatusBarItem()
    item.set_text("Code Score: 70/100 🤔")
    assert "Status:" not in caplog.text

    item.show()
    item.set_text("Code Score: 91/100 🎉")
    assert "Status: Code Score: 70/100 🤔" in caplog.text
    assert "Status: Code Score: 91/100 🎉" in caplog.text


def test_disposed_item_ignores_updates():
    item = StatusBarItem()
    item.show()
    item.dispose()
    item.set_text("Code Score: 50/100 👎")
    assert item.text == "Code Score: N/A"
    assert not item.visible


def test_error_notifier_logs_and_remembers(caplog):
    notifier = ErrorNotifier()
    notifier.show_error_message("Error: rate limited")
    assert notifier.last_message == "Error: rate limited"
    assert "Error: rate limited" in caplog.text
