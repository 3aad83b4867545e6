from labstock.services.alerts import AlertItem, build_alert_message, send_alert, sort_alert_items


def item(product_id, name, status, risk):
    return AlertItem(
        product_id=product_id, name=name, stock=3, remaining_days=1, adjusted_remaining_days=1,
        status=status, risk_level=risk, recommendation="urgent reorder needed",
    )


def test_sort_by_severity_then_risk_then_name():
    items = [
        item("1", "Wipes", "high", 0.0),
        item("2", "Gloves", "critical", 0.5),
        item("3", "Tips", "low", 0.2),
        item("4", "Acetone", "critical", 0.5),
        item("5", "Foil", "critical", 0.9),
        item("6", "Vials", "normal", 0.0),
    ]
    assert [i.name for i in sort_alert_items(items)] == ["Foil", "Acetone", "Gloves", "Tips", "Vials", "Wipes"]


def test_message_layout():
    message = build_alert_message([item("2", "Tips", "low", 0.2), item("1", "Gloves", "critical", 0.8)], "https://stock.example.com/")
    blocks = message["blocks"]

    assert blocks[0]["type"] == "header"
    assert "*Gloves*" in blocks[2]["text"]["text"]
    assert "*Tips*" in blocks[3]["text"]["text"]
    assert blocks[-1]["type"] == "actions"
    assert blocks[-1]["elements"][0]["url"] == "https://stock.example.com/inventory"


def test_message_without_link():
    message = build_alert_message([item("1", "Gloves", "critical", 0.8)], "")
    assert all(b["type"] != "actions" for b in message["blocks"])


def test_link_defaults_to_config():
    message = build_alert_message([item("1", "Gloves", "critical", 0.8)])
    assert message["blocks"][-1]["elements"][0]["url"] == "https://stock.example.com/inventory"


def test_send_alert(notifier):
    assert not send_alert(notifier, [])
    assert notifier.messages == []

    assert send_alert(notifier, [item("1", "Gloves", "critical", 0.8)])
    assert len(notifier.messages) == 1


def test_send_alert_rejected(notifier):
    notifier.accept = False
    assert not send_alert(notifier, [item("1", "Gloves", "critical", 0.8)])


def test_send_alert_without_notifier():
    assert not send_alert(None, [item("1", "Gloves", "critical", 0.8)])
