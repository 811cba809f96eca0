import logging

import pytest

from config.settings import mask_sensitive_data
from modules.orders.exceptions import InvalidRemaneioSequence


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]

    def test_non_sensitive_data_unchanged(self):
        event_dict = {"event": "order.created", "order_key": "C0017x9k2"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_key"] == "C0017x9k2"
        assert result["event"] == "order.created"


class TestDomainEvents:
    def test_order_creation_is_logged(self, make_order, caplog):
        with caplog.at_level(logging.INFO):
            order = make_order()
        messages = [record.getMessage() for record in caplog.records]
        assert any("order.created" in m and str(order.id) in m for m in messages)

    def test_remaneio_rejection_is_logged(self, sequencer, make_order, caplog):
        waiting = make_order()
        with caplog.at_level(logging.WARNING):
            with pytest.raises(InvalidRemaneioSequence):
                sequencer.reorder([waiting.id])
        assert any("remaneio.rejected" in r.getMessage() for r in caplog.records)
