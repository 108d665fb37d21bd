"""Tests for the mail transports: fake adapter and registry."""

import asyncio

import pytest
from notifications.channel import get_mail_transport, reset_mail_transport
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.sendgrid import SendGridAdapter


def _send(adapter, to="a@b.com", subject="Hi", body="Hello"):
    return asyncio.run(adapter.send(to=to, from_email="desk@shipdesk.test", subject=subject, body=body))


class TestFakeEmailAdapter:
    def setup_method(self):
        self.adapter = FakeEmailAdapter()

    def test_send_records_email(self):
        result = _send(self.adapter, to="test@example.com")
        assert result["status"] == "sent"
        assert result["message_id"] is not None
        assert len(self.adapter.sent_emails) == 1
        assert self.adapter.sent_emails[0]["to"] == "test@example.com"
        assert self.adapter.sent_emails[0]["from_email"] == "desk@shipdesk.test"

    def test_send_failure(self):
        self.adapter.configure(should_succeed=False, failure_reason="SMTP error")
        result = _send(self.adapter)
        assert result["status"] == "failed"
        assert result["error"] == "SMTP error"
        assert len(self.adapter.sent_emails) == 0
        assert self.adapter.attempts == ["a@b.com"]

    def test_fail_for_single_address(self):
        self.adapter.configure(fail_for=["bad@b.com"])
        assert _send(self.adapter, to="bad@b.com")["status"] == "failed"
        assert _send(self.adapter, to="good@b.com")["status"] == "sent"
        assert [e["to"] for e in self.adapter.sent_emails] == ["good@b.com"]

    def test_sent_to(self):
        _send(self.adapter, to="x@b.com")
        _send(self.adapter, to="y@b.com")
        _send(self.adapter, to="x@b.com")
        assert len(self.adapter.sent_to("x@b.com")) == 2

    def test_reset(self):
        _send(self.adapter)
        self.adapter.configure(should_succeed=False, delays={"a@b.com": 1})
        self.adapter.reset()
        assert len(self.adapter.sent_emails) == 0
        assert self.adapter.attempts == []
        assert self.adapter.should_succeed is True
        assert self.adapter.delays == {}


class TestTransportRegistry:
    def setup_method(self):
        reset_mail_transport()

    def teardown_method(self):
        reset_mail_transport()

    def test_fake_by_default(self, monkeypatch):
        monkeypatch.delenv("MAIL_TRANSPORT", raising=False)
        assert isinstance(get_mail_transport(), FakeEmailAdapter)

    def test_singleton(self):
        assert get_mail_transport() is get_mail_transport()

    def test_reset_gives_fresh_adapter(self):
        first = get_mail_transport()
        reset_mail_transport()
        assert get_mail_transport() is not first

    def test_sendgrid_selected(self, monkeypatch):
        monkeypatch.setenv("MAIL_TRANSPORT", "sendgrid")
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.test")
        transport = get_mail_transport()
        assert isinstance(transport, SendGridAdapter)
        assert transport.api_key == "SG.test"

    def test_sendgrid_requires_key(self, monkeypatch):
        monkeypatch.setenv("MAIL_TRANSPORT", "sendgrid")
        monkeypatch.delenv("SENDGRID_API_KEY", raising=False)
        with pytest.raises(ValueError):
            get_mail_transport()

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("MAIL_TRANSPORT", "pigeon")
        with pytest.raises(ValueError):
            get_mail_transport()
