"""AlertRepository / UserRepository tests on SQLite in-memory."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlmodel import select

from seedling_prime.domain import AlertAlreadyTriggeredError, AlertNotFoundError, AlertType, InvalidAlertError
from seedling_prime.infra.database.models import AlertDB
from seedling_prime.infra.database.repositories import AlertRepository, UserRepository

# ─── Pipeline queries ────────────────────────────────────────────


class TestListEligible:
    def test_only_active_untriggered(self, session, make_alert):
        eligible = make_alert(alert_id="a1")
        make_alert(alert_id="a2", is_active=False)
        make_alert(alert_id="a3", is_active=False, is_triggered=True)

        rows = AlertRepository.list_eligible(session)

        assert [r.id for r in rows] == [eligible.id]

    def test_empty(self, session):
        assert AlertRepository.list_eligible(session) == []


class TestMarkTriggered:
    def test_transitions_eligible_alert(self, session, make_alert):
        alert = make_alert(alert_id="a1")
        now = datetime(2026, 10, 18, 19, 45, tzinfo=UTC)

        row = AlertRepository.mark_triggered(session, alert.id, now=now)

        assert row.is_triggered is True
        assert row.is_active is False
        assert row.triggered_at is not None
        assert row.triggered_at.replace(tzinfo=None) == now.replace(tzinfo=None)

    def test_second_commit_loses(self, session, make_alert):
        alert = make_alert(alert_id="a1")
        AlertRepository.mark_triggered(session, alert.id)

        with pytest.raises(AlertAlreadyTriggeredError):
            AlertRepository.mark_triggered(session, alert.id)

    def test_inactive_alert_not_triggered(self, session, make_alert):
        alert = make_alert(alert_id="a1", is_active=False)

        with pytest.raises(AlertAlreadyTriggeredError):
            AlertRepository.mark_triggered(session, alert.id)

        row = session.get(AlertDB, alert.id)
        assert row.is_triggered is False

    def test_missing_alert(self, session):
        with pytest.raises(AlertNotFoundError):
            AlertRepository.mark_triggered(session, "nope")

    def test_triggered_leaves_eligible_set(self, session, make_alert):
        a = make_alert(alert_id="a1")
        b = make_alert(alert_id="a2")

        AlertRepository.mark_triggered(session, a.id)

        assert [r.id for r in AlertRepository.list_eligible(session)] == [b.id]


# ─── User-facing actions ─────────────────────────────────────────


class TestCreate:
    def test_price_alert(self, session):
        row = AlertRepository.create(
            session,
            user_id="u1",
            symbol=" aapl ",
            company="Apple Inc.",
            alert_type="price_upper",
            target_price=150,
            volume_multiplier=5,
        )
        assert row.symbol == "AAPL"
        assert row.alert_type == AlertType.PRICE_UPPER
        assert row.target_price == 150.0
        assert row.volume_multiplier is None
        assert row.is_active is True
        assert row.is_triggered is False

    def test_volume_alert_drops_target(self, session):
        row = AlertRepository.create(
            session,
            user_id="u1",
            symbol="TSLA",
            company="Tesla",
            alert_type=AlertType.VOLUME,
            target_price=200,
        )
        assert row.target_price is None
        assert row.volume_multiplier == 2.0

    def test_price_alert_without_target(self, session):
        with pytest.raises(InvalidAlertError):
            AlertRepository.create(session, user_id="u1", symbol="AAPL", company="Apple", alert_type="price_lower")
        assert session.exec(select(AlertDB)).all() == []

    def test_unknown_type(self, session):
        with pytest.raises(ValueError):
            AlertRepository.create(session, user_id="u1", symbol="AAPL", company="Apple", alert_type="bogus")


class TestListQueries:
    def test_list_by_user_newest_first(self, session, make_alert):
        base = datetime(2026, 10, 1, tzinfo=UTC)
        old = make_alert(alert_id="old", created_at=base)
        new = make_alert(alert_id="new", created_at=base + timedelta(days=1))
        make_alert(alert_id="other", user_id="u2")

        rows = AlertRepository.list_by_user(session, "u1")

        assert [r.id for r in rows] == [new.id, old.id]

    def test_list_by_user_symbol_normalizes(self, session, make_alert):
        aapl = make_alert(alert_id="a1", symbol="AAPL")
        make_alert(alert_id="a2", symbol="MSFT")

        rows = AlertRepository.list_by_user_symbol(session, "u1", "aapl")

        assert [r.id for r in rows] == [aapl.id]


class TestUpdate:
    def test_update_target(self, session, make_alert):
        alert = make_alert(alert_id="a1")
        row = AlertRepository.update(session, alert.id, "u1", target_price=175.0)
        assert row.target_price == 175.0

    def test_update_rejects_invalid_target(self, session, make_alert):
        alert = make_alert(alert_id="a1")
        with pytest.raises(InvalidAlertError):
            AlertRepository.update(session, alert.id, "u1", target_price=-1.0)

    def test_update_requires_ownership(self, session, make_alert):
        alert = make_alert(alert_id="a1", user_id="u1")
        with pytest.raises(AlertNotFoundError):
            AlertRepository.update(session, alert.id, "u2", target_price=10.0)

    def test_toggle_active(self, session, make_alert):
        alert = make_alert(alert_id="a1")
        assert AlertRepository.toggle_active(session, alert.id, "u1").is_active is False
        assert AlertRepository.toggle_active(session, alert.id, "u1").is_active is True


class TestDelete:
    def test_delete_owned(self, session, make_alert):
        alert = make_alert(alert_id="a1")
        AlertRepository.delete(session, alert.id, "u1")
        assert AlertRepository.get(session, alert.id) is None

    def test_delete_not_owned(self, session, make_alert):
        alert = make_alert(alert_id="a1")
        with pytest.raises(AlertNotFoundError):
            AlertRepository.delete(session, alert.id, "intruder")
        assert AlertRepository.get(session, alert.id) is not None


# ─── Users ───────────────────────────────────────────────────────


class TestUserRepository:
    def test_contact(self, session, make_user):
        make_user("u1", "ada@example.com", "Ada")
        contact = UserRepository.get_contact(session, "u1")
        assert contact.email == "ada@example.com"
        assert contact.name == "Ada"

    def test_default_name(self, session, make_user):
        make_user("u1", "ada@example.com", None)
        assert UserRepository.get_contact(session, "u1").name == "Investor"

    def test_missing_email(self, session, make_user):
        make_user("u1", None, "Ada")
        assert UserRepository.get_contact(session, "u1") is None

    def test_missing_user(self, session):
        assert UserRepository.get_contact(session, "ghost") is None
