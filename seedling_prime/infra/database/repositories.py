"""Shared DB queries — Repository pattern used by the service layer.

Every query takes a SQLModel Session and behaves as a pure function.
Repositories return DB models; conversion to domain models is the caller's job.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import desc, update
from sqlmodel import Session, select

from seedling_prime.domain.alert import validate_alert_params
from seedling_prime.domain.enums import AlertType
from seedling_prime.domain.errors import AlertAlreadyTriggeredError, AlertNotFoundError
from seedling_prime.domain.user import DEFAULT_USER_NAME, UserContact

from .models import AlertDB, UserDB

logger = logging.getLogger(__name__)


# ─── Alerts ──────────────────────────────────────────────────────


class AlertRepository:
    """Alert persistence contract."""

    # --- Pipeline ---

    @staticmethod
    def list_eligible(session: Session) -> list[AlertDB]:
        """All alerts with is_active AND NOT is_triggered."""
        stmt = (
            select(AlertDB)
            .where(AlertDB.is_active == True)  # noqa: E712
            .where(AlertDB.is_triggered == False)  # noqa: E712
            .order_by(AlertDB.created_at)
        )
        return list(session.exec(stmt).all())

    @staticmethod
    def mark_triggered(session: Session, alert_id: str, now: datetime | None = None) -> AlertDB:
        """Conditional eligible → triggered transition.

        Only updates the row while it is still active and un-triggered, so two
        overlapping passes cannot both commit the same alert.

        Raises:
            AlertNotFoundError: no alert with this id.
            AlertAlreadyTriggeredError: the alert exists but is no longer eligible.
        """
        now = now or datetime.now(UTC)
        result = session.exec(
            update(AlertDB)  # type: ignore[call-overload]
            .where(AlertDB.id == alert_id)
            .where(AlertDB.is_active == True)  # noqa: E712
            .where(AlertDB.is_triggered == False)  # noqa: E712
            .values(is_triggered=True, is_active=False, triggered_at=now, updated_at=now)
        )
        session.commit()

        alert = session.get(AlertDB, alert_id)
        if alert is None:
            raise AlertNotFoundError(alert_id)
        if result.rowcount == 0:
            raise AlertAlreadyTriggeredError(alert_id)
        return alert

    # --- User-facing actions ---

    @staticmethod
    def create(
        session: Session,
        *,
        user_id: str,
        symbol: str,
        company: str,
        alert_type: AlertType | str,
        target_price: float | None = None,
        volume_multiplier: float | None = None,
    ) -> AlertDB:
        """Create an active, un-triggered alert.

        Raises:
            InvalidAlertError: kind-specific parameter missing or non-positive.
            ValueError: unknown alert_type.
        """
        alert_type = AlertType(alert_type)
        target_price, volume_multiplier = validate_alert_params(alert_type, target_price, volume_multiplier)
        alert = AlertDB(
            user_id=user_id,
            symbol=symbol.strip().upper(),
            company=company.strip(),
            alert_type=alert_type.value,
            target_price=target_price,
            volume_multiplier=volume_multiplier,
            is_active=True,
            is_triggered=False,
        )
        session.add(alert)
        session.commit()
        session.refresh(alert)
        logger.info("[%s] Alert created: id=%s type=%s user=%s", alert.symbol, alert.id, alert_type, user_id)
        return alert

    @staticmethod
    def get(session: Session, alert_id: str) -> AlertDB | None:
        return session.get(AlertDB, alert_id)

    @staticmethod
    def list_by_user(session: Session, user_id: str) -> list[AlertDB]:
        stmt = select(AlertDB).where(AlertDB.user_id == user_id).order_by(desc(AlertDB.created_at))
        return list(session.exec(stmt).all())

    @staticmethod
    def list_by_user_symbol(session: Session, user_id: str, symbol: str) -> list[AlertDB]:
        stmt = (
            select(AlertDB)
            .where(AlertDB.user_id == user_id)
            .where(AlertDB.symbol == symbol.strip().upper())
            .order_by(desc(AlertDB.created_at))
        )
        return list(session.exec(stmt).all())

    @staticmethod
    def update(
        session: Session,
        alert_id: str,
        user_id: str,
        *,
        target_price: float | None = None,
        volume_multiplier: float | None = None,
        is_active: bool | None = None,
    ) -> AlertDB:
        """Edit the parameter of an owned alert or flip its active flag."""
        alert = AlertRepository._get_owned(session, alert_id, user_id)
        alert_type = AlertType(alert.alert_type)

        if target_price is not None or volume_multiplier is not None:
            new_target, new_multiplier = validate_alert_params(
                alert_type,
                target_price if target_price is not None else alert.target_price,
                volume_multiplier if volume_multiplier is not None else alert.volume_multiplier,
            )
            alert.target_price = new_target
            alert.volume_multiplier = new_multiplier
        if is_active is not None:
            alert.is_active = is_active

        alert.updated_at = datetime.now(UTC)
        session.add(alert)
        session.commit()
        session.refresh(alert)
        return alert

    @staticmethod
    def toggle_active(session: Session, alert_id: str, user_id: str) -> AlertDB:
        alert = AlertRepository._get_owned(session, alert_id, user_id)
        alert.is_active = not alert.is_active
        alert.updated_at = datetime.now(UTC)
        session.add(alert)
        session.commit()
        session.refresh(alert)
        logger.info("[%s] Alert %s %s", alert.symbol, alert.id, "activated" if alert.is_active else "deactivated")
        return alert

    @staticmethod
    def delete(session: Session, alert_id: str, user_id: str) -> None:
        alert = AlertRepository._get_owned(session, alert_id, user_id)
        session.delete(alert)
        session.commit()

    @staticmethod
    def _get_owned(session: Session, alert_id: str, user_id: str) -> AlertDB:
        alert = session.get(AlertDB, alert_id)
        if alert is None or alert.user_id != user_id:
            raise AlertNotFoundError(alert_id)
        return alert


# ─── Users ───────────────────────────────────────────────────────


class UserRepository:
    """Notification recipient lookup."""

    @staticmethod
    def get_contact(session: Session, user_id: str) -> UserContact | None:
        """None when the user is missing or has no email."""
        user = session.get(UserDB, user_id)
        if user is None or not user.email:
            return None
        return UserContact(id=user.id, email=user.email, name=user.name or DEFAULT_USER_NAME)
