"""SMTP transport — STARTTLS + login, one connection per message."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid

from seedling_prime.domain import NotificationError
from seedling_prime.domain.config import MailConfig, get_config

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Sends multipart (text + HTML) mail through the configured SMTP relay.

    Usage:
        mailer = SmtpMailer()
        message_id = mailer.send("user@example.com", "Subject", "text", "<p>html</p>")
    """

    def __init__(self, config: MailConfig | None = None):
        self._config = config or get_config().mail

    @property
    def sender(self) -> str:
        return formataddr((self._config.sender_name, self._config.from_address))

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> str:
        """Deliver one message.

        Returns:
            The Message-ID header of the sent message.

        Raises:
            NotificationError: connection, auth or delivery failure.
        """
        if html is not None:
            msg = MIMEMultipart("alternative")
            msg.attach(MIMEText(text, "plain", "utf-8"))
            msg.attach(MIMEText(html, "html", "utf-8"))
        else:
            msg = MIMEText(text, "plain", "utf-8")

        message_id = make_msgid(domain=self._sender_domain())
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg["Message-ID"] = message_id

        cfg = self._config
        try:
            with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.timeout) as server:
                if cfg.use_tls:
                    server.starttls()
                if cfg.username:
                    server.login(cfg.username, cfg.password)
                server.sendmail(cfg.from_address, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Failed to send mail to {to}: {e}") from e

        logger.info("Mail sent: to=%s subject=%r id=%s", to, subject, message_id)
        return message_id

    def _sender_domain(self) -> str | None:
        _, _, domain = self._config.from_address.partition("@")
        return domain or None
