"""Outbound mail — SMTP transport and alert templates."""

from .mailer import SmtpMailer
from .templates import render_price_alert_html

__all__ = ["SmtpMailer", "render_price_alert_html"]
