"""HTML bodies for alert emails."""

from html import escape

_PRICE_ALERT_HTML = """<html>
  <body style="font-family: Arial, sans-serif; color: #1f2937;">
    <h2 style="color: {accent};">{headline}</h2>
    <p>Hi {name},</p>
    <p><strong>{symbol}</strong> ({company}) has {movement} your target price.</p>
    <table cellpadding="6" style="border-collapse: collapse;">
      <tr><td>Current price</td><td><strong>{current_price}</strong></td></tr>
      <tr><td>Target price</td><td>{target_price}</td></tr>
      <tr><td>Time</td><td>{timestamp}</td></tr>
    </table>
    <p style="color: #6b7280; font-size: 12px;">
      This alert has now been turned off. Create a new one to keep watching {symbol}.
    </p>
    <p>SeedlingPrime Alerts</p>
  </body>
</html>
"""

_UPPER = {"accent": "#059669", "headline": "Price Above Target", "movement": "risen above"}
_LOWER = {"accent": "#dc2626", "headline": "Price Below Target", "movement": "dropped below"}


def render_price_alert_html(
    *,
    upper: bool,
    name: str,
    symbol: str,
    company: str,
    current_price: str,
    target_price: str,
    timestamp: str,
) -> str:
    """Fill the upper- or lower-crossing template. Arguments are pre-formatted."""
    variant = _UPPER if upper else _LOWER
    return _PRICE_ALERT_HTML.format(
        **variant,
        name=escape(name),
        symbol=escape(symbol),
        company=escape(company or symbol),
        current_price=escape(current_price),
        target_price=escape(target_price),
        timestamp=escape(timestamp),
    )
