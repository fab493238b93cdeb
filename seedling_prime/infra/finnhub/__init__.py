"""Finnhub market data client."""

from .client import FinnhubClient

__all__ = ["FinnhubClient"]
