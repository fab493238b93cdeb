"""Notification recipient."""

from pydantic import BaseModel

DEFAULT_USER_NAME = "Investor"


class UserContact(BaseModel):
    """Who receives an alert email."""

    id: str
    email: str
    name: str = DEFAULT_USER_NAME
