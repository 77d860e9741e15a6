"""Notifier port — best-effort user notifications."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Delivers a notification without the caller waiting on it.

    ``notify`` returns immediately. Delivery failures are never reported back
    to the caller and never affect the caller's transaction.
    """

    @abstractmethod
    def notify(self, user_id: int, message: str, link: str) -> None:
        ...
