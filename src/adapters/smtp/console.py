"""
Console notification adapter - Implements NotificationDispatcher protocol.

This module provides a console-based implementation of the domain's
notification port, logging confirmation and admin notifications instead of
delivering them, for demo and development purposes.
"""

import logging

from src.domain.exceptions import NotificationFailure
from src.domain.models import RegistrationNotification

logger = logging.getLogger(__name__)


class ConsoleNotificationDispatcher:
    """
    Implements NotificationDispatcher protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Mirrors the production mail settings: the registrant confirmation and the
    admin notification can each be switched off, and the admin notification
    needs an admin address.
    """

    def __init__(
        self,
        admin_email: str = "",
        notify_user: bool = True,
        notify_admin: bool = True,
        site_name: str = "Event Registration",
    ) -> None:
        self._admin_email = admin_email
        self._notify_user = notify_user
        self._notify_admin = notify_admin
        self._site_name = site_name

    def send_registration_confirmation(self, notification: RegistrationNotification) -> None:
        """
        Log the confirmation and admin notification (simulates email delivery).

        In production, this would be replaced with an SMTP adapter.
        Messages are logged at INFO level to be visible in docker-compose logs.

        Raises:
            NotificationFailure: If there is no address to deliver to
        """
        if self._notify_user:
            if not notification.email:
                raise NotificationFailure("Registrant email address is empty")
            logger.info(
                "[CONFIRMATION] %s To: %s Event: %s Date: %s Category: %s",
                self._site_name,
                notification.email,
                notification.event_name,
                notification.event_date.isoformat(),
                notification.category,
            )

        if self._notify_admin and self._admin_email:
            logger.info(
                "[ADMIN NOTIFICATION] %s To: %s Registrant: %s <%s> College: %s "
                "Department: %s Event: %s Date: %s",
                self._site_name,
                self._admin_email,
                notification.full_name,
                notification.email,
                notification.college_name,
                notification.department,
                notification.event_name,
                notification.event_date.isoformat(),
            )
