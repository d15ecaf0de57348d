"""Notification engine: writer, read-time projector, reader and role-slot mutator."""

from staffboard.services.notifications.mutator import NotificationMutator
from staffboard.services.notifications.projector import Viewer, action_url_for, project_notification
from staffboard.services.notifications.reader import NotificationReader
from staffboard.services.notifications.writer import NotificationWriter, Recipient

__all__ = [
    "NotificationMutator",
    "NotificationReader",
    "NotificationWriter",
    "Recipient",
    "Viewer",
    "action_url_for",
    "project_notification",
]
