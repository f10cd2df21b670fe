"""
Notification model — one outbound email/SMS/push message and its delivery outcome.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from storekeeper.models.enums import NotificationStatus, NotificationType


class Notification(models.Model):
    """
    Outbound message.

    Created PENDING before the delivery attempt, then updated to SENT
    (with sent_at) or FAILED (with error).
    """

    type = models.CharField(
        max_length=10,
        choices=NotificationType.choices,
        verbose_name=_('Type'),
    )
    recipient = models.CharField(max_length=255, db_index=True, verbose_name=_('Recipient'))
    subject = models.CharField(max_length=255, blank=True, verbose_name=_('Subject'))
    message = models.TextField(verbose_name=_('Message'))
    template_id = models.CharField(max_length=100, blank=True, verbose_name=_('Template'))
    data = models.JSONField(default=dict, blank=True, verbose_name=_('Data'))

    status = models.CharField(
        max_length=10,
        choices=NotificationStatus.choices,
        default=NotificationStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    error = models.TextField(blank=True, verbose_name=_('Error'))
    sent_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Sent at'))
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('Notification')
        verbose_name_plural = _('Notifications')
        ordering = ['-created_at', '-pk']

    def __str__(self) -> str:
        return f"{self.type} → {self.recipient} ({self.status})"
