"""
Tests for the notification dispatcher, channels and order notifications.
"""

from unittest import mock

import pytest
from django.core import mail

from storekeeper import StoreError
from storekeeper.adapters import get_channel
from storekeeper.adapters.email import EmailChannel
from storekeeper.adapters.log import LogChannel
from storekeeper.adapters.sms import TwilioSmsChannel
from storekeeper.models import Notification, Order
from storekeeper.protocols import Channel, DeliveryResult, OutboundMessage
from storekeeper.services.notifications import (
    NotificationDispatcher,
    send_order_confirmation,
    send_order_status_update,
)
from storekeeper.tests.fakes import FailingChannel, RaisingChannel, RecordingChannel, ScriptedChannel


pytestmark = pytest.mark.django_db


class TestSend:
    """Tests for NotificationDispatcher.send()."""

    def test_sent(self):
        notification = NotificationDispatcher().send(
            'email', 'ana@example.com', 'Hello', subject='Hi', template_id='welcome', data={'a': 1},
        )

        notification.refresh_from_db()
        assert notification.status == 'sent'
        assert notification.sent_at is not None
        assert notification.error == ''
        assert notification.template_id == 'welcome'

        message = RecordingChannel.sent[-1]
        assert message.recipient == 'ana@example.com'
        assert message.subject == 'Hi'
        assert message.data == {'a': 1}

    def test_failed(self):
        dispatcher = NotificationDispatcher(channels={'sms': FailingChannel('Number unreachable')})

        notification = dispatcher.send('sms', '+15550001111', 'Hello')

        notification.refresh_from_db()
        assert notification.status == 'failed'
        assert notification.error == 'Number unreachable'
        assert notification.sent_at is None

    def test_raising_channel_is_recorded_as_failure(self):
        dispatcher = NotificationDispatcher(channels={'push': RaisingChannel()})

        notification = dispatcher.send('push', 'user-1', 'Hello')

        assert notification.status == 'failed'
        assert 'provider unreachable' in notification.error

    def test_record_is_pending_during_delivery(self):
        seen = []

        class PeekingChannel:
            def send(self, message):
                seen.append(Notification.objects.get(recipient=message.recipient).status)
                return DeliveryResult.ok()

        NotificationDispatcher(channels={'email': PeekingChannel()}).send('email', 'peek@example.com', 'x')

        assert seen == ['pending']

    def test_unknown_type(self):
        with pytest.raises(StoreError) as exc:
            NotificationDispatcher().send('pigeon', 'roof', 'coo')
        assert exc.value.code == 'INVALID_ARGUMENT'
        assert Notification.objects.count() == 0


class TestSendBulk:
    """Tests for NotificationDispatcher.send_bulk()."""

    def test_partial_failure_does_not_abort(self):
        channel = ScriptedChannel(failing={'b@example.com'})
        dispatcher = NotificationDispatcher(channels={'email': channel})

        result = dispatcher.send_bulk(
            'email', ['a@example.com', 'b@example.com', 'c@example.com'], 'Sale!', subject='Sale',
        )

        assert channel.attempts == ['a@example.com', 'b@example.com', 'c@example.com']
        assert result['success'] is True
        assert result['totalSent'] == 2
        assert result['totalFailed'] == 1
        assert result['results'][1] == {
            'recipient': 'b@example.com',
            'success': False,
            'error': 'Rejected b@example.com',
        }
        assert Notification.objects.filter(status='sent').count() == 2
        assert Notification.objects.filter(status='failed').count() == 1

    def test_raising_recipient_does_not_abort(self):
        dispatcher = NotificationDispatcher(channels={'sms': RaisingChannel()})

        result = dispatcher.send_bulk('sms', ['+1', '+2'], 'Hi')

        assert result['totalFailed'] == 2
        assert Notification.objects.count() == 2


class TestHistory:
    """Tests for NotificationDispatcher.history()."""

    def test_newest_first_and_filters(self):
        dispatcher = NotificationDispatcher()
        first = dispatcher.send('email', 'ana@example.com', 'one')
        dispatcher.send('sms', '+15550001111', 'two')
        third = dispatcher.send('email', 'ana@example.com', 'three')

        assert dispatcher.history(recipient='ana@example.com') == [third, first]
        assert [n.message for n in dispatcher.history(notification_type='sms')] == ['two']
        assert dispatcher.history(limit=1) == [third]

    def test_default_limit(self, settings):
        settings.STOREKEEPER = {
            'NOTIFICATION_HISTORY_LIMIT': 2,
            'NOTIFICATION_CHANNELS': {'push': 'storekeeper.tests.fakes.RecordingChannel'},
        }
        dispatcher = NotificationDispatcher()
        for i in range(3):
            dispatcher.send('push', 'user-1', str(i))

        assert len(dispatcher.history()) == 2


class TestChannels:
    """Tests for channel adapters and loading."""

    def test_loader_uses_settings_and_caches(self):
        channel = get_channel('email')

        assert isinstance(channel, RecordingChannel)
        assert get_channel('email') is channel

    def test_adapters_satisfy_protocol(self):
        for channel in (LogChannel(), EmailChannel(), TwilioSmsChannel(client=mock.Mock()), RecordingChannel()):
            assert isinstance(channel, Channel)

    def test_log_channel_always_succeeds(self):
        result = LogChannel().send(OutboundMessage(type='push', recipient='user-1', message='hi'))

        assert result.success is True

    def test_email_channel_uses_django_mail(self):
        result = EmailChannel().send(OutboundMessage(
            type='email', recipient='ana@example.com', message='Body', subject='Subject',
        ))

        assert result.success is True
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['ana@example.com']
        assert mail.outbox[0].subject == 'Subject'

    def test_email_channel_failure(self):
        with mock.patch('storekeeper.adapters.email.send_mail', side_effect=OSError('smtp down')):
            result = EmailChannel().send(OutboundMessage(type='email', recipient='a@b.c', message='x'))

        assert result.success is False
        assert result.error == 'Email delivery failed'

    def test_sms_channel_sends_through_client(self, settings):
        settings.TWILIO_ACCOUNT_SID = 'AC123'
        settings.TWILIO_AUTH_TOKEN = 'token'
        settings.TWILIO_SMS_FROM = '+15550000000'
        client = mock.Mock()
        client.messages.create.return_value = mock.Mock(sid='SM1')

        result = TwilioSmsChannel(client=client).send(
            OutboundMessage(type='sms', recipient='+15551234567', message='Shipped'),
        )

        assert result.success is True
        client.messages.create.assert_called_once_with(
            body='Shipped', from_='+15550000000', to='+15551234567',
        )

    def test_sms_channel_without_credentials(self, settings):
        settings.TWILIO_ACCOUNT_SID = ''

        result = TwilioSmsChannel().send(
            OutboundMessage(type='sms', recipient='+15551234567', message='x'),
        )

        assert result.success is False
        assert result.error == 'Twilio credentials missing'


class TestOrderNotifications:
    """Order confirmation and status update messages."""

    def test_confirmation_on_create(self):
        order = Order.objects.create(customer_email='jo@example.com', customer_phone='+15551234567')

        sent = Notification.objects.filter(data__orderId=order.pk)
        assert sorted(sent.values_list('type', flat=True)) == ['email', 'sms']
        email = sent.get(type='email')
        assert email.subject == f"Order Confirmation - {order.order_number}"
        assert email.template_id == 'order_confirmation'

    def test_status_update_on_shipped(self):
        order = Order.objects.create(customer_email='jo@example.com')
        order.status = 'shipped'
        order.save()

        update = Notification.objects.get(template_id='order_status_update')
        assert update.subject == f"Order Shipped - {order.order_number}"
        assert update.data['statusChange'] == {'from': 'pending', 'to': 'shipped'}

    def test_processing_is_not_announced(self):
        order = Order.objects.create(customer_email='jo@example.com')
        order.status = 'processing'
        order.save()

        assert not Notification.objects.filter(template_id='order_status_update').exists()

    def test_no_email_no_notification(self):
        order = Order.objects.create()

        assert send_order_confirmation(order) == []
        assert Notification.objects.count() == 0

    def test_same_status_is_ignored(self):
        order = Order.objects.create(customer_email='jo@example.com')

        assert send_order_status_update(order, 'pending') == []

    def test_disabled_by_setting(self, settings):
        settings.STOREKEEPER = {'ORDER_NOTIFICATIONS': False}

        Order.objects.create(customer_email='jo@example.com')

        assert Notification.objects.count() == 0

    def test_failed_delivery_does_not_fail_order(self):
        dispatcher = NotificationDispatcher(channels={'email': RaisingChannel()})
        order = Order.objects.create(customer_email='jo@example.com')

        sent = send_order_confirmation(order, dispatcher=dispatcher)

        assert sent[0].status == 'failed'
