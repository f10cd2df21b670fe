"""Deterministic channels for tests."""

from storekeeper.protocols.channel import DeliveryResult, OutboundMessage


class RecordingChannel:
    """Succeeds and records every message (shared across instances)."""

    sent: list[OutboundMessage] = []

    def send(self, message: OutboundMessage) -> DeliveryResult:
        RecordingChannel.sent.append(message)
        return DeliveryResult.ok(provider_id=f"fake-{len(RecordingChannel.sent)}")


class FailingChannel:
    def __init__(self, error: str = 'Delivery refused'):
        self.error = error

    def send(self, message: OutboundMessage) -> DeliveryResult:
        return DeliveryResult.failed(self.error)


class RaisingChannel:
    def send(self, message: OutboundMessage) -> DeliveryResult:
        raise ConnectionError('provider unreachable')


class ScriptedChannel:
    """Fails for the recipients it is told to, succeeds for the rest."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.attempts: list[str] = []

    def send(self, message: OutboundMessage) -> DeliveryResult:
        self.attempts.append(message.recipient)
        if message.recipient in self.failing:
            return DeliveryResult.failed(f"Rejected {message.recipient}")
        return DeliveryResult.ok()
