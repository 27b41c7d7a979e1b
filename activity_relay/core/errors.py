class RelayError(Exception):
    """Base class for failures raised while relaying an activity event."""


class ConfigurationError(RelayError):
    """Required settings are absent."""


class TopicCreationError(RelayError):
    """The forum topic for an IP could not be created."""


class DeliveryError(RelayError):
    """Telegram refused or failed to accept the activity message."""
