class MonitorError(RuntimeError):
    """Base class for everything the status monitor raises on purpose."""

    kind = "monitor"


class ConfigError(MonitorError):
    """Raised at startup when the configuration cannot be loaded or validated."""

    kind = "config"


class TransportError(MonitorError):
    """Raised when the A2S query fails on the network or protocol level."""

    kind = "transport"


class KeywordsMissing(MonitorError):
    """Raised when a query succeeded but the response carried no keyword string."""

    kind = "keywords_missing"

    def __init__(self, message: str = "Failed to extract server keywords from A2S response (keywords missing)."):
        super().__init__(message)


class MessageSendFailure(MonitorError):
    """Raised when the status message could not be created."""

    kind = "message_send"


class MessageEditFailure(MonitorError):
    """Raised when the status message could not be edited."""

    kind = "message_edit"
