"""Domain-specific exceptions for messaging services."""


class MessagingServiceError(Exception):
    """Base exception for messaging services."""
    pass


class ConversationNotFoundError(MessagingServiceError):
    """Raised when a conversation does not exist."""
    pass


class NotParticipantError(MessagingServiceError):
    """Raised when a user acts on a conversation they are not part of."""
    pass


class InvalidMessageError(MessagingServiceError):
    """Raised when message content is empty or too long."""
    pass


class InvalidParticipantsError(MessagingServiceError):
    """Raised when a conversation would have no other participants."""
    pass
