"""Services for messaging business logic."""

from .exceptions import (
    MessagingServiceError,
    ConversationNotFoundError,
    NotParticipantError,
    InvalidMessageError,
    InvalidParticipantsError,
)
from .conversations import (
    start_conversation,
    send_message,
    fetch_messages,
    mark_read,
    unread_counts,
    list_conversations,
    get_conversation_for_user,
)
from .sms_gateway import send_sms, normalize_phone

__all__ = [
    # Exceptions
    'MessagingServiceError',
    'ConversationNotFoundError',
    'NotParticipantError',
    'InvalidMessageError',
    'InvalidParticipantsError',
    # Services
    'start_conversation',
    'send_message',
    'fetch_messages',
    'mark_read',
    'unread_counts',
    'list_conversations',
    'get_conversation_for_user',
    'send_sms',
    'normalize_phone',
]
