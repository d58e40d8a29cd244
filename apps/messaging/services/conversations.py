"""
Conversation and message services.

Messages are ordered by a per-conversation ``sequence`` assigned while the
conversation row is locked. Clients fetch incrementally with
``after_sequence`` and retry sends with the same ``client_message_id``
without creating duplicates.
"""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import F

from apps.messaging.models import (
    Conversation,
    ConversationKind,
    ConversationParticipant,
    Message,
)

from .exceptions import (
    ConversationNotFoundError,
    InvalidMessageError,
    InvalidParticipantsError,
    NotParticipantError,
)

User = get_user_model()

MAX_MESSAGE_LENGTH = 4000
MAX_FETCH_LIMIT = 200


def _direct_key(first_id, second_id) -> str:
    return ':'.join(sorted([str(first_id), str(second_id)]))


def get_conversation_for_user(*, conversation_id: UUID, user: User) -> Conversation:
    """
    Raises:
        ConversationNotFoundError: If the conversation does not exist
        NotParticipantError: If the user is not in it
    """
    try:
        conversation = Conversation.objects.get(id=conversation_id)
    except Conversation.DoesNotExist:
        raise ConversationNotFoundError(f"Conversation {conversation_id} not found")
    if not conversation.has_participant(user):
        raise NotParticipantError("You are not a participant in this conversation")
    return conversation


@transaction.atomic
def start_conversation(
    *,
    creator: User,
    participant_ids: Iterable[UUID],
    name: str = '',
) -> Conversation:
    """
    Start a conversation, reusing the existing direct thread between two users.

    One other participant makes a direct conversation, more make a group.

    Raises:
        InvalidParticipantsError: If no other active user is given
    """
    other_ids = {str(pid) for pid in participant_ids} - {str(creator.id)}
    others = list(User.objects.filter(id__in=other_ids, is_active=True))
    if not others or len(others) != len(other_ids):
        raise InvalidParticipantsError("Conversation needs at least one other active participant")

    if len(others) == 1 and not name:
        key = _direct_key(creator.id, others[0].id)
        existing = Conversation.objects.filter(direct_key=key).first()
        if existing:
            return existing
        try:
            with transaction.atomic():
                conversation = Conversation.objects.create(
                    kind=ConversationKind.DIRECT,
                    direct_key=key,
                    created_by=creator,
                )
        except IntegrityError:
            # Another request created the same direct thread first
            return Conversation.objects.get(direct_key=key)
    else:
        conversation = Conversation.objects.create(
            kind=ConversationKind.GROUP,
            name=name,
            created_by=creator,
        )

    ConversationParticipant.objects.bulk_create([
        ConversationParticipant(conversation=conversation, user=member)
        for member in [creator, *others]
    ])
    return conversation


def _same_conversation(existing: Message, conversation_id) -> Message:
    if str(existing.conversation_id) != str(conversation_id):
        raise InvalidMessageError("client_message_id already used in another conversation")
    return existing


@transaction.atomic
def send_message(
    *,
    conversation_id: UUID,
    sender: User,
    content: str,
    client_message_id: Optional[str] = None,
) -> Message:
    """
    Append a message to a conversation.

    Sending again with the same ``client_message_id`` returns the message
    stored the first time. Reusing it in another conversation is an
    error.

    Raises:
        InvalidMessageError: If content is blank or too long, or the
            ``client_message_id`` belongs to another conversation
        ConversationNotFoundError / NotParticipantError
    """
    content = (content or '').strip()
    if not content:
        raise InvalidMessageError("Message cannot be empty")
    if len(content) > MAX_MESSAGE_LENGTH:
        raise InvalidMessageError(f"Message cannot exceed {MAX_MESSAGE_LENGTH} characters")

    if client_message_id:
        existing = Message.objects.filter(sender=sender, client_message_id=client_message_id).first()
        if existing:
            return _same_conversation(existing, conversation_id)

    try:
        conversation = Conversation.objects.select_for_update().get(id=conversation_id)
    except Conversation.DoesNotExist:
        raise ConversationNotFoundError(f"Conversation {conversation_id} not found")
    if not conversation.has_participant(sender):
        raise NotParticipantError("You are not a participant in this conversation")

    # Re-check under the lock; a concurrent retry may have landed meanwhile
    if client_message_id:
        existing = Message.objects.filter(sender=sender, client_message_id=client_message_id).first()
        if existing:
            return _same_conversation(existing, conversation_id)

    sequence = conversation.last_sequence + 1
    message = Message.objects.create(
        conversation=conversation,
        sender=sender,
        content=content,
        sequence=sequence,
        client_message_id=client_message_id or None,
    )

    conversation.last_sequence = sequence
    conversation.last_message_at = message.created_at
    conversation.save(update_fields=['last_sequence', 'last_message_at'])

    # The sender has read their own message
    ConversationParticipant.objects.filter(
        conversation=conversation, user=sender, last_read_sequence__lt=sequence
    ).update(last_read_sequence=sequence)

    return message


def fetch_messages(
    *,
    conversation_id: UUID,
    user: User,
    after_sequence: int = 0,
    limit: int = 50,
) -> List[Message]:
    """Messages with ``sequence > after_sequence`` in ascending order."""
    get_conversation_for_user(conversation_id=conversation_id, user=user)
    limit = max(1, min(limit, MAX_FETCH_LIMIT))
    return list(
        Message.objects
        .filter(conversation_id=conversation_id, sequence__gt=after_sequence)
        .select_related('sender')
        .order_by('sequence')[:limit]
    )


@transaction.atomic
def mark_read(
    *,
    conversation_id: UUID,
    user: User,
    up_to_sequence: Optional[int] = None,
) -> int:
    """
    Move the user's read cursor forward. It never moves backwards.

    Returns:
        The participant's read cursor after the update
    """
    conversation = get_conversation_for_user(conversation_id=conversation_id, user=user)
    target = conversation.last_sequence if up_to_sequence is None else min(up_to_sequence, conversation.last_sequence)

    participant = (
        ConversationParticipant.objects
        .select_for_update()
        .get(conversation=conversation, user=user)
    )
    if target > participant.last_read_sequence:
        participant.last_read_sequence = target
        participant.save(update_fields=['last_read_sequence'])
    return participant.last_read_sequence


def unread_counts(*, user: User) -> Dict[str, int]:
    """Unread message count per conversation id, omitting read conversations."""
    rows = (
        ConversationParticipant.objects
        .filter(user=user, conversation__last_sequence__gt=F('last_read_sequence'))
        .values_list('conversation_id', 'conversation__last_sequence', 'last_read_sequence')
    )
    return {str(cid): last - read for cid, last, read in rows}


def list_conversations(*, user: User):
    return (
        Conversation.objects
        .filter(participants__user=user)
        .prefetch_related('participants__user')
        .distinct()
    )
