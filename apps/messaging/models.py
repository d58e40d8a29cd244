# ==========================================
# apps/messaging/models.py
# ==========================================

from django.db import models
import uuid


class ConversationKind(models.TextChoices):
    DIRECT = 'direct', 'Direct'
    GROUP = 'group', 'Group'


class Conversation(models.Model):
    """Chat thread between two or more users."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    kind = models.CharField(max_length=10, choices=ConversationKind.choices, default=ConversationKind.DIRECT)
    name = models.CharField(max_length=200, blank=True)
    # Sorted participant ids for direct threads; lets us reuse them
    direct_key = models.CharField(max_length=80, unique=True, null=True, blank=True, editable=False)
    created_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, related_name='created_conversations')
    last_sequence = models.PositiveIntegerField(default=0)
    last_message_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'conversations'
        ordering = ['-last_message_at', '-created_at']

    def __str__(self):
        return self.name or f"Conversation {self.id}"

    def has_participant(self, user):
        return self.participants.filter(user=user).exists()


class ConversationParticipant(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='conversation_memberships')
    last_read_sequence = models.PositiveIntegerField(default=0)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'conversation_participants'
        unique_together = [['conversation', 'user']]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user} in {self.conversation_id}"


class Message(models.Model):
    """
    Chat message.

    ``sequence`` increases by one per conversation and is the fetch cursor.
    ``client_message_id`` makes retried optimistic sends idempotent.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, related_name='sent_messages')
    content = models.TextField()
    sequence = models.PositiveIntegerField()
    client_message_id = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'messages'
        ordering = ['conversation', 'sequence']
        constraints = [
            models.UniqueConstraint(fields=['conversation', 'sequence'], name='unique_message_sequence'),
            models.UniqueConstraint(
                fields=['sender', 'client_message_id'],
                condition=models.Q(client_message_id__isnull=False),
                name='unique_client_message_id',
            ),
        ]

    def __str__(self):
        return f"#{self.sequence} in {self.conversation_id}"


class SmsStatus(models.TextChoices):
    SENT = 'sent', 'Sent'
    FAILED = 'failed', 'Failed'


class SmsLog(models.Model):
    """Every outbound SMS attempt, successful or not."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    recipient_phone = models.CharField(max_length=20)
    message = models.TextField()
    message_type = models.CharField(max_length=50, default='general')
    status = models.CharField(max_length=10, choices=SmsStatus.choices)
    provider_response = models.JSONField(default=dict, blank=True)
    failure_reason = models.TextField(blank=True)
    triggered_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='sms_logs')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sms_logs'
        indexes = [
            models.Index(fields=['recipient_phone', 'created_at'], name='sms_logs_phone_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"SMS to {self.recipient_phone} ({self.status})"
