from rest_framework import serializers

from .models import Conversation, ConversationParticipant, Message, SmsLog


class ParticipantSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(source='user.id', read_only=True)
    display_name = serializers.CharField(source='user.get_display_name', read_only=True)

    class Meta:
        model = ConversationParticipant
        fields = ['user_id', 'display_name', 'last_read_sequence', 'joined_at']


class ConversationSerializer(serializers.ModelSerializer):
    participants = ParticipantSerializer(many=True, read_only=True)

    class Meta:
        model = Conversation
        fields = ['id', 'kind', 'name', 'participants', 'last_sequence', 'last_message_at', 'created_at']


class ConversationCreateSerializer(serializers.Serializer):
    participant_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class MessageSerializer(serializers.ModelSerializer):
    sender_id = serializers.UUIDField(source='sender.id', read_only=True, allow_null=True)
    sender_name = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = ['id', 'conversation', 'sender_id', 'sender_name', 'content', 'sequence', 'client_message_id', 'created_at']

    def get_sender_name(self, obj):
        return obj.sender.get_display_name() if obj.sender else None


class SendMessageSerializer(serializers.Serializer):
    content = serializers.CharField(trim_whitespace=False)
    client_message_id = serializers.CharField(max_length=64, required=False, allow_blank=True)


class MessageQuerySerializer(serializers.Serializer):
    after_sequence = serializers.IntegerField(min_value=0, required=False, default=0)
    limit = serializers.IntegerField(min_value=1, max_value=200, required=False, default=50)


class MarkReadSerializer(serializers.Serializer):
    up_to_sequence = serializers.IntegerField(min_value=0, required=False)


class SmsLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = SmsLog
        fields = ['id', 'recipient_phone', 'message', 'message_type', 'status', 'failure_reason', 'created_at']
