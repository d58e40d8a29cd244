from django.contrib import admin

from .models import Conversation, ConversationParticipant, Message, SmsLog


class ParticipantInline(admin.TabularInline):
    model = ConversationParticipant
    extra = 0
    raw_id_fields = ['user']


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ['id', 'kind', 'name', 'last_sequence', 'last_message_at', 'created_at']
    list_filter = ['kind']
    inlines = [ParticipantInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['conversation', 'sequence', 'sender', 'created_at']
    search_fields = ['content']
    raw_id_fields = ['conversation', 'sender']


@admin.register(SmsLog)
class SmsLogAdmin(admin.ModelAdmin):
    list_display = ['recipient_phone', 'message_type', 'status', 'created_at']
    list_filter = ['status', 'message_type']
    search_fields = ['recipient_phone', 'message']
    readonly_fields = ['provider_response']
