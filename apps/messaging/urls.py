from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'messaging'

router = DefaultRouter()
router.register(r'conversations', views.ConversationViewSet, basename='conversation')
router.register(r'sms-logs', views.SmsLogViewSet, basename='sms-log')

urlpatterns = [
    # GET    /api/messaging/conversations/                 - List conversations
    # POST   /api/messaging/conversations/                 - Start conversation
    # GET    /api/messaging/conversations/{id}/            - Conversation detail
    # GET    /api/messaging/conversations/{id}/messages/   - Fetch (?after_sequence=&limit=)
    # POST   /api/messaging/conversations/{id}/messages/   - Send message
    # POST   /api/messaging/conversations/{id}/read/       - Mark read
    # GET    /api/messaging/sms-logs/                      - SMS history (admin)
    path('unread/', views.unread, name='unread'),
    path('', include(router.urls)),
]
