from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdministrator

from .models import SmsLog
from .serializers import (
    ConversationCreateSerializer,
    ConversationSerializer,
    MarkReadSerializer,
    MessageQuerySerializer,
    MessageSerializer,
    SendMessageSerializer,
    SmsLogSerializer,
)
from .services import (
    ConversationNotFoundError,
    InvalidMessageError,
    InvalidParticipantsError,
    NotParticipantError,
    fetch_messages,
    get_conversation_for_user,
    list_conversations,
    mark_read,
    send_message,
    start_conversation,
    unread_counts,
)


def _lookup_error_response(e):
    if isinstance(e, ConversationNotFoundError):
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


class ConversationViewSet(viewsets.ViewSet):
    """
    Conversations the current user takes part in.

    list: Conversations, most recent first
    create: Start a conversation (direct threads are reused)
    retrieve: Conversation details
    messages: GET fetch after a sequence cursor, POST send
    read: Advance the read cursor
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = '[0-9a-f-]{36}'

    def list(self, request):
        conversations = list_conversations(user=request.user)
        return Response(ConversationSerializer(conversations, many=True).data)

    @extend_schema(request=ConversationCreateSerializer, responses={201: ConversationSerializer})
    def create(self, request):
        serializer = ConversationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            conversation = start_conversation(
                creator=request.user,
                participant_ids=serializer.validated_data['participant_ids'],
                name=serializer.validated_data['name'],
            )
        except InvalidParticipantsError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ConversationSerializer(conversation).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        try:
            conversation = get_conversation_for_user(conversation_id=pk, user=request.user)
        except (ConversationNotFoundError, NotParticipantError) as e:
            return _lookup_error_response(e)
        return Response(ConversationSerializer(conversation).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('after_sequence', OpenApiTypes.INT, description='Return messages after this sequence'),
            OpenApiParameter('limit', OpenApiTypes.INT, description='Maximum messages (1-200)'),
        ],
        request=SendMessageSerializer,
        responses={200: MessageSerializer(many=True), 201: MessageSerializer},
    )
    @action(detail=True, methods=['get', 'post'])
    def messages(self, request, pk=None):
        if request.method == 'GET':
            query = MessageQuerySerializer(data=request.query_params)
            query.is_valid(raise_exception=True)
            try:
                messages = fetch_messages(conversation_id=pk, user=request.user, **query.validated_data)
            except (ConversationNotFoundError, NotParticipantError) as e:
                return _lookup_error_response(e)
            return Response(MessageSerializer(messages, many=True).data)

        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            message = send_message(
                conversation_id=pk,
                sender=request.user,
                content=serializer.validated_data['content'],
                client_message_id=serializer.validated_data.get('client_message_id') or None,
            )
        except InvalidMessageError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (ConversationNotFoundError, NotParticipantError) as e:
            return _lookup_error_response(e)

        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=MarkReadSerializer)
    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            cursor = mark_read(
                conversation_id=pk,
                user=request.user,
                up_to_sequence=serializer.validated_data.get('up_to_sequence'),
            )
        except (ConversationNotFoundError, NotParticipantError) as e:
            return _lookup_error_response(e)
        return Response({'last_read_sequence': cursor})


@extend_schema(description="Unread message counts keyed by conversation id.", tags=['messaging'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread(request):
    counts = unread_counts(user=request.user)
    return Response({'total': sum(counts.values()), 'conversations': counts})


class SmsLogViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Outbound SMS history for administrators."""

    queryset = SmsLog.objects.all()
    serializer_class = SmsLogSerializer
    permission_classes = [IsAuthenticated, IsAdministrator]
