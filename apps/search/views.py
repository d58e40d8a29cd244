from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import get_access

from .serializers import SearchRequestSerializer, SearchResponseSerializer
from .services import AIGatewayError, global_search


@extend_schema(
    request=SearchRequestSerializer,
    responses={200: SearchResponseSerializer},
    description="Search across every module the caller may open.",
    tags=['search'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def search(request):
    serializer = SearchRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        payload = global_search(
            raw_query=serializer.validated_data['query'],
            access=get_access(request),
        )
    except AIGatewayError as e:
        return Response(
            {'error': str(e), 'results': [], 'suggestions': []},
            status=status.HTTP_502_BAD_GATEWAY,
        )

    return Response(payload)
