"""
Staff inbox endpoints.

Any signed-in user can send a message.  Listing, marking as read and
deleting are reserved for administrators.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.serializers.messages import MessageCreateSerializer
from clinic.services.messages import (
    create_message,
    delete_message,
    format_message,
    list_messages,
    mark_read,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def messages(request):
    if request.method == 'GET':
        # admin only, enforced by the service
        unread_only = (request.query_params.get('unread') or '0') in ['1', 'true', 'True']
        data = list_messages(request.user, unread_only=unread_only)
        return Response([format_message(m, with_user=True) for m in data])

    s = MessageCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    message = create_message(request.user, **s.validated_data)
    return Response(format_message(message), status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def message_read(request, pk: int):
    message = mark_read(request.user, pk)
    return Response(format_message(message, with_user=True))


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def message_detail(request, pk: int):
    delete_message(request.user, pk)
    return Response(status=status.HTTP_204_NO_CONTENT)
