"""
Staff inbox: users write in, administrators read, mark and discard.
"""
from __future__ import annotations

import logging
from typing import Optional

from clinic.exceptions import NotFoundError
from clinic.models import Message, User
from clinic.services.users import format_user, require_admin

logger = logging.getLogger(__name__)


def create_message(caller: User, *, content: str, subject: Optional[str] = None) -> Message:
    message = Message.objects.create(
        user=caller,
        subject=subject or None,
        content=content,
        is_read=False,
    )
    logger.info('User %s sent message %s', caller.pk, message.pk)
    return message


def list_messages(caller: Optional[User], *, unread_only: bool = False) -> list[Message]:
    require_admin(caller)
    qs = Message.objects.select_related('user')
    if unread_only:
        qs = qs.filter(is_read=False)
    return list(qs.order_by('-created_at', '-id'))


def _get_message(message_id) -> Message:
    message = Message.objects.select_related('user').filter(pk=message_id).first()
    if message is None:
        raise NotFoundError('Message not found')
    return message


def mark_read(caller: Optional[User], message_id) -> Message:
    require_admin(caller)
    message = _get_message(message_id)
    if not message.is_read:
        message.is_read = True
        message.save(update_fields=['is_read'])
    return message


def delete_message(caller: Optional[User], message_id) -> None:
    require_admin(caller)
    deleted, _ = Message.objects.filter(pk=message_id).delete()
    if not deleted:
        raise NotFoundError('Message not found')
    logger.info('Admin %s deleted message %s', caller.pk, message_id)


def format_message(message: Message, *, with_user: bool = False) -> dict:
    data = {
        'id': message.id,
        'userId': message.user_id,
        'subject': message.subject,
        'content': message.content,
        'isRead': message.is_read,
        'createdAt': message.created_at.isoformat() if message.created_at else None,
    }
    if with_user:
        data['user'] = format_user(message.user)
    return data
