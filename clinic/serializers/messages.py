from rest_framework import serializers

from clinic.models import Message
from clinic.serializers.fields import CleanCharField


class MessageCreateSerializer(serializers.Serializer):
    subject = CleanCharField(
        max_length=Message.SUBJECT_MAX_LENGTH, required=False, allow_blank=True, allow_null=True,
    )
    content = CleanCharField(max_length=5000)
