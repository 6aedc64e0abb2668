import html

import bleach
from rest_framework import serializers


class CleanCharField(serializers.CharField):
    """CharField that strips all markup; a value left empty counts as blank.

    Text is stored as plain text: entities bleach produces are decoded
    again, so ``&``, ``<`` and ``>`` round-trip unchanged and length
    limits apply to what the user typed.
    """

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        value = html.unescape(bleach.clean(value, tags=set(), strip=True)).strip()
        if not value and not self.allow_blank:
            self.fail('blank')
        return value
