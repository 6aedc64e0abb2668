from django.contrib.auth.password_validation import validate_password as run_password_validators
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from clinic.serializers.fields import CleanCharField


class RegisterSerializer(serializers.Serializer):
    # No ``role`` field: registration always creates a plain user.
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(min_length=6, max_length=128, write_only=True, trim_whitespace=False)
    firstName = CleanCharField(source='first_name', max_length=150)
    lastName = CleanCharField(source='last_name', max_length=150)

    def validate_password(self, v):
        """Apply ``AUTH_PASSWORD_VALIDATORS`` on top of the length bounds."""
        try:
            run_password_validators(v)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages)) from exc
        return v


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v
