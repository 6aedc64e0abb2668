from rest_framework import serializers

from clinic.serializers.fields import CleanCharField


class DoctorSerializer(serializers.Serializer):
    firstName = CleanCharField(source='first_name', max_length=100)
    lastName = CleanCharField(source='last_name', max_length=100)
    email = serializers.EmailField(max_length=254)
    specialty = CleanCharField(max_length=100)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32)
    experience = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=80)
    isActive = serializers.BooleanField(source='is_active', default=True)

    def validate_phone(self, v):
        return (v or '').strip()


class DoctorListQuerySerializer(serializers.Serializer):
    includeInactive = serializers.BooleanField(required=False)
    q = serializers.CharField(max_length=64, required=False, allow_blank=True)
    specialty = serializers.CharField(max_length=100, required=False, allow_blank=True)
