from rest_framework import serializers

from clinic.serializers.fields import CleanCharField


class AppointmentCreateSerializer(serializers.Serializer):
    # Owner and status are never taken from the client.
    doctorId = serializers.IntegerField(source='doctor_id', min_value=1)
    date = serializers.DateField(input_formats=['%Y-%m-%d'])
    time = serializers.TimeField(input_formats=['%H:%M', '%H:%M:%S'])
    reason = CleanCharField(max_length=2000)
