"""
Management command to populate the doctor directory with demo data.
"""
from django.core.management.base import BaseCommand

from clinic.models import Doctor

DEMO_DOCTORS = [
    ("Alice", "Smith", "cardiology", 12),
    ("Brian", "Okafor", "dermatology", 7),
    ("Chen", "Wei", "endocrinology", 15),
    ("Dana", "Morales", "gastroenterology", 9),
    ("Elif", "Kaya", "neurology", 11),
    ("Farah", "Haddad", "oncology", 20),
    ("George", "Lindqvist", "orthopedics", 6),
    ("Hana", "Sato", "pediatrics", 8),
    ("Ivan", "Petrov", "psychiatry", 14),
    ("Julia", "Rossi", "radiology", 5),
]


class Command(BaseCommand):
    help = 'Populate the doctor directory with demo doctors (idempotent)'

    def handle(self, *args, **options):
        created = 0
        for first_name, last_name, specialty, years in DEMO_DOCTORS:
            email = f"{first_name}.{last_name}@medicare.example".lower()
            _, was_created = Doctor.objects.get_or_create(
                email=email,
                defaults={
                    'first_name': first_name,
                    'last_name': last_name,
                    'specialty': specialty,
                    'experience_years': years,
                },
            )
            created += int(was_created)
        self.stdout.write(self.style.SUCCESS(f'{created} doctors created, {len(DEMO_DOCTORS) - created} already present'))
