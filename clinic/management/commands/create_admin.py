# clinic/management/commands/create_admin.py
from django.core.management.base import BaseCommand, CommandError

from clinic.models import User
from clinic.services.credentials import hash_password


class Command(BaseCommand):
    help = "Create an admin account, or promote an existing account to admin (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", help="Required when the account does not exist yet; resets it otherwise.")
        parser.add_argument("--first-name", default="Admin")
        parser.add_argument("--last-name", default="User")

    def handle(self, *args, **opts):
        email = User.objects.normalize_email(opts["email"])
        password = opts.get("password")
        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            if not password:
                raise CommandError("--password is required for a new account")
            User.objects.create_user(
                email=email,
                password=password,
                first_name=opts["first_name"],
                last_name=opts["last_name"],
                role=User.ROLE_ADMIN,
                is_staff=True,
            )
            self.stdout.write(self.style.SUCCESS(f"created admin: {email}"))
            return

        # existing account: force role and active flag
        user.role = User.ROLE_ADMIN
        user.is_staff = True
        user.is_active = True
        fields = ["role", "is_staff", "is_active"]
        if password:
            user.password = hash_password(password)
            fields.append("password")
        user.save(update_fields=fields)
        self.stdout.write(self.style.SUCCESS(f"promoted to admin: {email}"))
