from typing import Optional

from clinic.models import Appointment, Doctor, Message, User
from clinic.services.users import require_admin


def dashboard_stats(caller: Optional[User]) -> dict:
    # Counted at call time, nothing is cached.
    require_admin(caller)
    return {
        'totalAppointments': Appointment.objects.count(),
        'activeDoctors': Doctor.objects.filter(is_active=True).count(),
        'pendingAppointments': Appointment.objects.filter(status=Appointment.STATUS_PENDING).count(),
        'unreadMessages': Message.objects.filter(is_read=False).count(),
    }
