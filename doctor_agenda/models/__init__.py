from doctor_agenda.models.user import User
from doctor_agenda.models.clinic import Clinic
from doctor_agenda.models.links import UserClinic
from doctor_agenda.models.doctor import Doctor
from doctor_agenda.models.patient import Patient, PatientSex
from doctor_agenda.models.appointment import Appointment

__all__ = ["User", "Clinic", "UserClinic", "Doctor", "Patient", "PatientSex", "Appointment"]
