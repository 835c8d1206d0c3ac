"""Pure helpers over a doctor's weekly availability window.

Week days follow the stored convention: 0 = Sunday ... 6 = Saturday.
A window whose start day is after its end day wraps over the weekend
(``from=5, to=1`` is Friday through Monday).
"""
from datetime import date, datetime, time, timedelta

from doctor_agenda.models.doctor import Doctor


def week_day(day: date) -> int:
    return day.isoweekday() % 7


def works_on(doctor: Doctor, day: int) -> bool:
    start, end = doctor.available_from_week_day, doctor.available_to_week_day
    if start <= end:
        return start <= day <= end
    return day >= start or day <= end


def within_hours(doctor: Doctor, at: time) -> bool:
    # both ends inclusive: the closing time is still a bookable start
    return doctor.available_from_time <= at <= doctor.available_to_time


def is_available(doctor: Doctor, when: datetime) -> bool:
    return works_on(doctor, week_day(when.date())) and within_hours(doctor, when.time())


def generate_time_slots(start: time, end: time, step_minutes: int = 30) -> list[time]:
    """Every ``step_minutes`` from ``start`` up to and including ``end``."""
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    anchor = date.min
    cursor = datetime.combine(anchor, start)
    stop = datetime.combine(anchor, end)
    step = timedelta(minutes=step_minutes)
    slots: list[time] = []
    while cursor <= stop:
        slots.append(cursor.time())
        cursor += step
    return slots
