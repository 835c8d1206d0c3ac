# doctor_agenda/core/exceptions.py


class AgendaError(Exception):
    """Base error of the data-access layer. ``code`` is a short machine-readable tag."""
    code = "agenda_error"

    def __init__(self, msg: str, code: str | None = None):
        self.msg = msg
        if code:
            self.code = code
        super().__init__(msg)


class NotFoundError(AgendaError):
    """A referenced row does not exist (or belongs to another clinic)."""
    code = "not_found"


class ConflictError(AgendaError):
    """The database rejected the write: foreign key, not null, enum or restrict violation."""
    code = "conflict"


class UnavailableError(AgendaError):
    """The doctor does not work at the requested time or the slot is already booked."""
    code = "unavailable"
