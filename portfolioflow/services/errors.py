class PersistenceError(Exception):
    """A database read or write failed."""


class ProjectNotFoundError(LookupError):
    pass


class MessageNotFoundError(LookupError):
    pass


class ResumeUpdateError(PersistenceError):
    pass
