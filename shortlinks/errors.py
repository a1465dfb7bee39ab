"""Error kinds returned by the link store, service and redirect resolver.

Store, service and resolver operations return these instead of raising them,
so every caller checks the outcome explicitly::

    result = await service.read_one(code)
    if isinstance(result, LinkError):
        ...
"""


class LinkError(Exception):
    """Base class for all link errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __eq__(self, other):
        return type(self) is type(other) and self.message == other.message

    def __hash__(self):
        return hash((type(self), self.message))

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"


class ValidationError(LinkError):
    """Malformed url or code supplied by the caller."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(LinkError):
    """Code is already taken."""

    status_code = 409
    default_message = "Code already exists"


class NotFoundError(LinkError):
    """Unknown code."""

    status_code = 404
    default_message = "Not found"


class InternalError(LinkError):
    """Storage or transport failure. The message never carries store detail."""

    status_code = 500
    default_message = "Internal server error"
