class InviteError(Exception):
    """Base class for invitations that could not create a session."""

    code = "invite_error"


class InvalidOpponentError(InviteError):
    """The opponent is a bot or the initiator themselves."""

    code = "invalid_opponent"


class AlreadyOccupiedError(InviteError):
    """One of the two users already belongs to a live session."""

    code = "already_occupied"
