class LedgerError(Exception):
    """
    The base exception for the ledger. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    :ivar code: Stable name of the error, matches the class name
    """
    fmt = 'An unspecified ledger error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs

    @property
    def code(self):
        return self.__class__.__name__


class PolicyViolation(LedgerError):
    """
    An expected, recoverable outcome of normal usage. The caller
    may retry with corrected arguments.
    """


class CorruptionError(LedgerError):
    """
    Internal consistency of the stores is broken. Unreachable
    under correct sequential use.
    """


class NotOwner(PolicyViolation):
    """
    :ivar caller: The account that attempted the operation
    :ivar id: The token id
    """
    fmt = "Account '{caller}' is not the owner of token {id}"


class NotApproved(PolicyViolation):
    fmt = "Account '{caller}' is not approved to transfer token {id}"


class TokenExists(PolicyViolation):
    fmt = 'Token {id} already exists'


class TokenNotFound(PolicyViolation):
    fmt = 'Token {id} does not exist'


class NotAllowed(PolicyViolation):
    fmt = 'Operation not allowed: {reason}'


class CannotInsert(CorruptionError):
    fmt = "Cannot insert into '{store}' at key '{key}', an entry already exists"


class CannotRemove(CorruptionError):
    fmt = "Cannot remove from '{store}' at key '{key}'"


class CannotFetchValue(CorruptionError):
    fmt = "Cannot fetch value from '{store}' at key '{key}'"


class DatabaseDriverNotFound(LedgerError):
    """
    Could not find the specified database driver when
    looking for it

    :ivar driver: The name of the database driver the
                  the user attempted to load
    :ivar known_drivers: The list of known drivers
    """
    fmt = "Unknown database driver '{driver}', known drivers '{known_drivers}'"
