from functools import wraps

from nftledger import config
from nftledger.db.driver import LedgerDriver
from nftledger.db.orm import Hash
from nftledger.events import EventLog, Transfer, Approval, ApprovalForAll
from nftledger.exceptions import (
    LedgerError, CorruptionError, NotOwner, NotApproved, TokenExists, TokenNotFound,
    CannotInsert, CannotRemove, CannotFetchValue, NotAllowed
)
from nftledger.logger import get_logger

log = get_logger('LEDGER')

QUERIES = ('balance_of', 'owner_of', 'get_approved', 'is_approved_for_all', 'exists')
MUTATIONS = ('mint', 'burn', 'approve', 'set_approval_for_all', 'transfer', 'transfer_from')


def validate_account(account):
    if not isinstance(account, str) or account == '':
        raise ValueError('Account must be a non-empty string, got {!r}'.format(account))

    if config.DELIMITER in account or config.INDEX_SEPARATOR in account:
        raise ValueError('Illegal character in account {!r}'.format(account))

    if len(account) > config.MAX_ACCOUNT_SIZE:
        raise ValueError('Account is too long ({}). Max is {}.'.format(len(account), config.MAX_ACCOUNT_SIZE))


def validate_token_id(id):
    # bool is an int subclass, reject it explicitly
    if not isinstance(id, int) or isinstance(id, bool):
        raise ValueError('TokenId must be an integer, got {!r}'.format(id))

    if not config.TOKEN_ID_MIN <= id <= config.TOKEN_ID_MAX:
        raise ValueError('TokenId {} out of range [{}, {}]'.format(id, config.TOKEN_ID_MIN, config.TOKEN_ID_MAX))


def mutation(f):
    """
    Runs a ledger operation as a unit. On failure the staged writes and
    staged events are restored to what they were before the call, so an
    operation either fully succeeds or leaves no trace.
    """
    @wraps(f)
    def wrapper(self, caller, *args, **kwargs):
        validate_account(caller)

        writes = dict(self.driver.pending_writes)
        staged = len(self.events.pending)

        try:
            result = f(self, caller, *args, **kwargs)
        except Exception as e:
            self.driver.pending_writes = writes
            del self.events.pending[staged:]

            if isinstance(e, ValueError):
                log.warning('{} by {} called with bad arguments: {}'.format(f.__name__, caller, e))
            elif isinstance(e, LedgerError) and not isinstance(e, CorruptionError):
                log.warning('{} by {} rejected: {}'.format(f.__name__, caller, e))
            else:
                log.error('{} by {} failed, ledger state is inconsistent: {}'.format(f.__name__, caller, e))
            raise

        log.debug('{} by {} args={} kwargs={}'.format(f.__name__, caller, args, kwargs))
        return result

    return wrapper


class TokenLedger:
    """
    Tracks which account owns which token, and who may move it on the
    owner's behalf.

    Every mutating operation takes the invoking account as its first
    argument. Writes are staged on the LedgerDriver and events on the
    EventLog; committing both is left to whoever delivers the call
    (see nftledger.execution.executor).
    """
    def __init__(self, driver=None, name=config.LEDGER_NAME, events=None):
        self.driver = driver if driver is not None else LedgerDriver()
        self.name = name
        self.events = events if events is not None else EventLog()

        self.token_owner = Hash(name, config.OWNERS_NAME, driver=self.driver)
        self.token_approvals = Hash(name, config.APPROVALS_NAME, driver=self.driver)
        self.owned_tokens_count = Hash(name, config.BALANCES_NAME, driver=self.driver)
        self.operator_approvals = Hash(name, config.OPERATORS_NAME, driver=self.driver)

    # Queries

    def balance_of(self, owner):
        validate_account(owner)
        return self._balance_of_or_zero(owner)

    def owner_of(self, id):
        validate_token_id(id)
        return self.token_owner[id]

    def get_approved(self, id):
        validate_token_id(id)
        return self.token_approvals[id]

    def is_approved_for_all(self, owner, operator):
        validate_account(owner)
        validate_account(operator)
        return self._approved_for_all(owner, operator)

    def exists(self, id):
        validate_token_id(id)
        return id in self.token_owner

    # Mutations

    @mutation
    def mint(self, caller, id):
        validate_token_id(id)

        self._add_token_to(caller, id)
        self.events.emit(Transfer(from_=config.ZERO_ACCOUNT, to=caller, id=id))

    @mutation
    def burn(self, caller, id):
        validate_token_id(id)

        owner = self.token_owner[id]
        if owner is None:
            raise TokenNotFound(id=id)

        if owner != caller:
            raise NotOwner(caller=caller, id=id)

        self._decrease_counter_of(caller)
        del self.token_owner[id]

        # An approval must not outlive its token
        self._clear_approval(id)

        self.events.emit(Transfer(from_=caller, to=config.ZERO_ACCOUNT, id=id))

    @mutation
    def approve(self, caller, to, id):
        validate_account(to)
        validate_token_id(id)

        owner = self.token_owner[id]
        if owner is None:
            raise TokenNotFound(id=id)

        if not (owner == caller or self._approved_for_all(owner, caller)):
            raise NotAllowed(reason='{} is neither owner nor operator of token {}'.format(caller, id))

        if to == config.ZERO_ACCOUNT:
            raise NotAllowed(reason='cannot approve the zero account')

        # No overwrite, an outstanding approval is cleared only by a transfer or burn
        if id in self.token_approvals:
            raise CannotInsert(store=config.APPROVALS_NAME, key=id)

        self.token_approvals[id] = to
        self.events.emit(Approval(from_=caller, to=to, id=id))

    @mutation
    def set_approval_for_all(self, caller, operator, approved):
        validate_account(operator)
        self._approve_for_all(caller, operator, bool(approved))

    @mutation
    def transfer(self, caller, to, id):
        self._transfer_token_from(caller, caller, to, id)

    @mutation
    def transfer_from(self, caller, from_, to, id):
        validate_account(from_)
        self._transfer_token_from(caller, from_, to, id)

    # Internals

    def _transfer_token_from(self, caller, from_, to, id):
        validate_account(to)
        validate_token_id(id)

        if not self.exists(id):
            raise TokenNotFound(id=id)

        if not self._approved_or_owner(caller, id):
            raise NotApproved(caller=caller, id=id)

        if self.token_owner[id] != from_:
            raise NotOwner(caller=from_, id=id)

        if to == config.ZERO_ACCOUNT:
            raise NotAllowed(reason='cannot transfer to the zero account')

        self._clear_approval(id)
        self._remove_token_from(from_, id)
        self._add_token_to(to, id)

        self.events.emit(Transfer(from_=from_, to=to, id=id))

    def _add_token_to(self, to, id):
        if id in self.token_owner:
            raise TokenExists(id=id)

        if to == config.ZERO_ACCOUNT:
            raise NotAllowed(reason='the zero account cannot own tokens')

        self._increase_counter_of(to)
        self.token_owner[id] = to

    def _remove_token_from(self, from_, id):
        # Re-checked here even though callers verified existence
        if id not in self.token_owner:
            raise TokenNotFound(id=id)

        self._decrease_counter_of(from_)
        del self.token_owner[id]

    def _clear_approval(self, id):
        if id not in self.token_approvals:
            return

        del self.token_approvals[id]

        if id in self.token_approvals:
            raise CannotRemove(store=config.APPROVALS_NAME, key=id)

    def _approve_for_all(self, caller, operator, approved):
        if operator == caller:
            raise NotAllowed(reason='an account cannot be its own operator')

        if operator == config.ZERO_ACCOUNT:
            raise NotAllowed(reason='cannot make the zero account an operator')

        # Overwrites an existing entry, inserts otherwise
        self.operator_approvals[caller, operator] = approved

        self.events.emit(ApprovalForAll(owner=caller, operator=operator, approved=approved))

    def _approved_or_owner(self, caller, id):
        if caller == config.ZERO_ACCOUNT:
            return False

        owner = self.token_owner[id]

        return caller == owner or \
            caller == self.token_approvals[id] or \
            self._approved_for_all(owner, caller)

    def _approved_for_all(self, owner, operator):
        return self.operator_approvals[owner, operator] is True

    def _balance_of_or_zero(self, of):
        count = self.owned_tokens_count[of]
        return count if count is not None else 0

    def _increase_counter_of(self, of):
        count = self.owned_tokens_count[of]
        self.owned_tokens_count[of] = 1 if count is None else count + 1

    def _decrease_counter_of(self, of):
        count = self.owned_tokens_count[of]
        if count is None or count <= 0:
            raise CannotFetchValue(store=config.BALANCES_NAME, key=of)
        self.owned_tokens_count[of] = count - 1
