from copy import deepcopy
import traceback

from nftledger import config
from nftledger.db.driver import LedgerDriver
from nftledger.events import EventLog
from nftledger.ledger import TokenLedger, QUERIES, MUTATIONS
from nftledger.logger import get_logger

log = get_logger('EXECUTOR')


class Executor:
    """
    Delivers calls to a TokenLedger one at a time and reports the outcome
    as a result dict instead of raising.
    """
    def __init__(self, driver=None, ledger=None, events=None, name=config.LEDGER_NAME):
        if ledger is not None:
            self.ledger = ledger
            self.driver = ledger.driver
            self.events = ledger.events
        else:
            self.driver = driver if driver is not None else LedgerDriver()
            self.events = events if events is not None else EventLog()
            self.ledger = TokenLedger(driver=self.driver, name=name, events=self.events)

    def execute(self, sender, function_name, kwargs={}, auto_commit=True) -> dict:
        status_code = 0
        delivered = []

        try:
            if function_name.startswith(config.PRIVATE_METHOD_PREFIX):
                raise AttributeError('Private method {} not callable.'.format(function_name))

            if function_name not in QUERIES + MUTATIONS:
                raise AttributeError('Ledger has no function {}.'.format(function_name))

            func = getattr(self.ledger, function_name)

            if function_name in MUTATIONS:
                result = func(sender, **kwargs)
            else:
                result = func(**kwargs)

            writes = deepcopy(self.driver.pending_writes)

            if auto_commit:
                self.driver.commit()
                delivered = self.events.commit()
            else:
                delivered = list(self.events.pending)
        except Exception as e:
            result = e
            writes = deepcopy(self.driver.pending_writes)
            log.error('{} {} by {} failed: {}'.format(function_name, kwargs, sender, e))
            log.debug(traceback.format_exc())
            status_code = 1

            if auto_commit:
                self.driver.rollback()
                self.events.discard()

        output = {
            'status_code': status_code,
            'result': result,
            'events': [e.to_dict() for e in delivered],
            'writes': writes,
        }

        return output

    def commit(self):
        self.driver.commit()
        return self.events.commit()

    def rollback(self):
        self.driver.rollback()
        self.events.discard()
