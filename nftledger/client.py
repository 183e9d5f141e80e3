from functools import partial

from nftledger import config
from nftledger.db.driver import LedgerDriver
from nftledger.execution.executor import Executor
from nftledger.ledger import QUERIES, MUTATIONS


class LedgerClient:
    """
    Binds a default signer to a ledger. Every ledger function is available
    as a method taking keyword arguments, plus an optional signer override:

        client = LedgerClient(signer='stu')
        client.mint(id=1)
        client.transfer(to='colin', id=1)
        client.approve(to='raghu', id=2, signer='colin')

    Failed calls raise the ledger error.
    """
    def __init__(self, signer='sys', driver=None, name=config.LEDGER_NAME):
        self.raw_driver = driver if driver is not None else LedgerDriver()
        self.executor = Executor(driver=self.raw_driver, name=name)
        self.signer = signer
        self.name = name

        # each function is a partial that allows kwarg overloading and overriding
        for func in QUERIES + MUTATIONS:
            setattr(self, func, partial(self._abstract_function_call, func))

    @property
    def ledger(self):
        return self.executor.ledger

    @property
    def events(self):
        return self.executor.events

    def _abstract_function_call(self, func, signer=None, **kwargs):
        output = self.executor.execute(sender=signer or self.signer,
                                       function_name=func,
                                       kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']

    def flush(self):
        self.raw_driver.flush()
        self.events.clear()

    def get_var(self, variable, arguments=[]):
        return self.raw_driver.get_var(self.name, variable, arguments)

    def set_var(self, variable, arguments=[], value=None):
        self.raw_driver.set_var(self.name, variable, arguments, value)
        self.raw_driver.commit()
