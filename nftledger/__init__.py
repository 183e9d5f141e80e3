from nftledger.ledger import TokenLedger
from nftledger.client import LedgerClient
from nftledger.execution.executor import Executor

__version__ = '0.1.0'
