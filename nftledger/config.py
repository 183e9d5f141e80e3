import os

# Storage key layout: <ledger>.<variable>:<key1>:<key2>
DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Operator approvals key on an (owner, operator) pair, both must fit in one key
MAX_ACCOUNT_SIZE = (MAX_KEY_SIZE - len(DELIMITER)) // 2

# The zero sentinel. Stands for "no account" in notifications; never an owner or approval target.
ZERO_ACCOUNT = '0' * 64

# TokenIds are unsigned 32-bit integers
TOKEN_ID_MIN = 0
TOKEN_ID_MAX = 2 ** 32 - 1

LEDGER_NAME = 'erc721'

OWNERS_NAME = 'token_owner'
APPROVALS_NAME = 'token_approvals'
BALANCES_NAME = 'owned_tokens_count'
OPERATORS_NAME = 'operator_approvals'

DB_TYPE = os.getenv('NFTLEDGER_DB_TYPE', 'memory')

DB_URL = os.getenv('NFTLEDGER_DB_URL', 'mongodb://localhost:27017')
DB_NAME = os.getenv('NFTLEDGER_DB_NAME', 'nftledger')
DB_COLLECTION = os.getenv('NFTLEDGER_DB_COLLECTION', 'state')

PRIVATE_METHOD_PREFIX = '_'
