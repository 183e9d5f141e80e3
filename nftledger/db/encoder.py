import json
from nftledger.config import INDEX_SEPARATOR, DELIMITER

##
# Values in the ledger are accounts (str), counters (int) and flags (bool).
# All of them round trip through plain JSON, so the codec stays small.
##


def encode(data):
    return json.dumps(data, separators=(',', ':'))


def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data)
    except json.decoder.JSONDecodeError:
        return None


def make_key(ledger, variable, args=[]):
    ledger_variable = INDEX_SEPARATOR.join((ledger, variable))
    if args:
        return DELIMITER.join((ledger_variable, *[str(arg) for arg in args]))
    return ledger_variable

