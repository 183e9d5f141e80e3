import abc
import re
import logging

import pymongo

from nftledger import config
from nftledger.db.encoder import encode, decode, make_key
from nftledger.exceptions import DatabaseDriverNotFound

logger = logging.getLogger(__name__)

# DB maps bytes to bytes
# Driver maps string to python object


class Driver(abc.ABC):
    @abc.abstractmethod
    def get(self, item: str):
        """Get the decoded value at the key, None if absent"""

    @abc.abstractmethod
    def set(self, key: str, value):
        """Set the key. A value of None deletes it"""

    @abc.abstractmethod
    def iter(self, prefix: str, length=0):
        """Sorted keys starting with prefix"""

    @abc.abstractmethod
    def flush(self):
        """Remove every entry"""

    def delete(self, key: str):
        self.__delitem__(key)

    def keys(self):
        return self.iter('')

    def exists(self, key: str):
        return self.get(key) is not None

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    @abc.abstractmethod
    def __delitem__(self, key: str):
        """Remove the key if present"""


class InMemDriver(Driver):
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        return decode(self.db.get(key))

    def set(self, key: str, value):
        k = key.encode()
        if value is None:
            self.__delitem__(key)
        else:
            self.db[k] = encode(value).encode()

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

    def flush(self):
        self.db.clear()

    def __delitem__(self, key: str):
        self.db.pop(key.encode(), None)


class MongoDriver(Driver):
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str=config.DB_URL, db=config.DB_NAME, collection=config.DB_COLLECTION):
        self.client = pymongo.MongoClient(conn_str)
        self.db = self.client[db][collection]
        logger.debug('Using mongo collection {}.{}'.format(db, collection))

    def get(self, item: str):
        v = self.db.find_one({'_id': item})
        if v is None:
            return None

        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db.replace_one({'_id': key}, {'_id': key, 'value': encode(value)}, upsert=True)

    def iter(self, prefix: str, length=0):
        cur = self.db.find({'_id': {'$regex': '^{}'.format(re.escape(prefix))}})

        keys = []
        for entry in cur:
            keys.append(entry['_id'])

        keys.sort()

        return keys if length == 0 else keys[:length]

    def flush(self):
        self.db.delete_many({})

    def __delitem__(self, key: str):
        self.db.delete_one({'_id': key})


DRIVERS = {
    'memory': InMemDriver,
    'mongo': MongoDriver
}


def get_driver(name=config.DB_TYPE, **kwargs):
    driver = DRIVERS.get(name)
    if driver is None:
        raise DatabaseDriverNotFound(driver=name, known_drivers=sorted(DRIVERS.keys()))
    return driver(**kwargs)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L2 cache, None marks a staged delete
        self.cache = {}  # L1 cache
        self.driver = driver or InMemDriver()  # L0

    def find(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]

        value = self.cache.get(key)
        if value is not None:
            return value

        return self.driver.get(key)

    def get(self, key: str):
        value = self.find(key)

        if value is not None and key not in self.pending_writes:
            self.cache[key] = value

        return value

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
                self.cache.pop(k, None)
            else:
                self.driver.set(k, v)
                self.cache[k] = v

        self.pending_writes.clear()

    def rollback(self):
        # Returns to driver state, which is whatever it was prior to the write session
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()
        self.cache.clear()


class LedgerDriver(CacheDriver):
    def items(self, prefix=''):
        _items = {}
        deleted = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                if v is None:
                    deleted.add(k)
                else:
                    _items[k] = v

        for k in self.driver.iter(prefix=prefix):
            if k not in _items and k not in deleted:
                _items[k] = self.get(k)

        return dict(sorted(_items.items()))

    def keys(self, prefix=''):
        return list(self.items(prefix).keys())

    def values(self, prefix=''):
        return list(self.items(prefix).values())

    def make_key(self, ledger, variable, args=[]):
        return make_key(ledger, variable, args)

    def get_var(self, ledger, variable, arguments=[]):
        key = self.make_key(ledger, variable, arguments)
        return self.get(key)

    def set_var(self, ledger, variable, arguments=[], value=None):
        key = self.make_key(ledger, variable, arguments)
        self.set(key, value)

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
