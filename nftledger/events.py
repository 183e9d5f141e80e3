from collections import namedtuple
import logging

logger = logging.getLogger(__name__)

TRANSFER = 'Transfer'
APPROVAL = 'Approval'
APPROVAL_FOR_ALL = 'ApprovalForAll'


class _Event:
    __slots__ = ()
    name = None

    def to_dict(self):
        # from is a keyword, so the field carries a trailing underscore
        data = {k.rstrip('_'): v for k, v in self._asdict().items()}
        return {'event': self.name, 'data': data}


class Transfer(_Event, namedtuple('Transfer', ['from_', 'to', 'id'])):
    """
    Emitted by mint, burn and transfer. The zero account as from_
    means the token was created, as to that it was destroyed.
    """
    __slots__ = ()
    name = TRANSFER


class Approval(_Event, namedtuple('Approval', ['from_', 'to', 'id'])):
    __slots__ = ()
    name = APPROVAL


class ApprovalForAll(_Event, namedtuple('ApprovalForAll', ['owner', 'operator', 'approved'])):
    __slots__ = ()
    name = APPROVAL_FOR_ALL


class EventLog:
    """
    Order preserving notification sink. Events emitted during an operation
    are staged, and only reach history and subscribers on commit.
    """
    def __init__(self):
        self.pending = []
        self.history = []
        self._subscribers = []

    def emit(self, event):
        self.pending.append(event)

    def subscribe(self, callback):
        self._subscribers.append(callback)

    def unsubscribe(self, callback):
        self._subscribers.remove(callback)

    def commit(self):
        delivered, self.pending = self.pending, []

        for event in delivered:
            self.history.append(event)

            # Fire and forget, a failing subscriber does not undo the operation
            for callback in list(self._subscribers):
                try:
                    callback(event)
                except Exception as e:
                    logger.error('Subscriber {} failed on {}: {}'.format(callback, event, e))

        return delivered

    def discard(self):
        self.pending = []

    def of_type(self, name):
        return [e for e in self.history if e.name == name]

    def clear(self):
        self.pending = []
        self.history = []
