from __future__ import annotations

from collections.abc import Iterable


class SubscriberRegistry:
    """Chat identities subscribed for this process lifetime."""

    def __init__(self, chat_ids: Iterable[int] = ()) -> None:
        self._chat_ids: set[int] = set(chat_ids)

    def add(self, chat_id: int) -> bool:
        if chat_id in self._chat_ids:
            return False
        self._chat_ids.add(chat_id)
        return True

    def remove(self, chat_id: int) -> bool:
        if chat_id not in self._chat_ids:
            return False
        self._chat_ids.discard(chat_id)
        return True

    def all(self) -> frozenset[int]:
        return frozenset(self._chat_ids)

    def count(self) -> int:
        return len(self._chat_ids)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._chat_ids
