# dyslexia_helper/services/preferences.py
"""
Хранилище пользовательских настроек отображения.
Интерфейс PreferencesStore {get, save}; реализация по умолчанию: в памяти
процесса, без персистентности.
"""

import itertools
import threading
from collections import defaultdict
from typing import Any, Dict, Optional, Protocol, Union

UserId = Union[str, int]
PreferencesRecord = Dict[str, Any]

DEFAULT_PREFERENCES: PreferencesRecord = {
    "theme": "light",
    "fontFamily": "roboto",
    "fontSize": 16,
    "letterSpacing": 1,
    "lineHeight": 15,
    "customSettings": None,
}

# поля записи, которые merge не трогает
IDENTITY_FIELDS = ("id", "userId")


class PreferencesStore(Protocol):
    def get(self, user_id: UserId) -> Optional[PreferencesRecord]:
        ...

    def save(self, user_id: UserId, preferences: Dict[str, Any]) -> PreferencesRecord:
        ...


def _key(user_id: UserId) -> str:
    # POST {"userId": 7} и GET /preferences/7 адресуют одну запись
    return str(user_id)


class InMemoryPreferencesStore:
    """
    Одна запись на userId, id растёт монотонно и не переиспользуется.
    read-merge-write в save идёт под замком конкретного ключа.
    Наружу отдаём копии: запись меняется только через save.
    """

    def __init__(self):
        self._records: Dict[str, PreferencesRecord] = {}
        self._ids = itertools.count(1)
        self._guard = threading.Lock()
        self._key_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            return self._key_locks[key]

    def get(self, user_id: UserId) -> Optional[PreferencesRecord]:
        record = self._records.get(_key(user_id))
        return dict(record) if record is not None else None

    def save(self, user_id: UserId, preferences: Dict[str, Any]) -> PreferencesRecord:
        key = _key(user_id)
        updates = {k: v for k, v in preferences.items() if k not in IDENTITY_FIELDS}

        with self._lock_for(key):
            existing = self._records.get(key)
            if existing is None:
                with self._guard:
                    new_id = next(self._ids)
                record = {"id": new_id, "userId": user_id, **DEFAULT_PREFERENCES, **updates}
            else:
                record = {**existing, **updates}
            self._records[key] = record
            return dict(record)

    def __len__(self) -> int:
        return len(self._records)
