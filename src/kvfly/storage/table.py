# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Typed tables — logical collections sharing one physical store.

A :class:`Table` ties a key type and a value type to a name. Binding it to a
storage backend gives a :class:`TableStorage` whose operations are typed by
the table, so callers never pass a value type by hand::

    USERS: Table[int, User] = Table("users", User, key_type=int,
                                    key_format=lambda user_id: f"user:{user_id}")

    users = USERS.bind(storage)
    users.insert(7, User(name="Ada"))
    users.get(7)  # -> User(name="Ada")

Tables do not namespace keys. Two tables whose ``key_format`` produce the same
string address the same stored value; prefixing is up to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Generic, TypeVar

from kvfly.storage.ports.outbound import StorageRead, StorageTemp, StorageWrite

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class Table(Generic[K, V]):
    """Type-level tag for one logical collection."""

    name: str
    value_type: type[V] | Any
    key_type: type[K] | Any = str
    key_format: Callable[[K], str] = field(default=str)

    def key_of(self, key: K) -> str:
        return self.key_format(key)

    def bind(self, storage: Any) -> TableStorage[K, V]:
        return TableStorage(self, storage)


class TableStorage(Generic[K, V]):
    """A storage backend viewed through a :class:`Table`."""

    def __init__(self, table: Table[K, V], storage: Any) -> None:
        self._table = table
        self._storage = storage

    @property
    def table(self) -> Table[K, V]:
        return self._table

    def get(self, key: K) -> V | None:
        reader: StorageRead[str] = self._storage
        return reader.get(self._table.key_of(key), self._table.value_type)

    def exists(self, key: K) -> bool:
        reader: StorageRead[str] = self._storage
        return reader.exists(self._table.key_of(key))

    def insert(self, key: K, value: V) -> V | None:
        writer: StorageWrite[str] = self._storage
        return writer.insert(self._table.key_of(key), value, self._table.value_type)

    def remove(self, key: K) -> V | None:
        writer: StorageWrite[str] = self._storage
        return writer.remove(self._table.key_of(key), self._table.value_type)

    def ttl(self, key: K) -> timedelta:
        temporal: StorageTemp[str] = self._storage
        return temporal.ttl(self._table.key_of(key))
