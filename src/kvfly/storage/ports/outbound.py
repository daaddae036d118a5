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
"""Storage capability protocols and the command execution port."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol, TypeVar, runtime_checkable

from kvfly.storage.commands import Command

K_contra = TypeVar("K_contra", contravariant=True)
T = TypeVar("T")


@runtime_checkable
class Storage(Protocol):
    """Marker for any storage backend.

    Concrete backends raise only ``kvfly.kernel.StorageException`` subclasses.
    """


@runtime_checkable
class StorageRead(Storage, Protocol[K_contra]):
    """Read capability.

    ``get`` returns ``None`` when the key is absent. A stored value that cannot
    be decoded as *value_type* raises ``DeserializeException``; it is never
    reported as absent.
    """

    def get(self, key: K_contra, value_type: type[T] | Any = Any) -> T | None: ...

    def exists(self, key: K_contra) -> bool: ...


@runtime_checkable
class StorageWrite(Storage, Protocol[K_contra]):
    """Write capability.

    Both operations return the value stored before the call (``None`` if
    there was none). The previous value is read in a separate round trip, so
    concurrent writers on the same key may each observe the same prior value.
    ``None`` is not a storable value: it would read back as an absent key, so
    ``insert`` rejects it with ``SerializeException``.
    """

    def insert(self, key: K_contra, value: T, value_type: type[T] | Any | None = None) -> T | None: ...

    def remove(self, key: K_contra, value_type: type[T] | Any = Any) -> T | None: ...


@runtime_checkable
class StorageTemp(Storage, Protocol[K_contra]):
    """Temporal capability: remaining time-to-live of a key.

    Whatever the store reports for a missing or non-expiring key is passed
    through unchanged as whole seconds.
    """

    def ttl(self, key: K_contra) -> timedelta: ...


@runtime_checkable
class CommandExecutor(Protocol):
    """Port that runs a :class:`Command` and decodes its reply as *result_type*."""

    def execute_command(self, command: Command, result_type: type[T] | Any) -> T: ...
