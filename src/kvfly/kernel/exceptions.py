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
"""Unified exception hierarchy for kvfly.

Every library error inherits from KvflyException. Storage failures form a
closed set of four kinds under StorageException:

- StorageConnectionException: no client handle or live connection
- QueryException: the store rejected or failed a command
- SerializeException: a value could not be encoded before a write
- DeserializeException: a stored string could not be decoded on read
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class KvflyException(Exception):
    """Base exception for all kvfly errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "STORAGE_QUERY").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageException(KvflyException):
    """Any failure raised by a storage adapter."""


class StorageConnectionException(StorageException):
    """A client handle or connection to the store could not be obtained."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Redis connection error: {detail}", code="STORAGE_CONNECTION")
        self.detail = detail


class QueryException(StorageException):
    """The store rejected or failed to execute a command."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Redis query error: {detail}", code="STORAGE_QUERY")
        self.detail = detail


class SerializeException(StorageException):
    """A value could not be encoded; the write never reached the store."""

    def __init__(self, key: str, detail: str) -> None:
        super().__init__(
            f'Unable to serialize value for key "{key}": {detail}',
            code="STORAGE_SERIALIZE",
            context={"key": key},
        )
        self.key = key
        self.detail = detail


class DeserializeException(StorageException):
    """A stored string could not be decoded into the requested type."""

    def __init__(self, key: str, detail: str) -> None:
        super().__init__(
            f'Unable to deserialize value for key "{key}": {detail}',
            code="STORAGE_DESERIALIZE",
            context={"key": key},
        )
        self.key = key
        self.detail = detail
