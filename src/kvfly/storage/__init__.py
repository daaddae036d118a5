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
"""kvfly Storage — typed key-value storage with per-key expiry."""

from kvfly.storage.adapters.memory import InMemoryStorage
from kvfly.storage.adapters.redis import RedisStorage
from kvfly.storage.codec import Codec, JsonCodec
from kvfly.storage.commands import Command, CommandKind
from kvfly.storage.factory import create_storage
from kvfly.storage.ports.outbound import (
    CommandExecutor,
    Storage,
    StorageRead,
    StorageTemp,
    StorageWrite,
)
from kvfly.storage.table import Table, TableStorage

__all__ = [
    "Codec",
    "Command",
    "CommandExecutor",
    "CommandKind",
    "InMemoryStorage",
    "JsonCodec",
    "RedisStorage",
    "Storage",
    "StorageRead",
    "StorageTemp",
    "StorageWrite",
    "Table",
    "TableStorage",
    "create_storage",
]
