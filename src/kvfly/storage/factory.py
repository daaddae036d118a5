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
"""Construct the configured storage backend."""

from __future__ import annotations

import logging
from datetime import timedelta

from kvfly.config.properties.storage import StorageProperties
from kvfly.core.config import Config
from kvfly.storage.adapters.memory import InMemoryStorage
from kvfly.storage.adapters.redis import RedisStorage
from kvfly.storage.codec import Codec

_logger = logging.getLogger(__name__)


def create_storage(config: Config, codec: Codec | None = None) -> RedisStorage | InMemoryStorage:
    """Build the backend named by ``kvfly.storage.provider`` (``redis`` or ``memory``)."""
    props = config.bind(StorageProperties)
    ttl = timedelta(seconds=props.ttl)
    provider = props.provider.lower()

    if provider == "redis":
        _logger.info("Using Redis storage (ttl=%ss)", props.ttl)
        return RedisStorage.from_url(props.url, ttl, codec)
    if provider == "memory":
        _logger.info("Using in-memory storage (ttl=%ss)", props.ttl)
        return InMemoryStorage(ttl, codec)
    raise ValueError(f"Unknown storage provider '{props.provider}'")
