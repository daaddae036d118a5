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
"""Tests for StructlogAdapter."""

import logging

from kvfly.core.config import Config
from kvfly.logging.port import LoggingPort
from kvfly.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level_and_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"kvfly": {"logging": {"level": {"root": "debug"}, "format": "json"}}}))
        assert adapter._root_level == "DEBUG"
        assert adapter._format == "json"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_applies_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"kvfly": {"logging": {"level": {"root": "INFO", "kvfly.storage": "WARNING"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"kvfly.storage": "WARNING"}
        assert logging.getLogger("kvfly.storage").level == logging.WARNING

    def test_stdlib_records_are_rendered_as_json(self, capsys):
        adapter = StructlogAdapter()
        adapter.configure(Config({"kvfly": {"logging": {"format": "json"}}}))
        logging.getLogger("kvfly.storage.adapters.redis").warning("Failed to deserialize stored value for key '%s'", "k")
        out = capsys.readouterr().out
        assert '"event": "Failed to deserialize stored value for key \'k\'"' in out


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("myapp.test")
        assert callable(getattr(logger, "info", None))

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("myapp.services", "ERROR")
        assert logging.getLogger("myapp.services").level == logging.ERROR
