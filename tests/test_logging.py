"""Tests for logging configuration and utilities."""

import json
import logging
import os
import time

from scorekeeper.logging import (
    ComponentFormatter,
    JSONLHandler,
    SecretRedactor,
    prune_old_logs,
)


def _record(name: str, msg: str, **extra) -> logging.LogRecord:
    return logging.getLogger(name).makeRecord(
        name, logging.INFO, __file__, 1, msg, (), None, extra=extra or None
    )


class TestSecretRedactor:
    """Tests for SecretRedactor class."""

    def test_redacts_telegram_bot_token(self):
        redactor = SecretRedactor()
        text = "Bot token: 123456789:ABCdefGHIjklMNOpqrSTUvwxYZ1234567890"
        result = redactor.redact(text)
        assert "1234" in result
        assert "7890" in result
        assert "ABCdefGHIjklMNOpqrSTUvwxYZ" not in result

    def test_redacts_hex_seed(self):
        redactor = SecretRedactor()
        seed = "0x" + "ab" * 32
        result = redactor.redact(f"loaded signer from {seed}")
        assert seed not in result
        assert "0xab...abab" in result

    def test_redacts_seed_assignment(self):
        redactor = SecretRedactor()
        result = redactor.redact("SIGNER_SEED=supersecretseedvalue")
        assert "SIGNER_SEED=" in result
        assert "supersecretseedvalue" not in result
        assert "supe" in result

    def test_redacts_sentry_dsn_key(self):
        redactor = SecretRedactor()
        key = "0123456789abcdef0123456789abcdef"
        result = redactor.redact(f"dsn https://{key}@o1.ingest.sentry.io/2")
        assert key not in result
        assert "sentry.io" in result

    def test_block_hashes_are_kept(self):
        redactor = SecretRedactor()
        text = "executed in finalized block #0xfinal announced at block #8700"
        assert redactor.redact(text) == text

    def test_preserves_non_secrets(self):
        redactor = SecretRedactor()
        text = "This is a normal log message with no secrets"
        assert redactor.redact(text) == text

    def test_disabled_redactor_passes_through(self):
        redactor = SecretRedactor(enabled=False)
        text = "SIGNER_SEED=supersecretseedvalue"
        assert redactor.redact(text) == text


class TestComponentFormatter:
    def test_component_and_extra_pairs(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        record = _record("scorekeeper.execution.engine", "tick_started", **{"tick.block": 10})

        assert formatter.format(record) == "execution | tick_started tick.block=10"

    def test_foreign_logger_uses_top_level_name(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        record = _record("aiogram.event", "update")

        assert formatter.format(record) == "aiogram | update"


class TestJSONLHandler:
    def test_writes_structured_entry(self, tmp_path):
        handler = JSONLHandler(tmp_path)
        try:
            handler.emit(
                _record(
                    "scorekeeper.store.queue",
                    "delayed_tx_added",
                    **{"tx.controller": "CTRL", "tx.announced_block": 8700},
                )
            )
        finally:
            handler.close()

        files = list(tmp_path.glob("*.jsonl"))
        assert len(files) == 1
        entry = json.loads(files[0].read_text().strip())
        assert entry["level"] == "INFO"
        assert entry["component"] == "store"
        assert entry["message"] == "delayed_tx_added"
        assert entry["extra"] == {"tx.controller": "CTRL", "tx.announced_block": 8700}

    def test_redacts_extra_values(self, tmp_path):
        handler = JSONLHandler(tmp_path)
        token = "123456789:ABCdefGHIjklMNOpqrSTUvwxYZ1234567890"
        try:
            handler.emit(_record("scorekeeper.runtime", "runtime_ready", token=token))
        finally:
            handler.close()

        content = next(tmp_path.glob("*.jsonl")).read_text()
        assert token not in content


class TestPruneOldLogs:
    """Tests for prune_old_logs function."""

    def test_deletes_old_files(self, tmp_path):
        old_log = tmp_path / "2024-01-01.jsonl"
        old_log.write_text('{"test": "old"}\n')
        old_time = time.time() - (10 * 24 * 60 * 60)
        os.utime(old_log, (old_time, old_time))

        recent_log = tmp_path / "2024-01-10.jsonl"
        recent_log.write_text('{"test": "recent"}\n')

        deleted = prune_old_logs(tmp_path, retention_days=7)

        assert deleted == 1
        assert not old_log.exists()
        assert recent_log.exists()

    def test_ignores_non_jsonl_files(self, tmp_path):
        old_txt = tmp_path / "old.txt"
        old_txt.write_text("old text")
        old_time = time.time() - (10 * 24 * 60 * 60)
        os.utime(old_txt, (old_time, old_time))

        assert prune_old_logs(tmp_path, retention_days=7) == 0
        assert old_txt.exists()

    def test_handles_nonexistent_directory(self, tmp_path):
        assert prune_old_logs(tmp_path / "nonexistent") == 0
