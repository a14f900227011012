"""Tests for progress reporting and notifiers."""

import logging
from unittest.mock import AsyncMock, MagicMock

from pydantic import SecretStr

from scorekeeper.config.models import TelegramConfig
from scorekeeper.execution.notifier import (
    NullNotifier,
    TelegramNotifier,
    build_notifier,
    notify,
)
from scorekeeper.execution.progress import (
    JobStatusBoard,
    LoggingProgressSink,
    ProgressReporter,
)
from tests.conftest import ListSink


class TestProgressReporter:
    def test_item_percentages(self):
        sink = ListSink()
        reporter = ProgressReporter(sink, "execution")

        assert reporter.item_done(0, 4, "first") == 25
        assert reporter.item_done(3, 4, "last") == 100

        assert [e.progress for e in sink.events] == [25, 100]
        assert sink.events[0].task_name == "execution"
        assert sink.events[0].note == "first"
        assert sink.events[0].timestamp.tzinfo is not None

    def test_batch_done(self):
        sink = ListSink()
        ProgressReporter(sink, "execution").batch_done()

        assert sink.events[0].progress == 100
        assert sink.events[0].note == "batch complete"


class TestJobStatusBoard:
    def test_keeps_latest_and_fans_out(self):
        downstream = ListSink()
        board = JobStatusBoard(downstream)
        reporter = ProgressReporter(board, "execution")

        reporter.item_done(0, 2, "one")
        reporter.item_done(1, 2, "two")

        assert board.latest("execution").note == "two"
        assert board.latest("missing") is None
        assert list(board.snapshot()) == ["execution"]
        assert len(downstream.events) == 2


class TestLoggingProgressSink:
    def test_logs_event(self, caplog):
        reporter = ProgressReporter(LoggingProgressSink(), "execution")
        with caplog.at_level(logging.INFO, logger="scorekeeper.execution.progress"):
            reporter.item_done(0, 1, "Processed transaction: 0x1")

        record = caplog.records[-1]
        assert record.getMessage() == "job_progress"
        assert getattr(record, "job.progress") == 100
        assert getattr(record, "job.note") == "Processed transaction: 0x1"


class TestNotifiers:
    async def test_null_notifier_is_noop(self):
        await NullNotifier().send("hello")

    def test_build_without_config_is_null(self):
        assert isinstance(build_notifier(None), NullNotifier)
        assert isinstance(build_notifier(TelegramConfig(chat_id="1")), NullNotifier)

    async def test_telegram_sends_to_chat(self):
        bot = MagicMock()
        bot.send_message = AsyncMock()
        notifier = TelegramNotifier(bot, "-100123")

        await notifier.send("x" * 5000)

        bot.send_message.assert_awaited_once()
        chat_id, text = bot.send_message.await_args.args
        assert chat_id == "-100123"
        assert len(text) == 4000

    def test_telegram_from_config(self):
        config = TelegramConfig(
            bot_token=SecretStr("123456789:AAEabcdefghijklmnopqrstuvwxyz0123456"),
            chat_id="42",
        )
        notifier = build_notifier(config)
        assert isinstance(notifier, TelegramNotifier)

    async def test_notify_swallows_errors(self, caplog):
        notifier = MagicMock()
        notifier.send = AsyncMock(side_effect=RuntimeError("down"))

        with caplog.at_level(logging.WARNING):
            await notify(notifier, "hello")

        assert any(r.getMessage() == "notification_failed" for r in caplog.records)
