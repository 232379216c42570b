"""Unit tests for Mux.report — delivery policy, failover and misrouting."""

from __future__ import annotations

import logging
import threading

from ert.models.groups import try_all
from ert.models.trace import T
from ert.mux import MISROUTE_TRACE, ConfigurationError, Mux


class TestFirstSuccess:
    """Groups without try-all stop at the first reporter that succeeds."""

    def test_stops_after_first_success(self, mux, make_reporter, journal):
        a, b = make_reporter("a"), make_reporter("b")
        mux.new_group("ops").add("ops", a).add("ops", b)

        mux.report("ops", T("svc"), "topic", "body")

        assert journal == ["a"]
        assert b.calls == []

    def test_fails_over_in_order(self, mux, make_reporter, journal, error_logger):
        a, b = make_reporter("a", fail=True), make_reporter("b")
        mux.new_group("ops").add("ops", a).add("ops", b)

        mux.report("ops", T("svc"), "topic", "body")

        assert journal == ["a", "b"]
        assert b.calls == [(T("svc"), "topic", "body")]
        assert len(error_logger.entries) == 1

    def test_all_fail_does_not_raise(self, mux, make_reporter, journal, error_logger):
        mux.new_group("ops")
        mux.add("ops", make_reporter("a", fail=True))
        mux.add("ops", make_reporter("b", fail=True))

        mux.report("ops", T(), "topic", "body")

        assert journal == ["a", "b"]
        messages = [msg for _, msg in error_logger.entries]
        assert messages == [
            "reporting to group 'ops' via reporter no. 0 failed",
            "reporting to group 'ops' via reporter no. 1 failed",
        ]
        assert all(isinstance(err, RuntimeError) for err, _ in error_logger.entries)


class TestTryAll:
    def test_every_reporter_runs(self, mux, make_reporter, journal):
        a, b = make_reporter("a"), make_reporter("b")
        mux.new_group("ops", try_all()).add("ops", a).add("ops", b)

        mux.report("ops", T("svc"), "topic", "body")

        assert journal == ["a", "b"]
        assert a.calls == b.calls == [(T("svc"), "topic", "body")]

    def test_failure_does_not_stop_the_rest(self, mux, make_reporter, journal, error_logger):
        mux.new_group("ops", try_all())
        mux.add("ops", make_reporter("a"))
        mux.add("ops", make_reporter("b", fail=True))
        mux.add("ops", make_reporter("c"))

        mux.report("ops", T(), "topic", "body")

        assert journal == ["a", "b", "c"]
        assert [msg for _, msg in error_logger.entries] == [
            "reporting to group 'ops' via reporter no. 1 failed"
        ]

    def test_only_target_group_is_used(self, mux, make_reporter, journal):
        mux.new_group("ops", try_all()).add("ops", make_reporter("ops"))
        mux.new_group("dev").add("dev", make_reporter("dev"))

        mux.report("dev", T(), "topic", "body")

        assert journal == ["dev"]


class TestUnknownGroup:
    """Reports to an unknown group become a diagnostic for everyone."""

    def _configured(self, mux, make_reporter):
        ops_a, ops_b = make_reporter("ops_a"), make_reporter("ops_b")
        dev = make_reporter("dev")
        mux.new_group("ops").add("ops", ops_a).add("ops", ops_b)
        mux.new_group("dev", try_all()).add("dev", dev)
        return [ops_a, ops_b, dev]

    def test_every_reporter_gets_one_diagnostic(self, mux, make_reporter):
        reporters = self._configured(mux, make_reporter)

        mux.report("nope", T("billing", "run"), "secret topic", "secret body")

        for reporter in reporters:
            assert len(reporter.calls) == 1
            trace, topic, body = reporter.calls[0]
            assert trace == MISROUTE_TRACE
            assert topic == "ERROR: ert: wrong report group 'nope'"
            assert "secret" not in topic
            assert "secret body" not in body

    def test_ignores_first_success_policy(self, mux, make_reporter, journal):
        self._configured(mux, make_reporter)

        mux.report("nope", T(), "topic", "body")

        assert journal == ["ops_a", "ops_b", "dev"]

    def test_body_names_group_call_site_and_original_trace(self, mux, make_reporter):
        reporters = self._configured(mux, make_reporter)

        mux.report("nope", T("billing", "run"), "topic", "body")

        _, _, body = reporters[0].calls[0]
        assert "'nope'" in body
        assert "/billing/run" in body
        assert __file__ in body
        assert "forward" in body

    def test_logs_misroute_with_call_site(self, mux, make_reporter, error_logger):
        self._configured(mux, make_reporter)

        mux.report("nope", T(), "topic", "body")

        assert len(error_logger.entries) == 1
        err, msg = error_logger.entries[0]
        assert msg == "invalid report"
        assert isinstance(err, ConfigurationError)
        assert "given report group 'nope' doesn't exist" in str(err)
        assert __file__ in str(err)

    def test_broadcast_survives_failing_reporter(self, mux, make_reporter, journal, error_logger):
        mux.new_group("ops", try_all())
        mux.add("ops", make_reporter("a", fail=True))
        mux.add("ops", make_reporter("b"))

        mux.report("nope", T(), "topic", "body")

        assert journal == ["a", "b"]
        assert len(error_logger.entries) == 2

    def test_without_logger_still_broadcasts(self, make_reporter, journal):
        mux = Mux().new_group("ops").add("ops", make_reporter("a"))

        mux.report("nope", T(), "topic", "body")

        assert journal == ["a"]


class TestNop:
    def test_never_invokes_reporters(self, make_reporter, journal):
        mux = Mux.nop()
        mux.new_group("ops").add("ops", make_reporter("a"))

        mux.report("ops", T(), "topic", "body")
        mux.report("unknown", T(), "topic", "body")

        assert journal == []

    def test_never_logs(self, make_reporter, error_logger):
        mux = Mux.nop(logger=error_logger)
        mux.new_group("ops").add("ops", make_reporter("a", fail=True))

        mux.report("ops", T(), "topic", "body")
        mux.report("unknown", T(), "topic", "body")

        assert error_logger.entries == []


class TestConcurrentDispatch:
    def test_parallel_reports_reach_reporters(self, mux):
        lock = threading.Lock()
        seen: list[str] = []

        def reporter(trace, topic, body) -> None:
            with lock:
                seen.append(topic)

        mux.new_group("ops").add("ops", reporter)
        assert mux.validate() is None

        threads = [
            threading.Thread(target=mux.report, args=("ops", T("t", str(i)), f"topic-{i}", ""))
            for i in range(16)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(seen) == sorted(f"topic-{i}" for i in range(16))


class _RaisingLogger:
    """An ErrorLogger whose own sink is broken."""

    def log_error(self, error, msg, *args) -> None:
        raise RuntimeError("log sink down")


class TestBrokenErrorLogger:
    """A failing ErrorLogger must not turn dispatch into a raising call."""

    def test_reporter_failure_does_not_raise(self, make_reporter, journal, caplog):
        mux = Mux(logger=_RaisingLogger()).new_group("ops")
        mux.add("ops", make_reporter("a", fail=True))
        mux.add("ops", make_reporter("b"))

        with caplog.at_level(logging.ERROR, logger="ert.mux"):
            mux.report("ops", T(), "topic", "body")

        assert journal == ["a", "b"]
        assert "Error logger failed while logging" in caplog.text
        assert "reporting to group 'ops' via reporter no. 0 failed" in caplog.text

    def test_misroute_does_not_raise(self, make_reporter, journal):
        mux = Mux(logger=_RaisingLogger()).new_group("ops", try_all())
        mux.add("ops", make_reporter("a", fail=True))
        mux.add("ops", make_reporter("b"))

        mux.report("nope", T(), "topic", "body")

        assert journal == ["a", "b"]
