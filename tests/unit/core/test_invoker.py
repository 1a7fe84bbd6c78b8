from __future__ import annotations

"""
Unit tests for the Safe Invocation Engine.

Verifies:
1. Pass-through of successful results (including None/empty values).
2. Fallback substitution and the two ordered log entries per failure.
3. Exactly one invocation per call, no retry.
4. Configurable defaults for the int/float/bool kinds.
5. Decorator form and discrete-selector dispatch.
"""

import re
from typing import Any, List

import pytest

from hostguard.core.invoker import SafeInvoker, render_context
from hostguard.domain.settings import DefaultValues, ReturnKind
from hostguard.infra.logging.sink import ErrorLog

STAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} ")


@pytest.fixture
def invoker(error_log: ErrorLog) -> SafeInvoker:
    return SafeInvoker(error_log)


def _boom() -> Any:
    raise ValueError("host exploded")


def _entries(content: str) -> List[str]:
    """Split file content into entries (an entry may span several lines)."""
    entries: List[str] = []
    for line in content.splitlines():
        if STAMP_RE.match(line):
            entries.append(line)
        elif entries:
            entries[-1] += "\n" + line
    return entries


# -----------------------------------------------------------------------------
# PASS-THROUGH
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("value", [42, 0, "", None, [], {"a": 1}, 3.5, False])
def test_successful_result_is_returned_unchanged(invoker: SafeInvoker, value: Any) -> None:
    assert invoker.execute(lambda: value, "ctx", fallback="fallback") is value


def test_success_writes_nothing(invoker: SafeInvoker, tmp_path) -> None:
    invoker.execute(lambda: 1, "ctx", fallback=-1)
    invoker.execute_action(lambda: None, "ctx")

    assert not (tmp_path / "HostGuard").exists()


# -----------------------------------------------------------------------------
# FAILURE CONTAINMENT
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("fallback", [-1, 0.0, False, "", [], None, object()])
def test_failure_returns_exact_fallback(invoker: SafeInvoker, fallback: Any) -> None:
    assert invoker.execute(_boom, "ctx", fallback) is fallback


def test_failure_logs_context_then_detail(invoker: SafeInvoker, error_log: ErrorLog, read_log) -> None:
    invoker.execute(_boom, "Failed to read health.", -1)

    entries = _entries(read_log(error_log))
    assert len(entries) == 2
    assert entries[0].endswith(" Failed to read health.")
    assert "Traceback (most recent call last):" in entries[1]
    assert entries[1].rstrip().endswith("ValueError: host exploded")


def test_operation_runs_exactly_once(invoker: SafeInvoker) -> None:
    calls = []

    def flaky() -> int:
        calls.append(1)
        raise ConnectionError("transient")

    invoker.execute(flaky, "ctx", -1)

    assert len(calls) == 1


def test_execute_action_contains_failure(invoker: SafeInvoker, error_log: ErrorLog, read_log) -> None:
    assert invoker.execute_action(_boom, "Failed to cast 'Fireball' with QuickDelay: False.") is None

    entries = _entries(read_log(error_log))
    assert entries[0].endswith("Failed to cast 'Fireball' with QuickDelay: False.")


def test_base_exceptions_are_not_contained(invoker: SafeInvoker) -> None:
    def interrupt() -> None:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        invoker.execute(interrupt, "ctx", -1)


def test_logging_failure_does_not_leak(tmp_path, recording_sink, clock) -> None:
    (tmp_path / "HostGuard").write_text("blocked", encoding="utf-8")
    invoker = SafeInvoker(ErrorLog(base_dir=str(tmp_path), secondary_sink=recording_sink, clock=clock))

    assert invoker.execute(_boom, "ctx", 7) == 7
    assert recording_sink.texts.count("HostGuard logging failure!") == 2


# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

def test_builtin_defaults(invoker: SafeInvoker) -> None:
    assert invoker.execute_int(_boom, "ctx") == -1
    assert invoker.execute_float(_boom, "ctx") == -1.0
    assert invoker.execute_bool(_boom, "ctx") is False
    assert invoker.execute_str(_boom, "ctx") == ""
    assert invoker.execute_list(_boom, "ctx") == []
    assert invoker.execute_dict(_boom, "ctx") == {}


def test_configure_defaults_applies_to_later_calls(invoker: SafeInvoker) -> None:
    assert invoker.execute_int(_boom, "ctx") == -1

    invoker.configure_defaults(default_int=0, default_float=0.0, default_bool=False)

    assert invoker.execute_int(_boom, "ctx") == 0
    assert invoker.execute_float(_boom, "ctx") == 0.0
    assert invoker.defaults == DefaultValues(0, 0.0, False)


def test_configure_defaults_rejects_wrong_types(invoker: SafeInvoker) -> None:
    with pytest.raises(TypeError):
        invoker.configure_defaults(default_int=True)
    with pytest.raises(TypeError):
        invoker.configure_defaults(default_bool=1)  # type: ignore[arg-type]
    assert invoker.defaults == DefaultValues()


def test_container_fallbacks_are_fresh(invoker: SafeInvoker) -> None:
    first = invoker.execute_list(_boom, "ctx")
    first.append("mutated")

    assert invoker.execute_list(_boom, "ctx") == []


def test_successful_typed_call_passes_through(invoker: SafeInvoker) -> None:
    assert invoker.execute_int(lambda: 12, "ctx") == 12
    assert invoker.execute_kind(lambda: None, "ctx", ReturnKind.INT) is None


# -----------------------------------------------------------------------------
# RESULT CHANNEL
# -----------------------------------------------------------------------------

def test_attempt_does_not_log(invoker: SafeInvoker, tmp_path) -> None:
    result = invoker.attempt(_boom)

    assert not result.ok
    assert isinstance(result.error, ValueError)
    assert not (tmp_path / "HostGuard").exists()


def test_chained_attempts_recover_once(invoker: SafeInvoker, error_log: ErrorLog, read_log) -> None:
    result = invoker.attempt(lambda: 5).and_then(lambda v: invoker.attempt(_boom))

    assert invoker.recover(result, "Failed in chained lookup.", -1) == -1
    assert len(_entries(read_log(error_log))) == 2


# -----------------------------------------------------------------------------
# DECORATOR
# -----------------------------------------------------------------------------

def test_guard_renders_context_with_arguments(invoker: SafeInvoker, error_log: ErrorLog, read_log) -> None:
    @invoker.guard("Failed to get cooldown for spell: '{spell}' on '{unit}'.", ReturnKind.INT)
    def spell_cooldown(spell: str, unit: str = "target") -> int:
        raise TimeoutError("no answer")

    assert spell_cooldown("Fireball") == -1
    assert _entries(read_log(error_log))[0].endswith("Failed to get cooldown for spell: 'Fireball' on 'target'.")


def test_guard_explicit_fallback_and_passthrough(invoker: SafeInvoker) -> None:
    @invoker.guard("Failed to read queue.", fallback="none")
    def spell_queue(ok: bool) -> str:
        if not ok:
            raise RuntimeError("x")
        return "Frostbolt"

    assert spell_queue(True) == "Frostbolt"
    assert spell_queue(False) == "none"
    assert spell_queue.__name__ == "spell_queue"


def test_guard_reads_defaults_at_call_time(invoker: SafeInvoker) -> None:
    @invoker.guard("Failed.", ReturnKind.BOOL)
    def predicate() -> bool:
        raise RuntimeError("x")

    invoker.configure_defaults(default_bool=True)
    assert predicate() is True


class _Unprintable:
    def __format__(self, spec: str) -> str:
        raise RuntimeError("cannot format")


def test_guard_survives_unformattable_context(invoker: SafeInvoker, error_log: ErrorLog, read_log) -> None:
    @invoker.guard("Failed to target slot {0[0]}.", ReturnKind.INT)
    def target(slot: int) -> int:
        raise RuntimeError("slot empty")

    assert target(5) == -1
    assert _entries(read_log(error_log))[0].endswith("Failed to target slot {0[0]}.")


def test_render_context_contains_argument_format_errors() -> None:
    assert render_context("Failed for {0}.", None, (_Unprintable(),), {}) == "Failed for {0}."
    assert render_context("Failed for {unit[0]}.", None, (), {"unit": 3}) == "Failed for {unit[0]}."


def test_render_context_falls_back_to_template() -> None:
    assert render_context("Failed for '{missing}'.", None, (), {}) == "Failed for '{missing}'."
    assert render_context("Failed for {0}.", None, (3,), {}) == "Failed for 3."


# -----------------------------------------------------------------------------
# DISCRETE SELECTORS
# -----------------------------------------------------------------------------

def test_execute_selected_runs_matching_handler(invoker: SafeInvoker) -> None:
    hits = []
    handlers = {1: lambda: hits.append(1), 2: lambda: hits.append(2)}

    invoker.execute_selected(2, handlers, "Failed to target party member 2.", "party member")

    assert hits == [2]


def test_invalid_selector_logs_single_entry(invoker: SafeInvoker, error_log: ErrorLog, read_log) -> None:
    invoker.execute_selected(9, {1: lambda: None}, "Failed to target boss 9.", "boss")

    entries = _entries(read_log(error_log))
    assert len(entries) == 1
    assert entries[0].endswith(" Invalid boss number.")


def test_failing_selector_handler_is_contained(invoker: SafeInvoker, error_log: ErrorLog, read_log) -> None:
    invoker.execute_selected(1, {1: _boom}, "Failed to target arena 1.", "arena")

    entries = _entries(read_log(error_log))
    assert entries[0].endswith("Failed to target arena 1.")
    assert len(entries) == 2
