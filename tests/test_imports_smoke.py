# tests/test_imports_smoke.py
# -----------------------------------------------------------------------------
# Smoke tests for imports and the public contract of the hostguard package.
#
# Goals:
# - Ensure every non-GUI module is importable in any environment.
# - Validate the package root exposes the facade used by host scripts.
# - Ensure the GUI console is importable when customtkinter is available.
# -----------------------------------------------------------------------------

from __future__ import annotations

import importlib
import importlib.util

import pytest

import hostguard

MODULES = [
    "hostguard.api",
    "hostguard.main",
    "hostguard.core.host",
    "hostguard.core.invoker",
    "hostguard.domain.config",
    "hostguard.domain.constants",
    "hostguard.domain.result",
    "hostguard.domain.settings",
    "hostguard.domain.validator",
    "hostguard.infra.fs",
    "hostguard.infra.logging",
    "hostguard.interface.cli.app",
    "hostguard.interface.cli.args",
]


@pytest.mark.parametrize("name", MODULES)
def test_module_importable(name):
    assert importlib.import_module(name) is not None


def test_package_public_api_contract():
    required = [
        "configure",
        "configure_defaults",
        "log_error",
        "get_log_file_name",
        "execute_with_recovery",
        "execute_action",
        "set_secondary_sink",
        "SafeInvoker",
        "GuardedHost",
        "CallResult",
        "ErrorLog",
    ]
    for name in required:
        assert hasattr(hostguard, name), f"hostguard missing: {name}"


def test_gui_importable_if_customtkinter_available():
    if importlib.util.find_spec("customtkinter") is None:
        pytest.skip("customtkinter not installed; skipping GUI import smoke test.")

    module = importlib.import_module("hostguard.interface.gui.logs_console")
    assert hasattr(module, "LogsConsole")
