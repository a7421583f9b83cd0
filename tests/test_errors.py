import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
import signal

import pytest

from utils.error_tracker import CameraConnectionError, DeviceError, ErrorTracker


class SdkError(RuntimeError):
    def get_failed_function(self):
        return "rs2_pipeline_start_with_config"

    def get_failed_args(self):
        return "pipe:0x1234, config:0x5678"


def test_device_error_keeps_sdk_call_details():
    err = CameraConnectionError.from_exception(SdkError("No device connected"))
    assert isinstance(err, DeviceError)
    assert err.operation == "rs2_pipeline_start_with_config"
    assert err.describe() == (
        "RealSense error calling rs2_pipeline_start_with_config"
        "(pipe:0x1234, config:0x5678):\n    No device connected"
    )


def test_plain_errors_use_given_operation():
    err = DeviceError.from_exception(RuntimeError("timeout"), "wait_for_frames")
    assert err.describe().startswith("RealSense error calling wait_for_frames()")


def test_cleanup_runs_once_and_survives_failures():
    calls = []

    def broken():
        calls.append("broken")
        raise RuntimeError("boom")

    def ok():
        calls.append("ok")

    ErrorTracker.register_cleanup(broken)
    ErrorTracker.register_cleanup(ok)
    ErrorTracker.register_cleanup(ok)
    ErrorTracker._run_cleanup()
    ErrorTracker._run_cleanup()
    assert calls == ["broken", "ok"]


def test_excepthook_logs_cleans_up_and_chains(monkeypatch):
    seen = []
    monkeypatch.setattr(sys, "excepthook", lambda *exc: seen.append(exc[0]))
    monkeypatch.setattr(ErrorTracker, "_installed", False)
    monkeypatch.setattr(ErrorTracker, "_orig_hook", None)
    cleaned = []
    ErrorTracker.register_cleanup(lambda: cleaned.append(True))
    ErrorTracker.install_excepthook()
    sys.excepthook(ValueError, ValueError("bad"), None)
    assert cleaned == [True]
    assert seen == [ValueError]


def test_signal_handler_cleans_up_and_exits(monkeypatch):
    handlers = {}
    monkeypatch.setattr(signal, "signal", lambda sig, h: handlers.__setitem__(sig, h))
    ErrorTracker.install_signal_handlers()
    assert set(handlers) == {signal.SIGINT, signal.SIGTERM}
    cleaned = []
    ErrorTracker.register_cleanup(lambda: cleaned.append(True))
    with pytest.raises(SystemExit) as info:
        handlers[signal.SIGTERM](signal.SIGTERM, None)
    assert info.value.code == 1
    assert cleaned == [True]
