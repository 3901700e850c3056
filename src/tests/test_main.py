"""Tests for the command line entry point."""

import io
import json
import os
import time

import pytest
import structlog

from rdns_cache import main as main_module
from rdns_cache.rdns_logging import logger as logger_module

from conftest import FakeResolver


@pytest.fixture(autouse=True)
def isolate(monkeypatch):
    """Fake resolver, clean environment and logging teardown."""
    for key in list(os.environ):
        if key.startswith("RDNS_CACHE_"):
            monkeypatch.delenv(key)

    resolver = FakeResolver({"10.0.0.1": "router.local"})
    monkeypatch.setattr(
        main_module, "create_hostname_resolver", lambda *args, **kwargs: resolver
    )
    yield resolver

    if logger_module._logger_instance is not None:
        logger_module._logger_instance.close()
    logger_module._logger_instance = None
    structlog.reset_defaults()


def output_lines(capsys):
    return capsys.readouterr().out.splitlines()


class TestMain:
    """Test CLI resolution and output format."""

    def test_resolves_arguments(self, capsys, isolate):
        assert main_module.main(["10.0.0.1", "192.0.2.1", "0.0.0.0"]) == 0

        assert output_lines(capsys) == [
            "10.0.0.1\trouter.local",
            "192.0.2.1\t-",
            "0.0.0.0\t-",
        ]
        assert len(isolate.calls) == 2

    def test_invalid_address(self, capsys):
        assert main_module.main(["bogus"]) == 0
        assert output_lines(capsys) == ["bogus\t-"]

    def test_repeated_address_resolved_once(self, capsys, isolate):
        main_module.main(["192.0.2.1", "192.0.2.1"])

        assert output_lines(capsys) == ["192.0.2.1\t-", "192.0.2.1\t-"]
        assert len(isolate.calls) == 1

    def test_reads_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("10.0.0.1\n\n192.0.2.1\n"))

        assert main_module.main([]) == 0
        assert output_lines(capsys) == ["10.0.0.1\trouter.local", "192.0.2.1\t-"]

    def test_no_resolve_uses_hosts_file(self, capsys, isolate, tmp_path):
        """Only passively loaded names are shown when resolution is off."""
        hosts = tmp_path / "hosts"
        hosts.write_text("10.0.0.9 printer.local\n")

        code = main_module.main(
            ["--no-resolve", "--hosts", str(hosts), "10.0.0.9", "10.0.0.1"]
        )

        assert code == 0
        assert output_lines(capsys) == ["10.0.0.9\tprinter.local", "10.0.0.1\t-"]
        assert isolate.calls == []

    def test_config_disables_resolution(self, capsys, isolate, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("resolver:\n  enabled: false\n")

        main_module.main(["--config", str(config_file), "10.0.0.1"])

        assert output_lines(capsys) == ["10.0.0.1\t-"]
        assert isolate.calls == []

    def test_missing_config(self, capsys, tmp_path):
        code = main_module.main(["--config", str(tmp_path / "missing.yaml"), "10.0.0.1"])

        assert code == 1
        assert "Failed to initialize" in capsys.readouterr().err

    def test_missing_hosts_file(self, tmp_path):
        assert main_module.main(["--hosts", str(tmp_path / "missing"), "10.0.0.1"]) == 1

    def test_stats(self, capsys):
        main_module.main(["--stats", "10.0.0.1", "10.0.0.1"])

        err = capsys.readouterr().err
        stats = json.loads(err[err.index("{"):])
        assert stats["entries"] == 1
        assert stats["resolution"]["cache_hits"] == 1
        assert stats["resolution"]["resolver_calls"] == 1


class TestWatchConfig:
    """Test following config edits from the command line."""

    @pytest.fixture
    def started(self, monkeypatch):
        """Apps whose config watching was started."""
        apps = []
        start_watching = main_module.RDNSCacheApp.start_watching

        def record(app):
            apps.append(app)
            start_watching(app)

        monkeypatch.setattr(main_module.RDNSCacheApp, "start_watching", record)
        return apps

    def test_edit_applies_mid_stream(
        self, capsys, isolate, monkeypatch, tmp_path, started
    ):
        """Disabling resolution in the file stops lookups for later input."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("resolver:\n  enabled: true\n")

        def addresses():
            yield "10.0.0.1\n"
            staging = tmp_path / "config.yaml.tmp"
            staging.write_text("resolver:\n  enabled: false\n")
            os.replace(staging, config_file)

            loader = started[0].config_loader
            deadline = time.monotonic() + 10
            while loader.resolution_enabled() and time.monotonic() < deadline:
                time.sleep(0.05)
            yield "192.0.2.1\n"

        monkeypatch.setattr("sys.stdin", addresses())

        code = main_module.main(["--watch-config", "--config", str(config_file)])

        assert code == 0
        assert output_lines(capsys) == ["10.0.0.1\trouter.local", "192.0.2.1\t-"]
        assert len(isolate.calls) == 1
        assert not started[0].config_loader._observer.is_alive()

    def test_not_watching_by_default(self, tmp_path, started):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("resolver:\n  enabled: true\n")

        assert main_module.main(["--config", str(config_file), "10.0.0.1"]) == 0

        assert started[0].config_loader._observer is None
