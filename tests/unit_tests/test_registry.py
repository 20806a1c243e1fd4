from __future__ import annotations

from pathlib import Path

from nslogger.config import LoggerConfiguration
from nslogger.registry import ConfigurationRegistry


def _configuration(namespace: str) -> LoggerConfiguration:
    return LoggerConfiguration(namespace=namespace, logfile=Path("/tmp/app.log"))


class TestConfigurationRegistry:
    def test_namespaces_follow_registration_order(self) -> None:
        registry = ConfigurationRegistry()
        for name in ("A", "B", "C"):
            registry.register(f"/src/{name}.py", _configuration(name))

        assert registry.namespaces() == ("A", "B", "C")
        assert registry.size() == 3
        assert len(registry) == 3

    def test_overwrite_keeps_position(self) -> None:
        registry = ConfigurationRegistry()
        registry.register("/src/a.py", _configuration("A"))
        registry.register("/src/b.py", _configuration("B"))
        registry.register("/src/a.py", _configuration("A2"))

        assert registry.namespaces() == ("A2", "B")
        assert registry.size() == 2
        assert registry.get("/src/a.py").namespace == "A2"

    def test_first_registration_is_reported_once(self) -> None:
        registry = ConfigurationRegistry()

        assert registry.register("/src/a.py", _configuration("A")) is True
        assert registry.register("/src/b.py", _configuration("B")) is False
        assert registry.register("/src/a.py", _configuration("A")) is False

    def test_index_of(self) -> None:
        registry = ConfigurationRegistry()
        for name in ("A", "B", "C"):
            registry.register(name, _configuration(name))

        assert registry.index_of("B") == 1
        assert registry.index_of("Z") == -1

    def test_thread_parity(self) -> None:
        registry = ConfigurationRegistry()
        for name in ("A", "B", "C"):
            registry.register(name, _configuration(name))

        assert registry.index_of("A") & 1 == 0
        assert registry.index_of("B") & 1 == 1
        assert registry.index_of("C") & 1 == 0
        assert registry.index_of("Z") & 1 == 1

    def test_contains_and_clear(self) -> None:
        registry = ConfigurationRegistry()
        registry.register("/src/a.py", _configuration("A"))
        assert "/src/a.py" in registry

        registry.clear()

        assert "/src/a.py" not in registry
        assert registry.namespaces() == ()
        assert registry.register("/src/a.py", _configuration("A")) is True
