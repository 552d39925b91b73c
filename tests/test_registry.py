import pytest

# Import the modules to ensure their components are registered
import core.collectors  # noqa: F401
from core.collectors.diff_collector import DiffCollector
from core.collectors.history_collector import HistoryCollector
from core.diff import extractors
from core.registry import Registry, collector_registry, extractor_registry


def test_registry_get_component():
    """Tests that a component can be retrieved from the registry."""
    collector_class = collector_registry.get("diff")
    assert collector_class is DiffCollector

    assert extractor_registry.get("go") is extractors.extract_go_changes
    assert extractor_registry.get("python") is extractors.extract_python_changes


def test_stacked_registration():
    """Tests that one function can be registered under several names."""
    assert extractor_registry.get("javascript") is extractor_registry.get("typescript")


def test_registry_create_component():
    """Tests that a component can be instantiated from the registry."""
    collector = collector_registry.create("history", n=10)
    assert isinstance(collector, HistoryCollector)

    assert extractor_registry.create("python", "def main():") == ["function main"]


def test_registry_get_unregistered_component():
    """Tests that getting an unregistered component raises a KeyError."""
    with pytest.raises(KeyError):
        collector_registry.get("nonexistent")

    with pytest.raises(KeyError):
        extractor_registry.get("cobol")


def test_registry_register_duplicate_component():
    """Tests that registering a component with a duplicate name raises a ValueError."""
    with pytest.raises(ValueError):
        @collector_registry.register("diff")
        class AnotherDiffCollector:
            pass

    with pytest.raises(ValueError):
        @extractor_registry.register("go")
        def another_go_extractor(line):
            return []


def test_registry_contains():
    """Tests the `__contains__` method."""
    assert "branch" in collector_registry
    assert "nonexistent" not in collector_registry
    assert "typescript" in extractor_registry


def test_registry_iter_and_keys():
    """Tests the `__iter__` and `keys` methods."""
    assert {"diff", "history", "branch"} <= set(iter(collector_registry))
    assert {"go", "javascript", "typescript", "python"} <= set(extractor_registry.keys())


def test_new_registry_is_empty():
    registry = Registry("test")

    @registry.register("upper")
    def upper(value):
        return value.upper()

    assert list(registry) == ["upper"]
    assert registry.create("upper", "abc") == "ABC"
