from typing import Any, Callable, Dict, Iterator, KeysView, TypeVar

T = TypeVar("T", bound=Callable[..., Any])


class Registry:
    """A named table of callables (classes or plain functions)."""

    def __init__(self, name: str):
        """
        Initializes the registry.

        Args:
            name: The name of the registry (e.g., "collector", "extractor").
        """
        self._name = name
        self._components: Dict[str, Callable[..., Any]] = {}

    def register(self, name: str) -> Callable[[T], T]:
        """
        A decorator to register a callable under a given name.

        Decorators can be stacked to register one callable under several names.

        Raises:
            ValueError: If the name is already registered.
        """
        def decorator(component: T) -> T:
            if name in self._components:
                raise ValueError(f"Component '{name}' already registered in '{self._name}' registry.")
            self._components[name] = component
            return component
        return decorator

    def get(self, name: str) -> Callable[..., Any]:
        """
        Retrieves a component by its name.

        Raises:
            KeyError: If the name is not registered.
        """
        if name not in self._components:
            raise KeyError(f"Component '{name}' not found in '{self._name}' registry.")
        return self._components[name]

    def create(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Calls the component registered under `name` with the given arguments."""
        return self.get(name)(*args, **kwargs)

    def __contains__(self, name: str) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def keys(self) -> KeysView[str]:
        return self._components.keys()


collector_registry = Registry("collector")
extractor_registry = Registry("extractor")
