"""Factory for creating model registries."""

from typing import Any

from .base import ModelRegistry


def create_model_registry(
    backend: str = "memory",
    **kwargs: Any
) -> ModelRegistry:
    """Create a model registry.

    Args:
        backend: Backend type
            - "memory": empty unless ``profiles`` is given
            - "yaml": loaded from ``path`` (bundled catalogue when omitted)
        **kwargs: Backend-specific configuration

    Returns:
        ModelRegistry instance

    Raises:
        ValueError: If backend type is not supported
    """
    from .in_memory import InMemoryModelRegistry

    if backend == "memory":
        return InMemoryModelRegistry(**kwargs)

    elif backend == "yaml":
        from .catalog import load_catalog
        return InMemoryModelRegistry(load_catalog(kwargs.get("path")))

    raise ValueError(
        f"Unsupported registry backend: {backend}. "
        f"Supported backends: memory, yaml"
    )
