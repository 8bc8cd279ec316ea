"""
Model Family Registration

Maps family names (as used in configuration files and logs) to model
classes. The built-in families register themselves when bamupdate.models is
imported; user code can add its own.

Example usage:
    from bamupdate import register_family, get_family

    class Poisson(ParametricModel):
        name = "Poisson"
        ...

    register_family('Poisson', Poisson)
    prior = get_family('Gamma')(shape=2, scale=1)
"""

_REGISTRY = {}


def register_family(name, model_cls):
    """
    Register a model class under a family name.

    Args:
        name: Unique family name (e.g., 'Beta')
        model_cls: Model subclass

    Raises:
        ValueError: If the name is already registered or model_cls is not a class.
    """
    if name in _REGISTRY:
        raise ValueError(f"Model family '{name}' is already registered")
    if not isinstance(model_cls, type):
        raise ValueError(f"Model family '{name}' must be registered with a class, got {model_cls!r}")
    _REGISTRY[name] = model_cls


def get_family(name):
    """
    Get a registered model class by family name.

    Raises:
        KeyError: If the family is not registered
    """
    if name not in _REGISTRY:
        available = list(_REGISTRY.keys())
        raise KeyError(f"Unknown model family '{name}'. Available: {available}")
    return _REGISTRY[name]


def list_families():
    """List all registered family names."""
    return list(_REGISTRY.keys())


def unregister_family(name):
    """Remove a family. Primarily for testing."""
    _REGISTRY.pop(name, None)
