"""
Color comparator protocol for locked_bitmap.

A comparator decides whether two colors count as the same pixel. The
Locator takes one as a strategy, so matching rules can change without
touching the search.

Example - Implementing a custom comparator:
    >>> from locked_bitmap.comparators import register_comparator
    >>>
    >>> @register_comparator("luma")
    >>> class LumaColorComparator:
    ...     '''Treat colors of equal brightness as the same.'''
    ...
    ...     def is_same(self, left: Color, right: Color) -> bool:
    ...         return luma(left) == luma(right)

Using registered comparators:
    >>> from locked_bitmap.comparators import get_comparator
    >>> comparator = get_comparator("tolerance", tolerance=8)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from locked_bitmap.color import Color


# Registry of available comparators
_COMPARATOR_REGISTRY: dict[str, type] = {}


@runtime_checkable
class ColorComparator(Protocol):
    """Equality predicate over two colors.

    Built in:
    - ExactColorComparator ("exact"): R, G, B and A must match
    - RgbColorComparator ("rgb"): R, G and B must match, alpha ignored
    - ToleranceColorComparator ("tolerance"): channels within a tolerance
    """

    def is_same(self, left: Color, right: Color) -> bool:
        """Return True if the two colors should be treated as equal."""
        ...


def register_comparator(name: str):
    """Decorator to register a comparator implementation.

    Args:
        name: Unique name for the comparator

    Returns:
        Decorator function
    """

    def decorator(cls: type) -> type:
        if name in _COMPARATOR_REGISTRY:
            raise ValueError(f"Comparator '{name}' is already registered")
        _COMPARATOR_REGISTRY[name] = cls
        return cls

    return decorator


def get_comparator(name: str, *args: Any, **kwargs: Any) -> ColorComparator:
    """Instantiate a registered comparator by name.

    Args:
        name: Name of the comparator
        *args: Arguments to pass to the comparator constructor
        **kwargs: Keyword arguments to pass to the comparator constructor

    Raises:
        KeyError: If the comparator is not registered
    """
    if name not in _COMPARATOR_REGISTRY:
        available = ", ".join(_COMPARATOR_REGISTRY.keys())
        raise KeyError(f"Comparator '{name}' not found. Available: {available}")
    return _COMPARATOR_REGISTRY[name](*args, **kwargs)


def list_comparators() -> list[str]:
    """List all registered comparator names."""
    return list(_COMPARATOR_REGISTRY.keys())


def is_comparator_registered(name: str) -> bool:
    return name in _COMPARATOR_REGISTRY
