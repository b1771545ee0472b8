"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a test double that tests may swap back to the real one
Component = Literal["persistence", "ratelimit"]


class ProviderBase(Provider):
    """Base for every provider listed in ``PROVIDERS``.

    Mockable bases set ``__mock_component__``; their test subclasses set
    ``__is_mock__`` so ``get_provider`` can pick one or the other.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
