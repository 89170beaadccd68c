from typing import Any, Callable, ClassVar, Generic, Hashable, TypeVar


KeyT = TypeVar("KeyT", bound=Hashable)
ProductT = TypeVar("ProductT")


class TypeAbstractFactory(Generic[KeyT, ProductT]):
    """
    Keyed catalogue of implementation classes, filled by decorating each
    class with `@Factory.register(key)`.

    Concrete factories are declared as subclasses, e.g.
    `class TransportEngineFactory(TypeAbstractFactory[TransportEngineType, TransportEngine])`,
    and each one gets a catalogue of its own on declaration. A key can only
    be claimed once unless `replace=True` is passed, so two modules cannot
    silently shadow each other's implementation.
    """

    _implementations: ClassVar[dict[Any, type]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._implementations = {}

    @classmethod
    def register(
        cls, key: KeyT, *, replace: bool = False
    ) -> Callable[[type[ProductT]], type[ProductT]]:
        def decorate(impl: type[ProductT]) -> type[ProductT]:
            current = cls._implementations.get(key)
            if current is not None and current is not impl and not replace:
                raise ValueError(
                    f"{cls.__name__} already maps {key!r} to {current.__name__}"
                )
            cls._implementations[key] = impl
            return impl

        return decorate

    @classmethod
    def list_keys(cls) -> list[KeyT]:
        return list(cls._implementations)

    @classmethod
    def get(cls, key: KeyT) -> type[ProductT]:
        if key not in cls._implementations:
            known = ", ".join(repr(k) for k in cls._implementations) or "none"
            raise KeyError(f"{cls.__name__} has no implementation for {key!r} (known: {known})")
        return cls._implementations[key]

    @classmethod
    def create(cls, key: KeyT, *args: Any, **kwargs: Any) -> ProductT:
        """Instantiate the class registered under `key` with the given arguments."""
        return cls.get(key)(*args, **kwargs)
