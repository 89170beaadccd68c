"""Unit tests for TypeAbstractFactory"""
from enum import Enum
from typing import Protocol

import pytest

from rest_client.auth.authenticators import AuthenticatorFactory, AuthType
from rest_client.core.abstract_factory import TypeAbstractFactory
from rest_client.request_execution.transport.engine import TransportEngineFactory


class Encoding(str, Enum):
    PLAIN = "plain"
    UPPER = "upper"


class Formatter(Protocol):
    def render(self, value: str) -> str: ...


class FormatterFactory(TypeAbstractFactory[Encoding, Formatter]):
    pass


@FormatterFactory.register(Encoding.PLAIN)
class PlainFormatter:
    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def render(self, value: str) -> str:
        return f"{self.prefix}{value}"


@FormatterFactory.register(Encoding.UPPER)
class UpperFormatter:
    def render(self, value: str) -> str:
        return value.upper()


@pytest.mark.unit
@pytest.mark.core
class TestTypeAbstractFactoryRegistration:
    """Tests for the register decorator and key listing"""

    def test_register_adds_keys(self):
        assert set(FormatterFactory.list_keys()) == {Encoding.PLAIN, Encoding.UPPER}

    def test_register_returns_original_class(self):
        """
        GIVEN the @register decorator
        WHEN applied to a class
        THEN the class itself is returned unchanged
        """
        assert FormatterFactory.get(Encoding.PLAIN) is PlainFormatter
        assert PlainFormatter.__name__ == "PlainFormatter"

    def test_registries_are_isolated_per_subclass(self):
        class OtherFactory(TypeAbstractFactory[str, object]):
            pass

        @OtherFactory.register("x")
        class X:
            pass

        assert OtherFactory.list_keys() == ["x"]
        assert "x" not in FormatterFactory.list_keys()
        assert "x" not in AuthenticatorFactory.list_keys()

    def test_library_factories_are_populated(self):
        assert set(AuthenticatorFactory.list_keys()) == {AuthType.NONE, AuthType.BASIC, AuthType.BEARER}
        assert len(TransportEngineFactory.list_keys()) == 1


@pytest.mark.unit
@pytest.mark.core
class TestTypeAbstractFactoryCreation:

    def test_create_passes_kwargs(self):
        formatter = FormatterFactory.create(Encoding.PLAIN, prefix="> ")

        assert formatter.render("hi") == "> hi"

    def test_create_accepts_enum_value(self):
        assert FormatterFactory.create(Encoding("upper")).render("hi") == "HI"

    def test_unknown_key_raises_keyerror(self):
        """
        GIVEN a key without a registered implementation
        WHEN get or create is called
        THEN KeyError names the factory and the key
        """
        class EmptyFactory(TypeAbstractFactory[str, object]):
            pass

        with pytest.raises(KeyError, match="EmptyFactory"):
            EmptyFactory.create("missing")

    def test_unknown_key_lists_known_keys(self):
        with pytest.raises(KeyError, match=r"known: <Encoding\.PLAIN"):
            FormatterFactory.get("missing")


@pytest.mark.unit
@pytest.mark.core
class TestTypeAbstractFactoryConflicts:

    def test_claiming_a_taken_key_raises(self):
        """
        GIVEN a key already mapped to one implementation
        WHEN a different class registers under the same key
        THEN ValueError names the factory and the current implementation
        """
        with pytest.raises(ValueError, match="FormatterFactory already maps .* to PlainFormatter"):
            @FormatterFactory.register(Encoding.PLAIN)
            class ShadowFormatter:
                pass

        assert FormatterFactory.get(Encoding.PLAIN) is PlainFormatter

    def test_replace_overrides_existing_key(self):
        class LocalFactory(TypeAbstractFactory[str, object]):
            pass

        @LocalFactory.register("k")
        class First:
            pass

        @LocalFactory.register("k", replace=True)
        class Second:
            pass

        assert LocalFactory.get("k") is Second
        assert LocalFactory.list_keys() == ["k"]

    def test_registering_same_class_twice_is_allowed(self):
        class LocalFactory(TypeAbstractFactory[str, object]):
            pass

        class Impl:
            pass

        LocalFactory.register("k")(Impl)
        LocalFactory.register("k")(Impl)

        assert LocalFactory.get("k") is Impl
