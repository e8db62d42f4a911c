"""Mapping from text object keys to their inner/outer resolvers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, Mapping, MutableMapping, Protocol

from .core.patterns import BRACKET_MATH_CANDIDATES, DOLLAR_MATH_CANDIDATES, QUOTE_CANDIDATES
from .core.requests import SelectionRequest
from .core.spans import Span
from .documents.snapshot import DocumentSnapshot
from .errors import UnknownObjectError
from .resolvers import BlockSelector, EnvironmentResolver, MacroResolver

LOGGER = logging.getLogger(__name__)

Resolver = Callable[[DocumentSnapshot, SelectionRequest], Span]


class TextObjectKind(str, Enum):
    """Text object kinds and their default keys."""

    QUOTE = "quote"
    DOLLAR_MATH = "dollar_math"
    BRACKET_MATH = "bracket_math"
    MACRO = "macro"
    ENVIRONMENT = "environment"

    @property
    def default_key(self) -> str:
        return _DEFAULT_KEYS[self]


_DEFAULT_KEYS: dict[TextObjectKind, str] = {
    TextObjectKind.QUOTE: '"',
    TextObjectKind.DOLLAR_MATH: "$",
    TextObjectKind.BRACKET_MATH: "\\",
    TextObjectKind.MACRO: "m",
    TextObjectKind.ENVIRONMENT: "e",
}


class TextObjectResolver(Protocol):
    """Anything able to resolve a request, honouring ``include_delimiters``."""

    def resolve(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        ...


@dataclass(slots=True, frozen=True)
class TextObjectBinding:
    """Pairs a key with the resolver serving both of its selection variants."""

    key: str
    kind: TextObjectKind
    resolver: TextObjectResolver

    def inner(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        _validate_request(document, request)
        return self.resolver.resolve(document, request.with_delimiters(False))

    def outer(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        _validate_request(document, request)
        return self.resolver.resolve(document, request.with_delimiters(True))


def _validate_request(document: DocumentSnapshot, request: SelectionRequest) -> None:
    document.validate_offset(request.cursor)
    if request.bounds is not None:
        document.validate_span(request.bounds)


class TextObjectRegistry:
    """Ordered collection of :class:`TextObjectBinding` entries keyed by key."""

    def __init__(self, bindings: Iterable[TextObjectBinding] = ()) -> None:
        self._bindings: dict[str, TextObjectBinding] = {}
        for binding in bindings:
            self.register(binding)

    def register(self, binding: TextObjectBinding) -> None:
        existing = self._bindings.get(binding.key)
        if existing is not None and existing.kind is not binding.kind:
            raise ValueError(
                f"Key {binding.key!r} is already bound to {existing.kind.value}"
            )
        self._bindings[binding.key] = binding

    def get(self, key: str) -> TextObjectBinding:
        try:
            return self._bindings[key]
        except KeyError:
            raise UnknownObjectError(message=f"No text object bound to {key!r}", key=key) from None

    def binding_for(self, kind: TextObjectKind | str) -> TextObjectBinding:
        target = TextObjectKind(kind)
        for binding in self._bindings.values():
            if binding.kind is target:
                return binding
        raise UnknownObjectError(message=f"No binding registered for {target.value}", key=target.value)

    def keys(self) -> list[str]:
        return list(self._bindings)

    def __iter__(self) -> Iterator[TextObjectBinding]:
        return iter(list(self._bindings.values()))

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, key: object) -> bool:
        return key in self._bindings


def build_default_registry(key_overrides: Mapping[str, str] | None = None) -> TextObjectRegistry:
    """Return a registry with the five LaTeX text objects.

    ``key_overrides`` maps a kind name (``"macro"``) to the key to use instead
    of the default one.
    """

    overrides = _normalize_overrides(key_overrides or {})
    resolvers: dict[TextObjectKind, TextObjectResolver] = {
        TextObjectKind.QUOTE: BlockSelector(TextObjectKind.QUOTE.value, QUOTE_CANDIDATES),
        TextObjectKind.DOLLAR_MATH: BlockSelector(TextObjectKind.DOLLAR_MATH.value, DOLLAR_MATH_CANDIDATES),
        TextObjectKind.BRACKET_MATH: BlockSelector(TextObjectKind.BRACKET_MATH.value, BRACKET_MATH_CANDIDATES),
        TextObjectKind.MACRO: MacroResolver(),
        TextObjectKind.ENVIRONMENT: EnvironmentResolver(),
    }
    return TextObjectRegistry(
        [
            TextObjectBinding(key=overrides.get(kind, kind.default_key), kind=kind, resolver=resolver)
            for kind, resolver in resolvers.items()
        ]
    )


def install_text_objects(
    registry: TextObjectRegistry,
    inner_map: MutableMapping[str, Resolver],
    outer_map: MutableMapping[str, Resolver],
) -> None:
    """Write every binding's inner/outer resolver into the caller's maps.

    Re-installing overwrites the previous entries for the same keys.
    """

    for binding in registry:
        inner_map[binding.key] = binding.inner
        outer_map[binding.key] = binding.outer
    LOGGER.debug("Installed %d text object bindings: %s", len(registry), ", ".join(registry.keys()))


def _normalize_overrides(overrides: Mapping[str, str]) -> dict[TextObjectKind, str]:
    normalized: dict[TextObjectKind, str] = {}
    for name, key in overrides.items():
        try:
            kind = TextObjectKind(name)
        except ValueError:
            LOGGER.warning("Ignoring key override for unknown text object %r", name)
            continue
        if not isinstance(key, str) or not key:
            LOGGER.warning("Ignoring empty key override for %s", kind.value)
            continue
        normalized[kind] = key
    return normalized


__all__ = [
    "Resolver",
    "TextObjectBinding",
    "TextObjectKind",
    "TextObjectRegistry",
    "TextObjectResolver",
    "build_default_registry",
    "install_text_objects",
]
