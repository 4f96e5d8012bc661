"""Structural types for the objects handed over by the site generator.

The generator is an external collaborator; only the fields the engine reads
or writes are declared here.
"""
from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, Union


class PlaybookLike(Protocol):
    """Build configuration known after phase 1."""

    @property
    def output_dir(self) -> Optional[str]: ...

    @property
    def start_page(self) -> Optional[str]: ...


class VersionLike(Protocol):
    """Version descriptor of a component."""

    @property
    def version(self) -> str: ...

    @property
    def prerelease(self) -> Optional[Union[bool, str]]: ...


class ComponentLike(Protocol):
    """Classified documentation component."""

    @property
    def name(self) -> str: ...

    @property
    def versions(self) -> Sequence[VersionLike]: ...


class DocumentSourceLike(Protocol):
    """Origin metadata of a document."""

    @property
    def path(self) -> str: ...

    @property
    def component(self) -> str: ...

    @property
    def basename(self) -> str: ...

    @property
    def media_type(self) -> str: ...


class DocumentLike(Protocol):
    """A text document whose contents may be replaced before serialization."""

    src: DocumentSourceLike
    contents: Optional[Union[str, bytes]]


class ContentCatalogLike(Protocol):
    """Content index available from phase 2 onwards."""

    def get_components(self) -> Iterable[ComponentLike]: ...

    def find_by(self, media_type: str) -> Iterable[DocumentLike]: ...
