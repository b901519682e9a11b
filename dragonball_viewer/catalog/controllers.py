"""
Per-screen state controllers for the catalogue views.

A controller owns the mutable view state of one screen (the character
list or a character's detail page), drives the data access facade in
``store.py`` and notifies subscribers every time that state changes so
a presentation layer can re-render.  Controllers are not shared between
screens and hold nothing once the screen goes away.

All entry points are coroutines run on a single event loop.  There is
no cancellation: two overlapping loads both complete and the one that
finishes last wins.  Only ``load_more`` refuses to start while another
load is in flight.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Awaitable, Callable, Iterator, List, Optional, Union

from ..config import load_settings
from . import store
from .schemas import Character

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

Listener = Callable[[Any], None]


@dataclass
class CharacterListState:
    """View state of the character list screen."""

    loading: bool = False
    error: str = ""
    characters: List[Character] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 1
    has_more: bool = False


@dataclass
class CharacterDetailState:
    """View state of the character detail screen."""

    loading: bool = False
    error: str = ""
    character: Optional[Character] = None


class _StateController:
    """Subscription and loading bookkeeping shared by both screens."""

    state: Any

    def __init__(self, backend: Any = None) -> None:
        # Anything exposing the coroutines of ``store`` will do.
        self._backend = backend if backend is not None else store
        self._listeners: List[Listener] = []
        self._last_action: Optional[Callable[[], Awaitable[None]]] = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self.state.loading = True
        self.state.error = ""
        try:
            self._publish()
            yield
        finally:
            self.state.loading = False
            self._publish()

    def _fail(self, exc: Exception) -> None:
        logger.error("%s failed: %s", type(self).__name__, exc)
        self.state.error = store.handle_api_error(exc)


class CharacterListController(_StateController):
    """Drives the paginated, searchable character list."""

    def __init__(
        self,
        backend: Any = None,
        page_size: Optional[int] = None,
        search_page_size: Optional[int] = None,
    ) -> None:
        super().__init__(backend)
        settings = load_settings()
        self.state = CharacterListState()
        self.page_size = page_size or settings.page_size
        self.search_page_size = search_page_size or settings.search_page_size
        self._activated = False

    async def activate(self) -> None:
        """Load the first page the first time the screen is shown."""
        if self._activated:
            return
        self._activated = True
        await self.load(1, replace=True)

    async def load(self, page: int = 1, replace: bool = True) -> None:
        """Fetch ``page`` and replace the list with it or append it.

        Appending keeps arrival order and does not de-duplicate.  On
        failure the list is left as it was and ``error`` is set.
        """
        self._last_action = partial(self.load, page, replace)
        with self._loading():
            try:
                result = await self._backend.list_characters(page, self.page_size)
            except Exception as exc:
                self._fail(exc)
                return
            if replace:
                self.state.characters = list(result.items)
            else:
                self.state.characters = self.state.characters + list(result.items)
            self.state.current_page = page
            self.state.total_pages = result.meta.total_pages
            self.state.has_more = page < result.meta.total_pages

    async def load_more(self) -> None:
        if self.state.loading or not self.state.has_more:
            return
        await self.load(self.state.current_page + 1, replace=False)

    async def search(self, name: str = "", race: str = "") -> None:
        """Replace the list with search results.

        Results are never paginated further, so ``has_more`` is cleared.
        """
        self._last_action = partial(self.search, name, race)
        with self._loading():
            try:
                result = await self._backend.search_characters(
                    name, race, 1, self.search_page_size
                )
            except Exception as exc:
                self._fail(exc)
                return
            self.state.characters = list(result.items)
            self.state.has_more = False

    async def retry(self) -> None:
        """Run the last operation again with the same arguments."""
        if self._last_action is None:
            await self.load(1, replace=True)
        else:
            await self._last_action()


class CharacterDetailController(_StateController):
    """Drives the detail view of a single character."""

    def __init__(self, backend: Any = None) -> None:
        super().__init__(backend)
        self.state = CharacterDetailState()
        self._character_id: Optional[Union[int, str]] = None

    async def activate(self, character_id: Union[int, str]) -> None:
        """Load the character named by the navigation context."""
        await self.load(character_id)

    async def load(self, character_id: Union[int, str]) -> None:
        # A failed load keeps whatever record was shown before.
        self._character_id = character_id
        with self._loading():
            try:
                character = await self._backend.get_character(character_id)
            except Exception as exc:
                self._fail(exc)
                return
            self.state.character = character

    async def retry(self) -> None:
        if self._character_id is not None:
            await self.load(self._character_id)
