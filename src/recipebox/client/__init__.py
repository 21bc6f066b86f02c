"""Client-side search, favorites and dialog logic driving the recipebox pages."""

from recipebox.client.app import PAGES, ClientApp
from recipebox.client.cache import ResultCache
from recipebox.client.debounce import Debouncer
from recipebox.client.document import Document, KeyEvent
from recipebox.client.favorites import FavoritesStore
from recipebox.client.fetch import FetchAdapter, RecipeFetchError
from recipebox.client.modal import ModalController, ModalState
from recipebox.client.render import Renderer
from recipebox.client.search import SearchController

__all__ = [
    "ClientApp",
    "Debouncer",
    "Document",
    "FavoritesStore",
    "FetchAdapter",
    "KeyEvent",
    "ModalController",
    "ModalState",
    "PAGES",
    "RecipeFetchError",
    "Renderer",
    "ResultCache",
    "SearchController",
]
