"""Headless page model the client controllers read from and render into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

FOCUSABLE_SELECTOR = 'button, [href], input, select, textarea, [tabindex]:not([tabindex="-1"])'


@dataclass
class KeyEvent:
    """Keyboard event dispatched to the client application."""

    key: str
    shift: bool = False
    target: Optional[Tag] = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


def index_of(elements: Iterable[Tag], target: Optional[Tag]) -> int:
    """Position of *target* in *elements* by identity (``Tag.__eq__`` compares markup)."""

    if target is None:
        return -1
    for position, element in enumerate(elements):
        if element is target:
            return position
    return -1


class Document:
    """A parsed HTML page with focus, visibility and form-value helpers."""

    def __init__(self, markup: str) -> None:
        self._soup = BeautifulSoup(markup, "html.parser")
        self.active_element: Optional[Tag] = None

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    @property
    def body(self) -> Tag:
        return self._soup.body or self._soup

    def html(self) -> str:
        return str(self._soup)

    def query(self, selector: str, context: Optional[Tag] = None) -> Optional[Tag]:
        root = context if context is not None else self._soup
        return root.select_one(selector)

    def query_all(self, selector: str, context: Optional[Tag] = None) -> list[Tag]:
        root = context if context is not None else self._soup
        return list(root.select(selector))

    def contains(self, element: Optional[Tag]) -> bool:
        """Return ``True`` when *element* is still attached to this page."""

        if element is None:
            return False
        return any(parent is self._soup for parent in element.parents)

    def set_inner_html(self, target: Tag, markup: str) -> None:
        """Replace the children of *target* with the parsed *markup*."""

        target.clear()
        fragment = BeautifulSoup(markup, "html.parser")
        for node in list(fragment.contents):
            target.append(node.extract())
        if self.active_element is not None and not self.contains(self.active_element):
            self.active_element = None

    def set_text(self, target: Tag, text: str) -> None:
        target.string = text

    def text_of(self, selector: str) -> str:
        element = self.query(selector)
        return element.get_text(" ", strip=True) if element is not None else ""

    @staticmethod
    def show(element: Optional[Tag]) -> None:
        if element is not None and element.has_attr("hidden"):
            del element["hidden"]

    @staticmethod
    def hide(element: Optional[Tag]) -> None:
        if element is not None:
            element["hidden"] = ""

    @staticmethod
    def is_hidden(element: Optional[Tag]) -> bool:
        return element is None or element.has_attr("hidden")

    @staticmethod
    def has_class(element: Tag, name: str) -> bool:
        return name in (element.get("class") or [])

    @staticmethod
    def add_class(element: Tag, name: str) -> None:
        classes = list(element.get("class") or [])
        if name not in classes:
            classes.append(name)
        element["class"] = classes

    @staticmethod
    def remove_class(element: Tag, name: str) -> None:
        classes = [value for value in (element.get("class") or []) if value != name]
        if classes:
            element["class"] = classes
        elif element.has_attr("class"):
            del element["class"]

    def toggle_class(self, element: Tag, name: str) -> bool:
        """Flip *name* on *element* and return whether it is now present."""

        if self.has_class(element, name):
            self.remove_class(element, name)
            return False
        self.add_class(element, name)
        return True

    def lock_scroll(self) -> None:
        self.body["style"] = "overflow: hidden"

    def unlock_scroll(self) -> None:
        if self.body.has_attr("style"):
            del self.body["style"]

    @property
    def scroll_locked(self) -> bool:
        return "overflow: hidden" in (self.body.get("style") or "")

    def value(self, selector: str) -> str:
        element = self.query(selector)
        if element is None:
            return ""
        return self.element_value(element)

    @staticmethod
    def element_value(element: Tag) -> str:
        if element.name == "select":
            options = element.find_all("option")
            if not options:
                return ""
            chosen = next((option for option in options if option.has_attr("selected")), options[0])
            return chosen.get("value", chosen.get_text())
        if element.name == "textarea":
            return element.get_text()
        return element.get("value", "")

    def set_value(self, selector: str, value: str) -> None:
        element = self.query(selector)
        if element is None:
            return
        self.set_element_value(element, value)

    @staticmethod
    def set_element_value(element: Tag, value: str) -> None:
        if element.name == "select":
            for option in element.find_all("option"):
                if option.get("value", option.get_text()) == value:
                    option["selected"] = ""
                elif option.has_attr("selected"):
                    del option["selected"]
        elif element.name == "textarea":
            element.string = value
        else:
            element["value"] = value

    def reset_form(self, form: Tag) -> None:
        for field in form.select("input, textarea, select"):
            if field.name == "select":
                options = field.find_all("option")
                self.set_element_value(field, options[0].get("value", "") if options else "")
            else:
                self.set_element_value(field, "")

    def focus(self, element: Optional[Tag]) -> None:
        if element is not None and self.contains(element):
            self.active_element = element

    def blur(self) -> None:
        self.active_element = None

    def focusable_elements(self, context: Optional[Tag] = None) -> list[Tag]:
        return [
            element
            for element in self.query_all(FOCUSABLE_SELECTOR, context)
            if not element.has_attr("disabled")
        ]

    def move_focus(self, backward: bool = False) -> Optional[Tag]:
        """Default Tab behaviour: step to the next/previous focusable element in page order."""

        elements = self.focusable_elements()
        if not elements:
            return None
        position = index_of(elements, self.active_element)
        if position == -1:
            target = elements[-1] if backward else elements[0]
        else:
            step = -1 if backward else 1
            target = elements[(position + step) % len(elements)]
        self.active_element = target
        return target


__all__ = ["Document", "FOCUSABLE_SELECTOR", "KeyEvent", "index_of"]
