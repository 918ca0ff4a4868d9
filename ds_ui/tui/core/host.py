"""Host runtime primitives consumed by interactive components.

The host owns what a rendering framework normally provides: mutable state
cells that mark the host dirty, effects that re-subscribe when their
dependencies change, a tiny element tree with listeners, and a synchronous
dispatch loop with focus tracking. Components never talk to prompt_toolkit
directly; screens translate terminal input into host calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Protocol, Sequence, TypeVar

from ds_common.errors import HostError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Listener = Callable[["UIEvent"], None]
Cleanup = Callable[[], None]

BUBBLING_EVENTS = frozenset({"click", "blur", "keydown"})
MAX_COMMIT_ROUNDS = 25

_VALUE_TYPES = (str, int, float, bool, bytes)

KEY_ALIASES: dict[str, str] = {
    "enter": "Enter",
    "space": "Space",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "escape": "Escape",
    "esc": "Escape",
}


def normalize_key(name: str) -> str:
    """Map terminal-style key names (``up``, ``esc``) to event key names."""
    return KEY_ALIASES.get(name.strip().lower(), name.strip())


def same_value(left: Any, right: Any) -> bool:
    """Identity comparison, relaxed to equality for plain scalar values."""
    if left is right:
        return True
    if type(left) is type(right) and isinstance(left, _VALUE_TYPES):
        return left == right
    return False


class StateCell(Generic[T]):
    """A mutable value that notifies its owner when it changes."""

    def __init__(self, initial: T, on_change: Callable[[], None] | None = None) -> None:
        self._value = initial
        self._on_change = on_change

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T | Callable[[T], T]) -> None:
        """Store a new value; callables receive the previous value."""
        new_value = value(self._value) if callable(value) else value
        if same_value(new_value, self._value):
            return
        self._value = new_value
        if self._on_change is not None:
            self._on_change()


class Effect:
    """Scoped subscription re-acquired whenever its dependencies change.

    ``setup`` runs on the first ``sync`` and again after any dependency
    changes; the cleanup it returned last time always runs first.
    """

    def __init__(self, setup: Callable[[], Cleanup | None]) -> None:
        self._setup = setup
        self._deps: tuple[Any, ...] | None = None
        self._cleanup: Cleanup | None = None

    @property
    def active(self) -> bool:
        return self._deps is not None

    def sync(self, deps: Sequence[Any]) -> bool:
        new_deps = tuple(deps)
        if self._deps is not None and len(new_deps) == len(self._deps):
            if all(same_value(a, b) for a, b in zip(new_deps, self._deps)):
                return False
        self.release()
        self._cleanup = self._setup()
        self._deps = new_deps
        return True

    def release(self) -> None:
        cleanup, self._cleanup = self._cleanup, None
        self._deps = None
        if cleanup is not None:
            cleanup()


class Element:
    """Node of the host element tree."""

    def __init__(
        self,
        name: str,
        *,
        classes: Sequence[str] = (),
        focusable: bool = False,
        data: Any = None,
    ) -> None:
        self.name = name
        self.classes = list(classes)
        self.focusable = focusable
        self.data = data
        self.parent: Element | None = None
        self.children: list[Element] = []
        self._listeners: dict[str, list[Listener]] = {}

    def __repr__(self) -> str:
        return f"Element({self.name!r})"

    def append(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def clear_children(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    def path(self) -> Iterator["Element"]:
        """Yield this element followed by its ancestors."""
        node: Element | None = self
        while node is not None:
            yield node
            node = node.parent

    def contains(self, other: "Element") -> bool:
        return any(node is self for node in other.path())

    def closest_focusable(self) -> "Element | None":
        for node in self.path():
            if node.focusable:
                return node
        return None

    def find(self, name: str) -> "Element | None":
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        registered = self._listeners.get(event_type, [])
        if listener in registered:
            registered.remove(listener)

    def listeners(self, event_type: str) -> list[Listener]:
        return list(self._listeners.get(event_type, ()))

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, ()))


class ElementRef:
    """Stable handle to a mounted element."""

    def __init__(self) -> None:
        self.current: Element | None = None


@dataclass
class UIEvent:
    type: str
    target: Element
    key: str | None = None
    current_target: Element | None = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class Component(Protocol):
    def mount(self, host: "Host") -> None: ...

    def commit(self) -> None: ...

    def unmount(self) -> None: ...


class Host:
    """Synchronous event loop: one event is fully handled before the next."""

    def __init__(self) -> None:
        self._components: list[Component] = []
        self._focused: Element | None = None
        self._dirty = False
        self._depth = 0

    @property
    def focused(self) -> Element | None:
        return self._focused

    @property
    def components(self) -> list[Component]:
        return list(self._components)

    def state(self, initial: T) -> StateCell[T]:
        return StateCell(initial, on_change=self.invalidate)

    def invalidate(self) -> None:
        self._dirty = True

    def request_commit(self) -> None:
        """Mark dirty and commit now unless an event is still being dispatched."""
        self._dirty = True
        if self._depth == 0:
            self.flush()

    def mount(self, component: Component) -> None:
        if any(existing is component for existing in self._components):
            raise HostError("Component is already mounted", context={"component": component})
        self._components.append(component)
        component.mount(self)
        component.commit()
        self.flush()

    def unmount(self, component: Component) -> None:
        if not any(existing is component for existing in self._components):
            raise HostError("Component is not mounted", context={"component": component})
        self._components = [c for c in self._components if c is not component]
        component.unmount()

    def flush(self) -> None:
        """Commit components until no state cell changed during the commit."""
        rounds = 0
        while self._dirty:
            self._dirty = False
            for component in list(self._components):
                component.commit()
            rounds += 1
            if rounds > MAX_COMMIT_ROUNDS:
                raise HostError("Commit loop did not settle", context={"rounds": rounds})

    def dispatch(self, event: UIEvent) -> UIEvent:
        if event.type in BUBBLING_EVENTS:
            route = list(event.target.path())
        else:
            route = [event.target]
        self._depth += 1
        try:
            for element in route:
                event.current_target = element
                for listener in element.listeners(event.type):
                    listener(event)
                if event.propagation_stopped:
                    break
        finally:
            event.current_target = None
            self._depth -= 1
        if self._depth == 0:
            self.flush()
        return event

    def focus(self, element: Element | None) -> None:
        previous = self._focused
        if previous is element:
            return
        self._focused = None
        if previous is not None:
            self.dispatch(UIEvent("blur", target=previous))
        self._focused = element

    def blur(self) -> None:
        self.focus(None)

    def press(self, key: str) -> UIEvent | None:
        if self._focused is None:
            logger.debug("Dropping key %s: nothing focused", key)
            return None
        return self.dispatch(UIEvent("keydown", target=self._focused, key=key))

    def click(self, element: Element) -> UIEvent:
        self.focus(element.closest_focusable())
        return self.dispatch(UIEvent("click", target=element))

    def hover(self, element: Element) -> UIEvent:
        return self.dispatch(UIEvent("mouseenter", target=element))
