from collections import defaultdict
from enum import Enum


class EventType(str, Enum):
    # A property of a style or text object changed
    UPDATE = "update"
    # Pointer interaction with a link region
    LINK_CLICK = "link_click"
    LINK_HOVER = "link_hover"
    LINK_LEAVE = "link_leave"


class Event:
    """Event base class.

    Parameters
    ----------
    type : Union[str, EventType]
        The name of the event.
    target : EventTarget
        The object onto which the event was dispatched.
    cancelled : bool
        A boolean value indicating whether the event is cancelled.

    """

    def __init__(self, type, *, target=None, **kwargs):
        self._type = type
        self._target = target
        self._cancelled = False
        for key, value in kwargs.items():
            setattr(self, key, value)

    @property
    def type(self) -> str:
        """A string representing the name of the event."""
        return self._type

    @property
    def target(self):
        """The target object of the event."""
        return self._target

    @property
    def cancelled(self) -> bool:
        """A boolean value indicating whether the event is cancelled."""
        return self._cancelled

    def cancel(self):
        """Cancels the event. Any remaining handlers are not called."""
        self._cancelled = True

    def __repr__(self):
        return f"<{self.__class__.__name__} '{self.type}'>"


class LinkEvent(Event):
    """An event for pointer interaction with a link region.

    Parameters
    ----------
    link_id : str
        The id of the link.
    link : LinkInfo
        The link region that was hit.
    x : float
        The local x coordinate of the pointer.
    y : float
        The local y coordinate of the pointer.

    """

    def __init__(self, type, link_id, link, x, y, **kwargs):
        super().__init__(type, **kwargs)
        self.link_id = link_id
        self.link = link
        self.x = x
        self.y = y


class EventTarget:
    """Targetable object mixin.

    Mixin class that enables event handlers to be attached to objects
    of the mixed-in class.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._event_handlers = defaultdict(list)

    def add_event_handler(self, *args):
        """Register an event handler.

        Arguments:
            callback (callable): The event handler. Must accept a
                single event argument.
            *types (list of strings): A list of event types.

        Can also be used as a decorator:

        .. code-block:: py

            @style.add_event_handler("update")
            def on_update(event):
                print(event)
        """

        decorating = not callable(args[0])
        callback = None if decorating else args[0]
        types = args if decorating else args[1:]

        if not types:
            raise ValueError("No types registered for callback")
        if not all(isinstance(t, str) for t in types):
            raise TypeError("All types must be string.")

        def decorator(_callback):
            for type in types:
                handlers = self._event_handlers[type]
                if _callback not in handlers:
                    handlers.append(_callback)
            return _callback

        if decorating:
            return decorator
        return decorator(callback)

    def remove_event_handler(self, callback, *types):
        """Unregister an event handler.

        Arguments:
            callback (callable): The event handler.
            *types (list of strings): A list of event types.
        """
        for type in types:
            self._event_handlers[type].remove(callback)

    def handle_event(self, event: Event):
        """Handle an incoming event.

        Errors raised by handlers are logged and do not propagate.
        """
        from . import log_exception

        event_type = event.type
        for callback in list(self._event_handlers[event_type]):
            if event.cancelled:
                break
            with log_exception(f"Error during handling {event_type} event"):
                callback(event)

    def dispatch_event(self, type, **kwargs):
        """Create an event targeted at this object and handle it."""
        event_class = LinkEvent if "link_id" in kwargs else Event
        event = event_class(type, target=self, **kwargs)
        self.handle_event(event)
        return event
