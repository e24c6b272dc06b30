from typing import Generic, TypeVar


T = TypeVar("T")


class TagStack(Generic[T]):
    """A stack holding the nested values of a single style attribute.

    Opening a tag pushes a new value, closing it pops back to the value that
    was current before. Popping more often than pushing is a no-op, so
    unbalanced close tags can never underflow the stack.

    Parameters
    ----------
    default : T
        The value that is current when nothing has been pushed.

    """

    __slots__ = ["_default", "_current", "_stack"]

    def __init__(self, default: T):
        self._default = default
        self._current = default
        self._stack = []

    def __repr__(self):
        return f"<TagStack current={self._current!r} depth={len(self._stack)}>"

    def __len__(self):
        return len(self._stack)

    @property
    def current(self) -> T:
        """The value that is currently in effect."""
        return self._current

    @property
    def default(self) -> T:
        """The value that is current when the stack is empty."""
        return self._default

    def push(self, value: T) -> T:
        """Make ``value`` the current value, remembering the previous one."""
        self._stack.append(self._current)
        self._current = value
        return value

    def pop(self) -> T:
        """Restore the previous value and return it."""
        if self._stack:
            self._current = self._stack.pop()
        return self._current

    def reset(self, default: T = None):
        """Clear the stack. If ``default`` is given it becomes the new default."""
        if default is not None:
            self._default = default
        self._stack.clear()
        self._current = self._default


class AttributeStacks:
    """The collection of attribute stacks and toggle counters used by the
    built-in tag handlers. One instance belongs to one parser, and is reset
    at the start of every parse.
    """

    # Toggles are reference counted: repeated opens are additive
    TOGGLES = ("bold", "italic", "underline", "strikethrough")

    def __init__(self):
        self.color = TagStack(0xFFFFFF)
        self.alpha = TagStack(1.0)
        self.size = TagStack(32.0)
        self.italic_angle = TagStack(0.0)
        self.underline_color = TagStack(-1)
        self.strikethrough_color = TagStack(-1)
        self.mark = TagStack(0)
        self.mark_padding = TagStack(())
        self.cspace = TagStack(0.0)
        self.mspace = TagStack(0.0)
        self.nobr = TagStack(False)
        self.align = TagStack("")
        self.voffset = TagStack(0.0)
        self.indent = TagStack(0.0)
        self.margin = TagStack((0.0, 0.0))
        self.line_height = TagStack(0.0)
        self.line_indent = TagStack(0.0)
        self.all_caps = TagStack(False)
        self.lowercase = TagStack(False)
        self.small_caps = TagStack(False)
        self.superscript = TagStack(False)
        self.subscript = TagStack(False)
        self.link = TagStack((False, ""))
        self.font = TagStack("")
        self.font_weight = TagStack("")
        self.material = TagStack("")
        self.font_material = TagStack(False)
        self.char_scale = TagStack(1.0)
        self.rotation = TagStack(0.0)
        self.gradient = TagStack(())
        self.width = TagStack(0.0)
        self.style_name = TagStack("")
        self.counters = dict.fromkeys(self.TOGGLES, 0)

    def stacks(self):
        """Iterate over all the attribute stacks."""
        return (v for v in vars(self).values() if isinstance(v, TagStack))

    def reset(self, font_size, color, font_family):
        """Clear all stacks, using the given base values for size, color and font."""
        for stack in self.stacks():
            stack.reset()
        self.size.reset(font_size)
        self.color.reset(color)
        self.font.reset(font_family)
        for key in self.counters:
            self.counters[key] = 0

    def increment(self, toggle):
        """Increment a toggle counter, returns whether the toggle is on."""
        self.counters[toggle] += 1
        return True

    def decrement(self, toggle):
        """Decrement a toggle counter (clamped at zero), returns whether the toggle is still on."""
        self.counters[toggle] = max(0, self.counters[toggle] - 1)
        return self.counters[toggle] > 0
