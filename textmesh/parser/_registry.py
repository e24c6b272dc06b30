from collections import namedtuple


FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193


def hash_tag_name(name):
    """Compute the 32-bit FNV-1a hash of a tag name.

    The hash is computed over the UTF-16 code units of the string, so that
    hashes are stable across implementations of the tag grammar.
    """
    h = FNV_OFFSET_BASIS
    data = name.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * FNV_PRIME) & 0xFFFFFFFF
    return h


TagEntry = namedtuple("TagEntry", ["name", "on_open", "on_close"])
TagEntry.__doc__ = """A registered tag: its lowercase name and its open and close handlers.

The open handler is called as ``on_open(state, value, base_font_size)``, the
close handler as ``on_close(state)``.
"""


class TagRegistry:
    """The dispatch table that maps tag names to their handlers.

    Tags are keyed by the FNV-1a hash of their lowercase name. Registering a
    name that already exists replaces its handlers, which is how built-in tags
    can be overridden.
    """

    def __init__(self):
        self._tags = {}

    def __len__(self):
        return len(self._tags)

    def __contains__(self, name):
        return self.has(name)

    def __iter__(self):
        return iter(sorted(entry.name for entry in self._tags.values()))

    def register(self, name, on_open, on_close):
        """Register the open and close handlers for a tag."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Tag name must be a non-empty string, got {name!r}.")
        if not (callable(on_open) and callable(on_close)):
            raise TypeError("Tag handlers must be callable.")
        name = name.strip().lower()
        self._tags[hash_tag_name(name)] = TagEntry(name, on_open, on_close)

    def unregister(self, name):
        """Remove a tag. Returns whether it was registered."""
        entry = self.get_by_name(name)
        if entry is None:
            return False
        del self._tags[hash_tag_name(entry.name)]
        return True

    def get_by_hash(self, tag_hash, name=None):
        """Get the entry for a hashed lowercase name, or None.

        If ``name`` is given, an entry registered under another name with the
        same hash is not returned.
        """
        entry = self._tags.get(tag_hash)
        if entry is not None and name is not None and entry.name != name:
            return None
        return entry

    def get_by_name(self, name):
        """Get the entry for a name (case insensitive), or None."""
        name = name.lower()
        entry = self._tags.get(hash_tag_name(name))
        if entry is not None and entry.name != name:
            return None
        return entry

    def has(self, name):
        """Get whether a tag with the given name is registered."""
        return self.get_by_name(name) is not None
