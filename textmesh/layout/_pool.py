from ._records import CharacterInfo


class CharacterInfoPool:
    """A pool of `CharacterInfo` records, reused across layouts.

    Not thread safe.
    """

    def __init__(self):
        self._records = []

    def __len__(self):
        return len(self._records)

    def acquire(self):
        """Get a record from the pool, or a new one if the pool is empty.

        The fields of a reused record are not reset; the caller sets them.
        """
        if self._records:
            return self._records.pop()
        return CharacterInfo()

    def release(self, records):
        """Put records back into the pool."""
        for record in records:
            # Drop the reference to the atlas region
            record.glyph = None
            self._records.append(record)

    def clear(self):
        self._records.clear()


default_pool = CharacterInfoPool()
