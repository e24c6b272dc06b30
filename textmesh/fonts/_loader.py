import os
import json

from ._font import FontAsset


FONT_DATA_EXTENSIONS = (".tmpfont.json", ".tmpfont")


def is_font_data_file(filename):
    """Get whether a filename has the extension of a font description file."""
    return str(filename).lower().endswith(FONT_DATA_EXTENSIONS)


def load_font_data(filename):
    """Load a `FontAsset` from a JSON font description (``.tmpfont.json``).

    The atlas page filenames in the ``pages`` field are made absolute,
    relative to the directory of the description file.
    """
    filename = os.fspath(filename)
    with open(filename, "rt", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or "info" not in data or "glyphs" not in data:
        raise ValueError(f"Not a font description file: {filename}")

    font = FontAsset.from_data(data)
    dirname = os.path.dirname(os.path.abspath(filename))
    font.pages = [os.path.join(dirname, page) for page in font.pages]
    return font
