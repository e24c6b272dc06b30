import sys
import subprocess

import textmesh


def run_code(code):
    p = subprocess.run(
        [sys.executable, "-c", code],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        universal_newlines=True,
    )
    return p.stdout.strip()


def test_no_layout_at_import():
    code = "import textmesh.layout; print(len(textmesh.layout.default_pool))"
    result = run_code(code)

    print(result)
    assert result.endswith("0")
    # If this fails, textmesh creates records at import-time somewhere,
    # which we don't want to do.


def test_log_level_from_env():
    code = "import os; os.environ['TEXTMESH_LOG_LEVEL'] = 'debug'; import textmesh; print(textmesh.logger.level)"
    result = run_code(code)
    assert result.endswith("10")


def test_public_names():
    for name in [
        "RichText",
        "TextStyle",
        "RichTextParser",
        "FontAsset",
        "LayoutEngine",
        "TextInfo",
        "SpriteRegistry",
        "StyleSheet",
        "Material",
        "TextAlignment",
        "Color",
    ]:
        assert hasattr(textmesh, name), name
    assert isinstance(textmesh.version_info, tuple)
