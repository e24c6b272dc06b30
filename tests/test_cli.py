import textmesh
from textmesh.__main__ import main


def test_version(capsys):
    main(["version"])
    assert capsys.readouterr().out.strip() == "textmesh v" + textmesh.__version__
    main(["--version"])
    assert textmesh.__version__ in capsys.readouterr().out


def test_help(capsys):
    main([])
    assert "usage" in capsys.readouterr().out.lower()


def test_tags(capsys):
    main(["tags"])
    names = capsys.readouterr().out.split()
    for name in ["b", "color", "gradient", "link", "sprite", "style"]:
        assert name in names
    assert names == sorted(names)


def test_layout(capsys):
    main(["layout", "Hello World", "--width", "60"])
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == "11 characters, 2 lines"
    assert lines[1] == "size: 50 x 90"
    assert lines[2] == "  0: y=0 width=50 'Hello '"
    assert lines[3] == "  1: y=50 width=50 'World'"


def test_invalid_command(capsys):
    main(["frobnicate"])
    assert "Invalid command" in capsys.readouterr().out
