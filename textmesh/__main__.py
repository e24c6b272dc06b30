"""A very tiny CLI.

Invoke using e.g. ``python -m textmesh version``, or
``python -m textmesh layout "Hello <b>World</b>"``.
"""

import sys
import argparse

import textmesh


def print_layout(text, width):
    style = textmesh.TextStyle(word_wrap=width > 0, word_wrap_width=width or 400)
    rich_text = textmesh.RichText(text, style=style)
    info = rich_text.text_info
    print(f"{info.character_count} characters, {info.line_count} lines")
    print(f"size: {info.width:g} x {info.height:g}")
    for i, line in enumerate(info.line_info):
        chars = info.character_info[line.first_char_index : line.last_char_index + 1]
        content = "".join(ci.char for ci in chars)
        print(f"  {i}: y={line.y:g} width={line.width:g} {content!r}")
    rich_text.release()


def main(argv=None):
    # Get argv so we can massage it
    if argv is None:
        argv = sys.argv
    if argv and argv[0].endswith(".py"):
        argv = argv[1:]

    # Defaults and aliases
    if not argv:
        argv = ["help"]
    if argv == ["--version"]:
        argv = ["version"]

    # Let the rest to argparse

    parser = argparse.ArgumentParser(
        prog="textmesh",
        description="The (very basic) textmesh CLI",
    )

    parser.add_argument(
        "command",
        action="store",
        help="The command to run: 'help', 'version', 'tags' or 'layout'",
    )
    parser.add_argument(
        "text", action="store", nargs="?", default="", help="The text to lay out"
    )
    parser.add_argument(
        "--width",
        type=float,
        default=0,
        help="The word wrap width for 'layout'. Default no wrapping.",
    )

    args = parser.parse_args(argv)
    command = args.command.lower()

    if command == "help":
        parser.print_help()
    elif command == "version":
        print("textmesh v" + textmesh.__version__)
    elif command == "tags":
        for name in textmesh.RichTextParser().registry:
            print(name)
    elif command == "layout":
        print_layout(args.text, args.width)
    else:
        print(f"Invalid command '{command}'")


if __name__ == "__main__":
    main()
