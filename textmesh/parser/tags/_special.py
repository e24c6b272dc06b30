from ._base import noop


NBSP = "\u00A0"
ZWSP = "\u200B"
SOFT_HYPHEN = "\u00AD"
EN_SPACE = "\u2002"
EM_SPACE = "\u2003"
ZWJ = "\u200D"
OBJECT_REPLACEMENT = "\uFFFC"

# Tags the parser handles itself because they emit a record or only affect
# the next one. Registering them lets stray closers like </br> be consumed.
STRUCTURAL_TAGS = {
    "br": "\n",
    "nbsp": NBSP,
    "zwsp": ZWSP,
    "softhyphen": SOFT_HYPHEN,
    "shy": SOFT_HYPHEN,
    "en-space": EN_SPACE,
    "em-space": EM_SPACE,
    "cr": "\r",
    "zwj": ZWJ,
}

PARSER_TAGS = ("space", "pos", "sprite", "noparse", "style")


def register_special_tags(registry):
    for name in STRUCTURAL_TAGS:
        registry.register(name, noop, noop)
    for name in PARSER_TAGS:
        registry.register(name, noop, noop)
