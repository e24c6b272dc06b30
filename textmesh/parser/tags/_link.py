import re


_href_pattern = re.compile(r"href\s*=\s*[\"']?([^\"'>\s]+)", re.IGNORECASE)


def register_link_tags(registry, stacks):
    """``<link="id">`` and ``<a href="url">``; the href is used as link id."""

    def set_link(state, link):
        state.is_link, state.link_id = link

    def open_link(state, value, base_font_size):
        set_link(state, stacks.link.push((True, value)))

    def open_anchor(state, value, base_font_size):
        match = _href_pattern.search(value)
        url = match.group(1) if match else value
        set_link(state, stacks.link.push((True, url)))

    def close_link(state):
        set_link(state, stacks.link.pop())

    registry.register("link", open_link, close_link)
    registry.register("a", open_anchor, close_link)
