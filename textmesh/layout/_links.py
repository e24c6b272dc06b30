from ._records import LinkInfo, Rect


def build_link_info(parsed, chars, lines):
    """Group consecutive characters with the same link id into link regions.

    A region gets one rect per line that it spans. The link id of a
    character is looked up in the parsed records, via ``CharacterInfo.index``.
    """
    links = []
    current_id = ""
    start = -1

    for i, ci in enumerate(chars):
        pc = parsed[ci.index] if 0 <= ci.index < len(parsed) else None
        link_id = pc.link_id if pc is not None and pc.is_link else ""
        if link_id != current_id:
            if current_id:
                links.append(_create_link_info(current_id, start, i - 1, chars, lines))
            current_id = link_id
            start = i if link_id else -1

    if current_id:
        links.append(_create_link_info(current_id, start, len(chars) - 1, chars, lines))
    return links


def _create_link_info(link_id, first_index, last_index, chars, lines):
    rects = []
    line_start = first_index
    for i in range(first_index, last_index + 1):
        if i == last_index or chars[i + 1].line_index != chars[i].line_index:
            first, last = chars[line_start], chars[i]
            line_index = first.line_index
            if line_index < len(lines):
                y, height = lines[line_index].y, lines[line_index].height
            else:
                y, height = first.y, first.height
            rects.append(Rect(first.x, y, (last.x + last.width) - first.x, height))
            line_start = i + 1
    return LinkInfo(link_id, first_index, last_index, rects)
