from ..utils.color import lerp_color_int


def apply_gradients(chars):
    """Interpolate the color across runs of records that share a gradient.

    A run is a sequence of consecutive records with the same (non-empty)
    endpoint pair. The first record gets the start color and the last the end
    color; a run of one record gets the start color.
    """
    start = -1
    colors = ()
    for i in range(len(chars) + 1):
        current = chars[i].gradient_colors if i < len(chars) else ()
        if start >= 0 and current != colors:
            _interpolate(chars, start, i - 1, colors)
            start = -1
        if len(current) >= 2 and start < 0:
            start = i
            colors = current
    return chars


def _interpolate(chars, start, end, colors):
    count = end - start
    if count <= 0:
        chars[start].color = colors[0]
        return
    for i in range(start, end + 1):
        chars[i].color = lerp_color_int(colors[0], colors[1], (i - start) / count)
