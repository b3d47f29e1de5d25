def check_collision(a, b, margin=1):
    """Axis-aligned overlap of two dicts with x, y, width, height.

    `margin` is shaved off each side of `a` so edge-grazing contact does not count.
    """
    return (
        a['x'] + margin < b['x'] + b['width']
        and a['x'] + a['width'] - margin > b['x']
        and a['y'] + margin < b['y'] + b['height']
        and a['y'] + a['height'] - margin > b['y']
    )
