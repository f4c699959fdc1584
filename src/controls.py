"""
keyboard and swipe input -> move direction
"""
import pygame


SWIPE_THRESHOLD = 30  # pixels along the dominant axis

KEY_DIRECTIONS = {
    pygame.K_UP: 'up',
    pygame.K_DOWN: 'down',
    pygame.K_LEFT: 'left',
    pygame.K_RIGHT: 'right',
    pygame.K_w: 'up',
    pygame.K_s: 'down',
    pygame.K_a: 'left',
    pygame.K_d: 'right',
}

CHAR_DIRECTIONS = {
    'w': 'up',
    's': 'down',
    'a': 'left',
    'd': 'right',
}


def direction_from_key(key, unicode=''):
    """
    map a key press to a direction

    arrow keys and WASD (any case). returns None for anything else,
    which the caller simply ignores.
    """
    if key in KEY_DIRECTIONS:
        return KEY_DIRECTIONS[key]
    return CHAR_DIRECTIONS.get(unicode.lower()) if unicode else None


def direction_from_swipe(start, end, threshold=SWIPE_THRESHOLD):
    """
    classify a drag from start to end (screen coords, y grows downward)

    the dominant axis wins, ties go horizontal. a swipe shorter than
    threshold along that axis returns None.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]

    if abs(dx) >= abs(dy):
        if abs(dx) < threshold:
            return None
        return 'right' if dx > 0 else 'left'

    if abs(dy) < threshold:
        return None
    return 'down' if dy > 0 else 'up'
