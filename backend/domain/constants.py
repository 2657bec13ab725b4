"""
Game constants for the snake engine.
"""

# Movement commands (screen coordinates: y grows downwards)
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

DIRECTIONS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Game modes
CLASSIC = "classic"
WALLS = "walls"
SPEED = "speed"
PORTAL = "portal"
NO_DIE = "no-die"

# Game settings
GRID_SIZE = 20
CELL_SIZE = 20
START_POSITION = (10, 10)
START_DIRECTION = DIRECTIONS[RIGHT]

MOVE_INTERVAL_MS = 200
MIN_MOVE_INTERVAL_MS = 50
SPEED_FACTOR = 0.9

# Random draws before falling back to enumerating free cells
MAX_PLACEMENT_ATTEMPTS = 1000
