GRID_SIZE = 7
COLOR_COUNT = 4

# Shortest run that counts as a match; exactly ROCKET_RUN_LENGTH spawns a rocket.
MIN_RUN_LENGTH = 3
ROCKET_RUN_LENGTH = 4
# Components strictly larger than this spawn a bomb.
BOMB_COMPONENT_THRESHOLD = 4
# Chebyshev radius of a bomb blast (5x5 block).
BOMB_RADIUS = 2

POINTS_PER_CELL = 10
POINTS_PER_COMBO_STEP = 20

# Turn clock, in seconds of game time fed through tick events.
TURN_SECONDS = 7.0
HINT_THRESHOLD_SECONDS = 3.0

# Uniform sampling retries before the board generator falls back to a constructive layout.
GENERATOR_MAX_ATTEMPTS = 10_000
CONSTRUCTIVE_MAX_ATTEMPTS = 200
