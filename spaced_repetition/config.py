DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
EASE_PRECISION = 10      # decimals kept after each ease update; strips float noise only
MAX_OWNER_ID_LENGTH = 64
MAX_SOURCE_REF_LENGTH = 255
PASSING_QUALITY = 3      # quality below this resets the streak
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
LEARNED_REPETITIONS = 3  # consecutive successes for a card to count as learned
