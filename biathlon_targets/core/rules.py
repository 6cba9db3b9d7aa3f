# Reglas del juego de los 5 blancos

TOTAL_TARGETS = 5
TOTAL_EXTRA_ROUNDS = 10            # Balas extra a repartir entre los 5 blancos
MAX_EXTRA_ROUNDS_PER_TARGET = TOTAL_EXTRA_ROUNDS
MAX_POSITION = 120

PRECISE_HIT_POINTS = 100
RANGE_HIT_POINTS = 50

# Predecir fuera del top 20 multiplica los puntos
MULTIPLIER_THRESHOLD = 20
MULTIPLIER = 1.5

TARGET_NUMBERS = list(range(1, TOTAL_TARGETS + 1))
