# connect4/engine/constants.py

# --- Board Dimensions ---
# Row 0 is the TOP of the board, row ROWS - 1 the BOTTOM.
ROWS = 6
COLS = 7
CONNECT = 4
CENTER_COL = COLS // 2

# --- Cell Values ---
EMPTY = 0
PLAYER = 1
AI = 2

# --- Optimization ---
# Search center columns first to maximize Alpha-Beta pruning efficiency
MOVE_ORDER = sorted(range(COLS), key=lambda c: (abs(c - CENTER_COL), c))

# --- Static Evaluation Weights ---
SCORE_WIN = 100_000
SCORE_THREE = 5
SCORE_TWO = 2
SCORE_OPP_THREE = -4
SCORE_CENTER = 3

# Terminal scores dwarf any heuristic sum.
# Logic: Score = -(WIN_SCORE + depth remaining), so faster wins score higher.
WIN_SCORE = SCORE_WIN * 100
INFINITY = 1_000_000_000

# --- Victor Allis Rule Weights ---
VICTOR_CLAIMEVEN_3 = 12
VICTOR_CLAIMEVEN_2 = 4
VICTOR_CLAIMEVEN_1 = 1
VICTOR_BASEINVERSE = 3
VICTOR_VERTICAL_3 = 8
VICTOR_VERTICAL_2 = 2
VICTOR_BEFORE_3 = 10
VICTOR_BEFORE_2 = 3
VICTOR_AFTEREVEN_3 = 20
VICTOR_AFTEREVEN_2 = 6
VICTOR_LOWINVERSE = 4

# --- Opening Book ---
# Beyond this many pieces the book doesn't cover the position
OPENING_BOOK_MAX_PIECES = 6

# --- Hashing / Caching ---
ZOBRIST_SEED = 0xDEADBEEF
DEFAULT_TT_MAX_SIZE = 1_000_000
