# config.py

class Config:
    def __init__(self):
        # ================================================================
        #                      Search configuration
        # ================================================================
        # Fixed budget for MCTSPlayer.play
        self.MCTS_ITERATIONS = 10000

        # Two-player games are folded into a single-agent MDP: a reward that
        # is good for the mover is bad for the player one ply up, hence the
        # negative sign. Slightly below 1 in magnitude so very long lines
        # still decay.
        self.DISCOUNT_FACTOR = -0.999

        # UCB1 exploration constant per game. Ultimate tic-tac-toe branches
        # much wider, so it explores more conservatively.
        self.EXPLORATION_CONSTANTS = {
            'ttt': 1.0,
            'c4': 1.0,
            'uttt': 0.75,
        }

        # Share of the remaining game clock a single blitz move may spend
        self.BLITZ_TIME_FRACTION = 1 / 8

        # Default horizon for minimax / alpha-beta
        self.SEARCH_DEPTH = 4

        # ================================================================
        #                      Arena configuration
        # ================================================================
        self.THINK_TIME = 1.0  # seconds on each side's clock
        self.NUM_GAMES = 10

        # ================================================================
        #                      Files
        # ================================================================
        self.QMAP_DIR = "outputs/qmaps"
        self.LOG_FILE = "outputs/arena.log"

config = Config()
