# main.py

# --- Standard Imports ---
import logging

# --- Project-specific Imports ---
from config import config
from logger_config import setup_logging
from arena import run_match
from data_structures import GameType, PlayerMark
from db_manager import qmap_path
from heuristics import HEURISTICS
from mcts import MCTSPlayer, exploration_constant
from search import AlphaBetaPlayer

def log_and_display_config(logger):
    """Logs the key configuration parameters at startup."""
    header = "="*30
    config_details = f"\n{header} Key Configuration {header}\n"
    config_details += f"[MCTS]\n  - Iterations per move (play): {config.MCTS_ITERATIONS}\n  - Discount factor: {config.DISCOUNT_FACTOR}\n"
    config_details += f"  - Exploration constants: {config.EXPLORATION_CONSTANTS}\n  - Blitz time fraction: {config.BLITZ_TIME_FRACTION}\n\n"
    config_details += f"[Search]\n  - Default depth: {config.SEARCH_DEPTH}\n\n"
    config_details += f"[Arena]\n  - Think time per side: {config.THINK_TIME}s\n  - Games per match: {config.NUM_GAMES}\n  - Q-map directory: {config.QMAP_DIR}\n"
    config_details += header + "===================" + header
    logger.info(config_details)
    print(config_details)

# =====================================================================
#                      MAIN EXECUTION BLOCK
# =====================================================================
if __name__ == "__main__":
    setup_logging(config.LOG_FILE)
    logger = logging.getLogger("Main")
    log_and_display_config(logger)

    game = GameType.TTT
    mcts_player = MCTSPlayer(
        exploration=exploration_constant(game),
        qmap_path=qmap_path("mcts1", PlayerMark.NAUGHT, game),
    )
    ab_player = AlphaBetaPlayer(PlayerMark.CROSS, HEURISTICS[game.value], config.SEARCH_DEPTH)
    with mcts_player, ab_player:
        _, tally = run_match(mcts_player, ab_player, game, progress=True)
    print(f"{mcts_player.name} vs {ab_player.name}: "
          f"{tally['win']} wins, {tally['draw']} draws, {tally['loss']} losses")
