# db_manager.py
# This module's ONLY job is persistence of what MCTS players learn.

import sqlite3
import pickle
import os
import logging
from contextlib import closing

from config import config
from data_structures import QTable

logger = logging.getLogger("DatabaseManager")

# Anything that means "this file is not a usable cache".
LOAD_ERRORS = (sqlite3.Error, pickle.UnpicklingError, EOFError, AttributeError,
               ImportError, IndexError, KeyError, TypeError, ValueError)


def get_db_connection(db_path):
    """Opens a connection, creating the parent directory if needed."""
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    return sqlite3.connect(db_path, timeout=10)


def qmap_path(player_name: str, mark, game_type) -> str:
    """Default cache location for one MCTS configuration, side and game, e.g. mcts1.X.ttt.db"""
    game = getattr(game_type, 'value', game_type)
    return os.path.join(config.QMAP_DIR, f"{player_name}.{mark}.{game}.db")


class QMapStore:
    """
    Loads and saves a QTable as pickled blobs in a small sqlite file.

    The file is a private cache: its format may change between versions and
    it is always safe to delete. A missing or unreadable file loads as an
    empty table.
    """
    def __init__(self, db_path: str):
        self.db_path = db_path

    @staticmethod
    def _init_db(conn):
        conn.execute('''
            CREATE TABLE IF NOT EXISTS qmap_state (
                key TEXT PRIMARY KEY,
                state_blob BLOB
            )
        ''')

    def load(self) -> QTable:
        if not os.path.exists(self.db_path):
            logger.info(f"DB: No Q-map at {self.db_path}; starting empty.")
            return QTable()
        try:
            with closing(get_db_connection(self.db_path)) as conn:
                rows = dict(conn.execute('SELECT key, state_blob FROM qmap_state').fetchall())
            table = QTable(returns=pickle.loads(rows['returns']),
                           state_visits=pickle.loads(rows['state_visits']))
        except LOAD_ERRORS as e:
            logger.warning(f"DB: Could not read Q-map at {self.db_path} ({e!r}); starting empty.")
            return QTable()
        if not isinstance(table.returns, dict) or not isinstance(table.state_visits, dict):
            logger.warning(f"DB: Q-map at {self.db_path} has an unexpected shape; starting empty.")
            return QTable()
        logger.info(f"DB: Loaded {len(table)} state-action entries from {self.db_path}.")
        return table

    def save(self, table: QTable):
        """
        Writes the whole table to a sibling temp file, then swaps it in, so an
        interrupted save never leaves a half-written cache behind.
        """
        tmp_path = self.db_path + '.tmp'
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        with closing(get_db_connection(tmp_path)) as conn:
            with conn:
                self._init_db(conn)
                conn.executemany(
                    'INSERT OR REPLACE INTO qmap_state (key, state_blob) VALUES (?, ?)',
                    [('returns', pickle.dumps(table.returns, protocol=pickle.HIGHEST_PROTOCOL)),
                     ('state_visits', pickle.dumps(table.state_visits, protocol=pickle.HIGHEST_PROTOCOL))]
                )
        os.replace(tmp_path, self.db_path)
        logger.info(f"DB: Saved {len(table)} state-action entries to {self.db_path}.")
