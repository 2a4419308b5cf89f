import unittest
import logging
import sys
import os
import tempfile

# Allow direct imports from the project root
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(current_dir)
sys.path.insert(0, project_root)

from logger_config import setup_logging


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self.saved = (list(root.handlers), root.level)
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = self.saved[0]
        root.setLevel(self.saved[1])
        self.tmp.cleanup()

    def test_file_handler_creates_directory_and_writes(self):
        log_file = os.path.join(self.tmp.name, 'logs', 'arena.log')
        handler = setup_logging(log_file)
        logging.getLogger("Arena").info("ttt: a vs b 1/0/0 (win/draw/loss)")
        logging.getLogger("Arena").debug("not shown at INFO")
        handler.flush()
        with open(log_file) as f:
            content = f.read()
        self.assertIn("Arena", content)
        self.assertIn("1/0/0", content)
        self.assertNotIn("not shown", content)

    def test_replaces_existing_handlers(self):
        setup_logging()
        handler = setup_logging(verbose=True)
        root = logging.getLogger()
        self.assertEqual(root.handlers, [handler])
        self.assertEqual(root.level, logging.DEBUG)


if __name__ == '__main__':
    unittest.main(verbosity=2)
