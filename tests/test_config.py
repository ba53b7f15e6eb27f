import importlib
import os
import unittest
from unittest import mock

from graphcalc import config


class TestConfig(unittest.TestCase):
    def tearDown(self):
        importlib.reload(config)

    def test_grid_size_ignores_environment(self):
        env = {"GRAPHCALC_GRID_WIDTH": "40", "GRAPHCALC_GRID_HEIGHT": "7"}
        with mock.patch.dict(os.environ, env):
            importlib.reload(config)
        self.assertEqual((config.GRID_WIDTH, config.GRID_HEIGHT), (80, 20))

    def test_solver_constants_read_environment(self):
        env = {"GRAPHCALC_MAX_ITER": "7", "GRAPHCALC_NUM_INITIAL_GUESSES": "3"}
        with mock.patch.dict(os.environ, env):
            importlib.reload(config)
        self.assertEqual(config.MAX_ITER, 7)
        self.assertEqual(config.NUM_INITIAL_GUESSES, 3)


if __name__ == "__main__":
    unittest.main()
