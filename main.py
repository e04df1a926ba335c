"""
main.py — Bootstrap

1. Load tuning values
2. Create the app
3. Push the maze scene
4. Run
"""

import argparse

from core import tuning
from core.app import App
from core.constants import GRID_WIDTH, GRID_HEIGHT, CELL_SIZE, HUD_HEIGHT
from scenes.maze_scene import MazeScene


def main():
    parser = argparse.ArgumentParser(description="Maze chase")
    parser.add_argument("--seed", type=int, default=None,
                        help="fix the level-generation seed")
    args = parser.parse_args()

    tuning.load()
    app = App(title="Maze Chase",
              width=GRID_WIDTH * CELL_SIZE,
              height=GRID_HEIGHT * CELL_SIZE + HUD_HEIGHT)
    app.push_scene(MazeScene(seed=args.seed))
    app.run()


if __name__ == "__main__":
    main()
