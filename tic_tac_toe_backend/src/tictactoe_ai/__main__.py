"""
Run the backend: python -m tictactoe_ai [--host HOST] [--port PORT]
"""

import argparse
import logging

import uvicorn

from .config import GameConfig


def main():
    parser = argparse.ArgumentParser(description="Tic Tac Toe vs. minimax backend")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    config = GameConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("tictactoe_ai.main:app", host=args.host, port=args.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
