#!/usr/bin/env python3
"""Play Leapfrog against a CPU strategy via the console, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from leapfrog import GameConfig, GameSession, IllegalMoveError, load_config
from leapfrog.core import (
    GAME_RULES,
    Board,
    BoardPosition,
    Move,
    Piece,
    get_game_winner,
    initialize_board,
    is_valid_move,
    moves_own_piece,
    perform_move,
    try_end_turn,
)
from leapfrog.cpu import STRATEGIES
from leapfrog.env import render_board


def format_board(board: Board) -> str:
    header = "  " + "".join(str(c) for c in range(board.size))
    rows = [f"{r} {line}" for r, line in enumerate(render_board(board).splitlines())]
    return "\n".join([header] + rows)


def parse_position(raw: str) -> BoardPosition:
    row, col = (int(part) for part in raw.split(","))
    return BoardPosition(row, col)


def parse_move(raw: str, piece: Piece) -> Move:
    """Parse ``"r,c r,c"`` into a move for ``piece``; raises ValueError on bad input."""
    parts = raw.split()
    if len(parts) != 2:
        raise ValueError("Expected two positions like '5,0 4,0'.")
    return Move(parse_position(parts[0]), parse_position(parts[1]), piece)


def move_record(move_index: int, actor: str, move: Move) -> Dict[str, object]:
    return {
        "move_index": move_index,
        "actor": actor,
        "piece": move.piece.name,
        "from": [move.src.row, move.src.col],
        "to": [move.dest.row, move.dest.col],
    }


def end_turn_record(move_index: int, actor: str, piece: Piece) -> Dict[str, object]:
    return {"move_index": move_index, "actor": actor, "piece": piece.name, "end_turn": True}


def prompt_human_action(session: GameSession) -> Optional[Move]:
    """Read commands until the human enters a move; ``None`` means end the turn."""
    piece = session.board.turn
    while True:
        raw = input("Move 'r,c r,c', 'm r,c' lists moves, 'e' ends the turn, 'q' quits: ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        if raw.lower() in {"e", "end"}:
            return None
        try:
            if raw.lower().startswith("m "):
                moves = session.valid_moves(parse_position(raw[2:].strip()))
                if not moves:
                    print("No legal moves from there.")
                for move in moves:
                    print(f"  ({move.src.row},{move.src.col}) -> ({move.dest.row},{move.dest.col})")
                continue
            move = parse_move(raw, piece)
        except ValueError as exc:
            print(f"Could not parse input: {exc}")
            continue
        if not session.board.in_bounds(move.src) or not session.board.in_bounds(move.dest):
            print("Position is off the board.")
            continue
        return move


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved game log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    moves = data.get("moves", [])
    board = initialize_board(data.get("metadata", {}).get("board_size", 8))
    if verbose:
        print("Replaying game.")
        print(format_board(board))
    applied = 0
    for entry in moves:
        piece = Piece[entry["piece"]]
        if entry.get("end_turn"):
            try_end_turn(board)
            continue
        move = Move(BoardPosition(*entry["from"]), BoardPosition(*entry["to"]), piece)
        if not (is_valid_move(board, move, piece) and moves_own_piece(board, move)):
            raise ValueError(f"Logged move {entry['move_index']} is illegal: {move.as_tuple()}")
        perform_move(board, move)
        applied += 1
        if verbose:
            print(f"{entry.get('actor', 'unknown')} ({piece.name}): {entry['from']} -> {entry['to']}")
            print(format_board(board))
    winner = get_game_winner(board)
    summary = {
        "winner": winner.name if winner is not None else None,
        "moves": applied,
        "board": board.cells.tolist(),
    }
    if verbose:
        print("Replay finished.")
        print(f"Winner: {summary['winner']}")
    return summary


def play_interactive(config: GameConfig, log_file: Optional[str] = None) -> None:
    session = GameSession(config)
    log_records: List[Dict] = []
    move_index = 0
    print(GAME_RULES)
    print(f"You play {config.cpu_piece.other.name} (W moves first), the CPU plays with the {config.strategy} strategy.")

    while session.winner is None and session.turn_count < config.max_turns:
        print("\nBoard:")
        print(format_board(session.board))
        piece = session.board.turn
        print(f"To move: {piece.name}")

        if session.is_cpu_turn:
            chain = session.play_cpu_turn()
            if not chain:
                print("The CPU has no legal move.")
                break
            for move in chain:
                print(f"CPU: ({move.src.row},{move.src.col}) -> ({move.dest.row},{move.dest.col})")
                log_records.append(move_record(move_index, "cpu", move))
                move_index += 1
            log_records.append(end_turn_record(move_index, "cpu", piece))
            continue

        move = prompt_human_action(session)
        if move is None:
            if session.end_turn():
                log_records.append(end_turn_record(move_index, "human", piece))
            else:
                print("You have to move before ending your turn.")
            continue
        try:
            session.apply_move(move)
        except IllegalMoveError as exc:
            print(exc)
            continue
        log_records.append(move_record(move_index, "human", move))
        move_index += 1

    print("\nFinal board:")
    print(format_board(session.board))
    winner = session.winner
    print(f"{winner.name} wins!" if winner is not None else "No winner.")

    if log_file:
        metadata = {
            "cpu_piece": config.cpu_piece.name,
            "strategy": config.strategy,
            "seed": config.seed,
            "board_size": config.board_size,
            "winner": winner.name if winner is not None else None,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Leapfrog in the console against the CPU.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES))
    parser.add_argument("--seed", type=int)
    parser.add_argument("--max-turns", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    config = load_config(args.config) if Path(args.config).exists() else GameConfig()
    if args.strategy is not None:
        config.strategy = args.strategy
    if args.seed is not None:
        config.seed = args.seed
    if args.max_turns is not None:
        config.max_turns = args.max_turns

    play_interactive(config, args.log_file)


if __name__ == "__main__":
    main()
