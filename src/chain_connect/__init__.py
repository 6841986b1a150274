def main() -> None:
    #a quick demonstration: the engine plays itself on the default board

    #importing the game board
    from .board import GameBoard

    #initializing a game object
    game = GameBoard()

    #every engine agent keeps its own mirror of the board
    from .engine import EngineAgent, get_strategy_counts, print_strategy_summary

    game.machine_vs_machine(machine1=EngineAgent(), machine2=EngineAgent())

    #how often each handler produced the move that was played
    print_strategy_summary(get_strategy_counts())

    #let the engine play a random opponent instead
    #from random import choice
    #game.machine_vs_machine(machine1=EngineAgent(), machine2=lambda board, moves: choice(moves))
