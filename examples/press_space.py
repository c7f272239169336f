"""Press Space -- a tiny game loop driven by a state machine.

Demonstrates:
- Entry and exit guards that set up and tear down per-state data
- Several callbacks per state ("update", "draw", "keypressed")
- Swapping states from inside a callback
- Storing data on states and on the machine itself

The "player" is scripted so the example runs without a window: it presses
space on some frames and backspace once the results are shown.

Run: python -m examples.press_space
"""

import random

from oosm import Machine, State

DT = 0.1
ROUND_SECONDS = 2.0


# ---------------------------------------------------------------------------
# Loading screen
# ---------------------------------------------------------------------------

def opened_enter(state: State, machine: Machine, last_name, last_state) -> bool:
    state.elapsed = 0.0
    state.stop_loading_at = random.uniform(0.3, 0.6)
    # Forgetting to return counts as True, but being explicit reads better.
    return True


def opened_exit(state: State, machine: Machine, next_name, next_state) -> bool:
    del state.elapsed, state.stop_loading_at
    return True


def opened_update(state: State, machine: Machine, dt: float) -> None:
    state.elapsed += dt
    if state.elapsed >= state.stop_loading_at:
        machine.swap_state("main-menu")


def opened_draw(state: State, machine: Machine) -> str:
    return "Loading..."


# ---------------------------------------------------------------------------
# Main menu
# ---------------------------------------------------------------------------

def menu_draw(state: State, machine: Machine) -> str:
    return "Main Menu -- press SPACE to play!"


def menu_keypressed(state: State, machine: Machine, key: str) -> None:
    if key == "space":
        machine.swap_state("game")


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------

def game_enter(state: State, machine: Machine, last_name, last_state) -> bool:
    state.score = 0
    state.time_left = ROUND_SECONDS
    return True


def game_keypressed(state: State, machine: Machine, key: str) -> None:
    if key == "space":
        state.score += 1


def game_update(state: State, machine: Machine, dt: float) -> None:
    state.time_left -= dt
    if state.time_left <= 0:
        machine.score = state.score
        machine.swap_state("results")


def game_draw(state: State, machine: Machine) -> str:
    return f"Press space! Score: {state.score}  Time: {max(state.time_left, 0):.1f}"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def results_keypressed(state: State, machine: Machine, key: str) -> None:
    if key == "backspace":
        machine.swap_state("main-menu")


def results_draw(state: State, machine: Machine) -> str:
    return f"Final score: {machine.score} -- press BACKSPACE to return"


def build_machine() -> Machine:
    return (
        Machine()
        .add_state(
            "game-opened",
            State()
            .set_on_entering(opened_enter)
            .set_on_exiting(opened_exit)
            .set_callback("update", opened_update)
            .set_callback("draw", opened_draw),
        )
        .add_state(
            "main-menu",
            State()
            .set_callback("draw", menu_draw)
            .set_callback("keypressed", menu_keypressed),
        )
        .add_state(
            "game",
            State()
            .set_on_entering(game_enter)
            .set_callback("keypressed", game_keypressed)
            .set_callback("update", game_update)
            .set_callback("draw", game_draw),
        )
        .add_state(
            "results",
            State()
            .set_callback("keypressed", results_keypressed)
            .set_callback("draw", results_draw),
        )
    )


def scripted_key(frame: int, machine: Machine) -> str | None:
    if machine.current_name == "results":
        return "backspace"
    if frame % 3 == 0:
        return "space"
    return None


def play(max_frames: int = 200, echo=print) -> list[str]:
    """Run the scripted session until the player is back in the menu after a round.

    Returns the names of the states visited, in order.
    """
    machine = build_machine()
    # The initial state has to be set explicitly.
    machine.swap_state("game-opened")
    visited = [machine.current_name]

    last_frame = ""
    for frame in range(max_frames):
        key = scripted_key(frame, machine)
        if key is not None:
            machine.run("keypressed", key)
        machine.run("update", DT)

        _, text = machine.run("draw")
        if text != last_frame:
            echo(f"  frame {frame:2d}  [{machine.current_name}]  {text}")
            last_frame = text

        if machine.current_name != visited[-1]:
            visited.append(machine.current_name)
            if visited[-2:] == ["results", "main-menu"]:
                break

    return visited


def main() -> None:
    print("=== Press Space ===\n")
    random.seed(7)

    visited = play()

    print(f"\nDone. Visited: {' -> '.join(visited)}")


if __name__ == "__main__":
    main()
