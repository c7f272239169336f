"""Hello World -- the simplest possible oosm program.

Demonstrates:
- Creating a machine and two states
- Giving both states a callback under the same name
- Swapping between states and running the callback

Run: python -m examples.hello_world
"""

from oosm import Machine, State


def greet_world(state: State, machine: Machine) -> None:
    print("Hello world!")


def greet_moon(state: State, machine: Machine) -> None:
    print("Hello moon!")


def main() -> None:
    print("=== Hello World ===\n")

    # Each state carries its own "greeting" callback.
    world = State().set_callback("greeting", greet_world)
    moon = State().set_callback("greeting", greet_moon)

    # add_state returns the machine, so registrations chain.
    machine = Machine().add_state("world", world).add_state("moon", moon)

    machine.swap_state("world")
    machine.run("greeting")  # Hello world!

    machine.swap_state("moon")
    machine.run("greeting")  # Hello moon!


if __name__ == "__main__":
    main()
