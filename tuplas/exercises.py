"""Warm-up exercises: argument parsing, turn-taking threads and pi."""

from __future__ import annotations

import argparse
import math
import re
import threading
import time
from typing import Sequence

_C_INT = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")


def _parse_int(text: str) -> int:
    """Parse a whole argument as a base-10 integer, as strtol would accept it."""
    if text == "":
        return 0
    if not _C_INT.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def describe_args(args: Sequence[str]) -> list[str]:
    """Number each argument from 1."""
    return [f"Argumento {index} = {arg}" for index, arg in enumerate(args, start=1)]


def describe_ints(args: Sequence[str]) -> list[str]:
    """Number each argument from 1 and show it as an integer, or an error."""
    lines = []
    for index, arg in enumerate(args, start=1):
        try:
            lines.append(f"Argumento {index} = {_parse_int(arg)}")
        except ValueError:
            lines.append(f"Argumento {index} = Error de conversión.")
    return lines


def min_max(args: Sequence[str]) -> tuple[int, int]:
    """Return the smallest and largest integer among the arguments."""
    if not args:
        raise ValueError("at least one number is required")
    numbers = []
    for index, arg in enumerate(args, start=1):
        try:
            numbers.append(_parse_int(arg))
        except ValueError:
            raise ValueError(
                f"Error de conversión en argumento {index}: {arg}"
            ) from None
    return min(numbers), max(numbers)


def alternate_turns(iterations: int = 10, threads: int = 2) -> list[tuple[int, int]]:
    """Run threads that take strict turns and return (thread, iteration) in order."""
    if threads < 1:
        raise ValueError("threads must be at least 1")
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    condition = threading.Condition()
    order: list[tuple[int, int]] = []
    turn = 0

    def worker(thread_id: int) -> None:
        nonlocal turn
        for iteration in range(iterations):
            with condition:
                condition.wait_for(lambda: turn == thread_id)
                order.append((thread_id, iteration))
                turn = (thread_id + 1) % threads
                condition.notify_all()

    workers = [threading.Thread(target=worker, args=(tid,)) for tid in range(threads)]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()
    return order


def _check_steps(steps: int) -> float:
    if steps < 1:
        raise ValueError("steps must be at least 1")
    return 1.0 / steps


def integrate_pi(steps: int = 10_000_000) -> float:
    """Approximate pi with a left Riemann sum of 2*sqrt(1 - x*x) on [0, 1)."""
    width = _check_steps(steps)
    total = sum(math.sqrt(4 * (1 - (width * i) ** 2)) for i in range(steps))
    return width * 2 * total


def integrate_pi_strided(steps: int = 10_000_000, stride: int = 20) -> float:
    """Approximate pi like integrate_pi, summing ``stride`` interleaved slices."""
    width = _check_steps(steps)
    if stride < 1:
        raise ValueError("stride must be at least 1")
    pi = 0.0
    for start in range(stride):
        partial = sum(
            math.sqrt(4 * (1 - (width * i) ** 2)) for i in range(start, steps, stride)
        )
        pi += width * 2 * partial
    return pi


def _run_timed(func, *args) -> float:
    began = time.perf_counter()
    value = func(*args)
    print(f"El tiempo es {(time.perf_counter() - began) * 1000.0:f} ms")
    return value


def main(argv=None) -> int:
    """Run one of the exercises from the command line."""
    parser = argparse.ArgumentParser(description="Warm-up exercises.")
    commands = parser.add_subparsers(dest="command", required=True)
    for name in ("args", "ints", "minmax"):
        commands.add_parser(name).add_argument("values", nargs=argparse.REMAINDER)
    turns = commands.add_parser("turns")
    turns.add_argument("--iterations", type=int, default=10)
    turns.add_argument("--threads", type=int, default=2)
    pi = commands.add_parser("pi")
    pi.add_argument("--steps", type=int, default=10_000_000)
    strided = commands.add_parser("pi-strided")
    strided.add_argument("--steps", type=int, default=10_000_000)
    strided.add_argument("--stride", type=int, default=20)
    args = parser.parse_args(argv)

    if args.command == "args":
        print("\n".join(describe_args(args.values)) if args.values else "", end="\n" if args.values else "")
    elif args.command == "ints":
        for line in describe_ints(args.values):
            print(line)
    elif args.command == "minmax":
        if not args.values:
            print("Uso: minmax num1 num2 ... numN")
            return 1
        try:
            low, high = min_max(args.values)
        except ValueError as exc:
            print(exc)
            return 1
        print(f"Valor mínimo = {low}")
        print(f"Valor máximo = {high}")
    elif args.command == "turns":
        for thread_id, iteration in alternate_turns(args.iterations, args.threads):
            print(f"Ejecuta el thread {thread_id} iteración {iteration}")
    elif args.command == "pi":
        value = _run_timed(integrate_pi, args.steps)
        print(f"PI={value:.9f}")
    else:
        value = _run_timed(integrate_pi_strided, args.steps, args.stride)
        print(f"PI = {value:.9f}")
    return 0