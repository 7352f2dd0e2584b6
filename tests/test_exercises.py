import math

import pytest

from tuplas.exercises import (
    alternate_turns,
    describe_args,
    describe_ints,
    integrate_pi,
    integrate_pi_strided,
    main,
    min_max,
)


def test_describe_args_numbers_from_one():
    assert describe_args(["hola", "mundo"]) == ["Argumento 1 = hola", "Argumento 2 = mundo"]
    assert describe_args([]) == []


def test_describe_ints_accepts_integers():
    assert describe_ints(["12", "-4", "+3", " 7"]) == [
        "Argumento 1 = 12",
        "Argumento 2 = -4",
        "Argumento 3 = 3",
        "Argumento 4 = 7",
    ]


@pytest.mark.parametrize("text", ["abc", "4x", "+", " ", "1.5", "7 "])
def test_describe_ints_rejects_non_integers(text):
    assert describe_ints([text]) == ["Argumento 1 = Error de conversión."]


def test_describe_ints_empty_argument_is_zero():
    assert describe_ints([""]) == ["Argumento 1 = 0"]


def test_min_max():
    assert min_max(["5", "-2", "9", "0"]) == (-2, 9)
    assert min_max(["3"]) == (3, 3)


def test_min_max_requires_arguments():
    with pytest.raises(ValueError):
        min_max([])


def test_min_max_reports_bad_argument():
    with pytest.raises(ValueError, match="argumento 2: abc"):
        min_max(["1", "abc", "3"])


def test_alternate_turns_two_threads():
    assert alternate_turns(3) == [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2)]


def test_alternate_turns_round_robin_invariant():
    order = alternate_turns(4, 3)
    assert len(order) == 12
    assert [tid for tid, _ in order] == [0, 1, 2] * 4
    assert [it for _, it in order] == sorted(it for _, it in order)


def test_alternate_turns_rejects_bad_arguments():
    with pytest.raises(ValueError):
        alternate_turns(1, 0)
    with pytest.raises(ValueError):
        alternate_turns(-1, 2)


def test_integrate_pi_close_to_pi():
    assert integrate_pi(20_000) == pytest.approx(math.pi, abs=1e-3)


def test_integrate_pi_converges():
    coarse = abs(integrate_pi(100) - math.pi)
    fine = abs(integrate_pi(10_000) - math.pi)
    assert fine < coarse


def test_strided_matches_plain():
    assert integrate_pi_strided(10_000, 20) == pytest.approx(integrate_pi(10_000), rel=1e-9)
    assert integrate_pi_strided(1_000, 1) == pytest.approx(integrate_pi(1_000), rel=1e-12)


def test_integrate_rejects_bad_steps():
    with pytest.raises(ValueError):
        integrate_pi(0)
    with pytest.raises(ValueError):
        integrate_pi_strided(10, 0)


def test_main_minmax(capsys):
    assert main(["minmax", "4", "-1", "8"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Valor mínimo = -1", "Valor máximo = 8"]


def test_main_minmax_error(capsys):
    assert main(["minmax", "4", "x"]) == 1
    assert "argumento 2: x" in capsys.readouterr().out
    assert main(["minmax"]) == 1


def test_main_turns(capsys):
    assert main(["turns", "--iterations", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Ejecuta el thread 0 iteración 0"
    assert len(lines) == 4


def test_main_pi(capsys):
    assert main(["pi", "--steps", "1000"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("El tiempo es ")
    assert lines[1] == f"PI={integrate_pi(1000):.9f}"