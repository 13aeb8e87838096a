import pytest

from symbolic_diff import VariableTerm, VariableEntity, Expression, make_variable
from symbolic_diff.cli import build_parser, main
from symbolic_diff import cli


def test_default_run_prints_product_derivative(capsys):
    assert main([]) == 0
    assert "Output: 5*x^4" in capsys.readouterr().out


def test_sum_example(capsys):
    assert main(["--example", "sum"]) == 0
    assert "Output: 3*x^2 + 2*x" in capsys.readouterr().out


def test_verify_and_latex(capsys):
    assert main(["--example", "nested", "--verify", "--latex"]) == 0
    out = capsys.readouterr().out
    assert "SymPy agrees: True" in out
    assert "LaTeX:" in out


def test_unknown_example_is_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--example", "quartic"])


def test_engine_errors_exit_with_status_one(monkeypatch, capsys):
    def two_variables():
        return Expression(VariableTerm(VariableEntity.of("x", 2), [make_variable("y", 1)]))

    monkeypatch.setitem(cli.PRESETS, "product", two_variables)
    assert main([]) == 1
    out = capsys.readouterr().out
    assert "Output:" not in out
    assert "MultipleVariablesError" in out


def test_verbose_run_logs_milestone_and_summary(capsys):
    assert main(["-vv"]) == 0
    out = capsys.readouterr().out
    assert "MILESTONE: Differentiating product: x^3*x^2" in out
    assert "DIFFERENTIATION RESULTS:" in out
