import logging

import pytest

from symbolic_diff import (
    ConstantTerm, EngineConfig, Expression, LogLevel, SymPyVerifier, configure,
    get_config, get_logger, log_info,
    SymbolicDiffInternalException, make_constant, make_product, make_sum,
    make_variable, set_log_level
)


def test_defaults():
    config = get_config()
    assert config.zero_tolerance == 0.0
    assert config.log_level == LogLevel.MINIMAL
    assert config.max_merge_passes is None


def test_configure_rejects_unknown_options():
    with pytest.raises(ValueError):
        configure(zero_threshold=0.1)


def test_zero_tolerance_controls_zero_detection():
    assert not ConstantTerm(0.05).is_zero()
    configure(zero_tolerance=0.1)
    assert ConstantTerm(0.05).is_zero()
    assert ConstantTerm(0.05).to_string() == "0"
    assert ConstantTerm(1.05).is_one()


def test_exact_comparison_by_default():
    assert make_constant(1e-12).to_string() == "1e-12"
    assert not ConstantTerm(1e-12).is_zero()
    assert not ConstantTerm(1 + 1e-11).is_one()

    near_one = make_product(make_constant(1 + 1e-11), make_variable("x", 2))
    assert near_one.to_string() != "x^2"
    assert near_one.to_string().endswith("*x^2")

    derivative = Expression(make_product(make_constant(1e-12), make_variable("x", 3))).differentiate()
    assert derivative.to_string() != "0"
    assert "1e-12" in derivative.to_string()


def test_is_close():
    config = EngineConfig(zero_tolerance=1e-3)
    assert config.is_close(1.0005, 1.0)
    assert not config.is_close(1.01, 1.0)


def test_verbose_logging_records_merges_and_absorption(tmp_path):
    log_file = tmp_path / "engine.log"
    configure(log_level=LogLevel.VERBOSE, log_to_file=True, log_file_path=str(log_file))

    make_sum([make_constant(1), make_constant(2)]).simplify()
    make_product(make_variable("x", 2), make_constant(0)).simplify()

    contents = log_file.read_text()
    assert "merged '1' and '2' into '3'" in contents
    assert "zero absorbed product" in contents


def test_minimal_logging_skips_debug_records(tmp_path):
    log_file = tmp_path / "engine.log"
    configure(log_level=LogLevel.MINIMAL, log_to_file=True, log_file_path=str(log_file))
    make_sum([make_constant(1), make_constant(2)]).simplify()
    assert "merged" not in log_file.read_text()


def test_set_log_level_updates_global_logger():
    set_log_level(LogLevel.DETAILED)
    assert get_logger().log_level == LogLevel.DETAILED
    assert get_logger().logger.name == "symbolic_diff"
    assert get_logger().logger.level == logging.DEBUG


def test_silent_logger_has_no_console_handler():
    configure(log_level=LogLevel.SILENT)
    assert get_logger().logger.handlers == []


def test_merge_pass_guard_aborts_runaway_simplify():
    configure(max_merge_passes=1)
    expr = make_sum([make_constant(1), make_constant(2), make_constant(3)])
    with pytest.raises(SymbolicDiffInternalException):
        expr.simplify()

    configure(max_merge_passes=2)
    assert expr.simplify().to_string() == "6"


def test_info_records_respect_required_level(tmp_path):
    log_file = tmp_path / "engine.log"
    configure(log_level=LogLevel.MODERATE, log_to_file=True, log_file_path=str(log_file))
    log_info("shown at moderate", LogLevel.MODERATE)
    log_info("hidden below detailed", LogLevel.DETAILED)

    contents = log_file.read_text()
    assert "shown at moderate" in contents
    assert "hidden below detailed" not in contents


def test_detailed_logging_reports_differentiation_and_verification(tmp_path):
    log_file = tmp_path / "engine.log"
    configure(log_level=LogLevel.DETAILED, log_to_file=True, log_file_path=str(log_file))

    expr = Expression(make_variable("x", 3))
    derivative = expr.differentiate()
    assert SymPyVerifier().verify_derivative(expr, derivative)

    contents = log_file.read_text()
    assert "differentiated x^3 into 3*x^2" in contents
    assert "verify: SymPy d/dx agrees" in contents
    assert "DEBUG:" not in contents
