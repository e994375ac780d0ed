"""
Tests for configuration and logging setup.
"""

import logging

import pytest

from opsplan.config import LOG_FORMAT, OpsPlanConfig, configure_logging


class TestOpsPlanConfig:
    """Tests for OpsPlanConfig."""

    def test_default_tolerances(self):
        config = OpsPlanConfig()
        assert config.get_tolerance("feasibility") == 1e-3
        assert config.get_tolerance("determinant") == 1e-3
        assert config.get_tolerance("highs_cross_check") == 1e-6

    def test_unknown_tolerance_default(self):
        assert OpsPlanConfig().get_tolerance("something_else") == 1e-3

    def test_partial_tolerances_merged(self):
        config = OpsPlanConfig(tolerances={"feasibility": 0.01})
        assert config.get_tolerance("feasibility") == 0.01
        assert config.get_tolerance("determinant") == 1e-3

    def test_set_tolerance(self):
        config = OpsPlanConfig()
        config.set_tolerance("determinant", 1e-6)
        assert config.get_tolerance("determinant") == 1e-6
        with pytest.raises(ValueError):
            config.set_tolerance("determinant", -1)

    def test_normalization(self):
        config = OpsPlanConfig(log_level="debug", default_lp_solver="HiGHS")
        assert config.log_level == "DEBUG"
        assert config.default_lp_solver == "highs"

    def test_unknown_solver(self):
        with pytest.raises(ValueError):
            OpsPlanConfig(default_lp_solver="gurobi")

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("OPSPLAN_LOG_LEVEL", "warning")
        monkeypatch.setenv("OPSPLAN_LP_SOLVER", "highs")
        config = OpsPlanConfig()
        assert config.log_level == "WARNING"
        assert config.default_lp_solver == "highs"

    def test_unknown_solver_in_environment(self, monkeypatch, caplog):
        monkeypatch.setenv("OPSPLAN_LP_SOLVER", "gurobi")
        with caplog.at_level(logging.WARNING, logger="opsplan.config"):
            config = OpsPlanConfig()
        assert config.default_lp_solver == "corner_point"
        assert "OPSPLAN_LP_SOLVER" in caplog.text

    def test_dict_roundtrip(self):
        config = OpsPlanConfig(log_level="ERROR", dedup_decimals=3,
                               tolerances={"feasibility": 0.5})
        restored = OpsPlanConfig.from_dict(config.to_dict())
        assert restored == config

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "opsplan.toml"
        config = OpsPlanConfig(log_level="DEBUG", default_lp_solver="highs",
                               dedup_decimals=4, tolerances={"determinant": 1e-6})
        config.save(path)

        text = path.read_text()
        assert "[general]" in text
        assert "[tolerances]" in text

        loaded = OpsPlanConfig.load(path)
        assert loaded.log_level == "DEBUG"
        assert loaded.default_lp_solver == "highs"
        assert loaded.dedup_decimals == 4
        assert loaded.get_tolerance("determinant") == 1e-6
        assert loaded.get_tolerance("feasibility") == 1e-3

    def test_load_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPSPLAN_LP_SOLVER", raising=False)
        loaded = OpsPlanConfig.load(tmp_path / "missing.toml")
        assert loaded.default_lp_solver == "corner_point"


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger("opsplan")
        handlers, level = list(logger.handlers), logger.level
        yield
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(level)

    def test_level_and_format(self):
        logger = configure_logging("DEBUG")
        assert logger.name == "opsplan"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter._fmt == LOG_FORMAT

    def test_replaces_handlers(self):
        configure_logging("INFO")
        logger = configure_logging("INFO")
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "opsplan.log"
        logger = configure_logging("INFO", log_file=log_file)
        logging.getLogger("opsplan.scheduling.cpm").info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
        assert "[INFO] opsplan.scheduling.cpm" in log_file.read_text()

    def test_root_logger_untouched(self):
        root_handlers = list(logging.getLogger().handlers)
        configure_logging("INFO")
        assert logging.getLogger().handlers == root_handlers
