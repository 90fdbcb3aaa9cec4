"""Tests for lint configuration loading."""
import pytest

from colcheck.config.loader import ConfigError, load_lint_config
from colcheck.config.settings import LintConfig
from colcheck.models.finding import Severity


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep developer config files and COLCHECK_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("DIALECT", "SEVERITY", "FAIL_ON", "MINORITY_ONLY",
                 "EXCLUDE_TABLES", "EXCLUDE_COLUMNS"):
        monkeypatch.delenv(f"COLCHECK_{name}", raising=False)


def test_defaults():
    """Test function."""
    config = load_lint_config()
    assert config == LintConfig()
    assert config.dialect == "tsql"
    assert config.severity == Severity.MEDIUM
    assert config.fail_on == "MEDIUM"
    assert config.minority_only is False


def test_explicit_file(tmp_path):
    """Test function."""
    config_file = tmp_path / "lint.yaml"
    config_file.write_text(
        "dialect: snowflake\n"
        "severity: high\n"
        "exclude_tables:\n"
        "  - 'audit.*'\n"
    )
    config = load_lint_config(str(config_file))
    assert config.dialect == "snowflake"
    assert config.severity == Severity.HIGH
    assert config.exclude_tables == ["audit.*"]


def test_project_file_is_found(tmp_path):
    """Test function."""
    (tmp_path / ".colcheck.yaml").write_text("minority_only: true\n")
    assert load_lint_config().minority_only is True


def test_empty_file_uses_defaults(tmp_path):
    """Test function."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")
    assert load_lint_config(str(config_file)) == LintConfig()


def test_env_variables(monkeypatch):
    """Test function."""
    monkeypatch.setenv("COLCHECK_DIALECT", "postgres")
    monkeypatch.setenv("COLCHECK_MINORITY_ONLY", "yes")
    monkeypatch.setenv("COLCHECK_EXCLUDE_COLUMNS", "row_version, *.legacy_id")
    config = load_lint_config()
    assert config.dialect == "postgres"
    assert config.minority_only is True
    assert config.exclude_columns == ["row_version", "*.legacy_id"]


def test_overrides_take_precedence(tmp_path):
    """Test function."""
    config_file = tmp_path / "lint.yaml"
    config_file.write_text("fail_on: HIGH\nexclude_tables: ['a']\n")
    config = load_lint_config(
        str(config_file),
        {"fail_on": "low", "dialect": None, "exclude_tables": ["b"]}
    )
    assert config.fail_on == "LOW"
    assert config.dialect == "tsql"
    assert config.exclude_tables == ["a", "b"]


def test_missing_file():
    """Test function."""
    with pytest.raises(ConfigError, match="not found"):
        load_lint_config("does-not-exist.yaml")


def test_invalid_yaml(tmp_path):
    """Test function."""
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("dialect: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_lint_config(str(config_file))


def test_non_mapping_yaml(tmp_path):
    """Test function."""
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- tsql\n- snowflake\n")
    with pytest.raises(ConfigError, match="YAML dictionary"):
        load_lint_config(str(config_file))


def test_invalid_values(tmp_path):
    """Test function."""
    config_file = tmp_path / "lint.yaml"
    config_file.write_text("dialect: cobol\n")
    with pytest.raises(ConfigError, match="Unsupported dialect"):
        load_lint_config(str(config_file))


def test_unknown_keys_rejected(tmp_path):
    """Test function."""
    config_file = tmp_path / "lint.yaml"
    config_file.write_text("exclude: ['a']\n")
    with pytest.raises(ConfigError):
        load_lint_config(str(config_file))
