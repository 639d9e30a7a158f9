"""
Tests for the Configuration Manager.

Covers configuration loading, merging, environment substitution, dotenv
loading and the Mapbox accessors.
"""

import os
import tempfile
from pathlib import Path

import pytest

from internal.config.manager import ConfigError, ConfigManager, findTomlFiles, mergeConfigs, substituteEnvVars
from lib.mapbox.constants import API_BASE_URL, DEFAULT_TIMEOUT

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def tempDir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sampleConfigToml():
    """Provide sample valid TOML configuration."""
    return """
[mapbox]
token = "pk.test_token_123"
timeout = 10

[logging]
level = "INFO"
"""


@pytest.fixture
def defaultsToml():
    """Provide default configuration TOML."""
    return """
[mapbox]
base-url = "https://api.example.com"
timeout = 30

[logging]
level = "WARNING"
console = true
"""


@pytest.fixture
def invalidSyntaxToml():
    """Provide invalid TOML syntax."""
    return """
[mapbox
token = "missing_bracket"
"""


@pytest.fixture(autouse=True)
def noTokenEnv(monkeypatch):
    """Make sure a developer's MAPBOX_TOKEN does not leak into tests."""
    monkeypatch.setenv("MAPBOX_TOKEN", "")
    monkeypatch.delenv("MAPBOX_TOKEN")


# ============================================================================
# Helper Functions
# ============================================================================


def createConfigFile(directory: Path, filename: str, content: str) -> Path:
    """Create a TOML config file in the specified directory."""
    filePath = directory / filename
    filePath.parent.mkdir(parents=True, exist_ok=True)
    filePath.write_text(content)
    return filePath


def createConfigDir(baseDir: Path, dirName: str, files: dict) -> Path:
    """Create a config directory with multiple TOML files."""
    configDir = baseDir / dirName
    configDir.mkdir(parents=True, exist_ok=True)

    for filename, content in files.items():
        createConfigFile(configDir, filename, content)

    return configDir


def makeManager(tempDir: Path, configPath: Path, **kwargs) -> ConfigManager:
    """Create ConfigManager that reads .env from tempDir only."""
    return ConfigManager(str(configPath), dotEnvFile=str(tempDir / ".env"), **kwargs)


# ============================================================================
# Loading Tests
# ============================================================================


class TestConfigurationLoading:
    """Test configuration loading from TOML files."""

    def testLoadSingleConfigFile(self, tempDir, sampleConfigToml):
        """Test loading configuration from single TOML file."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = makeManager(tempDir, configPath)

        assert manager.config_path == str(configPath)
        assert manager.config["mapbox"]["token"] == "pk.test_token_123"
        assert manager.getLoggingConfig() == {"level": "INFO"}

    def testMissingConfigFileIsEmpty(self, tempDir):
        """Test that a missing config file yields an empty configuration."""
        manager = makeManager(tempDir, tempDir / "nonexistent.toml")

        assert manager.config == {}
        assert manager.getLoggingConfig() == {}

    def testInvalidSyntaxRaises(self, tempDir, invalidSyntaxToml):
        configPath = createConfigFile(tempDir, "config.toml", invalidSyntaxToml)

        with pytest.raises(ConfigError):
            makeManager(tempDir, configPath)

    def testConfigDirsOverrideMainConfig(self, tempDir, sampleConfigToml, defaultsToml):
        """Test that config dirs merge on top of the main config."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "defaults", {"defaults.toml": defaultsToml})

        manager = makeManager(tempDir, configPath, configDirs=[str(configDir)])

        assert manager.config["mapbox"]["token"] == "pk.test_token_123"
        assert manager.config["mapbox"]["timeout"] == 30
        assert manager.config["mapbox"]["base-url"] == "https://api.example.com"
        assert manager.config["logging"] == {"level": "WARNING", "console": True}

    def testConfigDirFilesMergedInOrder(self, tempDir):
        configDir = createConfigDir(
            tempDir,
            "configs",
            {
                "00-defaults.toml": '[mapbox]\ntoken = "first"\n',
                "nested/01-override.toml": '[mapbox]\ntoken = "second"\n',
            },
        )

        manager = makeManager(tempDir, tempDir / "nonexistent.toml", configDirs=[str(configDir)])

        assert manager.config["mapbox"]["token"] == "second"

    def testNonExistentConfigDirSkipped(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = makeManager(tempDir, configPath, configDirs=[str(tempDir / "missing")])

        assert manager.config["mapbox"]["token"] == "pk.test_token_123"


# ============================================================================
# Environment Tests
# ============================================================================


class TestEnvironment:
    """Test environment variable substitution and dotenv loading."""

    def testSubstituteEnvVars(self, monkeypatch):
        monkeypatch.setenv("TEST_MAPBOX_VALUE", "substituted")

        result = substituteEnvVars({"a": "${TEST_MAPBOX_VALUE}", "b": ["x-${TEST_MAPBOX_VALUE}", 1], "c": 2})

        assert result == {"a": "substituted", "b": ["x-substituted", 1], "c": 2}

    def testUnsetVariableKeepsPlaceholder(self, monkeypatch):
        monkeypatch.delenv("TEST_MAPBOX_UNSET", raising=False)

        assert substituteEnvVars("${TEST_MAPBOX_UNSET}") == "${TEST_MAPBOX_UNSET}"

    def testTokenFromConfigPlaceholder(self, tempDir, monkeypatch):
        monkeypatch.setenv("MAPBOX_TOKEN", "pk.from_env")
        configPath = createConfigFile(tempDir, "config.toml", '[mapbox]\ntoken = "${MAPBOX_TOKEN}"\n')

        manager = makeManager(tempDir, configPath)

        assert manager.getMapboxToken() == "pk.from_env"

    def testTokenFromDotEnv(self, tempDir, monkeypatch):
        (tempDir / ".env").write_text('# local settings\nMAPBOX_TOKEN="pk.from_dotenv"\n')

        manager = makeManager(tempDir, tempDir / "nonexistent.toml")

        assert manager.getMapboxToken() == "pk.from_dotenv"
        assert os.environ["MAPBOX_TOKEN"] == "pk.from_dotenv"


# ============================================================================
# Accessor Tests
# ============================================================================


class TestMapboxAccessors:
    def testMapboxConfigDefaults(self, tempDir):
        manager = makeManager(tempDir, tempDir / "nonexistent.toml")

        config = manager.getMapboxConfig()

        assert config["base-url"] == API_BASE_URL
        assert config["timeout"] == DEFAULT_TIMEOUT

    def testMapboxConfigOverrides(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        config = makeManager(tempDir, configPath).getMapboxConfig()

        assert config["timeout"] == 10
        assert config["token"] == "pk.test_token_123"

    def testTokenFromConfigWinsOverEnv(self, tempDir, sampleConfigToml, monkeypatch):
        monkeypatch.setenv("MAPBOX_TOKEN", "pk.from_env")
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        assert makeManager(tempDir, configPath).getMapboxToken() == "pk.test_token_123"

    def testTokenFallsBackToEnv(self, tempDir, monkeypatch):
        monkeypatch.setenv("MAPBOX_TOKEN", "pk.from_env")

        assert makeManager(tempDir, tempDir / "nonexistent.toml").getMapboxToken() == "pk.from_env"

    def testNoTokenIsEmpty(self, tempDir):
        assert makeManager(tempDir, tempDir / "nonexistent.toml").getMapboxToken() == ""

    def testNumericTokenCoercedToString(self, tempDir):
        configPath = createConfigFile(tempDir, "config.toml", "[mapbox]\ntoken = 123\n")

        assert makeManager(tempDir, configPath).getMapboxToken() == "123"


# ============================================================================
# Helper Tests
# ============================================================================


class TestHelpers:
    def testMergeConfigsDeep(self):
        base = {"mapbox": {"token": "a", "timeout": 30}, "logging": {"level": "INFO"}}

        merged = mergeConfigs(base, {"mapbox": {"timeout": 5}, "logging": "off"})

        assert merged == {"mapbox": {"token": "a", "timeout": 5}, "logging": "off"}
        assert base["mapbox"]["timeout"] == 30

    def testFindTomlFilesSortedAndRecursive(self, tempDir):
        configDir = createConfigDir(tempDir, "configs", {"b.toml": "", "a/c.toml": "", "notes.txt": ""})

        assert [p.relative_to(configDir).as_posix() for p in findTomlFiles(str(configDir))] == ["a/c.toml", "b.toml"]

    def testFindTomlFilesSkipsFile(self, tempDir):
        filePath = createConfigFile(tempDir, "single.toml", "")

        assert findTomlFiles(str(filePath)) == []
