"""
Tests for PackagerConfig - JSON config loading and command-line overrides.
"""
import json
import pytest
from pathlib import Path
from unittest.mock import patch

from appx_signer.Config import PackagerConfig, default_kits_root
from appx_signer.errors import ConfigError, SDK_DOWNLOAD_URL


class TestPackagerConfig:

    def test_defaults(self):
        config = PackagerConfig.defaults()
        assert config.architecture == "x64"
        assert config.package_extension == "appx"
        assert config.sdk_url == SDK_DOWNLOAD_URL
        assert config.cert_start_date == "01/01/2000"
        assert config.kits_root.parts[-3:] == ("Windows Kits", "10", "bin")

    def test_default_kits_root_uses_program_files_x86(self):
        with patch.dict('os.environ', {'ProgramFiles(x86)': '/opt/pf86'}):
            assert default_kits_root() == Path('/opt/pf86') / "Windows Kits" / "10" / "bin"

    def test_missing_file_gives_defaults(self, tmp_path):
        assert PackagerConfig.load(tmp_path / "absent.json") == PackagerConfig.defaults()

    def test_none_path_gives_defaults(self):
        assert PackagerConfig.load(None) == PackagerConfig.defaults()

    def test_load_values(self, tmp_path):
        config_file = tmp_path / "packager_config.json"
        config_file.write_text(json.dumps({
            "kits_root": str(tmp_path / "kits"),
            "architecture": "arm64",
            "package_extension": "msix",
        }))

        config = PackagerConfig.load(config_file)

        assert config.kits_root == tmp_path / "kits"
        assert config.architecture == "arm64"
        assert config.package_extension == "msix"

    def test_unknown_keys_ignored_with_warning(self, tmp_path, caplog):
        config_file = tmp_path / "packager_config.json"
        config_file.write_text(json.dumps({"color": "blue", "architecture": "x86"}))

        with caplog.at_level("WARNING"):
            config = PackagerConfig.load(config_file)

        assert config.architecture == "x86"
        assert "Ignoring unknown config key: color" in caplog.text

    def test_malformed_json_raises(self, tmp_path):
        config_file = tmp_path / "packager_config.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigError):
            PackagerConfig.load(config_file)

    def test_non_object_json_raises(self, tmp_path):
        config_file = tmp_path / "packager_config.json"
        config_file.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="expected a JSON object"):
            PackagerConfig.load(config_file)

    def test_overrides_skip_none(self, tmp_path):
        config = PackagerConfig(kits_root=tmp_path, architecture="x86")

        updated = config.with_overrides(kits_root=None, architecture="arm64")

        assert updated.kits_root == tmp_path
        assert updated.architecture == "arm64"
        assert config.architecture == "x86"

    def test_bundled_config_file_is_valid(self):
        bundled = Path(__file__).parent.parent / "config" / "packager_config.json"
        config = PackagerConfig.load(bundled)
        assert config.architecture == "x64"
        assert config.package_extension == "appx"
