"""
Tests for PathResolver - development vs portable path layout.
"""
from unittest.mock import patch

from appx_signer.PathResolver import PathResolver


class TestPathResolver:
    """Test suite for PathResolver functionality."""

    def test_detect_development_mode(self, tmp_path):
        script_path = tmp_path / "main.py"
        script_path.write_text("")

        resolver = PathResolver(script_path)

        assert resolver.mode == "development"
        assert resolver.paths.root_dir == tmp_path
        assert resolver.paths.config_dir == tmp_path / "config"
        assert resolver.paths.logs_dir == tmp_path / "logs"

    def test_source_tree_with_internal_dirs_is_development(self, tmp_path):
        script_path = tmp_path / "AppxSigner" / "_internal" / "app" / "main.py"
        script_path.parent.mkdir(parents=True)
        script_path.write_text("")

        with patch.dict('os.environ', {'LOCALAPPDATA': str(tmp_path / "Local")}):
            resolver = PathResolver(script_path)

        assert resolver.mode == "development"
        assert resolver.paths.root_dir == script_path.parent
        assert resolver.paths.logs_dir == script_path.parent / "logs"

    def test_frozen_without_local_app_data_logs_beside_executable(self, tmp_path):
        script_path = tmp_path / "dist" / "appx-signer.exe"

        with patch.dict('os.environ', {}, clear=True):
            resolver = PathResolver(script_path, is_frozen=True)

        assert resolver.mode == "portable"
        assert resolver.paths.config_dir == tmp_path / "dist" / "config"
        assert resolver.paths.logs_dir == tmp_path / "dist" / "logs"

    def test_frozen_uses_local_app_data_for_logs(self, tmp_path):
        script_path = tmp_path / "dist" / "appx-signer.exe"

        with patch.dict('os.environ', {'LOCALAPPDATA': str(tmp_path / "Local")}):
            resolver = PathResolver(script_path, is_frozen=True)

        assert resolver.mode == "portable"
        assert resolver.paths.root_dir == tmp_path / "dist"
        assert resolver.paths.logs_dir == tmp_path / "Local" / "AppxSigner" / "logs"

    def test_get_config_path(self, tmp_path):
        resolver = PathResolver(tmp_path / "main.py")
        assert resolver.get_config_path() == tmp_path / "config" / "packager_config.json"
        assert resolver.get_config_path("other.json") == tmp_path / "config" / "other.json"

    def test_ensure_local_dir_structure_creates_logs(self, tmp_path):
        resolver = PathResolver(tmp_path / "main.py")

        resolver.ensure_local_dir_structure()

        assert (tmp_path / "logs").is_dir()
