"""Tests for platform helpers."""

import os

from habitvault import config, utils


class TestAppDataDir:

    def test_linux_uses_xdg_data_home(self, monkeypatch, tmp_path):
        monkeypatch.setattr(utils.platform, "system", lambda: "Linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert utils.get_app_data_dir() == os.path.join(str(tmp_path), config.DATA_DIR_NAME)

    def test_linux_fallback(self, monkeypatch):
        monkeypatch.setattr(utils.platform, "system", lambda: "Linux")
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        expected = os.path.join(os.path.expanduser("~"), ".local", "share", config.DATA_DIR_NAME)
        assert utils.get_app_data_dir() == expected

    def test_macos(self, monkeypatch):
        monkeypatch.setattr(utils.platform, "system", lambda: "Darwin")
        expected = os.path.join(os.path.expanduser("~"), "Library", "Application Support",
                                config.DATA_DIR_NAME)
        assert utils.get_app_data_dir() == expected

    def test_windows_uses_appdata(self, monkeypatch, tmp_path):
        monkeypatch.setattr(utils.platform, "system", lambda: "Windows")
        monkeypatch.setenv("APPDATA", str(tmp_path))
        assert utils.get_app_data_dir() == os.path.join(str(tmp_path), config.DATA_DIR_NAME)


class TestDefaultVaultPath:

    def test_default_path_under_app_data_dir(self, monkeypatch, tmp_path, fast_crypto):
        from habitvault.storage import Vault

        monkeypatch.setattr("habitvault.storage.get_app_data_dir", lambda: str(tmp_path / "appdata"))
        vault = Vault(crypto=fast_crypto)
        assert vault.filepath == str(tmp_path / "appdata" / config.DEFAULT_VAULT_FILE)
        assert (tmp_path / "appdata").is_dir()
