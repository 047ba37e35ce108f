"""Test configuration loading"""

import yaml

from ytmusic_shell.config.settings import Settings
from ytmusic_shell.ytmusic.client import ClientRequestContext
from ytmusic_shell.ytmusic.parser import ParserOptions


class TestSettings:
    """Test Settings sources and helpers"""

    def test_defaults(self, monkeypatch, temp_dir):
        monkeypatch.delenv('YTMUSIC_HL', raising=False)
        monkeypatch.delenv('YTMUSIC_TIMEOUT', raising=False)
        settings = Settings(str(temp_dir / 'missing.yaml'))

        assert settings.network.request_timeout == 15
        assert settings.ytmusic.client_name == "WEB_REMIX"
        assert settings.auth.signing_key_cookies == ["__Secure-3PAPISID", "SAPISID"]
        assert settings.get_thumbnail_band() == (200, 400)

    def test_yaml_file(self, temp_dir, monkeypatch):
        monkeypatch.delenv('YTMUSIC_HL', raising=False)
        config_path = temp_dir / 'config.yaml'
        config_path.write_text(yaml.dump({
            'ytmusic': {'hl': 'en', 'gl': 'US', 'unknown_key': 1},
            'network': {'request_timeout': 30},
            'unknown_section': {'x': 1},
        }), encoding='utf-8')

        settings = Settings(str(config_path))

        assert settings.ytmusic.hl == 'en'
        assert settings.network.request_timeout == 30
        assert not hasattr(settings.ytmusic, 'unknown_key')

    def test_environment_overrides(self, temp_dir, monkeypatch):
        config_path = temp_dir / 'config.yaml'
        config_path.write_text(yaml.dump({'ytmusic': {'hl': 'en'}}), encoding='utf-8')
        monkeypatch.setenv('YTMUSIC_HL', 'de')
        monkeypatch.setenv('YTMUSIC_TIMEOUT', '5')
        monkeypatch.setenv('YTMUSIC_COOKIE_FILE', str(temp_dir / 'cookies.txt'))

        settings = Settings(str(config_path))

        assert settings.ytmusic.hl == 'de'
        assert settings.network.request_timeout == 5
        assert settings.get_cookie_file() == temp_dir / 'cookies.txt'

    def test_invalid_timeout_ignored(self, temp_dir, monkeypatch):
        monkeypatch.setenv('YTMUSIC_TIMEOUT', 'soon')
        settings = Settings(str(temp_dir / 'missing.yaml'))
        assert isinstance(settings.network.request_timeout, int)

    def test_relative_cookie_file(self, temp_dir, monkeypatch):
        monkeypatch.delenv('YTMUSIC_COOKIE_FILE', raising=False)
        settings = Settings(str(temp_dir / 'missing.yaml'))
        settings.security.config_directory = str(temp_dir)
        settings.auth.cookie_file = 'cookies.txt'
        assert settings.get_cookie_file() == temp_dir / 'cookies.txt'

    def test_no_cookie_file(self, temp_dir, monkeypatch):
        monkeypatch.delenv('YTMUSIC_COOKIE_FILE', raising=False)
        settings = Settings(str(temp_dir / 'missing.yaml'))
        settings.auth.cookie_file = ''
        assert settings.get_cookie_file() is None

    def test_validate(self, temp_dir):
        settings = Settings(str(temp_dir / 'missing.yaml'))
        assert settings.validate()

        settings.ytmusic.thumbnail_min_width = 500
        assert not settings.validate()

    def test_validation_errors(self, temp_dir, monkeypatch, capsys):
        monkeypatch.delenv('YTMUSIC_TIMEOUT', raising=False)
        settings = Settings(str(temp_dir / 'missing.yaml'))
        assert settings.validation_errors() == []

        settings.ytmusic.origin = 'http://music.youtube.com'
        settings.network.request_timeout = 0
        settings.auth.signing_key_cookies = []
        errors = settings.validation_errors()

        assert len(errors) == 3
        assert any('https' in error for error in errors)
        assert any('timeout' in error for error in errors)
        assert not settings.validate()
        assert 'Configuration validation errors:' in capsys.readouterr().err

    def test_derived_options(self, temp_dir, monkeypatch):
        monkeypatch.delenv('YTMUSIC_HL', raising=False)
        monkeypatch.delenv('YTMUSIC_GL', raising=False)
        settings = Settings(str(temp_dir / 'missing.yaml'))
        settings.ytmusic.album_terms = ['Plak']
        settings.ytmusic.thumbnail_max_width = 600

        options = ParserOptions.from_settings(settings)
        assert options.album_terms == ('plak',)
        assert options.thumbnail_band == (200, 600)

        monkeypatch.setattr('ytmusic_shell.ytmusic.client.get_settings', lambda: settings)
        assert ClientRequestContext.from_settings() == ClientRequestContext()
