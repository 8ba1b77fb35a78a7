"""
Tests for Configuration Management
==================================

Run with: pytest tests/
"""

import pytest
import tempfile
import os

from tds_codec.config import (
    CodecConfig, default_config, load_config, parse_config,
    create_sample_config, save_sample_config, load_config_with_env
)


class TestParseConfig:
    """Tests for configuration parsing"""

    def test_parse_empty_config(self):
        """Test defaults when nothing is set"""
        config = parse_config({})

        assert config == CodecConfig()

    def test_parse_full_config(self):
        """Test parsing full configuration"""
        data = {
            'logging': {
                'level': 'debug',
                'unknown_types': True
            },
            'output': {
                'format': 'hexdump'
            }
        }

        config = parse_config(data)

        assert config.log_level == 'DEBUG'
        assert config.log_unknown_types is True
        assert config.dump_format == 'hexdump'

    def test_parse_empty_sections(self):
        """Test sections present but left empty"""
        config = parse_config({'logging': None, 'output': None})

        assert config.log_level == 'INFO'
        assert config.dump_format == 'hex'

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            parse_config({'logging': {'level': 'LOUD'}})

    def test_invalid_format(self):
        with pytest.raises(ValueError):
            parse_config({'output': {'format': 'base64'}})


class TestDefaultConfig:
    """Tests for default configuration"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv('TDS_CODEC_LOG_LEVEL', raising=False)
        config = default_config()

        assert config.log_level == 'INFO'
        assert config.log_unknown_types is False
        assert config.dump_format == 'hex'

    def test_env_override(self, monkeypatch):
        """Test log level taken from the environment"""
        monkeypatch.setenv('TDS_CODEC_LOG_LEVEL', 'debug')

        assert default_config().log_level == 'DEBUG'


class TestConfigFiles:
    """Tests for configuration file handling"""

    def test_load_config(self):
        """Test loading config from YAML file"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("logging:\n  level: WARNING\noutput:\n  format: hexdump\n")
            path = f.name

        try:
            config = load_config(path)
            assert config.log_level == 'WARNING'
            assert config.dump_format == 'hexdump'
        finally:
            os.unlink(path)

    def test_load_empty_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            path = f.name

        try:
            assert load_config(path) == CodecConfig()
        finally:
            os.unlink(path)

    def test_create_sample_config(self):
        """Test sample config generation"""
        sample = create_sample_config()

        assert 'logging:' in sample
        assert 'output:' in sample
        assert 'unknown_types' in sample

    def test_save_and_load_sample(self, monkeypatch):
        """Test the sample config loads back"""
        monkeypatch.delenv('TDS_CODEC_LOG_LEVEL', raising=False)
        with tempfile.NamedTemporaryFile(suffix='.yaml', delete=False) as f:
            path = f.name

        try:
            save_sample_config(path)
            config = load_config_with_env(path)

            assert config.log_level == 'INFO'
            assert config.log_unknown_types is False
            assert config.dump_format == 'hex'
        finally:
            os.unlink(path)

    def test_env_substitution(self, monkeypatch):
        """Test ${VAR} and ${VAR:-default} substitution"""
        monkeypatch.setenv('CODEC_TEST_LEVEL', 'ERROR')
        monkeypatch.delenv('CODEC_TEST_FORMAT', raising=False)

        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(
                "logging:\n"
                "  level: ${CODEC_TEST_LEVEL}\n"
                "output:\n"
                "  format: ${CODEC_TEST_FORMAT:-hexdump}\n"
            )
            path = f.name

        try:
            config = load_config_with_env(path)
            assert config.log_level == 'ERROR'
            assert config.dump_format == 'hexdump'
        finally:
            os.unlink(path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
