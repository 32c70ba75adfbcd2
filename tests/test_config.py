"""Tests for library configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kdindex.core.config import Settings


class TestSettings:
    """Test cases for Settings configuration."""

    def test_default_settings(self):
        """Test that default settings are loaded correctly."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.default_index_type == "auto"
        assert settings.kdtree_partition == "select"
        assert settings.thread_safe is True
        assert settings.default_distance == "euclidean"
        assert settings.default_minkowski_p == 2.0
        assert settings.default_k == 10
        assert settings.log_level == "INFO"
        assert settings.log_queries is False

    def test_environment_variable_override(self):
        """Test that prefixed environment variables override defaults."""
        with patch.dict(
            os.environ,
            {
                "KDINDEX_DEFAULT_INDEX_TYPE": "kdtree",
                "KDINDEX_KDTREE_PARTITION": "sort",
                "KDINDEX_DEFAULT_K": "3",
                "KDINDEX_LOG_LEVEL": "DEBUG",
                "KDINDEX_LOG_QUERIES": "true",
            },
        ):
            settings = Settings(_env_file=None)

            assert settings.default_index_type == "kdtree"
            assert settings.kdtree_partition == "sort"
            assert settings.default_k == 3
            assert settings.log_level == "DEBUG"
            assert settings.log_queries is True

    def test_unprefixed_variables_ignored(self):
        """Test that variables without the prefix do not leak in."""
        with patch.dict(os.environ, {"DEFAULT_K": "99"}):
            settings = Settings(_env_file=None)

            assert settings.default_k != 99

    def test_invalid_values_rejected(self):
        """Test that out-of-range values fail validation."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_minkowski_p=0.5)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, kdtree_partition="quickselect")
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_k=-1)

    def test_logging_formats(self):
        """Test that logging formats are configured correctly."""
        settings = Settings(_env_file=None)

        assert "%(asctime)s" in settings.log_format
        assert "%(name)s" in settings.log_format
        assert "%(levelname)s" in settings.log_format
        assert "%(message)s" in settings.log_format
