"""
Tests for creator.config

Test Coverage:
- CreatorConfig defaults and validation
- effective_upsize coupling with skip_smaller_sized_src
- from_dict()
"""
import pytest

from picture_toolkit.creator.config import CreatorConfig, DEFAULT_SUPPORTED_MIME_TYPES


class TestCreatorConfig:
    """Tests for CreatorConfig."""

    def test_defaults(self):
        """Defaults match the documented values."""
        config = CreatorConfig()

        assert config.supported_mime_types == DEFAULT_SUPPORTED_MIME_TYPES
        assert config.disallowed_actions == ()
        assert config.upsize is None
        assert config.skip_smaller_sized_src is False
        assert config.verify_sizes is False
        assert config.max_workers == 1

    @pytest.mark.parametrize(
        "upsize,skip,expected",
        [
            (None, False, None),
            (2.0, False, 2.0),
            (0.5, False, 0.5),
            (None, True, 1.0),
            (0.5, True, 1.0),
            (1.5, True, 1.5),
        ],
    )
    def test_effective_upsize(self, upsize, skip, expected):
        """Skipping smaller sources forces an upsize of at least 1.0."""
        config = CreatorConfig(upsize=upsize, skip_smaller_sized_src=skip)

        assert config.effective_upsize == expected

    def test_is_supported(self):
        """Only configured mime types are supported."""
        config = CreatorConfig(supported_mime_types=("image/jpeg",))

        assert config.is_supported("image/jpeg")
        assert not config.is_supported("image/png")
        assert not config.is_supported(None)

    def test_lists_are_stored_as_tuples(self):
        """Sequences are normalized so the config stays hashable."""
        config = CreatorConfig(supported_mime_types=["image/png"], disallowed_actions=["crop"])

        assert config.supported_mime_types == ("image/png",)
        assert config.disallowed_actions == ("crop",)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"supported_mime_types": ()},
            {"supported_mime_types": ("image/svg+xml",)},
            {"upsize": 0},
            {"upsize": "big"},
            {"upsize": True},
            {"max_workers": 0},
            {"max_workers": "2"},
            {"max_workers": 1.5},
            {"supported_mime_types": "image/png"},
            {"disallowed_actions": [1]},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        """Invalid configuration is rejected on construction."""
        with pytest.raises(ValueError):
            CreatorConfig(**kwargs)

    def test_from_dict(self):
        """from_dict accepts the field names."""
        config = CreatorConfig.from_dict({"upsize": 2.0, "verify_sizes": True, "max_workers": 4})

        assert config.upsize == 2.0
        assert config.verify_sizes is True
        assert config.max_workers == 4

    def test_from_dict_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(ValueError, match="Unknown creator config keys"):
            CreatorConfig.from_dict({"upsize": 2.0, "speed": "fast"})
