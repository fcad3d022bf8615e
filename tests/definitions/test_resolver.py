"""
Unit Tests for the Definition Resolver

Test Coverage:
- Positional ("array") definitions: [w, h] variants, descriptors,
  attribute pass-through, dropped sources
- Fully qualified ("factory") definitions: defaults and strict mode
- Round trip through Picture.to_dict()
"""

import pytest

from picture_toolkit.core.exceptions import MissingPrimarySourceError
from picture_toolkit.core.models import Variant
from picture_toolkit.definitions.resolver import (
    DefinitionResolver,
    resolve_array,
    resolve_factory,
)


class TestResolveArray:
    """Tests for the positional convention."""

    def test_resolve_when_width_only_then_height_none(self):
        """[600] resolves to width 600 and no height."""
        picture = resolve_array({"img": {"src": [600]}})

        assert picture.img.src.width == 600
        assert picture.img.src.height is None

    def test_resolve_when_width_and_height_then_both_set(self):
        """[600, 300] sets both dimensions."""
        picture = resolve_array({"img": {"src": [600, 300]}})

        assert (picture.img.src.width, picture.img.src.height) == (600, 300)

    def test_resolve_when_non_int_entry_then_none(self):
        """Non-int dimensions (strings, bools) resolve to None."""
        picture = resolve_array({"img": {"src": ["foo", True]}})

        assert picture.img.src.width is None
        assert picture.img.src.height is None

    def test_resolve_when_null_width_then_height_only(self):
        """[None, 50] is a height-only variant."""
        picture = resolve_array({"img": {"src": [None, 50]}})

        assert picture.img.src.width is None
        assert picture.img.src.height == 50

    def test_resolve_when_src_missing_then_raises(self):
        """img.src is required."""
        with pytest.raises(MissingPrimarySourceError):
            resolve_array({"img": {"alt": "no src"}})

    def test_resolve_when_img_missing_then_raises(self):
        """A definition without img has no primary source either."""
        with pytest.raises(MissingPrimarySourceError):
            resolve_array({})

    def test_resolve_when_src_not_list_then_null_variant(self):
        """A non-list src resolves to an all-null variant."""
        picture = resolve_array({"img": {"src": "image.jpg"}})

        assert picture.img.src == Variant()

    def test_resolve_when_src_is_variant_then_passes_through(self):
        """Pre-built variants are used as-is."""
        variant = Variant(width=50, options={"quality": 40})

        picture = resolve_array({"img": {"src": variant}})

        assert picture.img.src is variant

    def test_resolve_when_extra_img_keys_then_attributes(self):
        """Remaining img keys become img attributes."""
        picture = resolve_array({"img": {"src": [600], "alt": "Hero", "loading": "lazy"}})

        assert picture.img.attributes == {"alt": "Hero", "loading": "lazy"}

    def test_resolve_when_srcset_mapping_then_keys_are_descriptors(self):
        """srcset keys become descriptors, in order."""
        picture = resolve_array(
            {"img": {"src": [50], "srcset": {"480w": [480], "800w": [800, 400], "": [100]}}}
        )

        assert [(v.width, v.descriptor) for v in picture.img.srcset] == [
            (480, "480w"),
            (800, "800w"),
            (100, ""),
        ]

    def test_resolve_when_srcset_entry_invalid_then_dropped(self):
        """Non-list srcset values are dropped."""
        picture = resolve_array({"img": {"src": [50], "srcset": {"1x": [100], "2x": "big"}}})

        assert [v.descriptor for v in picture.img.srcset] == ["1x"]

    def test_resolve_when_no_srcset_then_none(self):
        """Absent srcset stays None."""
        assert resolve_array({"img": {"src": [50]}}).img.srcset is None

    def test_resolve_when_sources_then_remaining_keys_are_attributes(self):
        """Source keys other than srcset become attributes."""
        picture = resolve_array(
            {
                "img": {"src": [50]},
                "sources": [
                    {"srcset": {"": [800]}, "media": "(min-width: 800px)", "type": "image/webp"},
                ],
            }
        )

        source = picture.sources.all()[0]
        assert source.attributes == {"media": "(min-width: 800px)", "type": "image/webp"}
        assert source.srcset.all()[0].width == 800

    def test_resolve_when_source_without_srcset_then_dropped(self):
        """Sources with no usable srcset are dropped."""
        picture = resolve_array(
            {
                "img": {"src": [50]},
                "sources": [
                    {"media": "(min-width: 800px)"},
                    {"srcset": {}},
                    "not a mapping",
                    {"srcset": {"": [300]}},
                ],
            }
        )

        assert len(picture.sources) == 1
        assert picture.sources.all()[0].srcset.all()[0].width == 300

    def test_resolve_when_attributes_and_options_then_passed_through(self):
        """Picture attributes and options pass through when mappings."""
        picture = resolve_array(
            {
                "img": {"src": [50]},
                "attributes": {"class": "foo"},
                "options": {"convert": {"image/png": "image/webp"}},
            }
        )

        assert picture.attributes == {"class": "foo"}
        assert picture.options == {"convert": {"image/png": "image/webp"}}

    def test_resolve_when_options_not_mapping_then_empty(self):
        """Non-mapping options become {}."""
        picture = resolve_array({"img": {"src": [50]}, "options": "fast"})

        assert picture.options == {}


class TestResolveFactory:
    """Tests for the fully qualified convention."""

    def test_resolve_when_width_only_then_valid(self):
        """{"width": 200} is a valid src."""
        picture = resolve_factory({"img": {"src": {"width": 200}}})

        assert picture.img.src.width == 200

    def test_resolve_when_invalid_src_then_null_variant(self):
        """Malformed src resolves to an all-null variant."""
        picture = resolve_factory({"img": {"src": {"invalid": "ddd"}}})

        assert picture.img.src == Variant()

    def test_resolve_when_invalid_src_and_strict_then_raises(self):
        """Strict mode surfaces the construction error."""
        with pytest.raises(TypeError):
            resolve_factory({"img": {"src": {"invalid": "ddd"}}}, strict=True)

    def test_resolve_when_missing_src_then_null_variant(self):
        """Factory mode does not require img.src."""
        assert resolve_factory({"img": {}}).img.src == Variant()

    def test_resolve_when_srcset_has_malformed_entry_then_dropped(self):
        """Malformed srcset entries are dropped."""
        picture = resolve_factory(
            {"img": {"src": {"width": 50}, "srcset": [{"width": 100}, {"width": "wide"}]}}
        )

        assert [v.width for v in picture.img.srcset] == [100]

    def test_resolve_when_explicit_attributes_then_used(self):
        """Attributes come from explicit attributes keys."""
        picture = resolve_factory(
            {
                "img": {"src": {"width": 50}, "attributes": {"alt": "A"}},
                "sources": [{"srcset": [{"width": 80}], "attributes": {"media": "print"}}],
            }
        )

        assert picture.img.attributes == {"alt": "A"}
        assert picture.sources.all()[0].attributes == {"media": "print"}

    def test_resolve_when_round_tripped_then_equal(self):
        """resolve_factory(picture.to_dict()).to_dict() reproduces the input."""
        data = {
            "img": {
                "src": {
                    "width": 600,
                    "height": 300,
                    "descriptor": None,
                    "mimeType": "image/webp",
                    "url": None,
                    "path": None,
                    "options": {"quality": 80},
                },
                "srcset": [
                    {
                        "width": 480,
                        "height": None,
                        "descriptor": "480w",
                        "mimeType": None,
                        "url": None,
                        "path": None,
                        "options": {},
                    }
                ],
                "attributes": {"alt": "Hero"},
            },
            "sources": [
                {
                    "srcset": [
                        {
                            "width": 800,
                            "height": None,
                            "descriptor": None,
                            "mimeType": None,
                            "url": "https://example.com/a.jpg",
                            "path": None,
                            "options": {},
                        }
                    ],
                    "attributes": {"media": "(min-width: 800px)"},
                }
            ],
            "attributes": {"class": "hero"},
            "options": {"quality": {"image/webp": 80}},
        }

        assert resolve_factory(data).to_dict() == data

    def test_resolve_when_array_picture_serialized_then_factory_matches(self):
        """A positional definition survives serialization."""
        picture = resolve_array({"img": {"src": [600], "srcset": {"2x": [1200]}, "alt": "A"}})

        assert resolve_factory(picture.to_dict()) == picture


class TestDefinitionResolver:
    """Tests for the DefinitionResolver class."""

    def test_create_when_unknown_mode_then_raises(self):
        """Only array and factory modes exist."""
        with pytest.raises(ValueError, match="Unknown resolve mode"):
            DefinitionResolver("yaml")

    def test_resolve_when_data_not_mapping_then_raises(self):
        """Definition data must be a mapping."""
        with pytest.raises(TypeError):
            DefinitionResolver().resolve(["img"])
