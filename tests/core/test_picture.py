"""
Unit Tests for the Picture model tree

Tests Srcset/Source/Sources/Img/Picture containers, variant iteration
order and delegation to the markup renderer.
"""

import pytest

from picture_toolkit.core.models import (
    CreatedPicture,
    Img,
    Picture,
    Source,
    Sources,
    Srcset,
    Variant,
)


@pytest.fixture
def picture() -> Picture:
    """Picture with an img srcset and two sources."""
    return Picture(
        img=Img(
            src=Variant(width=1, path="img.jpg"),
            srcset=Srcset.of(Variant(width=2), Variant(width=3)),
        ),
        sources=Sources.of(
            Source(srcset=Srcset.of(Variant(width=4)), attributes={"media": "(min-width: 800px)"}),
            Source(srcset=Srcset.of(Variant(width=5), Variant(width=6))),
        ),
        attributes={"class": "foo"},
        options={"quality": {"image/webp": 80}},
    )


class TestSrcset:
    """Tests for Srcset."""

    def test_of_when_variants_given_then_order_kept(self):
        """Srcset keeps insertion order."""
        srcset = Srcset.of(Variant(width=320), Variant(width=640))

        assert [v.width for v in srcset] == [320, 640]
        assert len(srcset) == 2

    def test_create_when_list_given_then_stored_as_tuple(self):
        """Srcset is immutable even when built from a list."""
        srcset = Srcset([Variant(width=320)])

        assert isinstance(srcset.variants, tuple)


class TestPicture:
    """Tests for Picture."""

    def test_srces_when_called_then_img_then_srcset_then_sources(self, picture):
        """srces() visits img.src, img.srcset, then every source."""
        assert [v.width for v in picture.srces()] == [1, 2, 3, 4, 5, 6]

    def test_srces_when_no_srcset_then_img_and_sources_only(self):
        """A missing img srcset is skipped."""
        picture = Picture(
            img=Img(src=Variant(width=1)),
            sources=Sources.of(Source(srcset=Srcset.of(Variant(width=2)))),
        )

        assert [v.width for v in picture.srces()] == [1, 2]

    def test_with_attributes_when_called_then_original_unchanged(self, picture):
        """with_attributes returns a new Picture."""
        updated = picture.with_attributes({"id": "hero"})

        assert updated.attributes == {"id": "hero"}
        assert picture.attributes == {"class": "foo"}
        assert updated.img is picture.img

    def test_to_dict_when_called_then_fully_qualified_form(self, picture):
        """to_dict emits img, sources, attributes and options."""
        data = picture.to_dict()

        assert set(data) == {"img", "sources", "attributes", "options"}
        assert data["img"]["src"]["path"] == "img.jpg"
        assert [v["width"] for v in data["img"]["srcset"]] == [2, 3]
        assert data["sources"][0]["attributes"] == {"media": "(min-width: 800px)"}
        assert data["options"] == {"quality": {"image/webp": 80}}

    def test_to_dict_when_no_srcset_then_null(self):
        """A missing img srcset serializes as None."""
        data = Picture(img=Img(src=Variant(width=1))).to_dict()

        assert data["img"]["srcset"] is None
        assert data["sources"] == []

    def test_render_when_path_src_then_picture_markup(self):
        """render() delegates to the markup factory."""
        picture = Picture(img=Img(src=Variant(path="image.jpg")))

        assert picture.render() == '<picture><img src="image.jpg"></picture>'
        assert str(picture) == picture.render()

    def test_render_when_no_src_then_empty_string(self):
        """A picture without any img source renders nothing."""
        assert Picture(img=Img(src=Variant(width=100))).render() == ""

    def test_created_picture_when_replaced_then_type_kept(self, picture):
        """with_* on a CreatedPicture keeps the subclass."""
        created = CreatedPicture(img=picture.img)

        assert isinstance(created.with_attributes({}), CreatedPicture)
