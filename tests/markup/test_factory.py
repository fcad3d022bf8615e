"""
Tests for markup.factory

Test Coverage:
- Img src selection priority and NullPictureTag
- Width/height backfilling
- Source type attribute rules and srcset strings
"""
import pytest

from picture_toolkit.core.models import (
    EncodedResult,
    Img,
    Picture,
    Source,
    Sources,
    Srcset,
    Variant,
)
from picture_toolkit.markup.factory import PictureTagFactory, variant_path
from picture_toolkit.markup.picture_tag import NullPictureTag


@pytest.fixture
def factory():
    return PictureTagFactory()


@pytest.fixture
def encoded():
    return EncodedResult(
        data=b"imgdata",
        mime_type="image/jpeg",
        extension="jpg",
        width=200,
        height=100,
        size_bytes=7,
    )


def render(factory, picture):
    return factory.create_from_picture(picture).render()


class TestVariantPath:
    """Tests for variant_path."""

    def test_priority_url_then_encoded_then_path(self, encoded):
        """url wins over encoded, encoded over path."""
        assert variant_path(Variant(url="u.jpg", path="p.jpg").with_encoded(encoded)) == "u.jpg"
        assert variant_path(Variant(path="p.jpg").with_encoded(encoded)).startswith("data:image/jpeg")
        assert variant_path(Variant(path="p.jpg")) == "p.jpg"
        assert variant_path(Variant()) == ""

    def test_descriptor_appended(self):
        """Descriptors follow the path after a space."""
        assert variant_path(Variant(path="a.jpg", descriptor="2x"), with_descriptor=True) == "a.jpg 2x"
        assert variant_path(Variant(path="a.jpg", descriptor=""), with_descriptor=True) == "a.jpg"


class TestImg:
    """Tests for img rendering."""

    def test_render_when_path_then_img(self, factory):
        """A path src renders as img src."""
        picture = Picture(img=Img(src=Variant(path="image.jpg")))

        assert render(factory, picture) == '<picture><img src="image.jpg"></picture>'

    def test_render_when_img_attributes_then_before_src(self, factory):
        """Declared img attributes come first."""
        picture = Picture(img=Img(src=Variant(path="image.jpg"), attributes={"loading": "lazy"}))

        assert render(factory, picture) == '<picture><img loading="lazy" src="image.jpg"></picture>'

    def test_render_when_picture_attributes_then_on_picture(self, factory):
        """Picture attributes go on the picture element."""
        picture = Picture(img=Img(src=Variant(path="image.jpg")), attributes={"class": "foo"})

        assert render(factory, picture) == '<picture class="foo"><img src="image.jpg"></picture>'

    def test_render_when_encoded_then_data_url_and_dimensions(self, factory, encoded):
        """Encoded variants render as data URLs with encoded dimensions."""
        picture = Picture(img=Img(src=Variant(width=400).with_encoded(encoded)))

        assert render(factory, picture) == (
            '<picture><img src="data:image/jpeg;base64,aW1nZGF0YQ==" width="200" height="100"></picture>'
        )

    def test_render_when_requested_dimensions_then_backfilled(self, factory):
        """Requested dimensions fill width/height when not encoded."""
        picture = Picture(img=Img(src=Variant(path="a.jpg", width=300)))

        assert render(factory, picture) == '<picture><img src="a.jpg" width="300"></picture>'

    def test_render_when_width_declared_then_not_overwritten(self, factory):
        """Declared width/height attributes win."""
        picture = Picture(img=Img(src=Variant(path="a.jpg", width=300, height=200), attributes={"width": "100%"}))

        assert render(factory, picture) == '<picture><img width="100%" src="a.jpg" height="200"></picture>'

    def test_render_when_img_srcset_then_appended(self, factory):
        """A non-empty img srcset is appended."""
        picture = Picture(
            img=Img(
                src=Variant(path="a.jpg"),
                srcset=Srcset.of(Variant(path="a-480.jpg", descriptor="480w"), Variant(path="a-800.jpg", descriptor="800w")),
            )
        )

        assert render(factory, picture) == (
            '<picture><img src="a.jpg" srcset="a-480.jpg 480w, a-800.jpg 800w"></picture>'
        )

    def test_render_when_empty_img_srcset_then_omitted(self, factory):
        """An empty img srcset adds nothing."""
        picture = Picture(img=Img(src=Variant(path="a.jpg"), srcset=Srcset()))

        assert render(factory, picture) == '<picture><img src="a.jpg"></picture>'

    def test_create_when_no_src_then_null_tag(self, factory):
        """No resolvable img src gives a NullPictureTag."""
        tag = factory.create_from_picture(Picture(img=Img(src=Variant(width=100))))

        assert isinstance(tag, NullPictureTag)
        assert tag.render() == ""


class TestSources:
    """Tests for source rendering."""

    def picture_with_source(self, *variants, **attributes):
        return Picture(
            img=Img(src=Variant(path="image.jpg")),
            sources=Sources.of(Source(srcset=Srcset.of(*variants), attributes=attributes)),
        )

    def test_render_when_declared_attributes_then_srcset_last(self, factory):
        """Declared attributes render first, srcset last."""
        picture = self.picture_with_source(
            Variant(path="img.webp", mime_type="image/webp"),
            media="(min-width: 800px)",
            type="image/webp",
            width="300",
            height="100",
        )

        assert render(factory, picture) == (
            '<picture><source media="(min-width: 800px)" type="image/webp" width="300" height="100" '
            'srcset="img.webp"><img src="image.jpg"></picture>'
        )

    def test_render_when_empty_srcset_then_source_skipped(self, factory):
        """Sources with an empty srcset are skipped."""
        picture = self.picture_with_source(media="print")

        assert render(factory, picture) == '<picture><img src="image.jpg"></picture>'

    def test_render_when_several_mime_types_then_type_dropped(self, factory):
        """Mixed mime types remove the type attribute."""
        picture = self.picture_with_source(
            Variant(path="a.webp", mime_type="image/webp"),
            Variant(path="a.png", mime_type="image/png"),
            type="image/webp",
        )

        assert 'type="' not in render(factory, picture)

    def test_render_when_one_differing_mime_type_then_type_corrected(self, factory):
        """A single differing mime type overwrites the type attribute."""
        picture = self.picture_with_source(
            Variant(path="a.png", mime_type="image/png"),
            Variant(path="b.png", mime_type="image/png", descriptor="2x"),
            type="image/webp",
        )

        assert '<source type="image/png" srcset="a.png, b.png 2x">' in render(factory, picture)

    def test_render_when_no_mime_types_then_type_untouched(self, factory):
        """Variants without mime types leave the type alone."""
        picture = self.picture_with_source(Variant(path="a.avif"), type="image/avif")

        assert '<source type="image/avif" srcset="a.avif">' in render(factory, picture)

    def test_render_when_no_type_then_none_added(self, factory):
        """No type attribute is invented."""
        picture = self.picture_with_source(Variant(path="a.webp", mime_type="image/webp"))

        assert '<source srcset="a.webp">' in render(factory, picture)
