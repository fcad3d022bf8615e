"""
Module: creator.creator

Purpose:
    Generate a CreatedPicture from a source image and a picture
    definition: every variant gets its mime type, quality and actions
    resolved, is encoded by the image processor, and is then kept or
    dropped by the skip rules.

Key Classes:
    - PictureCreator: create_from_resource / create_from_stream /
      create_from_file

Pipeline:
    1. Verify the source mime type (fatal)
    2. Optionally verify the source is large enough (fatal)
    3. Plan: resolve options of img.src, img.srcset and sources in order
    4. Encode every planned variant (optionally on a thread pool)
    5. Reassemble the picture in declaration order, applying skip rules

Dependencies:
    - concurrent.futures (std): Optional parallel encoding

Used By:
    - cli: render command
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Iterator, List, Mapping, Optional, Sequence, Union

from picture_toolkit.core.exceptions import (
    ActionCreateError,
    ImageProcessorError,
    MimeDetectionError,
    PictureCreateError,
    ResourceTooSmallError,
    UnsupportedMimeTypeError,
)
from picture_toolkit.core.models import CreatedPicture, Img, Picture, Source, Sources, Srcset, Variant
from picture_toolkit.definitions import Definition

from .actions import Action, ActionFactory, Encode, Fit, Resize
from .config import CreatorConfig
from .mime import MimeDetector, get_image_format
from .processor import ImageProcessor, PillowImageProcessor
from .resources import FileResource, Resource, StreamResource

logger = logging.getLogger(__name__)

# Output actions a definition may never request
ALWAYS_DISALLOWED_ACTIONS: tuple[str, ...] = ("save", "encode")


@dataclass
class _SourcePlan:
    """Option-resolved variants of one kept source."""

    source: Source
    variants: List[Variant]


class PictureCreator:
    """
    Create pictures from a source image and a definition.

    Attributes:
        processor: Image processor used for probing and encoding
        config: Creator configuration
        action_factory: Builds actions from the "actions" option
        mime_detector: Detects the source mime type

    Example:
        >>> creator = PictureCreator(config=CreatorConfig(skip_smaller_sized_src=True))
        >>> picture = creator.create_from_file("photo.jpg", ArrayDefinition("thumb", {"img": {"src": [120]}}))
        >>> picture.img.src.encoded.width
        120
    """

    def __init__(
        self,
        processor: Optional[ImageProcessor] = None,
        config: Optional[CreatorConfig] = None,
        action_factory: Optional[ActionFactory] = None,
        mime_detector: Optional[MimeDetector] = None,
    ) -> None:
        self.processor = processor or PillowImageProcessor()
        self.config = config or CreatorConfig()
        self.action_factory = action_factory or ActionFactory()
        self.mime_detector = mime_detector or MimeDetector()
        self._disallowed = frozenset(ALWAYS_DISALLOWED_ACTIONS + self.config.disallowed_actions)

    # ─────────────────────────────────────────────────────────────────────────
    # Entry Points
    # ─────────────────────────────────────────────────────────────────────────

    def create_from_resource(
        self,
        resource: Resource,
        definition: Union[Definition, Picture],
    ) -> CreatedPicture:
        """
        Create a picture from a resource.

        Args:
            resource: Source image
            definition: Definition or already resolved Picture

        Returns:
            CreatedPicture whose kept variants carry their encoded result

        Raises:
            UnsupportedMimeTypeError: If the source type is not supported
            ResourceTooSmallError: If verify_sizes is on and a variant
                exceeds the source dimensions
            PictureCreateError: If encoding a variant fails
        """
        picture = definition if isinstance(definition, Picture) else definition.to_picture()
        return self._create_picture(resource, picture)

    def create_from_stream(
        self,
        stream: BinaryIO,
        definition: Union[Definition, Picture],
    ) -> CreatedPicture:
        """Create a picture from a binary file-like object."""
        return self.create_from_resource(StreamResource(stream), definition)

    def create_from_file(
        self,
        path: Union[str, Path],
        definition: Union[Definition, Picture],
    ) -> CreatedPicture:
        """Create a picture from an image file."""
        return self.create_from_resource(FileResource(Path(path)), definition)

    # ─────────────────────────────────────────────────────────────────────────
    # Pipeline
    # ─────────────────────────────────────────────────────────────────────────

    def _create_picture(self, resource: Resource, picture: Picture) -> CreatedPicture:
        mime_type = self._verify_mime_type(resource)

        if self.config.verify_sizes:
            self._verify_sizes(resource, picture)

        # Plan
        img_src = self._modify_variant(picture.img.src, picture, mime_type)
        img_srcset: Optional[List[Variant]] = None
        if picture.img.srcset is not None:
            img_srcset = [self._modify_variant(v, picture, mime_type) for v in picture.img.srcset]
        source_plans = self._plan_sources(picture, mime_type)

        planned = [img_src, *(img_srcset or [])]
        for plan in source_plans:
            planned.extend(plan.variants)

        logger.info(f"Creating picture from {resource!r}: {len(planned)} variants as {mime_type}")

        # Encode
        encoded = iter(self._encode_all(resource, planned))

        # Reassemble
        img = self._assemble_img(picture.img, encoded, img_srcset)
        sources = Sources.of(*(self._assemble_source(plan, encoded) for plan in source_plans))

        logger.info(f"Created picture with {len(sources)} sources")
        return CreatedPicture(
            img=img,
            sources=sources,
            attributes=picture.attributes,
            options=picture.options,
        )

    def _plan_sources(self, picture: Picture, mime_type: str) -> List[_SourcePlan]:
        plans = []
        for index, source in enumerate(picture.sources):
            forced_type = source.attributes.get("type")
            if forced_type is not None:
                if not self.config.is_supported(forced_type):
                    logger.debug(f"Skipped source {index} as unsupported mime type")
                    continue
            variants = []
            for variant in source.srcset:
                if forced_type is not None:
                    variant = variant.with_mime_type(forced_type)
                variants.append(self._modify_variant(variant, picture, mime_type))
            plans.append(_SourcePlan(source=source, variants=variants))
        return plans

    def _assemble_img(self, img: Img, encoded: Iterator[Variant], srcset: Optional[List[Variant]]) -> Img:
        img_src = next(encoded)
        if self._skip_encoded(img_src, log=False):
            logger.debug("Img src larger as original")
        img = img.with_src(img_src)

        if srcset is not None:
            kept = [v for v in (next(encoded) for _ in srcset) if not self._skip_encoded(v)]
            img = img.with_srcset(Srcset.of(*kept))
        return img

    def _assemble_source(self, plan: _SourcePlan, encoded: Iterator[Variant]) -> Source:
        kept = [v for v in (next(encoded) for _ in plan.variants) if not self._skip_encoded(v)]
        return plan.source.with_srcset(Srcset.of(*kept))

    # ─────────────────────────────────────────────────────────────────────────
    # Option Resolution
    # ─────────────────────────────────────────────────────────────────────────

    def _modify_variant(self, variant: Variant, picture: Picture, resource_mime_type: str) -> Variant:
        """Resolve mime type, quality and actions of a variant."""
        options = picture.options

        if variant.mime_type is None:
            convert = options.get("convert")
            target = convert.get(resource_mime_type) if isinstance(convert, Mapping) else None
            if self.config.is_supported(target):
                variant = variant.with_mime_type(target)
            else:
                variant = variant.with_mime_type(resource_mime_type)

        if not self.config.is_supported(variant.mime_type):
            variant = variant.with_mime_type(resource_mime_type)

        quality = options.get("quality")
        if variant.quality is None and isinstance(quality, Mapping):
            variant = variant.with_option("quality", quality.get(variant.mime_type))

        actions = options.get("actions")
        if variant.actions is None and isinstance(actions, Mapping):
            variant = variant.with_option("actions", actions)

        return variant

    def _create_actions(self, actions: Any) -> List[Action]:
        if not isinstance(actions, Mapping):
            return []

        created = []
        for name, params in actions.items():
            if isinstance(params, Action):
                action = params
            elif not isinstance(name, str) or not isinstance(params, Mapping):
                logger.debug(f"Ignored action {name!r} with parameters {params!r}")
                continue
            else:
                try:
                    action = self.action_factory.create_action(name, params)
                except ActionCreateError as e:
                    logger.warning(f"Unable to create action {name}: {e}")
                    continue

            if action.kind in self._disallowed:
                logger.debug(f"Disallowed action {name}")
                continue
            created.append(action)
        return created

    # ─────────────────────────────────────────────────────────────────────────
    # Encoding
    # ─────────────────────────────────────────────────────────────────────────

    def _encode_all(self, resource: Resource, variants: Sequence[Variant]) -> List[Variant]:
        workers = min(self.config.max_workers, len(variants))
        if workers <= 1:
            return [self._encode_variant(resource, v) for v in variants]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._encode_variant, resource, v) for v in variants]
            try:
                return [future.result() for future in futures]
            finally:
                for future in futures:
                    future.cancel()

    def _encode_variant(self, resource: Resource, variant: Variant) -> Variant:
        if variant.mime_type is None:
            raise PictureCreateError("No mime type specified", resource=resource)

        upsize = self.config.effective_upsize
        try:
            if variant.width is not None and variant.height is not None:
                sizing: Action = Fit(width=variant.width, height=variant.height, upsize=upsize)
            else:
                sizing = Resize(width=variant.width, height=variant.height, upsize=upsize)
            quality = variant.quality
            if isinstance(quality, bool) or not isinstance(quality, int):
                quality = None
            actions = [
                *self._create_actions(variant.actions),
                sizing,
                Encode(mime_type=variant.mime_type, quality=quality),
            ]
            encoded = self.processor.apply(resource, actions)
        except (ImageProcessorError, ValueError) as e:
            raise PictureCreateError(str(e), resource=resource) from e

        return variant.with_encoded(encoded)

    def _skip_encoded(self, variant: Variant, log: bool = True) -> bool:
        if variant.encoded is None:
            return True
        if not self.config.skip_smaller_sized_src:
            return False
        if variant.width is not None and variant.width != variant.encoded.width:
            if log:
                logger.debug(f"Skipped src with width {variant.width} as lower sized")
            return True
        if variant.height is not None and variant.height != variant.encoded.height:
            if log:
                logger.debug(f"Skipped src with height {variant.height} as lower sized")
            return True
        return False

    # ─────────────────────────────────────────────────────────────────────────
    # Verification
    # ─────────────────────────────────────────────────────────────────────────

    def _verify_mime_type(self, resource: Resource) -> str:
        try:
            mime_type = self.mime_detector.detect(resource)
        except MimeDetectionError as e:
            raise UnsupportedMimeTypeError(resource=resource) from e

        if not self.config.is_supported(mime_type) or get_image_format(mime_type) is None:
            raise UnsupportedMimeTypeError(resource=resource, mime_type=mime_type)
        return mime_type

    def _verify_sizes(self, resource: Resource, picture: Picture) -> None:
        try:
            width, height = self.processor.probe_dimensions(resource)
        except ImageProcessorError as e:
            raise PictureCreateError(str(e), resource=resource) from e

        for variant in picture.srces():
            if variant.width is not None and variant.width > width:
                raise ResourceTooSmallError(
                    "Image width too small to create images", resource=resource, dimension="width"
                )
            if variant.height is not None and variant.height > height:
                raise ResourceTooSmallError(
                    "Image height too small to create images", resource=resource, dimension="height"
                )
