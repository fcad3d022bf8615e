"""
Core Models Package

Immutable value objects describing a picture and its variants.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while a definition is resolved or generated
2. Untouched sub-trees (e.g. a srcset) are shared between a Picture and
   the CreatedPicture derived from it
3. Safe to pass between worker threads during encoding

Every "with_*" method returns a new instance.
"""

from .variant import EncodedResult, Variant, VARIANT_FIELDS
from .picture import CreatedPicture, Img, Picture, Source, Sources, Srcset

__all__ = [
    "EncodedResult",
    "Variant",
    "VARIANT_FIELDS",
    "Srcset",
    "Source",
    "Sources",
    "Img",
    "Picture",
    "CreatedPicture",
]
