"""Advertisement generation.

Turns a product projection into persuasive copy via a pluggable
text-generation provider.
"""

from storefront.advert.generator import AdvertFormat, AdvertGenerator, build_prompt, sanitize
from storefront.advert.projection import NamedRef, ProductAdvertProjection
from storefront.advert.providers import (
    GeminiTextProvider,
    TextGenerationProvider,
    get_text_provider,
)

__all__ = [
    "AdvertFormat",
    "AdvertGenerator",
    "GeminiTextProvider",
    "NamedRef",
    "ProductAdvertProjection",
    "TextGenerationProvider",
    "build_prompt",
    "get_text_provider",
    "sanitize",
]
