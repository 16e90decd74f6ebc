"""Advertisement copy generator.

Builds a copywriting prompt from a product projection, sends it to a
text-generation provider and sanitizes whatever comes back.
"""

import re
from enum import Enum

import structlog

from storefront.advert.projection import ProductAdvertProjection
from storefront.advert.providers import TextGenerationProvider
from storefront.domain.exceptions import AdvertGenerationError

logger = structlog.get_logger()

MAX_WORDS = 150
MAX_HEADLINE_WORDS = 10
MAX_FEATURE_POINTS = 5

_CONTROL_CHARS = re.compile(r"[\n\r\t]+")


class AdvertFormat(str, Enum):
    """Output format of the advertisement."""

    TEXT = "text"
    HTML = "html"


_HTML_RULES = (
    "- Format the advertisement using HTML tags: <h1> for the headline, <p> for "
    "paragraphs, <ul> and <li> for the feature list and <strong> for emphasis.\n"
    "- Do not add <html>, <head> or <body> tags."
)

_TEXT_RULES = (
    "- Do not use Markdown, bullet points, numbered lists or any special characters "
    "(including '\\n', '\\r', '\\t', or '-' for lists) that would create line breaks "
    "or formatting. The text must flow continuously as plain prose."
)


def build_prompt(projection: ProductAdvertProjection, advert_format: AdvertFormat) -> str:
    """Build the copywriting prompt.

    Args:
        projection: Product fields to advertise.
        advert_format: Requested output format.

    Returns:
        Prompt text.
    """
    format_rules = _HTML_RULES if advert_format is AdvertFormat.HTML else _TEXT_RULES

    return f"""You are a world-class advertising copywriter specializing in direct-response marketing. Write a highly persuasive and professional advertisement for the product below.

OBJECTIVE:
Create an engaging advertisement that drives immediate interest and action.

AUDIENCE PROFILE:
- Target audience: tech-savvy professionals and enthusiasts looking for high-quality products.
- Primary need: the problem this product solves or the wish it fulfills for them.

TONE & STYLE:
- Tone: professional, friendly and conversational.
- Call-to-action goal: click to buy now.

ADVERTISEMENT STRUCTURE:
1. Headline: a bold, attention-grabbing headline of at most {MAX_HEADLINE_WORDS} words focused on the main benefit.
2. Introduction: a short paragraph that speaks directly to the audience's problem.
3. Features & benefits: at most {MAX_FEATURE_POINTS} points, each translating a feature into a direct benefit.
4. Closing: one persuasive sentence that creates urgency.
5. Call to action: end with the call-to-action.

PRODUCT DATA:
- Name: {projection.title}
- Description: {projection.description}
- Price: {projection.price:.2f} €
- Brand: {projection.mark.name}
- Product category: {projection.category.name}

OUTPUT RULES:
- The advertisement must be under {MAX_WORDS} words total.
- All content must be directly relevant to the product data.
- Do not include any preamble or explanation (e.g. "Here is your ad..."); output only the advertisement.
{format_rules}
"""


def sanitize(text: str) -> str:
    """Collapse runs of newline, carriage-return and tab characters to one space and trim."""
    return _CONTROL_CHARS.sub(" ", text).strip()


class AdvertGenerator:
    """Generates advertisement copy through a text-generation provider.

    Example usage:
        generator = AdvertGenerator(get_text_provider())
        advert = await generator.generate(projection, AdvertFormat.HTML)
    """

    def __init__(self, provider: TextGenerationProvider) -> None:
        """Initialize generator.

        Args:
            provider: Text-generation provider.
        """
        self.provider = provider

    async def generate(
        self,
        projection: ProductAdvertProjection,
        advert_format: AdvertFormat = AdvertFormat.TEXT,
    ) -> str:
        """Generate a sanitized advertisement.

        Args:
            projection: Product fields to advertise.
            advert_format: Requested output format.

        Returns:
            Advertisement text without line breaks or tabs.

        Raises:
            AdvertGenerationError: If the provider returned no text.
            ProviderUnavailableError: If the provider kept failing.
        """
        prompt = build_prompt(projection, advert_format)
        logger.debug(
            "Generating advert",
            product=projection.title,
            format=advert_format.value,
            prompt_length=len(prompt),
        )

        text = await self.provider.generate(prompt)
        if not text or not text.strip():
            raise AdvertGenerationError(
                "Error generating text", details={"product": projection.title}
            )

        advert = sanitize(text)
        logger.info(
            "Generated advert",
            product=projection.title,
            format=advert_format.value,
            length=len(advert),
        )
        return advert
