"""Document tagging - prompt construction and tag list parsing."""

import logging
import re

from backend.app.config import Settings
from backend.app.docs.pdf_text import extract_pdf_text
from backend.app.errors import EmptyCompletionError, EmptyExtractedTextError
from backend.app.llm.client import CompletionClient
from backend.app.llm.retry import CompletionExecutor, CompletionRequest, RetryConfig

logger = logging.getLogger(__name__)

TAGGER_SYSTEM_PROMPTS = [
    "You are an expert document tagger.",
    "You will be given a document and you will provide a list of tags to assist "
    "people who are searching for this document",
]

# "Here are the tags: a, b" -> "a, b"; "COVID-19: a, b" is left alone
_PREAMBLE = re.compile(
    r"^[^,\n:]*\b(?:tags?|topics?|keywords?|labels?):\s*", re.IGNORECASE
)


def split_tags(completion: str) -> list[str]:
    """Split a comma-separated completion into a TagSet.

    A leading preamble such as "Here are the tags:" (a phrase ending in
    tags, topics, keywords or labels, then a colon) is dropped; any other
    colon is part of a tag. Entries are trimmed of whitespace and trailing
    periods; empty entries are discarded. Order is kept and duplicates are
    allowed.
    """
    text = _PREAMBLE.sub("", completion.strip(), count=1)
    tags = []
    for part in re.split(r"[,\n]", text):
        tag = part.strip().rstrip(".").strip()
        if tag:
            tags.append(tag)
    return tags


def build_tag_messages(text: str, max_chars: int = 2000) -> list[dict[str, str]]:
    """Build chat messages asking for tags of the first ``max_chars`` of text."""
    prompt = (
        "Provide only a comma-separated list of relevant tags and key topics from "
        "this document. Do not include any explanations or extra text.\n\n"
        f"{text[:max_chars]}"
    )
    messages = [{"role": "system", "content": content} for content in TAGGER_SYSTEM_PROMPTS]
    messages.append({"role": "user", "content": prompt})
    return messages


async def tag_document(
    data: bytes,
    client: CompletionClient,
    settings: Settings,
    executor: CompletionExecutor | None = None,
) -> list[str]:
    """Extract text from PDF bytes and ask the model for tags.

    Args:
        data: Raw PDF bytes
        client: Completion client
        settings: Application settings
        executor: Retry executor (default: new CompletionExecutor)

    Returns:
        Non-empty TagSet

    Raises:
        TextExtractionError: If the PDF cannot be read
        EmptyExtractedTextError: If the PDF has no text
        EmptyCompletionError: If the model produced no tags
        ProviderError: If the provider failed on every attempt
    """
    text = extract_pdf_text(data)
    if not text.strip():
        raise EmptyExtractedTextError("PDF contains no extractable text")

    logger.debug("Extracted %d characters of PDF text", len(text))

    def parse(content: str) -> list[str]:
        tags = split_tags(content)
        if not tags:
            raise EmptyCompletionError("No tags generated from the document", raw=content)
        return tags

    executor = executor or CompletionExecutor()
    return await executor.execute(
        client,
        CompletionRequest(
            operation="tag",
            messages=build_tag_messages(text, settings.tag_text_chars),
            temperature=settings.tag_temperature,
        ),
        parse,
        RetryConfig.from_settings(settings),
    )
