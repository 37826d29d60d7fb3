"""
Text summarization with the Hugging Face inference API or OpenAI.
"""

import logging
from collections.abc import Callable

import httpx
from openai import OpenAI

logger = logging.getLogger("narrator")

HF_API_URL = "https://api-inference.huggingface.co/models/{model}"
NO_SUMMARY = "No summary generated"


def summarize_huggingface(
    text: str,
    api_key: str | None,
    model: str = "facebook/bart-large-cnn",
    http_client: httpx.Client | None = None,
) -> str:
    """Summarize text with a hosted Hugging Face summarization model."""
    if not api_key:
        raise RuntimeError("HUGGING_API is not set. Put it in .env or environment.")

    url = HF_API_URL.format(model=model)
    headers = {
        "Authorization": f"Bearer {api_key}",
        "User-Agent": "narrator-pipeline/1.0",
    }
    client = http_client or httpx.Client(follow_redirects=True, timeout=120.0)
    try:
        r = client.post(url, json={"inputs": text}, headers=headers)
    finally:
        if http_client is None:
            client.close()

    if r.status_code != 200:
        raise RuntimeError(f"Hugging Face summarization failed: {r.status_code} {r.text[:300]}")

    data = r.json()
    summary = None
    if isinstance(data, list) and data and isinstance(data[0], dict):
        summary = data[0].get("summary_text")
    if not summary:
        logger.warning("Summarization response had no summary_text")
        return NO_SUMMARY
    return summary.strip()


def summarize_openai(client: OpenAI, text: str, model: str = "gpt-4o-mini") -> str:
    """Summarize text with an OpenAI chat model."""
    if client is None:
        raise RuntimeError("OpenAI client is not initialized (missing OPENAI_API_KEY)")

    system = (
        "You write short narration scripts. Summarize the user's text in a few plain "
        "sentences suitable for reading aloud. Return only the summary."
    )
    chat = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": text},
        ],
        temperature=0.3,
    )
    content = (chat.choices[0].message.content or "").strip()
    return content or NO_SUMMARY


def make_summarizer(
    provider: str,
    *,
    api_key: str | None = None,
    model: str | None = None,
    client: OpenAI | None = None,
) -> Callable[[str], str]:
    """Create a summarize function for the given provider."""
    if provider == "huggingface":
        hf_model = model or "facebook/bart-large-cnn"

        def _summarize(text: str) -> str:
            return summarize_huggingface(text, api_key, model=hf_model)

    elif provider == "openai":
        oa_model = model or "gpt-4o-mini"

        def _summarize(text: str) -> str:
            return summarize_openai(client, text, model=oa_model)

    else:
        raise ValueError(f"Unknown summarizer provider: {provider}")

    return _summarize
