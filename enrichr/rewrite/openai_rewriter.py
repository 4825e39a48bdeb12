"""OpenAI chat-completion rewriter."""

import logging
from typing import Optional

import openai
from openai import OpenAI

from enrichr.config import RewriteConfig
from enrichr.core.errors import (
    EmptyResponseError,
    InvalidCredentialError,
    MissingConfigError,
    QuotaExceededError,
    RewriteError,
)
from enrichr.core.models import OptimizationRequest, OptimizationResult
from enrichr.rewrite.base import SYSTEM_PROMPT, ContentRewriter, build_prompt, references_for

logger = logging.getLogger(__name__)

PROVIDER = "OpenAI"


class OpenAIRewriter(ContentRewriter):
    """Rewrites articles with a single OpenAI chat completion."""

    def __init__(self, config: RewriteConfig, client: Optional[OpenAI] = None, timeout: float = 120.0):
        """
        Initialize OpenAI rewriter.

        Args:
            config: Rewrite configuration
            client: OpenAI client (built from the config if None)
            timeout: Request timeout in seconds

        Raises:
            MissingConfigError: No API key configured and no client given
        """
        self.config = config
        if client is None:
            if not config.openai_api_key:
                raise MissingConfigError("OPENAI_API_KEY")
            # Failed rewrites are not retried
            client = OpenAI(
                api_key=config.openai_api_key,
                base_url=config.openai_base_url,
                max_retries=0,
                timeout=timeout,
            )
        self.client = client

    def rewrite(self, request: OptimizationRequest) -> OptimizationResult:
        if not request.competitors:
            raise RewriteError("Rewrite requires at least one competitor article")

        prompt = build_prompt(request)
        logger.info(f"Optimizing {request.title!r} with {self.config.model}")
        logger.debug(f"Prompt preview: {prompt[:500]}...")

        try:
            completion = self.client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
        except openai.AuthenticationError as e:
            raise InvalidCredentialError(PROVIDER) from e
        except openai.APIError as e:
            code = getattr(e, "code", None)
            if code == "insufficient_quota":
                raise QuotaExceededError(PROVIDER) from e
            if code == "invalid_api_key":
                raise InvalidCredentialError(PROVIDER) from e
            raise RewriteError(f"{PROVIDER} request failed: {e}", details={"code": code}) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise EmptyResponseError(PROVIDER)

        usage = completion.usage
        tokens_used = usage.total_tokens if usage else 0
        if usage:
            logger.info(
                f"Tokens used: {usage.total_tokens} "
                f"(prompt: {usage.prompt_tokens}, completion: {usage.completion_tokens})"
            )

        return OptimizationResult(content=content, references=references_for(request), tokens_used=tokens_used)
