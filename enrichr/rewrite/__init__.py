"""Article rewriting through an external language model."""

from enrichr.rewrite.base import (
    SYSTEM_PROMPT,
    ContentRewriter,
    build_optimization_request,
    build_prompt,
)
from enrichr.rewrite.openai_rewriter import OpenAIRewriter
from enrichr.rewrite.validator import ContentValidation, validate_optimized_content

__all__ = [
    "SYSTEM_PROMPT",
    "ContentRewriter",
    "ContentValidation",
    "OpenAIRewriter",
    "build_optimization_request",
    "build_prompt",
    "validate_optimized_content",
]
