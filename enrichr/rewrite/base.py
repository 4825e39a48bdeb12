"""Rewrite interface: request building, prompt assembly and the rewriter contract."""

from abc import ABC, abstractmethod
from typing import List

from enrichr.core.models import Article, CompetitorContent, OptimizationRequest, OptimizationResult, Reference

DEFAULT_BODY_BUDGET = 3000

SYSTEM_PROMPT = (
    "You are a professional content writer and SEO expert. Output only markdown content "
    "without any explanations or meta-commentary. Do not use emojis. Do not add marketing "
    "fluff. Do not hallucinate facts."
)

PROMPT_TEMPLATE = """You are a content optimization expert.

Original Article:
Title: {title}
Content: {content}

Reference Articles:
{references}

Task:
- Rewrite the original article
- Preserve core meaning
- Match SEO depth & structure
- Improve readability
- Use proper headings
- Maintain professional tone

Return markdown only."""


def truncate_body(body: str, budget: int = DEFAULT_BODY_BUDGET) -> str:
    """Cut a body to ``budget`` characters, marking the cut with '...'."""
    if len(body) <= budget:
        return body
    return body[:budget] + "..."


def build_optimization_request(
    article: Article,
    competitors: List[CompetitorContent],
    max_competitors: int = 2,
    body_budget: int = DEFAULT_BODY_BUDGET,
) -> OptimizationRequest:
    """
    Assemble the rewrite input for an article.

    Args:
        article: Subject article
        competitors: Scraped competitor content in search order
        max_competitors: Maximum competitors included
        body_budget: Characters kept per competitor body

    Returns:
        OptimizationRequest with truncated competitor bodies
    """
    included = [
        CompetitorContent(
            url=competitor.url,
            title=competitor.title,
            body=truncate_body(competitor.body, body_budget),
            headings=list(competitor.headings),
            code_blocks=list(competitor.code_blocks),
            original_title=competitor.original_title,
        )
        for competitor in competitors[:max_competitors]
    ]
    return OptimizationRequest(title=article.title, content=article.content, competitors=included)


def build_prompt(request: OptimizationRequest) -> str:
    """Render the user prompt for a rewrite request."""
    sections = [
        f"{index}. {competitor.display_title}\n{competitor.body}\n"
        for index, competitor in enumerate(request.competitors, 1)
    ]
    return PROMPT_TEMPLATE.format(
        title=request.title,
        content=request.content,
        references="\n".join(sections),
    )


def references_for(request: OptimizationRequest) -> List[Reference]:
    """One reference per competitor, in request order."""
    return [Reference(title=c.display_title, url=c.url) for c in request.competitors]


class ContentRewriter(ABC):
    """Abstract interface for the external rewrite collaborator."""

    @abstractmethod
    def rewrite(self, request: OptimizationRequest) -> OptimizationResult:
        """
        Rewrite an article using competitor content.

        Args:
            request: Article text plus competitor content

        Returns:
            Rewritten markdown with the references it draws on

        Raises:
            RewriteError: The collaborator failed or returned nothing
        """
        pass
