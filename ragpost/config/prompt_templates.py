"""
ragpost - Prompt Templates & Demo Content
==========================================
Every literal the two pipelines depend on lives here: the seed snippets
written by the ingestion script, the default query, and the generation
prompt.

Exports
-------
SEED_CONTENT, DEFAULT_QUERY, BLOG_POST_PROMPT_TEMPLATE,
NO_MATCH_MESSAGE, build_prompt.
"""

# ══════════════════════════════════════════════════════════════════════
#  SEED CONTENT (ingestion)
# ══════════════════════════════════════════════════════════════════════

SEED_CONTENT: tuple[str, ...] = (
    "Beyond Mars: speculating life on distant planets.",
    "Jazz under stars: a night in New Orleans' music scene.",
    "Mysteries of the deep: exploring uncharted ocean caves.",
    "Rediscovering lost melodies: the rebirth of vinyl culture.",
    "Tales from the tech frontier: decoding AI ethics.",
)


# ══════════════════════════════════════════════════════════════════════
#  QUERY
# ══════════════════════════════════════════════════════════════════════

DEFAULT_QUERY: str = "life on distant planets"

NO_MATCH_MESSAGE: str = "No matching documents found"


# ══════════════════════════════════════════════════════════════════════
#  GENERATION PROMPT
# ══════════════════════════════════════════════════════════════════════
# Content is interpolated verbatim; no escaping or trimming.

BLOG_POST_PROMPT_TEMPLATE: str = "Write a blog post on: [{content}]"


def build_prompt(content: str) -> str:
    """Interpolate matched *content* into ``BLOG_POST_PROMPT_TEMPLATE``."""
    return BLOG_POST_PROMPT_TEMPLATE.format(content=content)
