"""Plain-text rendering of articles for terminals and hand-off to other tools."""


def format_article_line(title: str, category: str | None, date: str | None) -> str:
    """One-line summary used in article lists."""
    return f"{title} | {category or ''} | {date or ''}"


def format_article_text(title: str, content: str) -> str:
    """Title and body, the form copied or sent to other services."""
    return f"{title}\n\n{content}"


def format_article_detail(title: str, category: str | None, date: str | None, content: str) -> str:
    return f"{title}\n{category or ''} | {date or ''}\n\n{content}"
